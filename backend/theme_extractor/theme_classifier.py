"""
Theme Classifier
主题分类器

Decides light vs dark and picks the seed background, foreground and
accent colors from the extracted evidence. All thresholds are
brightness values on the 0..255 scale.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .color_math import brightness, is_neutral
from .models import ColorInventory

logger = logging.getLogger(__name__)


# ==================== Dark Detection ====================

DARK_BRIGHTNESS = 50
LIGHT_BRIGHTNESS = 200
BLACK_LITERALS = ('0 0 0', '#000', 'rgb(0')
BACKGROUND_VAR_MARKERS = ('background', 'bg')

# ==================== Accent ====================

ACCENT_MIN_BRIGHTNESS_DARK = 80
ACCENT_MAX_BRIGHTNESS_LIGHT = 200
FALLBACK_ACCENT_BAND_DARK = (80, 220)
FALLBACK_ACCENT_BAND_LIGHT = (40, 200)
DEFAULT_ACCENT_DARK = '#3b82f6'
DEFAULT_ACCENT_LIGHT = '#2563eb'

# ==================== Background / Foreground ====================

DARK_BG_MAX_BRIGHTNESS = 60
DARK_FG_MIN_BRIGHTNESS = 180
LIGHT_BG_MIN_BRIGHTNESS = 200
LIGHT_FG_MAX_BRIGHTNESS = 80
DEFAULT_BACKGROUND_DARK = '#0a0a0a'
DEFAULT_FOREGROUND_DARK = '#fafafa'
DEFAULT_BACKGROUND_LIGHT = '#ffffff'
DEFAULT_FOREGROUND_LIGHT = '#171717'


@dataclass
class ThemeSeeds:
    """Classifier output consumed by the synthesizer"""
    is_dark: bool
    background: str
    foreground: str
    accent: str


def background_variable_hints(css_variables: Dict[str, str]) -> List[str]:
    """Values of custom properties whose name looks like a background"""
    return [
        value for name, value in css_variables.items()
        if any(marker in name for marker in BACKGROUND_VAR_MARKERS)
    ]


def detect_dark_theme(inventory: ColorInventory, css_variables: Dict[str, str]) -> bool:
    """
    Whether the site reads as a dark theme.

    Order of evidence:
    1. a background-ish CSS variable holding a black literal
    2. more dark than light `background` declarations
    3. the first background declaration itself is dark
    """
    for value in background_variable_hints(css_variables):
        lowered = value.lower()
        if any(literal in lowered for literal in BLACK_LITERALS):
            logger.debug(f"Dark theme from CSS variable: {value}")
            return True

    backgrounds = inventory.backgrounds
    dark_count = sum(1 for c in backgrounds if brightness(c) < DARK_BRIGHTNESS)
    light_count = sum(1 for c in backgrounds if brightness(c) > LIGHT_BRIGHTNESS)
    if dark_count > light_count:
        return True

    if backgrounds and brightness(backgrounds[0]) < DARK_BRIGHTNESS:
        return True

    return False


def _visible_accent(color: str, is_dark: bool) -> bool:
    if is_dark:
        return brightness(color) > ACCENT_MIN_BRIGHTNESS_DARK
    return brightness(color) < ACCENT_MAX_BRIGHTNESS_LIGHT


def find_accent_color(
    accents: Iterable[str],
    all_colors: Dict[str, int],
    is_dark: bool
) -> str:
    """
    Pick the brand accent.

    Args:
        accents: colors found inside btn/link/brand/... rules, in order
        all_colors: every color found with its occurrence count
        is_dark: detected theme orientation

    Returns:
        `#rrggbb`; a per-mode default when nothing qualifies
    """
    for color in accents:
        if not is_neutral(color) and _visible_accent(color, is_dark):
            return color

    low, high = FALLBACK_ACCENT_BAND_DARK if is_dark else FALLBACK_ACCENT_BAND_LIGHT
    # sorted() is stable, so equal counts keep discovery order
    for color in sorted(all_colors, key=lambda c: -all_colors[c]):
        if is_neutral(color):
            continue
        if low < brightness(color) < high:
            return color

    return DEFAULT_ACCENT_DARK if is_dark else DEFAULT_ACCENT_LIGHT


def _pick(candidates: Iterable[str], darkest: bool) -> Optional[str]:
    candidates = list(candidates)
    if not candidates:
        return None
    pick = min if darkest else max
    return pick(candidates, key=brightness)


def find_background_color(backgrounds: Iterable[str], is_dark: bool) -> str:
    if is_dark:
        color = _pick(
            (c for c in backgrounds if brightness(c) < DARK_BG_MAX_BRIGHTNESS),
            darkest=True
        )
        return color or DEFAULT_BACKGROUND_DARK

    color = _pick(
        (c for c in backgrounds if brightness(c) > LIGHT_BG_MIN_BRIGHTNESS),
        darkest=False
    )
    return color or DEFAULT_BACKGROUND_LIGHT


def find_foreground_color(foregrounds: Iterable[str], is_dark: bool) -> str:
    if is_dark:
        color = _pick(
            (c for c in foregrounds if brightness(c) > DARK_FG_MIN_BRIGHTNESS),
            darkest=False
        )
        return color or DEFAULT_FOREGROUND_DARK

    color = _pick(
        (c for c in foregrounds if brightness(c) < LIGHT_FG_MAX_BRIGHTNESS),
        darkest=True
    )
    return color or DEFAULT_FOREGROUND_LIGHT


def classify(inventory: ColorInventory, css_variables: Dict[str, str]) -> ThemeSeeds:
    """Run dark detection and seed selection over one page's evidence"""
    is_dark = detect_dark_theme(inventory, css_variables)
    seeds = ThemeSeeds(
        is_dark=is_dark,
        background=find_background_color(inventory.backgrounds, is_dark),
        foreground=find_foreground_color(inventory.foregrounds, is_dark),
        accent=find_accent_color(inventory.accents, inventory.counts, is_dark),
    )
    logger.debug(f"Classified: {seeds}")
    return seeds
