"""
Theme Synthesizer
根据种子颜色生成完整的明/暗主题

Only the accent hue is taken from the site. Everything else sits on
fixed near-neutral lightness levels so the light and dark palettes stay
coherent whatever the site looked like.
"""

from urllib.parse import urlparse

from .color_math import hue, is_neutral, round_half_up
from .models import ThemeColors, ThemePreset, ThemePreview
from .theme_classifier import ThemeSeeds


CUSTOM_THEME_ID = 'custom-cloned'

PREVIEW_PRIMARY_DARK = '#ffffff'
PREVIEW_PRIMARY_LIGHT = '#000000'


def _format_number(value: float) -> str:
    """`1` -> '1', `0.2` -> '0.20', `0.005` -> '0.005'"""
    if value == int(value):
        return str(int(value))
    text = f"{value:.3f}".rstrip('0')
    if len(text.split('.')[1]) < 2:
        return f"{value:.2f}"
    return text


def oklch(lightness: float, chroma: float, hue_deg: int) -> str:
    return f"oklch({_format_number(lightness)} {_format_number(chroma)} {hue_deg})"


def _hue_token(value: float) -> int:
    return round_half_up(value) % 360


def light_colors(primary_hue: int, accent_hue: int) -> ThemeColors:
    return ThemeColors(
        background=oklch(0.99, 0.005, 0),
        foreground=oklch(0.15, 0.005, 0),
        card=oklch(1, 0, 0),
        card_foreground=oklch(0.15, 0.005, 0),
        popover=oklch(1, 0, 0),
        popover_foreground=oklch(0.15, 0.005, 0),
        primary=oklch(0.20, 0.02, primary_hue),
        primary_foreground=oklch(0.98, 0.005, primary_hue),
        secondary=oklch(0.96, 0.01, primary_hue),
        secondary_foreground=oklch(0.25, 0.02, primary_hue),
        muted=oklch(0.96, 0.01, primary_hue),
        muted_foreground=oklch(0.50, 0.02, primary_hue),
        accent=oklch(0.55, 0.20, accent_hue),
        accent_foreground=oklch(0.98, 0.01, accent_hue),
        border=oklch(0.91, 0.01, primary_hue),
        input=oklch(0.91, 0.01, primary_hue),
        ring=oklch(0.55, 0.20, accent_hue),
    )


def dark_colors(primary_hue: int, accent_hue: int) -> ThemeColors:
    return ThemeColors(
        background=oklch(0.10, 0.005, 0),
        foreground=oklch(0.96, 0.005, 0),
        card=oklch(0.14, 0.005, 0),
        card_foreground=oklch(0.96, 0.005, 0),
        popover=oklch(0.14, 0.005, 0),
        popover_foreground=oklch(0.96, 0.005, 0),
        primary=oklch(0.96, 0.01, primary_hue),
        primary_foreground=oklch(0.12, 0.01, primary_hue),
        secondary=oklch(0.22, 0.01, primary_hue),
        secondary_foreground=oklch(0.96, 0.01, primary_hue),
        muted=oklch(0.22, 0.01, primary_hue),
        muted_foreground=oklch(0.65, 0.02, primary_hue),
        accent=oklch(0.65, 0.18, accent_hue),
        accent_foreground=oklch(0.12, 0.01, accent_hue),
        border=oklch(0.26, 0.01, primary_hue),
        input=oklch(0.26, 0.01, primary_hue),
        ring=oklch(0.65, 0.18, accent_hue),
    )


def site_display_name(url: str) -> str:
    """
    First hostname label, capitalized.

    >>> site_display_name('https://www.stripe.com/pricing')
    'Stripe'
    """
    hostname = (urlparse(url).hostname or '').replace('www.', '')
    label = hostname.split('.')[0]
    return label[:1].upper() + label[1:]


def synthesize_theme(seeds: ThemeSeeds, site_name: str) -> ThemePreset:
    """
    Build the light + dark preset from classifier seeds.

    The primary hue follows the accent when the site background is
    neutral, otherwise the background hue.
    """
    accent_hue = _hue_token(hue(seeds.accent))
    if is_neutral(seeds.background):
        primary_hue = accent_hue
    else:
        primary_hue = _hue_token(hue(seeds.background))

    return ThemePreset(
        id=CUSTOM_THEME_ID,
        name=site_name,
        description=f"Inspired by {site_name}",
        preview=ThemePreview(
            primary=PREVIEW_PRIMARY_DARK if seeds.is_dark else PREVIEW_PRIMARY_LIGHT,
            accent=seeds.accent,
            bg=seeds.background,
        ),
        light=light_colors(primary_hue, accent_hue),
        dark=dark_colors(primary_hue, accent_hue),
    )
