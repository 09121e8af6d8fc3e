"""
CSS Extractor
从 HTML / CSS 文本中提取颜色、CSS 变量和字体

Regex-driven on purpose: no DOM or CSS AST. Misses (colors inside
`var()` chains, named colors, hsl()) are accepted.
"""

import logging
import re
from typing import Dict, Iterator, List

from .color_math import channels_to_hex, expand_shorthand
from .models import ColorInventory

logger = logging.getLogger(__name__)


HEX_COLOR_RE = re.compile(r'#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})\b')
RGB_COLOR_RE = re.compile(r'rgba?\((\d+),\s*(\d+),\s*(\d+)')

# `color` must not be the tail of `background-color`, `border-color`, ...
COLOR_DECLARATION_RE = re.compile(
    r'(?<![-\w])(background-color|background|color)\s*:\s*([^;}]+)',
    re.IGNORECASE
)

# selector { body } without nested braces; @media wrappers fall through
RULE_BLOCK_RE = re.compile(r'([^{}]+)\{([^{}]*)\}')
CSS_COMMENT_RE = re.compile(r'/\*[\s\S]*?\*/')

ACCENT_SELECTOR_RE = re.compile(r'btn|button|link|brand|accent|primary|cta', re.IGNORECASE)
ROOT_SELECTORS = {':root', 'html', 'body'}
CUSTOM_PROPERTY_RE = re.compile(r'--([\w-]+)\s*:\s*([^;]+)')

FONT_FAMILY_RE = re.compile(r'font-family:\s*([^;}\n]+)', re.IGNORECASE)
MAX_FONTS = 3

GENERIC_FONT_FAMILIES = {
    'serif', 'sans-serif', 'monospace', 'cursive', 'fantasy',
    'emoji', 'math', 'fangsong',
    'inherit', 'initial', 'unset', 'revert',
}
# system-ui, -apple-system, BlinkMacSystemFont, Segoe UI, Roboto, ...
PLATFORM_FONT_MARKERS = ('system', 'apple', 'segoe', 'roboto')


# ============================================
# Colors
# ============================================

def iter_colors(text: str) -> Iterator[str]:
    """
    Yield every hex and rgb()/rgba() color in `text`, normalized.
    Hex matches come first, then functional notation.
    """
    for match in HEX_COLOR_RE.finditer(text):
        yield '#' + expand_shorthand(match.group(1)).lower()

    for match in RGB_COLOR_RE.finditer(text):
        yield channels_to_hex(*(int(g) for g in match.groups()))


def _rule_blocks(css: str) -> Iterator[tuple]:
    for match in RULE_BLOCK_RE.finditer(CSS_COMMENT_RE.sub('', css)):
        # drop statements before the selector (@import ...;)
        selector = match.group(1).rsplit(';', 1)[-1].strip()
        yield selector, match.group(2)


def extract_colors(html: str, css: str) -> ColorInventory:
    """
    Build the color inventory for one page.

    Counts aggregate over HTML and CSS. Context buckets come from the
    CSS only:
    - backgrounds: `background` / `background-color` values
    - foregrounds: bare `color` values
    - accents: background/color values inside btn/link/brand/... rules

    CSS comments are dropped before any pass.
    """
    inventory = ColorInventory()
    css = CSS_COMMENT_RE.sub('', css)

    for source in (html, css):
        for color in iter_colors(source):
            inventory.add(color)

    for match in COLOR_DECLARATION_RE.finditer(css):
        prop = match.group(1).lower()
        bucket = inventory.foregrounds if prop == 'color' else inventory.backgrounds
        bucket.extend(iter_colors(match.group(2)))

    for selector, body in _rule_blocks(css):
        if not ACCENT_SELECTOR_RE.search(selector):
            continue
        for match in COLOR_DECLARATION_RE.finditer(body):
            inventory.accents.extend(iter_colors(match.group(2)))

    logger.debug(
        f"Colors: {len(inventory.counts)} unique, "
        f"bg={len(inventory.backgrounds)} fg={len(inventory.foregrounds)} "
        f"accent={len(inventory.accents)}"
    )
    return inventory


# ============================================
# CSS Custom Properties
# ============================================

def _is_root_selector(selector: str) -> bool:
    return any(part.strip().lower() in ROOT_SELECTORS for part in selector.split(','))


def extract_css_variables(css: str) -> Dict[str, str]:
    """
    Collect `--name: value` pairs declared in `:root`, `html` or `body`
    rules. Names are lowercased without the leading `--`; the last
    declaration of a name wins.
    """
    variables: Dict[str, str] = {}
    for selector, body in _rule_blocks(css):
        if not _is_root_selector(selector):
            continue
        for match in CUSTOM_PROPERTY_RE.finditer(body):
            variables[match.group(1).lower()] = match.group(2).strip()
    return variables


# ============================================
# Fonts
# ============================================

def _is_font_noise(name: str) -> bool:
    lowered = name.lower()
    if lowered in GENERIC_FONT_FAMILIES or lowered.startswith(('ui-', 'var(')):
        return True
    return any(marker in lowered for marker in PLATFORM_FONT_MARKERS)


def extract_fonts(css: str) -> List[str]:
    """
    First three distinct font families declared in `css`, generic
    keywords and platform defaults removed.
    """
    fonts: List[str] = []
    seen = set()

    for match in FONT_FAMILY_RE.finditer(css):
        for raw in match.group(1).split(','):
            name = raw.replace('!important', '').strip().strip('"\'').strip()
            if not name or _is_font_noise(name):
                continue
            key = name.lower()
            if key in seen:
                continue
            seen.add(key)
            fonts.append(name)
            if len(fonts) == MAX_FONTS:
                return fonts

    return fonts
