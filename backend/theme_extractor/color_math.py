"""
Color Math
颜色计算工具

Pure helpers over `#rrggbb` colors:
- normalization of hex / shorthand / rgb() notation
- brightness, HSL saturation and hue
- approximate OKLCH strings for the design-token system

The OKLCH conversion goes through CIE Lab and rescales chroma by 1/150.
It is not true OKLab; the preset themes are calibrated against exactly
this arithmetic, so keep it as is.
"""

import math
import re
from typing import Tuple


# Saturation below this counts as neutral (gray-ish)
NEUTRAL_SATURATION_THRESHOLD = 0.15

# sRGB (D65) -> XYZ
SRGB_TO_XYZ = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)

# D65 reference white
WHITE_X = 0.95047
WHITE_Y = 1.0
WHITE_Z = 1.08883

LAB_EPSILON = 0.008856
CHROMA_SCALE = 150

_HEX_RE = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')
_RGB_RE = re.compile(r'^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)', re.IGNORECASE)


class InvalidColorError(ValueError):
    """Raised when a value cannot be read as a color"""


def expand_shorthand(value: str) -> str:
    """
    Expand 3-digit hex to 6 digits by doubling each digit.
    6-digit input is returned unchanged (without '#').

    >>> expand_shorthand('#0f8')
    '00ff88'
    """
    digits = value.lstrip('#')
    if len(digits) == 3:
        digits = ''.join(c + c for c in digits)
    return digits


def channels_to_hex(r: int, g: int, b: int) -> str:
    """Format 8-bit channels as `#rrggbb`; out of range values are clamped."""
    return '#' + ''.join(
        format(max(0, min(255, int(c))), '02x') for c in (r, g, b)
    )


def normalize_color(value: str) -> str:
    """
    Normalize a color literal to lowercase `#rrggbb`.

    Accepts `#rgb`, `#rrggbb` (with or without '#'), and `rgb()` / `rgba()`
    with integer channels. Alpha is ignored.

    Raises:
        InvalidColorError: value is not one of the forms above
    """
    if not isinstance(value, str):
        raise InvalidColorError(f"Not a color: {value!r}")

    text = value.strip()
    match = _HEX_RE.match(text)
    if match:
        return '#' + expand_shorthand(match.group(1)).lower()

    match = _RGB_RE.match(text)
    if match:
        return channels_to_hex(*(int(g) for g in match.groups()))

    raise InvalidColorError(f"Not a color: {value!r}")


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    """Decode a hex color into 8-bit (r, g, b)."""
    digits = normalize_color(value)[1:]
    return (
        int(digits[0:2], 16),
        int(digits[2:4], 16),
        int(digits[4:6], 16),
    )


def _unit_rgb(value: str) -> Tuple[float, float, float]:
    r, g, b = hex_to_rgb(value)
    return r / 255, g / 255, b / 255


def brightness(value: str) -> float:
    """Perceived brightness (ITU-R 601 luma), 0..255."""
    r, g, b = hex_to_rgb(value)
    return (r * 299 + g * 587 + b * 114) / 1000


def saturation(value: str) -> float:
    """HSL saturation, 0..1. Achromatic colors give 0."""
    r, g, b = _unit_rgb(value)
    high = max(r, g, b)
    low = min(r, g, b)
    if high == low:
        return 0.0

    lightness = (high + low) / 2
    d = high - low
    if lightness > 0.5:
        return d / (2 - high - low)
    return d / (high + low)


def hue(value: str) -> float:
    """HSL hue in degrees, 0 <= h < 360. Achromatic colors give 0."""
    r, g, b = _unit_rgb(value)
    high = max(r, g, b)
    low = min(r, g, b)
    if high == low:
        return 0.0

    d = high - low
    if high == r:
        h = (g - b) / d + (6 if g < b else 0)
    elif high == g:
        h = (b - r) / d + 2
    else:
        h = (r - g) / d + 4
    return (h * 60) % 360


def is_neutral(value: str) -> bool:
    return saturation(value) < NEUTRAL_SATURATION_THRESHOLD


def _to_linear(c: float) -> float:
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def _lab_f(t: float) -> float:
    if t > LAB_EPSILON:
        return t ** (1 / 3)
    return 7.787 * t + 16 / 116


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def to_oklch(value: str) -> str:
    """
    Approximate OKLCH string for a hex color.

    sRGB -> linear RGB -> XYZ (D65) -> Lab, then
    L = Lab L / 100 (clamped to 0..1), C = |ab| / 150, H = atan2(b, a).

    >>> to_oklch('#000000')
    'oklch(0.00 0.00 0)'
    """
    lr, lg, lb = (_to_linear(c) for c in _unit_rgb(value))

    x, y, z = (
        row[0] * lr + row[1] * lg + row[2] * lb
        for row in SRGB_TO_XYZ
    )

    fx = _lab_f(x / WHITE_X)
    fy = _lab_f(y / WHITE_Y)
    fz = _lab_f(z / WHITE_Z)

    lab_l = 116 * fy - 16
    lab_a = 500 * (fx - fy)
    lab_b = 200 * (fy - fz)

    lightness = max(0.0, min(1.0, lab_l / 100))
    chroma = math.sqrt(lab_a * lab_a + lab_b * lab_b) / CHROMA_SCALE
    hue_deg = (math.degrees(math.atan2(lab_b, lab_a)) + 360) % 360

    return f"oklch({lightness:.2f} {chroma:.2f} {round_half_up(hue_deg) % 360})"
