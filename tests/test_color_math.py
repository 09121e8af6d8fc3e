import re

import pytest

from theme_extractor.color_math import (
    InvalidColorError,
    brightness,
    expand_shorthand,
    hex_to_rgb,
    hue,
    is_neutral,
    normalize_color,
    saturation,
    to_oklch,
)

OKLCH_RE = re.compile(r'^oklch\((\d\.\d\d) (\d+\.\d\d) (\d+)\)$')


@pytest.mark.parametrize("short,full", [
    ("#fff", "#ffffff"),
    ("#0F8", "#00ff88"),
    ("#a1b", "#aa11bb"),
])
def test_shorthand_normalizes_like_full_form(short, full):
    assert normalize_color(short) == normalize_color(full) == full


def test_expand_shorthand_leaves_six_digits_alone():
    assert expand_shorthand("#abcdef") == "abcdef"


def test_normalize_functional_notation():
    assert normalize_color("rgb(255, 102, 0)") == "#ff6600"
    assert normalize_color("rgba(0, 0, 255, 0.5)") == "#0000ff"
    assert normalize_color("RGB(300, 0, 0)") == "#ff0000"


@pytest.mark.parametrize("value", ["#ggg", "#12345", "", "red", "rgb(a, b, c)"])
def test_malformed_colors_raise(value):
    with pytest.raises(InvalidColorError):
        normalize_color(value)


def test_math_on_malformed_color_raises():
    with pytest.raises(InvalidColorError):
        brightness("nope")
    with pytest.raises(InvalidColorError):
        to_oklch("#12")


def test_hex_to_rgb():
    assert hex_to_rgb("#ff6600") == (255, 102, 0)


def test_brightness_bounds():
    assert brightness("#000000") == 0
    assert brightness("#ffffff") == 255


def test_saturation():
    assert saturation("#808080") == 0
    assert saturation("#ff0000") == 1
    assert 0 < saturation("#336699") < 1


@pytest.mark.parametrize("value,expected", [
    ("#ff0000", 0),
    ("#00ff00", 120),
    ("#0000ff", 240),
    ("#ff6600", 24),
    ("#ff00ff", 300),
])
def test_hue(value, expected):
    assert hue(value) == pytest.approx(expected)


def test_hue_of_gray_is_zero():
    assert hue("#777777") == 0


def test_is_neutral():
    assert is_neutral("#808080")
    assert is_neutral("#f5f5f4")
    assert not is_neutral("#ff6600")


def test_to_oklch_black_and_white():
    assert to_oklch("#000000") == "oklch(0.00 0.00 0)"
    assert to_oklch("#ffffff").startswith("oklch(1.00 0.00 ")


def test_to_oklch_red():
    # Lab(53.24, 80.09, 67.20)
    assert to_oklch("#ff0000") == "oklch(0.53 0.70 40)"


def test_to_oklch_is_deterministic():
    assert to_oklch("#3b82f6") == to_oklch("#3b82f6")
    assert to_oklch("#3B82F6") == to_oklch("#3b82f6")


@pytest.mark.parametrize("value", [
    "#000000", "#ffffff", "#ff6600", "#2563eb", "#7c3aed", "#0a0a0a", "#00ffcc",
])
def test_to_oklch_ranges(value):
    match = OKLCH_RE.match(to_oklch(value))
    assert match, to_oklch(value)
    lightness, chroma, hue_deg = float(match.group(1)), float(match.group(2)), int(match.group(3))
    assert 0 <= lightness <= 1
    assert chroma >= 0
    assert 0 <= hue_deg < 360
