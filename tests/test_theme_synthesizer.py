import re

from theme_extractor.models import ThemeColors
from theme_extractor.theme_classifier import ThemeSeeds
from theme_extractor.theme_synthesizer import (
    CUSTOM_THEME_ID,
    oklch,
    site_display_name,
    synthesize_theme,
)

TOKEN_RE = re.compile(r'^oklch\((\d(?:\.\d+)?) (\d(?:\.\d+)?) (\d+)\)$')


def dark_seeds() -> ThemeSeeds:
    return ThemeSeeds(is_dark=True, background="#101010", foreground="#f5f5f5", accent="#ff6600")


def test_oklch_formatting():
    assert oklch(1, 0, 0) == "oklch(1 0 0)"
    assert oklch(0.99, 0.005, 0) == "oklch(0.99 0.005 0)"
    assert oklch(0.55, 0.2, 24) == "oklch(0.55 0.20 24)"
    assert oklch(0.1, 0.005, 0) == "oklch(0.10 0.005 0)"


def test_theme_identity_and_preview():
    theme = synthesize_theme(dark_seeds(), "Example")

    assert theme.id == CUSTOM_THEME_ID == "custom-cloned"
    assert theme.name == "Example"
    assert theme.description == "Inspired by Example"
    assert theme.preview.primary == "#ffffff"
    assert theme.preview.accent == "#ff6600"
    assert theme.preview.bg == "#101010"


def test_light_preview_primary_is_black():
    seeds = ThemeSeeds(is_dark=False, background="#ffffff", foreground="#171717", accent="#2563eb")
    assert synthesize_theme(seeds, "X").preview.primary == "#000000"


def test_accent_tokens_follow_accent_hue():
    theme = synthesize_theme(dark_seeds(), "Example")

    assert theme.light.accent == "oklch(0.55 0.20 24)"
    assert theme.light.ring == theme.light.accent
    assert theme.dark.accent == "oklch(0.65 0.18 24)"
    assert theme.dark.ring == theme.dark.accent
    assert theme.light.accent_foreground.endswith(" 24)")


def test_base_tokens_are_near_neutral():
    theme = synthesize_theme(dark_seeds(), "Example")

    assert theme.light.background == "oklch(0.99 0.005 0)"
    assert theme.dark.background == "oklch(0.10 0.005 0)"
    assert theme.light.card == "oklch(1 0 0)"


def test_neutral_background_borrows_accent_hue():
    theme = synthesize_theme(dark_seeds(), "Example")
    assert theme.light.primary == "oklch(0.20 0.02 24)"


def test_tinted_background_sets_primary_hue():
    # #eef2ff has hue ~226, #2563eb ~221
    seeds = ThemeSeeds(is_dark=False, background="#eef2ff", foreground="#171717", accent="#2563eb")
    theme = synthesize_theme(seeds, "Indigo")

    assert theme.light.primary == "oklch(0.20 0.02 226)"
    assert theme.light.accent == "oklch(0.55 0.20 221)"


def test_every_token_is_a_valid_color():
    theme = synthesize_theme(dark_seeds(), "Example")
    for colors in (theme.light, theme.dark):
        tokens = colors.model_dump()
        assert len(tokens) == 17
        for name, value in tokens.items():
            match = TOKEN_RE.match(value)
            assert match, f"{name}={value}"
            assert 0 <= float(match.group(1)) <= 1
            assert 0 <= int(match.group(3)) < 360


def test_camel_case_serialization():
    data = synthesize_theme(dark_seeds(), "Example").model_dump(by_alias=True)
    assert "cardForeground" in data["light"]
    assert "accentForeground" in data["dark"]


def test_css_variables():
    colors: ThemeColors = synthesize_theme(dark_seeds(), "Example").light
    variables = colors.to_css_variables()
    assert variables["--card-foreground"] == colors.card_foreground
    assert variables["--ring"] == colors.ring
    assert len(variables) == 17


def test_site_display_name():
    assert site_display_name("https://www.stripe.com/pricing") == "Stripe"
    assert site_display_name("https://docs.github.com/") == "Docs"
    assert site_display_name("http://localhost:8000") == "Localhost"
