"""
Theme Extractor Module
网站主题提取模块

Scrapes a website's HTML/CSS and derives a coordinated light/dark theme.
"""

from .extractor_service import (
    ThemeExtractorService,
    ThemeExtractionError,
    InvalidURLError,
    UpstreamFetchError,
    theme_extractor_service,
)
from .presets import ThemePresetStore, theme_preset_store
from .routes import router as theme_router

__all__ = [
    "ThemeExtractorService",
    "ThemeExtractionError",
    "InvalidURLError",
    "UpstreamFetchError",
    "theme_extractor_service",
    "ThemePresetStore",
    "theme_preset_store",
    "theme_router",
]
