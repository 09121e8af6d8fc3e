"""
Theme Preset Store
内置主题预设

Read-only catalog of the built-in presets, font options and status
colors, loaded from `data/presets.json`.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import FontOption, StatusColorSet, ThemePreset
from .theme_synthesizer import CUSTOM_THEME_ID

logger = logging.getLogger(__name__)

# Default data file
DATA_FILE = Path(__file__).parent / "data" / "presets.json"


class ThemePresetStore:
    """
    Built-in theme catalog
    内置主题目录
    """

    def __init__(self, data_file: Path = DATA_FILE):
        self.data_file = Path(data_file)
        self._presets: Optional[List[ThemePreset]] = None
        self._fonts: List[FontOption] = []
        self._status_colors: Optional[StatusColorSet] = None

    def _load(self) -> None:
        if self._presets is not None:
            return

        with open(self.data_file, "r", encoding="utf-8") as f:
            data: Dict[str, Any] = json.load(f)

        presets = [ThemePreset.model_validate(p) for p in data.get("presets", [])]
        for preset in presets:
            if preset.id == CUSTOM_THEME_ID:
                raise ValueError(f"Preset id '{CUSTOM_THEME_ID}' is reserved")

        self._fonts = [FontOption.model_validate(f) for f in data.get("fonts", [])]
        self._status_colors = StatusColorSet.model_validate(data["statusColors"])
        self._presets = presets
        logger.info(f"Loaded {len(presets)} theme presets from {self.data_file.name}")

    def list_presets(self) -> List[ThemePreset]:
        self._load()
        return list(self._presets)

    def get_preset(self, theme_id: str) -> Optional[ThemePreset]:
        self._load()
        for preset in self._presets:
            if preset.id == theme_id:
                return preset
        return None

    def list_fonts(self) -> List[FontOption]:
        self._load()
        return list(self._fonts)

    def get_font(self, font_id: str) -> Optional[FontOption]:
        self._load()
        for font in self._fonts:
            if font.id == font_id:
                return font
        return None

    def status_colors(self) -> StatusColorSet:
        self._load()
        return self._status_colors


theme_preset_store = ThemePresetStore()
