"""
Theme Extractor Models
主题提取数据模型

Wire models (pydantic, camelCase on the wire) and the request-local
evidence collected while scanning a site.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================
# Request Models
# ============================================

class ExtractThemeRequest(BaseModel):
    """Request body for POST /api/extract-theme"""
    url: Optional[str] = Field(None, description="Absolute or scheme-relative website URL")


# ============================================
# Theme Models
# ============================================

class ThemeColors(CamelModel):
    """
    17 design tokens for one color mode
    单一模式下的 17 个颜色 token
    """
    background: str
    foreground: str
    card: str
    card_foreground: str
    popover: str
    popover_foreground: str
    primary: str
    primary_foreground: str
    secondary: str
    secondary_foreground: str
    muted: str
    muted_foreground: str
    accent: str
    accent_foreground: str
    border: str
    input: str
    ring: str

    def to_css_variables(self) -> Dict[str, str]:
        """Map tokens to CSS custom properties, e.g. `--card-foreground`"""
        return {
            "--" + name.replace("_", "-"): value
            for name, value in self.model_dump().items()
        }


class ThemePreview(BaseModel):
    """Swatch shown in theme pickers"""
    primary: str
    accent: str
    bg: str


class ThemePreset(CamelModel):
    """Complete light + dark palette"""
    id: str
    name: str
    description: str
    preview: ThemePreview
    light: ThemeColors
    dark: ThemeColors


class FontOption(BaseModel):
    id: str
    name: str
    description: str
    variable: str
    fallback: str


class StatusColors(CamelModel):
    on_track: str
    at_risk: str
    behind: str


class StatusColorSet(BaseModel):
    light: StatusColors
    dark: StatusColors


# ============================================
# Response Models
# ============================================

class SelectedColors(BaseModel):
    """Seed colors picked by the classifier"""
    background: str
    foreground: str
    accent: str


class ExtractionDebug(CamelModel):
    backgrounds_found: int
    foregrounds_found: int
    accents_found: int
    css_vars_found: int
    selected: SelectedColors


class ExtractionResult(CamelModel):
    """Response body for a successful extraction"""
    success: bool = True
    theme: ThemePreset
    fonts: List[str] = Field(default_factory=list)
    colors_found: int
    is_dark: bool
    debug: ExtractionDebug


class ErrorResponse(BaseModel):
    error: str


class ExtractionPhase(str, Enum):
    """Orchestrator states, in order"""
    FETCHING_HTML = "fetching_html"
    EXTRACTING_INLINE_CSS = "extracting_inline_css"
    DISCOVERING_STYLESHEETS = "discovering_stylesheets"
    FETCHING_STYLESHEETS = "fetching_stylesheets"
    ANALYZING = "analyzing"
    DONE = "done"
    FAILED = "failed"


# ============================================
# Extraction Evidence (request-local)
# ============================================

@dataclass
class ColorInventory:
    """
    Colors found during one extraction pass
    单次提取中发现的颜色

    `counts` keeps discovery order (dict insertion order). The three
    buckets are evidence lists: discovery order, duplicates allowed.
    """
    counts: Dict[str, int] = field(default_factory=dict)
    backgrounds: List[str] = field(default_factory=list)
    foregrounds: List[str] = field(default_factory=list)
    accents: List[str] = field(default_factory=list)

    def add(self, color: str, count: int = 1) -> None:
        self.counts[color] = self.counts.get(color, 0) + count


@dataclass
class SiteStyles:
    """HTML and assembled CSS of one fetched page"""
    url: str
    html: str
    css: str = ""
    stylesheet_urls: List[str] = field(default_factory=list)
    stylesheets_loaded: int = 0
