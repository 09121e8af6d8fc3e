"""
FastAPI Routes for Theme Extractor Module
主题提取 HTTP 端点

端点：
- POST /api/extract-theme                 - 从网站提取主题
- GET  /api/themes                        - 内置主题列表
- GET  /api/themes/fonts                  - 字体选项
- GET  /api/themes/fonts/{font_id}        - 单个字体选项
- GET  /api/themes/status-colors          - 状态颜色
- GET  /api/themes/{theme_id}             - 单个主题
- GET  /api/themes/{theme_id}/css         - 主题的 CSS 变量
"""

import logging
from typing import List

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .extractor_service import (
    InvalidURLError,
    UpstreamFetchError,
    theme_extractor_service,
)
from .models import (
    ErrorResponse,
    ExtractThemeRequest,
    ExtractionResult,
    FontOption,
    StatusColorSet,
    ThemePreset,
)
from .presets import theme_preset_store

# 设置日志
logger = logging.getLogger(__name__)

router = APIRouter(tags=["theme"])


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ==================== Extract Endpoint ====================

@router.post(
    '/api/extract-theme',
    response_model=ExtractionResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def extract_theme(request: ExtractThemeRequest):
    """
    从网站 HTML/CSS 提取颜色和字体，生成完整的明/暗主题

    Request Body:
        {
            "url": "https://example.com"
        }

    Returns:
        ExtractionResult: theme, fonts, colorsFound, isDark, debug
    """
    try:
        return await theme_extractor_service.extract(request.url)

    except InvalidURLError as e:
        logger.info(f"无效请求: {request.url!r} - {e.message}")
        return error_response(400, e.message)

    except UpstreamFetchError as e:
        return error_response(400, e.message)

    except Exception as e:
        logger.error(f"主题提取异常: {str(e)}")
        return error_response(500, "Failed to extract theme")


# ==================== Preset Endpoints ====================

@router.get('/api/themes', response_model=List[ThemePreset])
async def list_themes():
    """内置主题列表"""
    return theme_preset_store.list_presets()


@router.get('/api/themes/fonts', response_model=List[FontOption])
async def list_fonts():
    return theme_preset_store.list_fonts()


@router.get(
    '/api/themes/fonts/{font_id}',
    response_model=FontOption,
    responses={404: {"model": ErrorResponse}},
)
async def get_font(font_id: str):
    font = theme_preset_store.get_font(font_id)
    if not font:
        return error_response(404, "Font not found")
    return font


@router.get('/api/themes/status-colors', response_model=StatusColorSet)
async def get_status_colors():
    """On-track / at-risk / behind colors, identical across presets"""
    return theme_preset_store.status_colors()


@router.get(
    '/api/themes/{theme_id}',
    response_model=ThemePreset,
    responses={404: {"model": ErrorResponse}},
)
async def get_theme(theme_id: str):
    preset = theme_preset_store.get_preset(theme_id)
    if not preset:
        return error_response(404, "Theme not found")
    return preset


@router.get('/api/themes/{theme_id}/css', responses={404: {"model": ErrorResponse}})
async def get_theme_css(theme_id: str):
    """
    Preset tokens as CSS custom properties

    Returns:
        {"light": {"--background": ...}, "dark": {...}}
    """
    preset = theme_preset_store.get_preset(theme_id)
    if not preset:
        return error_response(404, "Theme not found")
    return {
        "light": preset.light.to_css_variables(),
        "dark": preset.dark.to_css_variables(),
    }
