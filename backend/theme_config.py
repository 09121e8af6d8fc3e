"""
Theme Extractor Configuration
后端配置文件
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# ==================== Server Configuration ====================
# 服务器配置

SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT = int(os.getenv("SERVER_PORT", "5100"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]

# ==================== Fetch Configuration ====================
# 网页/样式表抓取配置

THEME_USER_AGENT = os.getenv(
    "THEME_USER_AGENT",
    "Mozilla/5.0 (compatible; ThemeExtractor/1.0)",
)
THEME_MAX_STYLESHEETS = int(os.getenv("THEME_MAX_STYLESHEETS", "5"))
THEME_HTML_TIMEOUT = float(os.getenv("THEME_HTML_TIMEOUT", "15"))
THEME_STYLESHEET_TIMEOUT = float(os.getenv("THEME_STYLESHEET_TIMEOUT", "10"))
THEME_MAX_CSS_BYTES = int(os.getenv("THEME_MAX_CSS_BYTES", str(2 * 1024 * 1024)))
# 超出上限即停止下载: 样式表整体跳过，页面截断
THEME_MAX_HTML_BYTES = int(os.getenv("THEME_MAX_HTML_BYTES", str(5 * 1024 * 1024)))
