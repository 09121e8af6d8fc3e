"""
Theme Extractor Backend
统一 FastAPI 入口

Clones a website's look into a light/dark theme preset.

启动方式:
    python main.py
    或
    uvicorn main:app --reload --port 5100
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import theme_config

# Configure logging
logging.basicConfig(
    level=theme_config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Theme Extractor API",
    description="Extract a coordinated light/dark theme from any website",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=theme_config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================
# Register Routers
# ============================================

# Theme extractor module (website scraping + theme synthesis)
from theme_extractor import theme_router
app.include_router(theme_router)
logger.info("Registered: /api/extract-theme, /api/themes/*")


# ============================================
# Root Endpoints
# ============================================

@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "name": "Theme Extractor API",
        "version": "1.0.0",
        "description": "Extract a coordinated light/dark theme from any website",
        "docs": "/docs",
        "endpoints": {
            "extract_theme": "/api/extract-theme",
            "themes": "/api/themes",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "theme-extractor",
        "version": "1.0.0",
    }


# ============================================
# Startup Events
# ============================================

@app.on_event("startup")
async def startup_event():
    """Run on startup"""
    logger.info("=" * 50)
    logger.info("Theme Extractor API Starting...")
    logger.info("=" * 50)
    logger.info(
        f"Stylesheets: max {theme_config.THEME_MAX_STYLESHEETS}, "
        f"timeout {theme_config.THEME_STYLESHEET_TIMEOUT}s; "
        f"page timeout {theme_config.THEME_HTML_TIMEOUT}s"
    )
    logger.info(
        f"API documentation available at: http://localhost:{theme_config.SERVER_PORT}/docs"
    )


# ============================================
# Main Entry Point
# ============================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=theme_config.SERVER_HOST,
        port=theme_config.SERVER_PORT,
        reload=True,
        log_level=theme_config.LOG_LEVEL.lower(),
    )
