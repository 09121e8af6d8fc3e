"""
Theme Extractor Service
主题提取服务

Fetches a page and its stylesheets, then runs
extract -> classify -> synthesize over the assembled HTML + CSS.

States:
    FETCHING_HTML -> EXTRACTING_INLINE_CSS -> DISCOVERING_STYLESHEETS
    -> FETCHING_STYLESHEETS -> ANALYZING -> DONE | FAILED

Only the HTML fetch can fail the request. Stylesheets that fail,
time out or are too large contribute empty CSS.
"""

import asyncio
import html as html_lib
import logging
import re
from typing import List, Optional, Tuple
from urllib.parse import urljoin, urlparse

import httpx

import theme_config
from .css_extractor import extract_colors, extract_css_variables, extract_fonts
from .models import (
    ExtractionDebug,
    ExtractionPhase,
    ExtractionResult,
    SelectedColors,
    SiteStyles,
)
from .theme_classifier import classify
from .theme_synthesizer import site_display_name, synthesize_theme

# 设置日志
logger = logging.getLogger(__name__)


STYLE_BLOCK_RE = re.compile(r'<style[^>]*>([\s\S]*?)</style>', re.IGNORECASE)
# `style=`, not `data-style=` / `font-style=`
STYLE_ATTR_RE = re.compile(r'(?<![-\w])style\s*=\s*(?:"([^"]*)"|\'([^\']*)\')', re.IGNORECASE)
STYLESHEET_LINK_RE = re.compile(
    r'<link[^>]+href\s*=\s*["\']([^"\']+\.css[^"\']*)["\']',
    re.IGNORECASE
)
# characters a URL host can never carry (httpx would percent-encode them)
INVALID_HOST_CHARS_RE = re.compile(r'[\s<>"{}|\\^`%]')


# ============================================
# Errors
# ============================================

class ThemeExtractionError(Exception):
    """Base error for a failed extraction; `message` is safe to return"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidURLError(ThemeExtractionError):
    """Missing or unparseable target URL"""


class UpstreamFetchError(ThemeExtractionError):
    """Target page could not be fetched"""

    def __init__(self, message: str = "Failed to fetch website"):
        super().__init__(message)


# ============================================
# Pure Helpers
# ============================================

def parse_target_url(url: Optional[str]) -> str:
    """
    Validate the requested URL.

    Scheme-relative input (`//example.com`) is read as https.

    Raises:
        InvalidURLError: missing, or not an absolute http(s) URL
    """
    if url is None or not url.strip():
        raise InvalidURLError("URL is required")

    url = url.strip()
    if url.startswith('//'):
        url = 'https:' + url

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        # non-numeric or out-of-range ports raise here
        parsed.port
        httpx.URL(url)
    except (ValueError, httpx.InvalidURL):
        raise InvalidURLError("Invalid URL")

    if parsed.scheme not in ('http', 'https') or not hostname:
        raise InvalidURLError("Invalid URL")
    if INVALID_HOST_CHARS_RE.search(hostname):
        raise InvalidURLError("Invalid URL")

    return url


def extract_inline_css(html: str) -> str:
    """
    Concatenate `<style>` bodies and `style="..."` attribute values.
    Attribute values are HTML-unescaped (`&quot;Inter&quot;` -> `"Inter"`).
    """
    chunks = [m.group(1) for m in STYLE_BLOCK_RE.finditer(html)]
    chunks.extend(
        html_lib.unescape(m.group(1) or m.group(2) or '')
        for m in STYLE_ATTR_RE.finditer(html)
    )
    return ''.join(chunk + '\n' for chunk in chunks)


def resolve_stylesheet_url(href: str, page_url: str) -> str:
    """
    Make a stylesheet href absolute.
    - `//cdn/x.css` -> `https://cdn/x.css`
    - `/x.css` -> page origin + path
    - anything else relative -> resolved against the page URL
    """
    href = html_lib.unescape(href.strip())
    if href.startswith('//'):
        return 'https:' + href
    if href.startswith(('http://', 'https://')):
        return href
    if href.startswith('/'):
        parsed = urlparse(page_url)
        return f"{parsed.scheme}://{parsed.netloc}{href}"
    return urljoin(page_url, href)


def discover_stylesheets(html: str, page_url: str, limit: int) -> List[str]:
    """Linked stylesheet URLs in document order, de-duplicated, at most `limit`"""
    urls: List[str] = []
    for match in STYLESHEET_LINK_RE.finditer(html):
        if len(urls) >= limit:
            break
        url = resolve_stylesheet_url(match.group(1), page_url)
        if url not in urls:
            urls.append(url)
    return urls


# ============================================
# Streamed Bodies
# ============================================

async def read_limited(response: httpx.Response, limit: int) -> Tuple[bytes, bool]:
    """
    Read a streamed body, stopping once it passes `limit` bytes.
    Returns (at most `limit` bytes, whether the body was longer).
    """
    body = bytearray()
    async for chunk in response.aiter_bytes():
        body.extend(chunk)
        if len(body) > limit:
            return bytes(body[:limit]), True
    return bytes(body), False


def decode_body(response: httpx.Response, body: bytes) -> str:
    return body.decode(response.encoding or 'utf-8', errors='replace')


# ============================================
# Analysis
# ============================================

def analyze(styles: SiteStyles) -> ExtractionResult:
    """Extractor -> Classifier -> Synthesizer over one page"""
    inventory = extract_colors(styles.html, styles.css)
    css_variables = extract_css_variables(styles.css)
    fonts = extract_fonts(styles.css)

    seeds = classify(inventory, css_variables)
    theme = synthesize_theme(seeds, site_display_name(styles.url))

    return ExtractionResult(
        success=True,
        theme=theme,
        fonts=fonts,
        colors_found=len(inventory.counts),
        is_dark=seeds.is_dark,
        debug=ExtractionDebug(
            backgrounds_found=len(inventory.backgrounds),
            foregrounds_found=len(inventory.foregrounds),
            accents_found=len(inventory.accents),
            css_vars_found=len(css_variables),
            selected=SelectedColors(
                background=seeds.background,
                foreground=seeds.foreground,
                accent=seeds.accent,
            ),
        ),
    )


# ============================================
# Service
# ============================================

class ThemeExtractorService:
    """
    Theme 提取服务
    管理抓取流程和分析链
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        user_agent: str = theme_config.THEME_USER_AGENT,
        max_stylesheets: int = theme_config.THEME_MAX_STYLESHEETS,
        html_timeout: float = theme_config.THEME_HTML_TIMEOUT,
        stylesheet_timeout: float = theme_config.THEME_STYLESHEET_TIMEOUT,
        max_css_bytes: int = theme_config.THEME_MAX_CSS_BYTES,
        max_html_bytes: int = theme_config.THEME_MAX_HTML_BYTES,
    ):
        self.transport = transport
        self.user_agent = user_agent
        self.max_stylesheets = max_stylesheets
        self.html_timeout = html_timeout
        self.stylesheet_timeout = stylesheet_timeout
        self.max_css_bytes = max_css_bytes
        self.max_html_bytes = max_html_bytes

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self.transport,
            headers={"User-Agent": self.user_agent},
            follow_redirects=True,
        )

    async def extract(self, url: Optional[str]) -> ExtractionResult:
        """
        主提取方法

        Args:
            url: target page, absolute or scheme-relative

        Returns:
            ExtractionResult for the page

        Raises:
            InvalidURLError: bad input, nothing was fetched
            UpstreamFetchError: the page itself could not be fetched
        """
        target = parse_target_url(url)
        phase = ExtractionPhase.FETCHING_HTML
        logger.info(f"开始提取主题: {target}")

        try:
            async with self._client() as client:
                html, page_url = await self._fetch_html(client, target)

                phase = ExtractionPhase.EXTRACTING_INLINE_CSS
                styles = SiteStyles(url=target, html=html, css=extract_inline_css(html))

                phase = ExtractionPhase.DISCOVERING_STYLESHEETS
                styles.stylesheet_urls = discover_stylesheets(
                    html, page_url, self.max_stylesheets
                )

                phase = ExtractionPhase.FETCHING_STYLESHEETS
                sheets = await self._fetch_stylesheets(client, styles.stylesheet_urls)
                styles.stylesheets_loaded = sum(1 for sheet in sheets if sheet)
                styles.css += ''.join(sheet + '\n' for sheet in sheets)

            phase = ExtractionPhase.ANALYZING
            result = analyze(styles)
            phase = ExtractionPhase.DONE
        except ThemeExtractionError:
            logger.debug(f"[{phase.value}] -> {ExtractionPhase.FAILED.value}: {target}")
            raise
        except Exception:
            logger.error(
                f"[{phase.value}] -> {ExtractionPhase.FAILED.value} 提取异常: {target}",
                exc_info=True
            )
            raise

        logger.info(
            f"提取成功: {target} "
            f"(colors={result.colors_found}, dark={result.is_dark}, "
            f"stylesheets={styles.stylesheets_loaded}/{len(styles.stylesheet_urls)})"
        )
        return result

    async def _fetch_html(self, client: httpx.AsyncClient, url: str) -> Tuple[str, str]:
        """
        Fetch the page; returns (html, final URL after redirects).
        Bodies past `max_html_bytes` are cut off, not rejected.
        """
        try:
            async with client.stream('GET', url, timeout=self.html_timeout) as response:
                if not response.is_success:
                    logger.warning(f"页面返回 {response.status_code}: {url}")
                    raise UpstreamFetchError()

                body, truncated = await read_limited(response, self.max_html_bytes)
                if truncated:
                    logger.info(f"页面太大，截断到 {self.max_html_bytes} bytes: {url}")
                return decode_body(response, body), str(response.url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"页面请求失败 {url}: {e}")
            raise UpstreamFetchError()

    async def _fetch_stylesheets(
        self,
        client: httpx.AsyncClient,
        urls: List[str]
    ) -> List[str]:
        """Fetch all stylesheets concurrently; failures come back as ''"""
        if not urls:
            return []
        return list(await asyncio.gather(
            *(self._fetch_stylesheet(client, url) for url in urls)
        ))

    async def _fetch_stylesheet(self, client: httpx.AsyncClient, url: str) -> str:
        """Download stops as soon as the body passes `max_css_bytes`"""
        try:
            async with client.stream('GET', url, timeout=self.stylesheet_timeout) as response:
                if not response.is_success:
                    logger.debug(f"样式表返回 {response.status_code}: {url}")
                    return ''

                body, truncated = await read_limited(response, self.max_css_bytes)
                if truncated:
                    logger.debug(f"样式表太大，跳过: {url} (> {self.max_css_bytes} bytes)")
                    return ''

                return decode_body(response, body)
        except Exception as e:
            logger.debug(f"下载样式表失败 {url}: {str(e)}")
            return ''


theme_extractor_service = ThemeExtractorService()
