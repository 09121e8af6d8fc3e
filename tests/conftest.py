"""
Shared fixtures: a fake web built on httpx.MockTransport.
"""

from typing import Callable, Dict, List, Union

import httpx
import pytest

Page = Union[str, int, httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeWeb:
    """Serves canned pages by URL and records every request"""

    def __init__(self, pages: Dict[str, Page]):
        self.pages = pages
        self.requests: List[httpx.Request] = []

    @property
    def requested_urls(self) -> List[str]:
        return [str(r.url) for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        page = self.pages.get(str(request.url))
        if page is None:
            return httpx.Response(404, text="not found")
        if isinstance(page, int):
            return httpx.Response(page, text="")
        if isinstance(page, httpx.Response):
            return page
        if callable(page):
            return page(request)
        return httpx.Response(200, text=page)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_web():
    def build(pages: Dict[str, Page]) -> FakeWeb:
        return FakeWeb(pages)
    return build


DARK_SITE_HTML = (
    "<html><head>"
    "<style>body{background:#101010;color:#f5f5f5} .btn{background:#ff6600}</style>"
    "</head><body><a class=\"btn\">Go</a></body></html>"
)


@pytest.fixture
def dark_site_html() -> str:
    return DARK_SITE_HTML
