# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from typing import Awaitable, Dict

import pytest
import pytest_asyncio
from aiohttp import web

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.crawler import PageCrawler


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


@dataclass
class Page:
    """One route of a fake site."""

    body: str = ""
    content_type: str = "text/html"
    status: int = 200
    delay: float = 0.0


@dataclass
class FakeSite:
    base: str
    hits: Counter = field(default_factory=Counter)
    headers: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def url(self, path: str) -> str:
        return f"{self.base}{path}"


SiteFactory = Callable[[Dict[str, Page]], Awaitable[FakeSite]]


def _make_handler(site: FakeSite, page: Page):
    async def handler(request: web.Request) -> web.Response:
        site.hits[request.path] += 1
        site.headers[request.path] = dict(request.headers)
        if page.delay:
            await asyncio.sleep(page.delay)
        return web.Response(
            text=page.body,
            status=page.status,
            content_type=page.content_type,
        )

    return handler


@pytest_asyncio.fixture
async def site_factory(unused_tcp_port_factory) -> AsyncIterator[SiteFactory]:
    """Start local aiohttp apps serving the given ``{path: Page}`` maps."""
    runners: list[web.AppRunner] = []

    async def _make(pages: Dict[str, Page]) -> FakeSite:
        port = unused_tcp_port_factory()
        site = FakeSite(base=f"http://127.0.0.1:{port}")
        app = web.Application()
        for path, page in pages.items():
            app.router.add_get(path, _make_handler(site, page))
        runner = web.AppRunner(app)
        await runner.setup()
        await web.TCPSite(runner, "127.0.0.1", port).start()
        runners.append(runner)
        return site

    try:
        yield _make
    finally:
        for runner in runners:
            await runner.cleanup()


@pytest.fixture()
def config() -> CrawlerConfig:
    """Crawler config with a short timeout for tests."""
    return CrawlerConfig(timeout=2.0, user_agent="TestAgent/1.0 (contact=test@example.com)")


@pytest_asyncio.fixture
async def crawler(config: CrawlerConfig) -> AsyncIterator[PageCrawler]:
    async with PageCrawler(config) as c:
        yield c


def links(*hrefs: str) -> str:
    """HTML body with one anchor per href."""
    anchors = "".join(f'<a href="{h}">link {i}</a> ' for i, h in enumerate(hrefs))
    return f"<html><body><p>Hello world</p>{anchors}</body></html>"
