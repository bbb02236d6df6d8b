# === FILE: site_crawler/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Deque, List, Optional, Sequence, Set
from urllib.parse import urljoin, urlsplit

from aiohttp import ClientSession

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.fetcher import Fetcher, create_session
from site_crawler.crawler.models import (
    CrawlRequest,
    CrawlResult,
    DomainRequest,
    FrontierEntry,
    PageResult,
    PageStatus,
    PagesRequest,
)
from site_crawler.errors import EmptyInput, MissingURL, UnsupportedMode
from site_crawler.logger import LOGGER_NAME
from site_crawler.parser.html_parser import extract_main_content
from site_crawler.utils import (
    canonical_url,
    extract_origin,
    is_asset_path,
    normalize_domain_url,
    remove_duplicates,
)

__all__ = ("PageCrawler",)


class PageCrawler:
    """Асинхронный краулер: список страниц параллельно или BFS по одному origin."""

    def __init__(self, config: CrawlerConfig | None = None, session: ClientSession | None = None) -> None:
        self.config = config or CrawlerConfig()
        self.session = session
        self._own_session = session is None
        self.fetcher: Optional[Fetcher] = None if session is None else Fetcher(session, self.config)
        self.logger = logging.getLogger(LOGGER_NAME)

    async def __aenter__(self) -> PageCrawler:
        if self.session is None:
            self.session = create_session(self.config)
            self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._own_session and self.session and not self.session.closed:
            await self.session.close()
        if self._own_session:
            self.session = None
            self.fetcher = None

    async def crawl(self, request: CrawlRequest) -> List[PageResult]:
        """Выбирает стратегию по режиму запроса и возвращает результаты без ссылок."""
        if isinstance(request, PagesRequest):
            return await self.crawl_pages(request.urls)
        if isinstance(request, DomainRequest):
            return await self.crawl_domain(request.url, request.max_pages)
        raise UnsupportedMode()

    async def crawl_pages(self, urls: Sequence[Optional[str]]) -> List[PageResult]:
        """Fetch every distinct, non-empty URL concurrently."""
        unique = remove_duplicates(urls)
        if not unique:
            raise EmptyInput()

        self.logger.info("Старт обхода списка: %d страниц", len(unique))
        start = time.monotonic()
        results = await asyncio.gather(*(self.crawl_single(u) for u in unique))
        self._log_finished(results, start)
        return [r.to_page() for r in results]

    async def crawl_domain(self, url: Optional[str], max_pages: Optional[int] = None) -> List[PageResult]:
        """
        Breadth-first traversal of the seed's origin.

        Stops when the frontier is empty or ``max_pages`` results are collected;
        pages deeper than ``config.max_depth`` hops are never queued.
        """
        if not url or not url.strip():
            raise MissingURL()

        seed = normalize_domain_url(url)
        origin = extract_origin(seed)
        limit = self.config.effective_max_pages(max_pages)
        max_depth = self.config.max_depth

        self.logger.info("Старт обхода: %s (max_pages=%d, max_depth=%d)", seed, limit, max_depth)
        start = time.monotonic()

        frontier: Deque[FrontierEntry] = deque([FrontierEntry(seed, 0)])
        visited: Set[str] = set()
        collected: List[CrawlResult] = []

        while frontier and len(collected) < limit:
            entry = frontier.popleft()
            current = canonical_url(entry.url)
            if current in visited:
                continue
            visited.add(current)

            result = await self.crawl_single(current)
            collected.append(result)

            if result.ok and entry.depth < max_depth and len(collected) < limit:
                for link in self._expand(result, origin):
                    if link not in visited:
                        frontier.append(FrontierEntry(link, entry.depth + 1))

        self._log_finished(collected, start)
        return [r.to_page() for r in collected]

    async def crawl_single(self, url: str) -> CrawlResult:
        """Fetch and extract one page; failures become ``status=error``."""
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        fetched = await self.fetcher.fetch(url)
        if not fetched.ok:
            self.logger.debug("Page %s unavailable (%s)", url, fetched.reason.value if fetched.reason else "?")
            return CrawlResult(url=url, status=PageStatus.ERROR)

        extracted = extract_main_content(fetched.html or "")
        return CrawlResult(url=url, status=PageStatus.OK, content=extracted.text, links=extracted.links)

    def _expand(self, page: CrawlResult, origin: str) -> List[str]:
        """Resolve hrefs of *page* and keep same-origin, non-asset links in canonical form."""
        links: List[str] = []
        for href in page.links:
            try:
                absolute = urljoin(page.url, href)
                if extract_origin(absolute) != origin:
                    continue
                path = urlsplit(absolute).path
                canonical = canonical_url(absolute)
            except ValueError:
                self.logger.debug("Drop malformed link %r on %s", href, page.url)
                continue
            if is_asset_path(path, self.config.asset_extensions):
                continue
            links.append(canonical)
        return links

    def _log_finished(self, results: Sequence[CrawlResult], start: float) -> None:
        duration = time.monotonic() - start
        ok = sum(1 for r in results if r.ok)
        self.logger.info(
            "Завершено: %d страниц (%d ok, %d error) за %.2f с",
            len(results),
            ok,
            len(results) - ok,
            duration,
        )
