"""Fetching and traversal: :class:`PageCrawler` and its building blocks."""
from site_crawler.crawler.crawler import PageCrawler
from site_crawler.crawler.fetcher import Fetcher
from site_crawler.crawler.models import (
    CrawlRequest,
    CrawlResult,
    DomainRequest,
    FetchFailure,
    FetchResult,
    FrontierEntry,
    PageResult,
    PageStatus,
    PagesRequest,
)

__all__ = [
    "PageCrawler",
    "Fetcher",
    "CrawlRequest",
    "CrawlResult",
    "DomainRequest",
    "FetchFailure",
    "FetchResult",
    "FrontierEntry",
    "PageResult",
    "PageStatus",
    "PagesRequest",
]
