# === FILE: site_crawler/scanner.py ===
"""
Модуль-обёртка для функции запуска обхода.
"""
from typing import List, Optional

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.crawler import PageCrawler
from site_crawler.crawler.models import CrawlRequest, PageResult


async def start_crawl(request: CrawlRequest, cfg: Optional[CrawlerConfig] = None) -> List[PageResult]:
    """
    Запускает краулер в контексте и возвращает список PageResult.

    Parameters
    ----------
    request : PagesRequest | DomainRequest
        Что обходить: список страниц или сайт целиком.
    cfg : CrawlerConfig, optional
        Конфигурация; по умолчанию используются встроенные значения.

    Returns
    -------
    List[PageResult]
        Результаты в порядке загрузки (для domain) или в порядке уникальных URL (для pages).
    """
    async with PageCrawler(cfg) as crawler:
        pages = await crawler.crawl(request)
    return pages

__all__ = ["start_crawl"]
