# File: site_crawler/service.py
"""site_crawler.service: JSON-контракт краулера и HTTP-приложение на aiohttp.

Тело запроса::

    {"mode": "pages", "urls": ["https://a.example/x", ...]}
    {"mode": "domain", "url": "example.com", "maxPages": 40}

Ответ ``{"pages": [...]}`` либо ``{"error": "<message>"}`` со статусом 400.
Некорректный запрос отклоняется до любой сетевой активности.
"""
from __future__ import annotations

import json
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, Union

from aiohttp import web
from pydantic import ValidationError

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.models import CrawlRequest, DomainRequest, PageResult, PagesRequest
from site_crawler.errors import (
    CrawlRequestError,
    EmptyInput,
    InvalidJSON,
    InvalidRequest,
    MissingURL,
    UnsupportedMode,
)
from site_crawler.logger import logger
from site_crawler.scanner import start_crawl
from site_crawler.utils import normalize_domain_url, remove_duplicates

__all__ = ["parse_request", "handle_crawl_request", "create_app", "CONFIG_KEY", "CRAWL_ROUTE"]

CRAWL_ROUTE = "/api/crawler"
CONFIG_KEY = web.AppKey("config", CrawlerConfig)

CrawlFunc = Callable[[CrawlRequest, Optional[CrawlerConfig]], Awaitable[list[PageResult]]]


def parse_request(body: Union[str, bytes, Dict[str, Any]]) -> CrawlRequest:
    """Разбирает тело запроса и проверяет его форму.

    Raises:
        InvalidJSON: тело не является JSON.
        UnsupportedMode: ``mode`` не ``pages`` и не ``domain``.
        EmptyInput: в режиме pages не осталось непустых URL.
        MissingURL: в режиме domain ``url`` не указан или состоит из пробелов.
        InvalidRequest: поля имеют неверный тип.
        InvalidURL: seed-URL не разбирается.
    """
    if isinstance(body, (str, bytes)):
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidJSON() from exc
    else:
        data = body

    mode = data.get("mode") if isinstance(data, dict) else None
    if mode not in ("pages", "domain"):
        raise UnsupportedMode()

    try:
        if mode == "pages":
            request: CrawlRequest = PagesRequest.model_validate({**data, "urls": data.get("urls") or []})
        else:
            request = DomainRequest.model_validate(data)
    except ValidationError as exc:
        logger.debug("Invalid request body: %s", exc)
        raise InvalidRequest() from exc

    if isinstance(request, PagesRequest):
        if not remove_duplicates(request.urls):
            raise EmptyInput()
    else:
        if not request.url or not request.url.strip():
            raise MissingURL()
        normalize_domain_url(request.url)
    return request


async def handle_crawl_request(
    body: Union[str, bytes, Dict[str, Any]],
    config: Optional[CrawlerConfig] = None,
    crawl: CrawlFunc = start_crawl,
) -> Tuple[int, Dict[str, Any]]:
    """Возвращает пару (HTTP-статус, JSON-совместимый payload)."""
    try:
        request = parse_request(body)
    except CrawlRequestError as exc:
        logger.info("Rejected crawl request: %s", exc.message)
        return 400, {"error": exc.message}

    pages = await crawl(request, config)
    return 200, {"pages": [p.to_dict() for p in pages]}


async def _crawl_handler(request: web.Request) -> web.Response:
    body = await request.read()
    status, payload = await handle_crawl_request(body, request.app[CONFIG_KEY])
    return web.json_response(payload, status=status)


def create_app(config: Optional[CrawlerConfig] = None) -> web.Application:
    """Приложение aiohttp с единственным маршрутом ``POST /api/crawler``."""
    app = web.Application()
    app[CONFIG_KEY] = config or CrawlerConfig()
    app.router.add_post(CRAWL_ROUTE, _crawl_handler)
    return app
