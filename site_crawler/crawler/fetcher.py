# site_crawler/crawler/fetcher.py
"""
Fetcher module: a single bounded HTTP GET with timeout and content-type gating.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.models import FetchFailure, FetchResult
from site_crawler.logger import LOGGER_NAME


def build_headers(config: CrawlerConfig) -> Dict[str, str]:
    """Identifying headers sent with every request."""
    return {
        "User-Agent": config.user_agent,
        "Accept": config.accept,
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    }


def create_session(config: CrawlerConfig) -> ClientSession:
    """Session for one crawl: per-request timeout, no cap on open connections."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers=build_headers(config),
        connector=TCPConnector(limit=0),
        raise_for_status=False,
    )


class Fetcher:
    """Fetches HTML pages; every failure collapses into a ``FetchResult`` with a reason."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config
        self.logger = logging.getLogger(LOGGER_NAME)

    async def fetch(self, url: str) -> FetchResult:
        """
        GET *url* and return its body if it is an HTML document.

        The body is not read when the content type is not ``text/html``.
        """
        try:
            async with self.session.get(url, allow_redirects=True) as resp:
                ctype = resp.headers.get("Content-Type", "").lower()
                if "text/html" not in ctype:
                    self.logger.debug("Skip %s: content type %r", url, ctype)
                    return FetchResult.failure(url, FetchFailure.CONTENT_TYPE, resp.status)
                if not 200 <= resp.status < 400:
                    self.logger.debug("Skip %s: HTTP %s", url, resp.status)
                    return FetchResult.failure(url, FetchFailure.STATUS, resp.status)
                text = await resp.text(errors="replace")
                return FetchResult.success(url, text, resp.status)
        except asyncio.TimeoutError:
            self.logger.warning("Timeout after %.1f s: %s", self.config.timeout, url)
            return FetchResult.failure(url, FetchFailure.TIMEOUT)
        except ClientError as exc:
            self.logger.warning("Failed %s: %s", url, exc)
            return FetchResult.failure(url, FetchFailure.NETWORK)
        except (UnicodeDecodeError, LookupError) as exc:
            self.logger.warning("Cannot decode %s: %s", url, exc)
            return FetchResult.failure(url, FetchFailure.DECODE)
        except ValueError as exc:
            # yarl rejects some malformed URLs before aiohttp wraps them
            self.logger.warning("Invalid URL %s: %s", url, exc)
            return FetchResult.failure(url, FetchFailure.NETWORK)
