# File: site_crawler/errors.py
"""site_crawler.errors: Исключения, описывающие некорректные запросы на обход.

Ошибки отдельных страниц сюда не относятся: они превращаются в
``status="error"`` в результатах и никогда не прерывают обход.
"""
from __future__ import annotations

__all__ = (
    "CrawlError",
    "CrawlRequestError",
    "InvalidJSON",
    "InvalidRequest",
    "EmptyInput",
    "MissingURL",
    "UnsupportedMode",
    "InvalidURL",
)


class CrawlError(Exception):
    """Базовое исключение пакета."""


class CrawlRequestError(CrawlError, ValueError):
    """Запрос отклонён до начала сетевой активности."""

    default_message = "Invalid request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidJSON(CrawlRequestError):
    default_message = "Invalid JSON body"


class InvalidRequest(CrawlRequestError):
    default_message = "Invalid request body"


class EmptyInput(CrawlRequestError):
    default_message = "No URLs provided"


class MissingURL(CrawlRequestError):
    default_message = "Domain URL is required"


class UnsupportedMode(CrawlRequestError):
    default_message = "Unsupported mode"


class InvalidURL(CrawlRequestError):
    default_message = "Invalid URL"
