# File: site_crawler/utils.py
"""site_crawler.utils: Нормализация URL, подсчёт слов и работа со списками адресов."""

from __future__ import annotations

import re
from typing import Collection, Iterable, List, Optional, Sequence
from urllib.parse import urlsplit, urlunsplit

from site_crawler.errors import InvalidURL
from site_crawler.logger import logger

__all__: Sequence[str] = (
    "ASSET_EXTENSIONS",
    "normalize_domain_url",
    "canonical_url",
    "strip_fragment",
    "extract_origin",
    "is_asset_path",
    "word_count",
    "remove_duplicates",
    "split_url_list",
)

ASSET_EXTENSIONS: tuple[str, ...] = ("png", "jpg", "jpeg", "gif", "svg", "ico", "css", "js", "pdf", "zip")

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_URL_LIST_SPLIT_RE = re.compile(r"[\n,]+")
_DEFAULT_PORTS = {"http": 80, "https": 443}


def _split(url: str):
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as exc:
        logger.debug("Cannot parse URL %r: %s", url, exc)
        raise InvalidURL() from exc
    return parts, port


def _host_port(parts, port: int | None) -> str:
    """``host[:port]`` в нижнем регистре, порт по умолчанию для схемы опускается."""
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"
    if port is None or port == _DEFAULT_PORTS.get(scheme):
        return host
    return f"{host}:{port}"


def _rebuild(parts, port: int | None, query: str) -> str:
    netloc = _host_port(parts, port)
    # userinfo сохраняется как есть, регистр меняется только у хоста
    if "@" in parts.netloc:
        netloc = f"{parts.netloc.rpartition('@')[0]}@{netloc}"
    return urlunsplit((parts.scheme.lower(), netloc, parts.path or "/", query, ""))


def normalize_domain_url(raw: str) -> str:
    """Приводит адрес сайта к виду seed-URL: схема, хост, порт и путь без query/fragment.

    Если схема ``http(s)://`` не указана, подставляется ``https://``.
    """
    url = raw.strip()
    if not _SCHEME_RE.match(url):
        url = f"https://{url}"

    parts, port = _split(url)
    if not parts.hostname or any(ch.isspace() for ch in parts.netloc):
        logger.debug("Rejected seed URL %r", raw)
        raise InvalidURL()

    normalized = _rebuild(parts, port, "")
    logger.debug("Normalized seed URL: %s -> %s", raw, normalized)
    return normalized


def canonical_url(url: str) -> str:
    """Ключ для множества посещённых страниц.

    Схема и хост в нижнем регистре, порт по умолчанию убран, пустой путь
    становится ``/``, fragment отброшен; query сохраняется.
    """
    parts, port = _split(url)
    if not parts.hostname:
        return strip_fragment(url)
    return _rebuild(parts, port, parts.query)


def strip_fragment(url: str) -> str:
    """Убирает ``#fragment``, остальные части URL не трогает."""
    parts = urlsplit(url)
    if not parts.fragment and "#" not in url:
        return url
    return urlunsplit((parts.scheme, parts.netloc, parts.path, parts.query, ""))


def extract_origin(url: str) -> str:
    """Возвращает ``scheme://host[:port]``; порт по умолчанию для схемы опускается."""
    parts, port = _split(url)
    return f"{parts.scheme.lower()}://{_host_port(parts, port)}"


def is_asset_path(path: str, extensions: Iterable[str] = ASSET_EXTENSIONS) -> bool:
    """True, если путь оканчивается на расширение статического ресурса (без учёта регистра)."""
    lowered = path.lower()
    return any(lowered.endswith(f".{ext.lower().lstrip('.')}") for ext in extensions)


def word_count(text: str) -> int:
    """Число непустых токенов, разделённых пробельными символами."""
    return len(text.split()) if text else 0


def remove_duplicates(urls: Collection[Optional[str]]) -> List[str]:
    """Удаляет пустые значения и дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(u for u in urls if u))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d empty or duplicate URLs", removed)
    return unique


def split_url_list(raw: str) -> List[str]:
    """Разбивает текст со списком адресов по переводам строк и запятым."""
    return [part.strip() for part in _URL_LIST_SPLIT_RE.split(raw) if part.strip()]
