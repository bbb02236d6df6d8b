# === FILE: site_crawler/parser/html_parser.py ===
"""HTML parsing utilities for SiteCrawler.

:func:`extract_main_content` turns a raw HTML document into the two things the
crawler needs:

* text  — visible text of ``<body>`` with navigation, scripts and other
  non-content blocks removed and whitespace collapsed to single spaces.
* links — distinct ``href`` values of the remaining ``<a>`` tags, exactly as
  written in the markup (no resolution), in document order.

Links inside removed blocks (``<nav>``, ``<header>``, ``<footer>`` …) are gone
together with the block.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("ExtractedContent", "EXCLUDED_TAGS", "extract_main_content", "clean_text")

EXCLUDED_TAGS: tuple[str, ...] = ("script", "style", "noscript", "svg", "nav", "footer", "header", "aside")

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(slots=True)
class ExtractedContent:
    """Readable text and unique hrefs of one document."""

    text: str
    links: tuple[str, ...]


def clean_text(raw: str) -> str:
    """Collapse whitespace runs (incl. non-breaking spaces) into one space and trim."""
    return _WHITESPACE_RE.sub(" ", raw).replace("\u00a0", " ").strip()


def extract_main_content(html: str) -> ExtractedContent:
    soup = BeautifulSoup(html, "html.parser")

    for element in soup(list(EXCLUDED_TAGS)):
        element.decompose()

    root = soup.body
    if root is None:
        # fragment without <body>: everything outside <head> counts as body
        for element in soup(["head", "title"]):
            element.decompose()
        root = soup
    text = clean_text(root.get_text())

    links: dict[str, None] = {}
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if isinstance(href, str) and href:
            links.setdefault(href, None)

    return ExtractedContent(text=text, links=tuple(links))
