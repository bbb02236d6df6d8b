# File: site_crawler/aggregator.py
"""site_crawler.aggregator: Сводный отчёт по результатам обхода."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, TypedDict


class PageInfo(TypedDict):
    """Страница в том виде, в котором она уходит клиенту."""

    url: str
    status: str
    content: str
    wordCount: int


@dataclass(slots=True)
class CrawlReport:
    """Результаты обхода и агрегаты, которые показывает дашборд."""

    pages: List[PageInfo] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    @property
    def ok_pages(self) -> int:
        return sum(1 for p in self.pages if p["status"] == "ok")

    @property
    def error_pages(self) -> int:
        return self.total_pages - self.ok_pages

    @property
    def total_words(self) -> int:
        return sum(p["wordCount"] for p in self.pages)

    def summary(self) -> Dict[str, int]:
        return {
            "total_pages": self.total_pages,
            "ok_pages": self.ok_pages,
            "error_pages": self.error_pages,
            "total_words": self.total_words,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {"pages": list(self.pages), "summary": self.summary()}

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(raw_results: Sequence[Any]) -> CrawlReport:
    """Собирает CrawlReport из PageResult или уже сериализованных словарей."""
    pages: List[PageInfo] = []
    for entry in raw_results:
        data = entry if isinstance(entry, dict) else entry.to_dict()
        pages.append(
            {
                "url": data.get("url", ""),
                "status": data.get("status", "error"),
                "content": data.get("content", ""),
                "wordCount": int(data.get("wordCount", 0)),
            }
        )
    return CrawlReport(pages=pages)
