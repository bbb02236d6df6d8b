"""
Data models for the SiteCrawler crawler.

Request models are validated with pydantic; results produced during one crawl
are plain dataclasses.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from site_crawler.utils import word_count


class PagesRequest(BaseModel):
    """Fetch an explicit list of pages."""
    model_config = ConfigDict(frozen=True)

    mode: Literal["pages"] = "pages"
    urls: List[Optional[str]] = Field(default_factory=list)


class DomainRequest(BaseModel):
    """Breadth-first crawl of one origin starting from *url*."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mode: Literal["domain"] = "domain"
    url: Optional[str] = None
    max_pages: Optional[int] = Field(None, alias="maxPages")


CrawlRequest = Union[PagesRequest, DomainRequest]


class PageStatus(str, enum.Enum):
    OK = "ok"
    ERROR = "error"


@dataclass(slots=True)
class PageResult:
    """Externally visible result for one fetched page."""

    url: str
    status: PageStatus
    content: str = ""

    @property
    def word_count(self) -> int:
        return word_count(self.content)

    @property
    def ok(self) -> bool:
        return self.status is PageStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "status": self.status.value,
            "content": self.content,
            "wordCount": self.word_count,
        }


@dataclass(slots=True)
class CrawlResult(PageResult):
    """PageResult plus the hrefs found on the page; used only while traversing."""

    links: Tuple[str, ...] = ()

    def to_page(self) -> PageResult:
        return PageResult(url=self.url, status=self.status, content=self.content)


@dataclass(frozen=True, slots=True)
class FrontierEntry:
    url: str
    depth: int = 0


class FetchFailure(str, enum.Enum):
    """Why a page could not be fetched. Logged, never returned to the caller."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    CONTENT_TYPE = "content_type"
    STATUS = "status"
    DECODE = "decode"


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Outcome of a single GET: either HTML or a failure reason."""

    url: str
    html: Optional[str] = None
    reason: Optional[FetchFailure] = None
    http_status: Optional[int] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.html is not None

    @classmethod
    def success(cls, url: str, html: str, http_status: int | None = None) -> FetchResult:
        return cls(url=url, html=html, http_status=http_status)

    @classmethod
    def failure(cls, url: str, reason: FetchFailure, http_status: int | None = None) -> FetchResult:
        return cls(url=url, reason=reason, http_status=http_status)
