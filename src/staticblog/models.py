from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


NO_DATE = "No date found"
DEFAULT_TITLE = "Untitled"
DEFAULT_DESC = "No description available"

CORE_FIELDS = frozenset(
    {"file_name", "file_path", "date", "title", "desc", "content", "year", "month", "day", "slug", "extra"}
)


class MetadataFormat(str, Enum):
    HTML_COMMENT = "html-comment"
    FRONT_MATTER = "front-matter"

    @classmethod
    def _missing_(cls, value: object) -> "MetadataFormat":
        return cls.HTML_COMMENT


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class MetadataBag:
    date: Optional[str] = None
    title: Optional[str] = None
    desc: Optional[str] = None
    extra: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class BlogRecord:
    """One parsed blog post.

    Core fields are fixed; metadata the extractor found beyond them lives in
    ``extra`` and is merged onto the top level only by ``to_dict()``.
    """

    file_name: str
    file_path: str
    date: str
    title: str
    desc: str
    content: str
    year: Optional[str]
    month: Optional[str]
    day: Optional[str]
    slug: str
    extra: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def get(self, key: str, default: Any = None) -> Any:
        if key in CORE_FIELDS:
            return getattr(self, key)
        return self.extra.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.extra)
        data.update(
            {
                "file_name": self.file_name,
                "file_path": self.file_path,
                "date": self.date,
                "title": self.title,
                "desc": self.desc,
                "content": self.content,
                "year": self.year,
                "month": self.month,
                "day": self.day,
                "slug": self.slug,
            }
        )
        return data


@dataclass(frozen=True)
class Pagination:
    current_page: int
    total_pages: int
    total_items: int
    per_page: int
    has_next: bool
    has_prev: bool
    next_page: Optional[int]
    prev_page: Optional[int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "total_items": self.total_items,
            "per_page": self.per_page,
            "has_next": self.has_next,
            "has_prev": self.has_prev,
            "next_page": self.next_page,
            "prev_page": self.prev_page,
        }


@dataclass(frozen=True)
class PaginatedResult:
    items: list[BlogRecord]
    pagination: Pagination

    # Shortcuts so callers can read page metadata off the result directly.
    @property
    def current_page(self) -> int:
        return self.pagination.current_page

    @property
    def total_pages(self) -> int:
        return self.pagination.total_pages

    @property
    def total_items(self) -> int:
        return self.pagination.total_items

    @property
    def has_next(self) -> bool:
        return self.pagination.has_next

    @property
    def has_prev(self) -> bool:
        return self.pagination.has_prev


@dataclass(frozen=True)
class BlogStats:
    total_posts: int
    last_refresh: Optional[datetime]
    oldest_post: Optional[str]
    newest_post: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_posts": self.total_posts,
            "last_refresh": self.last_refresh.isoformat(timespec="seconds") if self.last_refresh else None,
            "oldest_post": self.oldest_post,
            "newest_post": self.newest_post,
        }
