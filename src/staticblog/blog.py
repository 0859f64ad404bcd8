"""Top-level blog object handed to the view layer."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from .cache import BlogIndex
from .config import BlogConfig
from .feed import render_rss_feed
from .models import BlogRecord, BlogStats, PaginatedResult

FULL_TEXT_FIELDS = ("title", "desc", "content")


class StaticBlog:
    """Blog system built from a BlogConfig.

    Holds the configuration and the index; consumers keep a reference to this
    object rather than to module-level state.
    """

    def __init__(self, config: BlogConfig):
        self.config = config
        self.index = BlogIndex(config)
        if config.cache_enabled:
            self.index.refresh()

    def get_all(self) -> list[BlogRecord]:
        return self.index.get_all()

    def get_by_date(self, key: Any) -> Optional[BlogRecord]:
        return self.index.get_by_date(key)

    def get_recent(self, count: int = 5) -> list[BlogRecord]:
        return self.index.get_recent(count)

    def get_by_slug(self, slug: str) -> Optional[BlogRecord]:
        return self.index.get_by_slug(slug)

    def get_by_year(self, year: Any) -> list[BlogRecord]:
        return self.index.get_by_year(year)

    def get_by_year_month(self, year: Any, month: Any) -> list[BlogRecord]:
        return self.index.get_by_year_month(year, month)

    def get_paginated(self, page: Any = 1, per_page: Optional[int] = None) -> PaginatedResult:
        return self.index.get_paginated(page, per_page or self.config.default_per_page)

    def search(self, keyword: str) -> list[BlogRecord]:
        """Full-text search across title, description and raw content."""
        return self.index.search(keyword, FULL_TEXT_FIELDS)

    def refresh(self) -> None:
        self.index.refresh()

    def get_stats(self) -> BlogStats:
        return self.index.get_stats()

    def rss_feed(self, base_url: str, count: int = 20, build_date: Optional[datetime] = None) -> str:
        link = base_url.rstrip("/") + self.config.route_prefix
        return render_rss_feed(
            self.get_recent(count),
            title=self.config.feed_title,
            description=self.config.feed_description,
            link=link,
            language=self.config.feed_language,
            build_date=build_date,
        )


def create_blog_system(**options: Any) -> StaticBlog:
    """Build a StaticBlog from keyword options (see BlogConfig for the fields).

    Example:
        blog = create_blog_system(source_directory="./blogs", sort_order="asc")
    """
    return StaticBlog(BlogConfig(**options))
