"""In-memory index of parsed blog posts."""

from __future__ import annotations

import logging
import math
import re
import threading
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from .config import BlogConfig
from .models import BlogRecord, BlogStats, PaginatedResult, Pagination
from .parser import is_valid_date, parse_blog_file

logger = logging.getLogger(__name__)

HTML_SUFFIXES = (".html", ".htm")
DEFAULT_SEARCH_FIELDS = ("title", "desc")

_DATE_KEY_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)

_DateTriple = tuple[int, int, int]


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            return None
    return None


def _date_triple(key: Any) -> Optional[_DateTriple]:
    """Normalize a date-like lookup key to (year, month, day)."""
    if isinstance(key, str):
        m = _DATE_KEY_RE.fullmatch(key)
        if not m:
            return None
        return int(m.group(1)), int(m.group(2)), int(m.group(3))

    # datetime is a date subclass
    if isinstance(key, date):
        return key.year, key.month, key.day

    if isinstance(key, Mapping):
        if not key.get("year") or not key.get("month") or not key.get("day"):
            return None
        year, month, day = _to_int(key["year"]), _to_int(key["month"]), _to_int(key["day"])
        if year is None or month is None or day is None:
            return None
        return year, month, day

    return None


def _record_triple(record: BlogRecord) -> Optional[_DateTriple]:
    year, month, day = _to_int(record.year), _to_int(record.month), _to_int(record.day)
    if year is None or month is None or day is None:
        return None
    return year, month, day


def _iter_html_files(source_dir: Path) -> list[Path]:
    paths: list[Path] = []
    for p in source_dir.iterdir():
        if p.suffix.lower() not in HTML_SUFFIXES:
            continue
        if not p.is_file():
            continue
        paths.append(p)
    paths.sort(key=lambda p: p.name)
    return paths


class BlogIndex:
    """Owns the sorted, in-memory collection of blog records.

    The collection is a tuple that is only ever replaced as a whole by
    ``refresh()``; readers grab the current reference and never see a
    half-built index.
    """

    def __init__(self, config: BlogConfig):
        self.config = config
        self._records: tuple[BlogRecord, ...] = ()
        self._refresh_lock = threading.Lock()
        self.last_refresh: Optional[datetime] = None

    @property
    def source_directory(self) -> Path:
        return self.config.source_directory

    def refresh(self) -> None:
        """Re-read every HTML file in the source directory.

        A missing directory yields an empty index. Files that cannot be read or
        parsed are logged and skipped; records without a valid date are dropped.
        Errors listing the directory itself propagate.
        """
        with self._refresh_lock:
            source_dir = self.source_directory
            if not source_dir.is_dir():
                logger.warning(f"Blog directory does not exist: {source_dir}")
                self._records = ()
                return

            records: list[BlogRecord] = []
            for path in _iter_html_files(source_dir):
                try:
                    record = parse_blog_file(path, self.config.metadata_format)
                except (OSError, UnicodeDecodeError, ValueError) as e:
                    logger.warning(f"Error parsing blog file {path.name}: {e}")
                    continue
                if not is_valid_date(record.date):
                    logger.debug(f"Skipping {path.name}: invalid date {record.date!r}")
                    continue
                records.append(record)

            records.sort(key=lambda r: r.date, reverse=self.config.sort_order != "asc")

            self._records = tuple(records)
            self.last_refresh = datetime.now(timezone.utc)
            logger.info(f"Blog cache refreshed: {len(records)} posts loaded")

    def get_all(self) -> list[BlogRecord]:
        if not self.config.cache_enabled or not self._records:
            self.refresh()
        return list(self._records)

    def get_by_date(self, key: Any) -> Optional[BlogRecord]:
        """Find a post by ``"YYYY-MM-DD"``, a date/datetime, or a
        ``{"year", "month", "day"}`` mapping. Returns None when nothing matches."""
        triple = _date_triple(key)
        if triple is None:
            return None
        for record in self.get_all():
            if _record_triple(record) == triple:
                return record
        return None

    def get_recent(self, count: int = 5) -> list[BlogRecord]:
        if count <= 0:
            return []
        return self.get_all()[:count]

    def get_by_slug(self, slug: str) -> Optional[BlogRecord]:
        for record in self.get_all():
            if record.slug == slug:
                return record
        return None

    def get_by_year(self, year: Any) -> list[BlogRecord]:
        wanted = _to_int(year)
        if wanted is None:
            return []
        return [r for r in self.get_all() if _to_int(r.year) == wanted]

    def get_by_year_month(self, year: Any, month: Any) -> list[BlogRecord]:
        wanted_year, wanted_month = _to_int(year), _to_int(month)
        if wanted_year is None or wanted_month is None:
            return []
        return [
            r
            for r in self.get_all()
            if _to_int(r.year) == wanted_year and _to_int(r.month) == wanted_month
        ]

    def get_paginated(self, page: Any = 1, per_page: Optional[int] = None) -> PaginatedResult:
        records = self.get_all()
        size = _to_int(per_page)
        if size is None or size < 1:
            size = self.config.default_per_page

        total_items = len(records)
        total_pages = math.ceil(total_items / size)
        requested = _to_int(page)
        # Only the lower bound is clamped: a page past the end reports the
        # requested number with no items.
        current_page = max(1, requested if requested is not None else 1)
        start = (current_page - 1) * size

        has_next = current_page < total_pages
        has_prev = current_page > 1
        return PaginatedResult(
            items=records[start : start + size],
            pagination=Pagination(
                current_page=current_page,
                total_pages=total_pages,
                total_items=total_items,
                per_page=size,
                has_next=has_next,
                has_prev=has_prev,
                next_page=current_page + 1 if has_next else None,
                prev_page=current_page - 1 if has_prev else None,
            ),
        )

    def search(self, keyword: str, fields: Iterable[str] = DEFAULT_SEARCH_FIELDS) -> list[BlogRecord]:
        needle = keyword.lower()
        fields = tuple(fields)

        def matches(record: BlogRecord) -> bool:
            for name in fields:
                value = record.get(name)
                if value and needle in str(value).lower():
                    return True
            return False

        return [r for r in self.get_all() if matches(r)]

    def get_stats(self) -> BlogStats:
        records = self._records
        if not records:
            return BlogStats(total_posts=0, last_refresh=self.last_refresh, oldest_post=None, newest_post=None)
        first, last = records[0].date, records[-1].date
        if self.config.sort_order == "asc":
            oldest, newest = first, last
        else:
            oldest, newest = last, first
        return BlogStats(
            total_posts=len(records),
            last_refresh=self.last_refresh,
            oldest_post=oldest,
            newest_post=newest,
        )
