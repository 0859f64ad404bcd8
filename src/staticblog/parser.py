from __future__ import annotations

import re
from datetime import date
from pathlib import Path
from typing import Any, Optional, Union

from .models import (
    CORE_FIELDS,
    DEFAULT_DESC,
    DEFAULT_TITLE,
    NO_DATE,
    BlogRecord,
    MetadataBag,
    MetadataFormat,
)


_COMMENT_DATE_RE = re.compile(r"<!--\s*\[\s*date\s*:\s*(.+?)\s*\]\s*-->")
_COMMENT_DESC_RE = re.compile(r"<!--\s*\[\s*desc\s*:\s*(.+?)\s*\]\s*-->")
_COMMENT_ANY_RE = re.compile(r"<!--\s*\[\s*(\w+)\s*:\s*(.+?)\s*\]\s*-->")
_TITLE_RE = re.compile(r"<title[^>]*>(.+?)</title\s*>", re.IGNORECASE | re.DOTALL)

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL)

_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_SPACE_RE = re.compile(r"\s+")
_SLUG_DASH_RE = re.compile(r"-{2,}")


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1].strip()
    return value


def _find_title(text: str) -> Optional[str]:
    m = _TITLE_RE.search(text)
    if not m:
        return None
    return _clean(" ".join(m.group(1).split()))


def parse_html_comment_metadata(text: str) -> MetadataBag:
    """Read ``<!-- [key: value] -->`` markers plus the ``<title>`` element."""
    date_match = _COMMENT_DATE_RE.search(text)
    desc_match = _COMMENT_DESC_RE.search(text)

    extra: dict[str, str] = {}
    for m in _COMMENT_ANY_RE.finditer(text):
        key = m.group(1)
        if key in CORE_FIELDS:
            continue
        extra[key] = m.group(2).strip()

    return MetadataBag(
        date=_clean(date_match.group(1)) if date_match else None,
        title=_find_title(text),
        desc=_clean(desc_match.group(1)) if desc_match else None,
        extra=extra,
    )


def parse_front_matter_metadata(text: str) -> MetadataBag:
    """Read a leading ``---`` block; without one, defer to the comment markers."""
    body = text[1:] if text.startswith("\ufeff") else text
    m = _FRONTMATTER_RE.match(body)
    if not m:
        return parse_html_comment_metadata(text)

    found_date: Optional[str] = None
    title: Optional[str] = None
    desc: Optional[str] = None
    extra: dict[str, str] = {}

    for raw_line in (m.group(1) or "").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        colon = line.find(":")
        if colon <= 0:
            continue
        key = line[:colon].strip()
        value = _unquote(line[colon + 1 :].strip())

        if key == "date":
            found_date = _clean(value)
        elif key == "title":
            title = _clean(value)
        elif key in ("description", "desc"):
            desc = _clean(value)
        elif key not in CORE_FIELDS:
            extra[key] = value

    if title is None:
        title = _find_title(text)

    return MetadataBag(date=found_date, title=title, desc=desc, extra=extra)


def extract_metadata(text: str, metadata_format: Union[MetadataFormat, str]) -> MetadataBag:
    fmt = MetadataFormat(metadata_format)
    if fmt is MetadataFormat.FRONT_MATTER:
        return parse_front_matter_metadata(text)
    return parse_html_comment_metadata(text)


def is_valid_date(value: Any) -> bool:
    """True for ``YYYY-MM-DD`` strings naming a real calendar day."""
    if not isinstance(value, str) or not value:
        return False
    m = _DATE_RE.fullmatch(value)
    if not m:
        return False
    try:
        date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return False
    return True


def split_date(value: Optional[str]) -> tuple[Optional[str], Optional[str], Optional[str]]:
    if not value:
        return None, None, None
    parts = value.split("-")
    if len(parts) != 3:
        return None, None, None
    return parts[0], parts[1], parts[2]


def generate_slug(text: str) -> str:
    slug = _SLUG_STRIP_RE.sub("", text.lower())
    slug = _SLUG_SPACE_RE.sub("-", slug.strip())
    slug = _SLUG_DASH_RE.sub("-", slug)
    return slug.strip("- \t\r\n")


def build_record(path: Path, text: str, metadata_format: Union[MetadataFormat, str]) -> BlogRecord:
    meta = extract_metadata(text, metadata_format)
    year, month, day = split_date(meta.date)
    return BlogRecord(
        file_name=path.name,
        file_path=str(path),
        date=meta.date or NO_DATE,
        title=meta.title or DEFAULT_TITLE,
        desc=meta.desc or DEFAULT_DESC,
        content=text,
        year=year,
        month=month,
        day=day,
        slug=generate_slug(meta.title or path.name),
        extra=meta.extra,
    )


def parse_blog_file(path: Path, metadata_format: Union[MetadataFormat, str]) -> BlogRecord:
    text = path.read_text(encoding="utf-8")
    return build_record(path, text, metadata_format)
