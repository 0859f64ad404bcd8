"""RSS 2.0 feed rendering."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from .models import BlogRecord

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_xml(text: str) -> str:
    return escape(text, _XML_ENTITIES)


def _rfc2822(value: str) -> str:
    dt = datetime.strptime(value, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    return format_datetime(dt, usegmt=True)


def post_link(link: str, record: BlogRecord) -> str:
    return f"{link}/{record.year}-{record.month}-{record.day}"


def render_rss_feed(
    records: Iterable[BlogRecord],
    *,
    title: str,
    description: str,
    link: str,
    language: str = "en",
    build_date: Optional[datetime] = None,
) -> str:
    """Render records as an RSS 2.0 document.

    Args:
        records: Posts to include, already ordered and trimmed
        title: Channel title
        description: Channel description
        link: Base URL of the blog routes; item links are ``{link}/YYYY-MM-DD``
        language: Channel language code
        build_date: lastBuildDate; defaults to now (UTC)

    Returns:
        XML document as a string
    """
    build_date = build_date or datetime.now(timezone.utc)
    if build_date.tzinfo is None:
        build_date = build_date.replace(tzinfo=timezone.utc)
    build_date = build_date.astimezone(timezone.utc)

    items = []
    for record in records:
        url = escape_xml(post_link(link, record))
        items.append(
            "    <item>\n"
            f"      <title>{escape_xml(record.title)}</title>\n"
            f"      <link>{url}</link>\n"
            f"      <description>{escape_xml(record.desc)}</description>\n"
            f"      <pubDate>{_rfc2822(record.date)}</pubDate>\n"
            f"      <guid>{url}</guid>\n"
            "    </item>\n"
        )

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<rss version="2.0">\n'
        "  <channel>\n"
        f"    <title>{escape_xml(title)}</title>\n"
        f"    <link>{escape_xml(link)}</link>\n"
        f"    <description>{escape_xml(description)}</description>\n"
        f"    <language>{escape_xml(language)}</language>\n"
        f"    <lastBuildDate>{format_datetime(build_date, usegmt=True)}</lastBuildDate>\n"
        + "".join(items)
        + "  </channel>\n"
        "</rss>\n"
    )
