"""Map blog queries onto the payloads the list page and JSON API serve."""

from __future__ import annotations

import math
from typing import Any, Optional, Union

from .blog import StaticBlog
from .models import BlogRecord


def record_to_api_dict(record: BlogRecord) -> dict[str, Any]:
    """Public record shape: every core field plus extra metadata at the top level."""
    return record.to_dict()


def list_view_context(blog: StaticBlog, page: int = 1, search: str = "") -> dict[str, Any]:
    """Context for the blog index page.

    A search term wins over pagination; pagination only applies when the blog
    is configured with ``paginate=True``.
    """
    pagination = None
    if search:
        blogs = blog.search(search)
    elif blog.config.paginate:
        result = blog.get_paginated(page)
        blogs = result.items
        pagination = result.pagination
    else:
        blogs = blog.get_all()

    return {"blogs": blogs, "pagination": pagination, "search": search}


def api_posts_payload(
    blog: StaticBlog,
    page: Optional[int] = None,
    per_page: int = 10,
    search: Optional[str] = None,
    year: Optional[Union[int, str]] = None,
    month: Optional[Union[int, str]] = None,
) -> Union[list[dict[str, Any]], dict[str, Any]]:
    """Payload for the posts listing endpoint.

    Without ``page`` the result is a plain list of records. With ``page`` the
    listing is sliced and wrapped with pagination metadata; here the page is
    clamped into ``[1, total_pages]``.
    """
    if search:
        blogs = blog.search(search)
    elif year and month:
        blogs = blog.get_by_year_month(year, month)
    elif year:
        blogs = blog.get_by_year(year)
    else:
        blogs = blog.get_all()

    if page is None:
        return [record_to_api_dict(b) for b in blogs]

    if per_page < 1:
        per_page = 10
    total_items = len(blogs)
    total_pages = math.ceil(total_items / per_page)
    current_page = max(1, min(page, total_pages))
    start = (current_page - 1) * per_page

    return {
        "items": [record_to_api_dict(b) for b in blogs[start : start + per_page]],
        "pagination": {
            "current_page": current_page,
            "total_pages": total_pages,
            "total_items": total_items,
            "per_page": per_page,
        },
    }


def api_post_payload(
    blog: StaticBlog,
    year: Union[int, str],
    month: Union[int, str],
    day: Union[int, str],
) -> Optional[dict[str, Any]]:
    record = blog.get_by_date({"year": year, "month": month, "day": day})
    if record is None:
        return None
    return record_to_api_dict(record)
