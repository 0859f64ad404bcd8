"""Serve a directory of static HTML files as a searchable, paginated blog."""

__version__ = "0.1.0"

from .blog import StaticBlog, create_blog_system
from .cache import BlogIndex
from .config import BlogConfig
from .models import BlogRecord, BlogStats, MetadataFormat, PaginatedResult, Pagination

__all__ = [
    "__version__",
    "StaticBlog",
    "create_blog_system",
    "BlogIndex",
    "BlogConfig",
    # Models
    "BlogRecord",
    "BlogStats",
    "MetadataFormat",
    "PaginatedResult",
    "Pagination",
]
