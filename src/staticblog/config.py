"""Configuration management for staticblog."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .models import MetadataFormat

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_DIRECTORY = "./blogs"


def _find_repo_root(start_dir: Path) -> Path:
    """Find repository root by walking upward looking for .git or pyproject.toml."""
    current_dir = start_dir

    while True:
        if (current_dir / ".git").exists() or (current_dir / "pyproject.toml").exists():
            return current_dir

        parent_dir = current_dir.parent

        # Stop if we reach filesystem root
        if parent_dir == current_dir:
            return start_dir

        current_dir = parent_dir


def _load_repo_config_data(repo_root: Path) -> Optional[dict]:
    """Load repo config data from .staticblog/config.toml if it exists."""
    config_file = repo_root / ".staticblog" / "config.toml"

    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # If config file is malformed, ignore it
        logger.warning(f"Ignoring unreadable config file {config_file}: {e}")
        return None


def _blog_section(data: Optional[dict]) -> dict[str, Any]:
    section = (data or {}).get("blog")
    if not isinstance(section, dict):
        return {}
    return section


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


class BlogConfig(BaseModel):
    """Configuration for a blog source directory and how it is indexed."""

    source_directory: Path = Field(default_factory=lambda: Path(DEFAULT_SOURCE_DIRECTORY))
    cache_enabled: bool = Field(default=True)
    metadata_format: MetadataFormat = Field(default=MetadataFormat.HTML_COMMENT)
    sort_order: Literal["asc", "desc"] = Field(default="desc")
    default_per_page: int = Field(default=10, ge=1)
    paginate: bool = Field(default=False)

    # Consumed by the view layer
    route_prefix: str = Field(default="/blogs")
    feed_title: str = Field(default="Blog RSS Feed")
    feed_description: str = Field(default="Latest blog posts")
    feed_language: str = Field(default="en")

    model_config = {"frozen": True}

    @field_validator("source_directory", mode="after")
    @classmethod
    def _resolve_source_directory(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    @field_validator("metadata_format", mode="before")
    @classmethod
    def _default_metadata_format(cls, value: Any) -> MetadataFormat:
        fmt = MetadataFormat(value)
        if fmt != value:
            logger.warning(f"Unknown metadata format {value!r}, using {fmt.value!r}")
        return fmt

    @field_validator("sort_order", mode="before")
    @classmethod
    def _normalize_sort_order(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip().lower() == "asc":
            return "asc"
        return "desc"

    @classmethod
    def from_env(cls, cli_source_dir: Optional[str] = None) -> "BlogConfig":
        """Load configuration with the following precedence:

        1. CLI --dir option (source directory only)
        2. repo-local .staticblog/config.toml [blog] table (walk upward from CWD)
        3. STATICBLOG_* environment variables
        4. Defaults

        Args:
            cli_source_dir: Source directory from the CLI --dir option

        Returns:
            BlogConfig instance
        """
        repo_root = _find_repo_root(Path.cwd())
        repo_section = _blog_section(_load_repo_config_data(repo_root))

        def pick(key: str, env_name: str, default: Any) -> Any:
            if key in repo_section:
                return repo_section[key]
            return os.environ.get(env_name, default)

        if cli_source_dir:
            source_directory = Path(cli_source_dir)
        elif "source_directory" in repo_section:
            # Relative to the repo root holding .staticblog/config.toml
            source_directory = repo_root / Path(repo_section["source_directory"]).expanduser()
        else:
            source_directory = Path(os.environ.get("STATICBLOG_SOURCE_DIR", DEFAULT_SOURCE_DIRECTORY))
        cache_enabled = repo_section.get("cache_enabled", _env_bool("STATICBLOG_CACHE_ENABLED", True))
        paginate = repo_section.get("paginate", _env_bool("STATICBLOG_PAGINATE", False))

        return cls(
            source_directory=source_directory,
            cache_enabled=cache_enabled,
            metadata_format=pick("metadata_format", "STATICBLOG_METADATA_FORMAT", "html-comment"),
            sort_order=pick("sort_order", "STATICBLOG_SORT_ORDER", "desc"),
            default_per_page=int(pick("default_per_page", "STATICBLOG_PER_PAGE", "10")),
            paginate=paginate,
            route_prefix=pick("route_prefix", "STATICBLOG_ROUTE_PREFIX", "/blogs"),
            feed_title=pick("feed_title", "STATICBLOG_FEED_TITLE", "Blog RSS Feed"),
            feed_description=pick("feed_description", "STATICBLOG_FEED_DESCRIPTION", "Latest blog posts"),
            feed_language=pick("feed_language", "STATICBLOG_FEED_LANGUAGE", "en"),
        )
