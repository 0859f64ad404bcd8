"""Tests for BlogConfig."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from staticblog.config import BlogConfig
from staticblog.models import MetadataFormat


def test_defaults():
    config = BlogConfig()
    assert config.source_directory == Path("./blogs").resolve()
    assert config.cache_enabled is True
    assert config.metadata_format is MetadataFormat.HTML_COMMENT
    assert config.sort_order == "desc"
    assert config.default_per_page == 10
    assert config.paginate is False
    assert config.route_prefix == "/blogs"


def test_source_directory_resolved_to_absolute():
    config = BlogConfig(source_directory="./relative/path")
    assert config.source_directory.is_absolute()


def test_custom_values():
    config = BlogConfig(
        source_directory="/tmp/articles",
        cache_enabled=False,
        metadata_format="front-matter",
        sort_order="asc",
        default_per_page=5,
        paginate=True,
        route_prefix="/articles",
    )
    assert config.cache_enabled is False
    assert config.metadata_format is MetadataFormat.FRONT_MATTER
    assert config.sort_order == "asc"
    assert config.default_per_page == 5
    assert config.paginate is True
    assert config.route_prefix == "/articles"


def test_unknown_metadata_format_falls_back():
    assert BlogConfig(metadata_format="toml").metadata_format is MetadataFormat.HTML_COMMENT


@pytest.mark.parametrize("value, expected", [("asc", "asc"), ("ASC", "asc"), ("desc", "desc"), ("sideways", "desc")])
def test_sort_order_normalized(value, expected):
    assert BlogConfig(sort_order=value).sort_order == expected


def test_per_page_must_be_positive():
    with pytest.raises(ValidationError):
        BlogConfig(default_per_page=0)


def test_from_env_reads_environment(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STATICBLOG_SOURCE_DIR", str(tmp_path / "posts"))
    monkeypatch.setenv("STATICBLOG_SORT_ORDER", "asc")
    monkeypatch.setenv("STATICBLOG_CACHE_ENABLED", "false")
    monkeypatch.setenv("STATICBLOG_PER_PAGE", "3")

    config = BlogConfig.from_env()
    assert config.source_directory == (tmp_path / "posts").resolve()
    assert config.sort_order == "asc"
    assert config.cache_enabled is False
    assert config.default_per_page == 3


def test_from_env_repo_config_beats_environment(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    (tmp_path / ".staticblog").mkdir()
    (tmp_path / ".staticblog" / "config.toml").write_text(
        '[blog]\nsource_directory = "content"\nmetadata_format = "front-matter"\npaginate = true\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STATICBLOG_SOURCE_DIR", str(tmp_path / "from-env"))
    monkeypatch.setenv("STATICBLOG_METADATA_FORMAT", "html-comment")

    config = BlogConfig.from_env()
    assert config.source_directory == (tmp_path / "content").resolve()
    assert config.metadata_format is MetadataFormat.FRONT_MATTER
    assert config.paginate is True


def test_from_env_cli_value_wins(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STATICBLOG_SOURCE_DIR", str(tmp_path / "from-env"))
    config = BlogConfig.from_env(cli_source_dir=str(tmp_path / "from-cli"))
    assert config.source_directory == (tmp_path / "from-cli").resolve()


def test_from_env_ignores_malformed_repo_config(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    (tmp_path / ".staticblog").mkdir()
    (tmp_path / ".staticblog" / "config.toml").write_text("[blog\nnot toml", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("STATICBLOG_SOURCE_DIR", raising=False)

    config = BlogConfig.from_env()
    assert config.source_directory == (tmp_path / "blogs").resolve()


def test_from_env_repo_source_directory_is_relative_to_repo_root(tmp_path, monkeypatch):
    (tmp_path / ".git").mkdir()
    (tmp_path / ".staticblog").mkdir()
    (tmp_path / ".staticblog" / "config.toml").write_text(
        '[blog]\nsource_directory = "content"\n', encoding="utf-8"
    )
    nested = tmp_path / "drafts" / "2025"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    config = BlogConfig.from_env()
    assert config.source_directory == (tmp_path / "content").resolve()
