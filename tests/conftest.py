"""Pytest fixtures for staticblog tests."""

from pathlib import Path
from typing import Optional

import pytest

from staticblog.config import BlogConfig


def write_post(
    directory: Path,
    name: str,
    *,
    title: Optional[str] = None,
    date: Optional[str] = None,
    desc: Optional[str] = None,
    body: str = "<p>Nothing to see here.</p>",
    extra: Optional[dict] = None,
) -> Path:
    """Write an HTML post using comment-style metadata."""
    head = []
    if title is not None:
        head.append(f"    <title>{title}</title>")
    if date is not None:
        head.append(f"    <!-- [date: {date}] -->")
    if desc is not None:
        head.append(f"    <!-- [desc: {desc}] -->")
    for key, value in (extra or {}).items():
        head.append(f"    <!-- [{key}: {value}] -->")

    html = (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        + "\n".join(head)
        + "\n</head>\n<body>\n"
        + body
        + "\n</body>\n</html>\n"
    )
    path = directory / name
    path.write_text(html, encoding="utf-8")
    return path


FRONT_MATTER_POST = """---
title: Front Matter Post
date: 2025-01-19
description: This post uses front matter metadata
tags: test, markdown, frontmatter
author: Test Author
---
<!DOCTYPE html>
<html>
<head><title>Ignored Title</title></head>
<body><p>Front matter body.</p></body>
</html>
"""


@pytest.fixture
def blogs_dir(tmp_path):
    """Directory with three well-formed posts.

    Returns:
        Path to the blog source directory
    """
    directory = tmp_path / "blogs"
    directory.mkdir()
    write_post(
        directory,
        "test-post.html",
        title="Test Blog Post",
        date="2025-01-20",
        desc="This is a test blog post for unit testing.",
        extra={"author": "Jane Doe"},
        body="<h1>Test Blog Post</h1>\n<p>Hello there.</p>",
    )
    write_post(
        directory,
        "older-post.html",
        title="Older Blog Post",
        date="2025-01-15",
        desc="An older entry.",
        body="<p>Written a while ago.</p>",
    )
    write_post(
        directory,
        "oldest-post.htm",
        title="Oldest Blog Post",
        date="2025-01-10",
        desc="The very first entry.",
        body="<p>Where it all began.</p>",
    )
    return directory


@pytest.fixture
def mixed_blogs_dir(blogs_dir):
    """The three good posts plus a collection of malformed files.

    Returns:
        Path to the blog source directory
    """
    write_post(blogs_dir, "no-date.html", title="Post Without Date", desc="Missing its date.")
    write_post(blogs_dir, "no-title.html", date="2025-01-17", desc="Missing its title.")
    write_post(blogs_dir, "no-desc.html", title="Post Without Description", date="2025-01-16")
    write_post(blogs_dir, "bad-date.html", title="Impossible Date", date="2025-02-30", desc="Feb 30th.")
    write_post(blogs_dir, "slash-date.html", title="Slash Date", date="2025/01/12", desc="Wrong separator.")
    (blogs_dir / "garbage.html").write_text("<<<not html at all>>>", encoding="utf-8")
    (blogs_dir / "binary.html").write_bytes(b"\xff\xfe\x00<title>Broken</title>\x80\x81")
    (blogs_dir / "notes.txt").write_text("<!-- [date: 2025-01-18] --><title>Text File</title>", encoding="utf-8")
    (blogs_dir / "folder.html").mkdir()
    return blogs_dir


@pytest.fixture
def front_matter_dir(blogs_dir):
    """The three good posts plus one post using front matter.

    Returns:
        Path to the blog source directory
    """
    (blogs_dir / "front-matter.html").write_text(FRONT_MATTER_POST, encoding="utf-8")
    return blogs_dir


@pytest.fixture
def blog_config(blogs_dir):
    """BlogConfig pointing at the three-post directory."""
    return BlogConfig(source_directory=blogs_dir)


@pytest.fixture
def post_writer():
    """Expose write_post to tests that build their own directories."""
    return write_post
