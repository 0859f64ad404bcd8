"""Typer-based CLI for staticblog."""

import json
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .blog import StaticBlog
from .config import BlogConfig
from .models import BlogRecord
from .views import api_posts_payload, record_to_api_dict

app = typer.Typer(
    name="staticblog",
    help="staticblog - browse a directory of static HTML blog posts",
    add_completion=False,
)

console = Console()

SOURCE_DIR_OPTION = typer.Option(
    None,
    "--dir",
    "-d",
    help="Blog source directory (default: STATICBLOG_SOURCE_DIR env or ./blogs)",
)
FORMAT_OPTION = typer.Option(
    None,
    "--format",
    help="Metadata format: html-comment or front-matter",
)
ORDER_OPTION = typer.Option(
    None,
    "--order",
    help="Sort order: desc (newest first) or asc",
)


@app.callback()
def main_callback(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Browse, search and export a static HTML blog."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_blog(
    source_dir: Optional[str],
    metadata_format: Optional[str],
    sort_order: Optional[str],
) -> StaticBlog:
    config = BlogConfig.from_env(cli_source_dir=source_dir)
    overrides = {}
    if metadata_format:
        overrides["metadata_format"] = metadata_format
    if sort_order:
        overrides["sort_order"] = sort_order
    if overrides:
        config = BlogConfig(**{**config.model_dump(), **overrides})
    return StaticBlog(config)


def _posts_table(title: str, records: list[BlogRecord]) -> Table:
    table = Table(title=title)
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Slug", style="magenta")
    table.add_column("Description", style="dim")

    for record in records:
        desc = record.desc
        if len(desc) > 60:
            desc = desc[:57] + "..."
        table.add_row(record.date, escape(record.title), record.slug, escape(desc))
    return table


@app.command("list")
def list_posts(
    source_dir: Optional[str] = SOURCE_DIR_OPTION,
    metadata_format: Optional[str] = FORMAT_OPTION,
    sort_order: Optional[str] = ORDER_OPTION,
    page: Optional[int] = typer.Option(None, "--page", "-p", help="Show a single page (1-based)"),
    per_page: Optional[int] = typer.Option(None, "--per-page", help="Posts per page"),
    year: Optional[int] = typer.Option(None, "--year", help="Only posts from this year"),
    month: Optional[int] = typer.Option(None, "--month", help="Only posts from this month (needs --year)"),
):
    """List posts in the configured sort order."""
    blog = _load_blog(source_dir, metadata_format, sort_order)

    if year is not None and month is not None:
        records = blog.get_by_year_month(year, month)
    elif year is not None:
        records = blog.get_by_year(year)
    elif page is not None:
        result = blog.get_paginated(page, per_page)
        records = result.items
        p = result.pagination
        console.print(f"[dim]Page {p.current_page} of {p.total_pages} ({p.total_items} posts)[/dim]")
    else:
        records = blog.get_all()

    if not records:
        console.print("[dim]No posts found[/dim]")
        return

    console.print(_posts_table(f"{len(records)} post(s)", records))


@app.command()
def show(
    date: str = typer.Argument(..., help="Post date (YYYY-MM-DD)"),
    source_dir: Optional[str] = SOURCE_DIR_OPTION,
    metadata_format: Optional[str] = FORMAT_OPTION,
    content: bool = typer.Option(False, "--content", help="Print the raw file content too"),
):
    """Show a single post by its date."""
    blog = _load_blog(source_dir, metadata_format, None)
    record = blog.get_by_date(date)
    if record is None:
        console.print(f"[red]Error: No post found for {escape(date)}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[cyan]Title:[/cyan]       {escape(record.title)}")
    console.print(f"[cyan]Date:[/cyan]        {record.date}")
    console.print(f"[cyan]Slug:[/cyan]        {record.slug}")
    console.print(f"[cyan]Description:[/cyan] {escape(record.desc)}")
    console.print(f"[cyan]File:[/cyan]        {escape(record.file_path)}")
    for key, value in sorted(record.extra.items()):
        console.print(f"[dim]{escape(key)}:[/dim] {escape(value)}")
    if content:
        console.print()
        console.print(record.content, markup=False, highlight=False)


@app.command()
def search(
    keyword: str = typer.Argument(..., help="Case-insensitive keyword"),
    source_dir: Optional[str] = SOURCE_DIR_OPTION,
    metadata_format: Optional[str] = FORMAT_OPTION,
    sort_order: Optional[str] = ORDER_OPTION,
):
    """Search titles, descriptions and content for a keyword."""
    blog = _load_blog(source_dir, metadata_format, sort_order)
    records = blog.search(keyword)
    if not records:
        console.print(f"[dim]No posts match {escape(keyword)!r}[/dim]")
        return
    console.print(_posts_table(f"{len(records)} match(es)", records))


@app.command()
def stats(
    source_dir: Optional[str] = SOURCE_DIR_OPTION,
    metadata_format: Optional[str] = FORMAT_OPTION,
    sort_order: Optional[str] = ORDER_OPTION,
):
    """Show index statistics."""
    blog = _load_blog(source_dir, metadata_format, sort_order)
    if not blog.config.cache_enabled:
        blog.refresh()
    s = blog.get_stats()

    console.print(f"[dim]Source:[/dim]       {escape(str(blog.config.source_directory))}")
    console.print(f"[dim]Total posts:[/dim]  {s.total_posts}")
    console.print(f"[dim]Newest post:[/dim]  {s.newest_post or '-'}")
    console.print(f"[dim]Oldest post:[/dim]  {s.oldest_post or '-'}")
    if s.last_refresh:
        console.print(f"[dim]Refreshed:[/dim]    {s.last_refresh.strftime('%Y-%m-%d %H:%M:%S')} UTC")


@app.command()
def feed(
    base_url: str = typer.Option("http://localhost:8000", "--base-url", help="Site URL used for item links"),
    count: int = typer.Option(20, "--count", "-n", help="Number of recent posts in the feed"),
    source_dir: Optional[str] = SOURCE_DIR_OPTION,
    metadata_format: Optional[str] = FORMAT_OPTION,
):
    """Print an RSS 2.0 feed of the most recent posts."""
    blog = _load_blog(source_dir, metadata_format, None)
    typer.echo(blog.rss_feed(base_url, count=count), nl=False)


@app.command()
def api(
    source_dir: Optional[str] = SOURCE_DIR_OPTION,
    metadata_format: Optional[str] = FORMAT_OPTION,
    sort_order: Optional[str] = ORDER_OPTION,
    date: Optional[str] = typer.Option(None, "--date", help="Single post by date (YYYY-MM-DD)"),
    page: Optional[int] = typer.Option(None, "--page", help="Wrap output with pagination metadata"),
    per_page: int = typer.Option(10, "--per-page", help="Posts per page"),
    search_term: Optional[str] = typer.Option(None, "--search", help="Keyword filter"),
    year: Optional[int] = typer.Option(None, "--year", help="Year filter"),
    month: Optional[int] = typer.Option(None, "--month", help="Month filter (with --year)"),
):
    """Print the JSON API payload for posts."""
    blog = _load_blog(source_dir, metadata_format, sort_order)

    if date is not None:
        record = blog.get_by_date(date)
        if record is None:
            typer.echo(json.dumps({"error": "Blog not found"}))
            raise typer.Exit(code=1)
        payload = record_to_api_dict(record)
    else:
        payload = api_posts_payload(
            blog,
            page=page,
            per_page=per_page,
            search=search_term,
            year=year,
            month=month,
        )

    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def version():
    """Show staticblog version."""
    from . import __version__
    console.print(f"staticblog v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
