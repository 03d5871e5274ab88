"""
Command-line interface for devblog.

Uses Typer to provide `build` and `list` commands with options for the
most common configuration settings. Loads .env files so the base path and
site URL can be supplied through the environment at build time.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import AppConfig, get_base_path, load_config
from .errors import ContentError
from .runner import build_listing_renderer, build_site

app = typer.Typer(add_completion=False)
DEFAULT_CONFIG_PATH = Path("devblog.yaml")
console = Console()


def _load(
    config: Path | None,
    content_dir: Path | None,
    base_path: str | None,
    include_drafts: bool | None,
) -> AppConfig:
    load_dotenv()
    if config is None and DEFAULT_CONFIG_PATH.exists():
        config = DEFAULT_CONFIG_PATH
    cfg = load_config(str(config) if config else None)
    if content_dir is not None:
        cfg.content.content_dir = str(content_dir)
    if base_path:
        cfg.site.base_path = base_path
    if include_drafts is not None:
        cfg.content.include_drafts = include_drafts
    return cfg


@app.command()
def build(
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="YAML config file."
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory."),
    content_dir: Path | None = typer.Option(
        None, "--content-dir", help="Root directory holding content collections."
    ),
    base_path: str | None = typer.Option(
        None, "--base-path", help="URL prefix the site is served under."
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    include_drafts: bool | None = typer.Option(
        None, "--include-drafts/--no-include-drafts", help="Publish draft posts."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Build the static site.

    Loads the blog collection, orders it newest first and writes the
    listing, post, home and feed pages.

    Args:
        config: Path to YAML config file; ./devblog.yaml is used when omitted and present
        output: Directory for the generated site
        content_dir: Override for content.content_dir
        base_path: Override for site.base_path
        progress: Whether to show progress bar
        include_drafts: Whether draft posts are published
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Log file format (jsonl, plain)
        log_file: Enable/disable file logging
    """
    cfg = _load(config, content_dir, base_path, include_drafts)
    if output is not None:
        cfg.output.output_dir = str(output)
    if log_level:
        cfg.logging.level = log_level
    if log_format:
        cfg.logging.format = log_format
    if log_file is not None:
        cfg.logging.file = log_file

    try:
        index_path = build_site(cfg, show_progress=progress, console=console)
    except ContentError as exc:
        console.print(f"[bold red]Build failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    console.print(f"Site generated: {index_path}")


@app.command("list")
def list_posts(
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="YAML config file."
    ),
    content_dir: Path | None = typer.Option(
        None, "--content-dir", help="Root directory holding content collections."
    ),
    base_path: str | None = typer.Option(
        None, "--base-path", help="URL prefix the site is served under."
    ),
    include_drafts: bool | None = typer.Option(
        None, "--include-drafts/--no-include-drafts", help="Include draft posts."
    ),
):
    """Print the post listing in publish order, newest first."""
    cfg = _load(config, content_dir, base_path, include_drafts)
    renderer = build_listing_renderer(cfg)
    try:
        rows = renderer.render_collection(cfg.content.collection, get_base_path(cfg.site))
    except ContentError as exc:
        console.print(f"[bold red]Listing failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    table = Table(title=f"{cfg.site.title}: {len(rows)} posts")
    table.add_column("Date")
    table.add_column("Title")
    table.add_column("Link")
    table.add_column("Image")
    for row in rows:
        table.add_row(row.formatted_date, row.title, row.link_href, row.image_ref or "")
    console.print(table)


if __name__ == "__main__":
    app()
