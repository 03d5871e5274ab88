"""
Build orchestration for devblog.

This module coordinates the static site build:
1. Load the blog collection from the content store
2. Render the listing rows (newest first)
3. Copy public files, then write one page per post and copy hero images
4. Write the blog index and home pages
5. Write the RSS feed

Supports both progress bar and quiet modes. Content errors are not
recovered: they propagate and fail the build.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
import logging
from pathlib import Path
import shutil

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)

from .config import AppConfig
from .content.markdown_store import MarkdownContentStore
from .core.dates import format_date
from .core.listing import ListingRenderer
from .core.types import DisplayRow, Entry
from .output.renderer import (
    SiteContext,
    is_relative_asset,
    render_blog_index,
    render_home,
    render_post,
    render_rss,
    write_page,
)
from .utils.logging import close_logging, log_event, setup_logging

STAGES = 5


@dataclass
class BuildStats:
    """Counters collected while writing the site.

    Attributes:
        posts: Number of post pages written
        assets_copied: Hero images copied into the assets directory
        assets_missing: Relative hero images that did not exist on disk
        feed_written: Whether rss.xml was produced
    """

    posts: int = 0
    assets_copied: int = 0
    assets_missing: int = 0
    feed_written: bool = False


def build_store(cfg: AppConfig) -> MarkdownContentStore:
    return MarkdownContentStore(
        Path(cfg.content.content_dir),
        include_drafts=cfg.content.include_drafts,
        extensions=cfg.content.extensions,
    )


def build_listing_renderer(cfg: AppConfig, store: MarkdownContentStore | None = None) -> ListingRenderer:
    """Listing renderer wired to the configured store and date format."""
    formatter = partial(format_date, fmt=cfg.site.date_format)
    return ListingRenderer(store or build_store(cfg), formatter)


def build_site(
    cfg: AppConfig,
    output_dir: Path | None = None,
    show_progress: bool = True,
    console: Console | None = None,
) -> Path:
    """Build the complete static site.

    Args:
        cfg: Application configuration
        output_dir: Output directory (defaults to cfg.output.output_dir)
        show_progress: Whether to display a progress bar
        console: Rich console for output (creates default if None)

    Returns:
        Path to the generated blog index page

    Raises:
        ContentError: If the collection is missing or an entry is invalid
    """
    output_dir = Path(output_dir or cfg.output.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    logger = setup_logging(cfg.logging, Path(cfg.logging.dir))
    console = console or Console()

    try:
        site = SiteContext.from_config(cfg)
        log_event(
            logger,
            "Build start",
            event="build_start",
            content=cfg.content.content_dir,
            collection=cfg.content.collection,
            output=str(output_dir),
            base_path=site.base_path,
        )

        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            disable=not show_progress,
        )
        with progress:
            stage_task = progress.add_task("Stages", total=STAGES)

            store = build_store(cfg)
            entries = store.get_collection(cfg.content.collection)
            progress.advance(stage_task, 1)

            renderer = build_listing_renderer(cfg, store)
            rows = renderer.render(entries, site.base_path)
            progress.advance(stage_task, 1)

            public_files = _copy_public_dir(cfg, output_dir, logger)
            stats = BuildStats()
            post_task = progress.add_task("Posts", total=len(rows))
            by_id = {entry.id: entry for entry in entries}
            for row in rows:
                entry = by_id[row.entry_id]
                _write_post(entry, row, site, output_dir, stats, logger, public_files)
                progress.advance(post_task, 1)
            progress.advance(stage_task, 1)

            index_path = write_page(output_dir / "blog" / "index.html", render_blog_index(rows, site))
            write_page(output_dir / "index.html", render_home(rows, site))
            progress.advance(stage_task, 1)

            _write_feed(cfg, rows, site, output_dir, stats, logger)
            progress.advance(stage_task, 1)

        _render_build_stats(stats, console)
        log_event(
            logger,
            "Build complete",
            event="build_complete",
            output=str(index_path),
            posts=stats.posts,
            assets_copied=stats.assets_copied,
            assets_missing=stats.assets_missing,
            feed=stats.feed_written,
        )
        return index_path
    finally:
        close_logging(logger)


def _write_post(
    entry: Entry,
    row: DisplayRow,
    site: SiteContext,
    output_dir: Path,
    stats: BuildStats,
    logger: logging.Logger,
    public_files: set[Path] | None = None,
) -> Path:
    """Write a post page and publish its hero image if it lives beside the post."""
    if row.image_ref and is_relative_asset(row.image_ref):
        _copy_asset(entry, row.image_ref, output_dir / site.assets_dir, stats, logger)

    page_path = output_dir / "blog" / Path(*entry.id.split("/")) / "index.html"
    if public_files and page_path in public_files:
        logger.warning(
            "Public file replaced by generated page",
            extra={"event": "public_overridden", "entry_id": entry.id, "path": str(page_path)},
        )
    write_page(page_path, render_post(entry, row, site))
    stats.posts += 1
    log_event(logger, "Page written", event="page_written", entry_id=entry.id, path=str(page_path))
    return page_path


def _copy_asset(
    entry: Entry,
    image_ref: str,
    assets_dir: Path,
    stats: BuildStats,
    logger: logging.Logger,
) -> None:
    if entry.source_path is None:
        return
    source = (entry.source_path.parent / image_ref).resolve()
    if not source.is_file():
        stats.assets_missing += 1
        logger.warning(
            "Hero image not found",
            extra={"event": "asset_missing", "entry_id": entry.id, "asset": str(source)},
        )
        return

    target = assets_dir / Path(*entry.id.split("/")) / source.name
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source, target)
    stats.assets_copied += 1


def _copy_public_dir(cfg: AppConfig, output_dir: Path, logger: logging.Logger) -> set[Path]:
    """Copy static files into the output ahead of the generated pages.

    Returns the output paths that came from the public dir, so generated
    pages written over them can be reported.
    """
    if not cfg.content.public_dir:
        return set()
    public_dir = Path(cfg.content.public_dir)
    if not public_dir.is_dir():
        return set()
    shutil.copytree(public_dir, output_dir, dirs_exist_ok=True)
    copied = {output_dir / path.relative_to(public_dir) for path in public_dir.rglob("*") if path.is_file()}
    log_event(logger, "Public files copied", event="public_copied", source=str(public_dir), files=len(copied))
    return copied


def _write_feed(
    cfg: AppConfig,
    rows: list[DisplayRow],
    site: SiteContext,
    output_dir: Path,
    stats: BuildStats,
    logger: logging.Logger,
) -> None:
    if not cfg.output.rss:
        return
    if not site.site_url:
        log_event(logger, "Feed skipped", event="feed_skipped", reason="site_url not configured")
        return
    write_page(output_dir / "rss.xml", render_rss(rows, site))
    stats.feed_written = True


def _render_build_stats(stats: BuildStats, console: Console) -> None:
    """Display build statistics to the console."""
    console.print(
        "[bold]Build summary[/bold]: "
        f"posts={stats.posts}, assets={stats.assets_copied}, "
        f"missing_assets={stats.assets_missing}, feed={'yes' if stats.feed_written else 'no'}"
    )
