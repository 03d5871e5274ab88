"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- SiteConfig: Site identity, base path and display settings
- ContentConfig: Where the content collection lives and what to load
- OutputConfig: Output directory and optional artifacts
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml

BASE_PATH_ENV = "DEVBLOG_BASE_PATH"
SITE_URL_ENV = "DEVBLOG_SITE_URL"


@dataclass
class SiteConfig:
    """Configuration for site identity and page rendering.

    Attributes:
        title: Site title shown in the header and page titles
        description: Default meta description and feed description
        base_path: URL prefix the site is served under (e.g. "/" or "/blog-site/")
        site_url: Absolute origin used for canonical URLs and the RSS feed
        date_format: strftime format for post dates; None uses "Jun 13, 2025" style
        language: Value of the html lang attribute
        author: Name shown in the footer copyright line
        recent_posts: Number of posts listed on the home page
    """

    title: str = "Devblog"
    description: str = "Notes on software, systems and tooling."
    base_path: str = "/"
    site_url: str | None = None
    date_format: str | None = None
    language: str = "en"
    author: str | None = None
    recent_posts: int = 5


@dataclass
class ContentConfig:
    """Configuration for content loading.

    Attributes:
        content_dir: Root directory holding one subdirectory per collection
        collection: Name of the blog post collection
        include_drafts: Whether entries marked draft are published
        extensions: File suffixes loaded as posts
        public_dir: Directory copied verbatim into the output root, if it exists
    """

    content_dir: str = "src/content"
    collection: str = "blog"
    include_drafts: bool = False
    extensions: list[str] = field(default_factory=lambda: [".md", ".mdx"])
    public_dir: str | None = "public"


@dataclass
class OutputConfig:
    """Configuration for output generation.

    Attributes:
        output_dir: Directory the static site is written to
        rss: Whether to write rss.xml (requires site.site_url)
        assets_dir: Subdirectory hero images are copied into
    """

    output_dir: str = "dist"
    rss: bool = True
    assets_dir: str = "assets"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the build log file
        dir: Directory the build log is written to, outside the output directory
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "build.jsonl"
    dir: str = "logs"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    site: SiteConfig = field(default_factory=SiteConfig)
    content: ContentConfig = field(default_factory=ContentConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return _fromdict(_asdict(DEFAULT_CONFIG))

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return _merge_config(DEFAULT_CONFIG, raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "site": {
            "title": cfg.site.title,
            "description": cfg.site.description,
            "base_path": cfg.site.base_path,
            "site_url": cfg.site.site_url,
            "date_format": cfg.site.date_format,
            "language": cfg.site.language,
            "author": cfg.site.author,
            "recent_posts": cfg.site.recent_posts,
        },
        "content": {
            "content_dir": cfg.content.content_dir,
            "collection": cfg.content.collection,
            "include_drafts": cfg.content.include_drafts,
            "extensions": list(cfg.content.extensions),
            "public_dir": cfg.content.public_dir,
        },
        "output": {
            "output_dir": cfg.output.output_dir,
            "rss": cfg.output.rss,
            "assets_dir": cfg.output.assets_dir,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "dir": cfg.logging.dir,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        site=SiteConfig(**data["site"]),
        content=ContentConfig(**data["content"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_base_path(cfg: SiteConfig) -> str:
    """Get the base path from the environment or inline config.

    The result always ends with a single "/".
    """
    raw = os.getenv(BASE_PATH_ENV) or cfg.base_path or "/"
    return f"{raw.rstrip('/')}/"


def get_site_url(cfg: SiteConfig) -> str | None:
    """Get the absolute site origin from the environment or inline config."""
    url = os.getenv(SITE_URL_ENV) or cfg.site_url
    if not url:
        return None
    return url.rstrip("/")
