"""
Page rendering for the static site.

Pages are rendered from Jinja2 templates sharing head, header and footer
partials. Post bodies are converted from markdown with the ``markdown``
package; MDX import/export lines are dropped since components are not
executed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path, PurePosixPath
import re
from urllib.parse import urlparse

import markdown
from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..config import AppConfig, get_base_path, get_site_url
from ..core.dates import format_date, iso_date, rfc822_date
from ..core.types import DisplayRow, Entry

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc", "sane_lists"]

_MDX_ESM_RE = re.compile(r"^(?:import|export)\s")


@dataclass(frozen=True)
class SiteContext:
    """Site-wide values shared by every page template."""

    title: str
    description: str
    base_path: str
    site_url: str | None
    language: str
    author: str | None
    date_format: str | None
    assets_dir: str
    recent_posts: int
    year: int

    @classmethod
    def from_config(cls, cfg: AppConfig, now: datetime | None = None) -> SiteContext:
        now = now or datetime.now(timezone.utc)
        return cls(
            title=cfg.site.title,
            description=cfg.site.description,
            base_path=get_base_path(cfg.site),
            site_url=get_site_url(cfg.site),
            language=cfg.site.language,
            author=cfg.site.author,
            date_format=cfg.site.date_format,
            assets_dir=cfg.output.assets_dir.strip("/") or "assets",
            recent_posts=max(0, cfg.site.recent_posts),
            year=now.year,
        )

    def url(self, path: str = "") -> str:
        """Site-relative URL for ``path`` under the base path."""
        return f"{self.base_path}{path.lstrip('/')}"

    def absolute_url(self, path: str) -> str | None:
        """Absolute URL for a root-relative path, None without a site URL."""
        if not self.site_url:
            return None
        return f"{self.site_url}/{path.lstrip('/')}"


def is_relative_asset(image_ref: str) -> bool:
    """True for refs that point at a file beside the post rather than a URL."""
    return not image_ref.startswith("/") and not _is_absolute(image_ref)


def asset_url(
    image_ref: str,
    base_path: str,
    assets_dir: str = "assets",
    entry_id: str | None = None,
) -> str:
    """Resolve a hero image reference to the URL used in page markup.

    Relative refs are published per entry, so two posts may each ship a
    `cover.png` without clobbering one another.

    Examples:
        >>> asset_url("https://cdn.example.com/a.png", "/")
        "https://cdn.example.com/a.png"
        >>> asset_url("/images/a.png", "/site/")
        "/site/images/a.png"
        >>> asset_url("./cover.png", "/", entry_id="my-post")
        "/assets/my-post/cover.png"
    """
    base = f"{base_path.rstrip('/')}/"
    if _is_absolute(image_ref):
        return image_ref
    if image_ref.startswith("/"):
        return f"{base}{image_ref.lstrip('/')}"
    name = PurePosixPath(image_ref).name
    if entry_id:
        return f"{base}{assets_dir}/{entry_id.strip('/')}/{name}"
    return f"{base}{assets_dir}/{name}"


def _is_absolute(ref: str) -> bool:
    return ref.startswith("//") or bool(urlparse(ref).scheme)


def render_markdown_body(body: str) -> str:
    """Convert a post body to HTML."""
    lines = _strip_mdx_esm(body.splitlines())
    return markdown.markdown("\n".join(lines), extensions=MARKDOWN_EXTENSIONS, output_format="html")


def _strip_mdx_esm(lines: list[str]) -> list[str]:
    """Drop leading import/export statements, including ones that span lines.

    A statement ends on the first line where its braces balance, so a
    braced import list split over several lines is consumed as a whole.
    """
    index = 0
    while index < len(lines):
        if not lines[index].strip():
            index += 1
            continue
        if not _MDX_ESM_RE.match(lines[index]):
            break
        depth = 0
        while index < len(lines):
            depth += lines[index].count("{") - lines[index].count("}")
            index += 1
            if depth <= 0:
                break
    return lines[index:]


def render_blog_index(rows: list[DisplayRow], site: SiteContext) -> str:
    """Render the post listing page."""
    return _render(
        "blog_index.html",
        site,
        page_title=f"Blog | {site.title}",
        page_description=site.description,
        canonical_path=site.url("blog/"),
        rows=rows,
    )


def render_home(rows: list[DisplayRow], site: SiteContext) -> str:
    """Render the home page with the most recent posts."""
    return _render(
        "home.html",
        site,
        page_title=site.title,
        page_description=site.description,
        canonical_path=site.url(),
        rows=rows[: site.recent_posts],
    )


def render_post(entry: Entry, row: DisplayRow, site: SiteContext) -> str:
    """Render a single post page."""
    data = entry.data
    updated = None
    if data.updated_date is not None:
        updated = {
            "iso": iso_date(data.updated_date),
            "text": format_date(data.updated_date, site.date_format),
        }
    og_image = None
    if row.image_ref:
        src = asset_url(row.image_ref, site.base_path, site.assets_dir, row.entry_id)
        og_image = src if _is_absolute(src) else site.absolute_url(src)
    return _render(
        "post.html",
        site,
        page_title=f"{row.title} | {site.title}" if row.title else site.title,
        page_description=data.description or site.description,
        canonical_path=row.link_href,
        og_image=og_image,
        row=row,
        updated=updated,
        tags=data.tags,
        content=render_markdown_body(entry.body),
    )


def render_rss(rows: list[DisplayRow], site: SiteContext) -> str:
    """Render the RSS 2.0 feed.

    Raises:
        ValueError: If the site has no absolute URL configured
    """
    if not site.site_url:
        raise ValueError("RSS feed requires site.site_url")
    items = [
        {
            "title": row.title,
            "description": row.description,
            "link": site.absolute_url(row.link_href),
            "pub_date": rfc822_date(row.pub_date),
        }
        for row in rows
    ]
    return _environment().get_template("rss.xml").render(
        site=site,
        channel_link=site.absolute_url(site.url()),
        items=items,
    )


def write_page(path: Path, html: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path


def _render(template_name: str, site: SiteContext, **context) -> str:
    template = _environment().get_template(template_name)

    def image_src(image_ref: str, entry_id: str | None = None) -> str:
        return asset_url(image_ref, site.base_path, site.assets_dir, entry_id)

    return template.render(
        site=site,
        canonical_url=site.absolute_url(context.get("canonical_path", site.url())),
        image_src=image_src,
        iso_date=iso_date,
        **context,
    )


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
