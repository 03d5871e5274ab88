"""Page rendering and output helpers."""

from .renderer import (
    SiteContext,
    asset_url,
    is_relative_asset,
    render_blog_index,
    render_home,
    render_markdown_body,
    render_post,
    render_rss,
    write_page,
)

__all__ = [
    "SiteContext",
    "asset_url",
    "is_relative_asset",
    "render_blog_index",
    "render_home",
    "render_markdown_body",
    "render_post",
    "render_rss",
    "write_page",
]
