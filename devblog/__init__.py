"""
devblog - static site builder for a personal technical blog.

This package loads markdown/MDX posts with YAML front matter, orders them
newest first and renders the listing, post, home and feed pages through
Jinja2 templates.

Main entry point is the CLI via `devblog build` command.

Example:
    $ devblog build -c devblog.yaml -o dist/
"""

__all__ = [
    "__version__",
    "DisplayRow",
    "Entry",
    "ListingRenderer",
    "MarkdownContentStore",
    "PostData",
    "render_listing",
]
__version__ = "0.1.0"

from .content.markdown_store import MarkdownContentStore
from .core.listing import ListingRenderer, render_listing
from .core.types import DisplayRow, Entry, PostData
