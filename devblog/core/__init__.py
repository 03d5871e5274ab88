"""
Core domain models and listing logic.

This package contains data types and the listing transformation, which
are independent of where content is loaded from or how pages are written.
"""

from .dates import format_date, iso_date, parse_pub_date, rfc822_date
from .listing import (
    ListingRenderer,
    build_post_href,
    normalize_base_path,
    render_listing,
    sort_entries,
)
from .types import DisplayRow, Entry, PostData

__all__ = [
    "Entry",
    "PostData",
    "DisplayRow",
    "ListingRenderer",
    "render_listing",
    "sort_entries",
    "build_post_href",
    "normalize_base_path",
    "format_date",
    "iso_date",
    "parse_pub_date",
    "rfc822_date",
]
