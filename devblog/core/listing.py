"""
Listing renderer for the blog index.

Turns the unordered entries of a collection into display rows ordered
newest first. The transformation is pure: no I/O, no mutation of the
input, and the same input always yields the same rows.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Callable, Iterable

from ..errors import InvalidEntryError
from .dates import format_date
from .types import DisplayRow, Entry

if TYPE_CHECKING:
    from ..content.base import ContentStore

DateFormatter = Callable[[datetime], str]

BLOG_SEGMENT = "blog/"


def normalize_base_path(base_path: str) -> str:
    """Return the base path with exactly one trailing slash.

    Examples:
        >>> normalize_base_path("/")
        "/"
        >>> normalize_base_path("/docs")
        "/docs/"
    """
    stripped = (base_path or "").rstrip("/")
    return f"{stripped}/"


def build_post_href(base_path: str, entry_id: str) -> str:
    """Build the link target for a post page: ``<base>blog/<id>/``."""
    return f"{normalize_base_path(base_path)}{BLOG_SEGMENT}{entry_id}/"


def sort_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Order entries by publish timestamp descending, then id ascending.

    Raises:
        InvalidEntryError: If an entry has no usable publish date
    """
    items = list(entries)
    for entry in items:
        _require_pub_date(entry)
    return sorted(items, key=lambda entry: (-entry.data.pub_date.timestamp(), entry.id))


def render_listing(
    entries: Iterable[Entry],
    base_path: str,
    date_formatter: DateFormatter = format_date,
) -> list[DisplayRow]:
    """Project entries into display rows in listing order.

    Args:
        entries: Entries as returned by a content store, in any order
        base_path: URL prefix the site is served under
        date_formatter: Turns a publish timestamp into display text

    Returns:
        One DisplayRow per entry, newest first
    """
    rows = []
    for entry in sort_entries(entries):
        data = entry.data
        rows.append(
            DisplayRow(
                entry_id=entry.id,
                link_href=build_post_href(base_path, entry.id),
                title=data.title or "",
                formatted_date=date_formatter(data.pub_date),
                pub_date=data.pub_date,
                image_ref=data.hero_image or None,
                description=data.description or "",
            )
        )
    return rows


class ListingRenderer:
    """Renders a store's collection into listing rows.

    The store is supplied at construction so callers decide where content
    comes from; the base path is supplied per call.
    """

    def __init__(self, store: ContentStore, date_formatter: DateFormatter = format_date):
        self._store = store
        self._date_formatter = date_formatter

    def render(self, entries: Iterable[Entry], base_path: str) -> list[DisplayRow]:
        return render_listing(entries, base_path, self._date_formatter)

    def render_collection(self, name: str, base_path: str) -> list[DisplayRow]:
        """Fetch collection ``name`` from the store and render it."""
        return self.render(self._store.get_collection(name), base_path)


def _require_pub_date(entry: Entry) -> None:
    pub_date = entry.data.pub_date
    if not isinstance(pub_date, datetime):
        raise InvalidEntryError(
            f"Entry '{entry.id}' has no valid pubDate (got {pub_date!r})",
            path=entry.source_path,
        )
