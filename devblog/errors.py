"""Exceptions raised while loading and rendering blog content.

All content problems are fatal at build time: they are raised where they
are detected and surface through the CLI as a non-zero exit.
"""

from __future__ import annotations

from pathlib import Path


class ContentError(Exception):
    """Base class for content collection failures."""


class CollectionNotFoundError(ContentError):
    """Raised when a requested collection does not exist in the store."""

    def __init__(self, name: str, location: Path | None = None):
        self.name = name
        self.location = location
        where = f" at {location}" if location is not None else ""
        super().__init__(f"Collection '{name}' not found{where}")


class InvalidEntryError(ContentError):
    """Raised when an entry's front matter or schema fields are malformed."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class DuplicateEntryError(ContentError):
    """Raised when two entries in one collection resolve to the same id."""

    def __init__(self, entry_id: str, first: Path | None, second: Path | None):
        self.entry_id = entry_id
        self.first = first
        self.second = second
        super().__init__(f"Duplicate entry id '{entry_id}': {first} and {second}")
