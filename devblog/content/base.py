"""
Abstract content store interface.

New stores should inherit from ContentStore and implement get_collection.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.types import Entry
from ..errors import CollectionNotFoundError


class ContentStore(ABC):
    """Read-only source of content collections."""

    @abstractmethod
    def get_collection(self, name: str) -> list[Entry]:
        """Return every entry of collection ``name``.

        Args:
            name: Collection name, e.g. "blog"

        Returns:
            Entries in no particular order

        Raises:
            CollectionNotFoundError: If the collection does not exist
        """
        raise NotImplementedError


class InMemoryContentStore(ContentStore):
    """Store backed by entries already held in memory."""

    def __init__(self, collections: dict[str, list[Entry]]):
        self._collections = {name: list(entries) for name, entries in collections.items()}

    def get_collection(self, name: str) -> list[Entry]:
        if name not in self._collections:
            raise CollectionNotFoundError(name)
        return list(self._collections[name])
