"""
Content loading.

This package contains the content store interface and its file-system
and in-memory implementations.
"""

from .base import ContentStore, InMemoryContentStore
from .frontmatter import split_front_matter
from .markdown_store import MarkdownContentStore, entry_id_for, load_entry, parse_post_data, slugify

__all__ = [
    "ContentStore",
    "InMemoryContentStore",
    "MarkdownContentStore",
    "split_front_matter",
    "entry_id_for",
    "load_entry",
    "parse_post_data",
    "slugify",
]
