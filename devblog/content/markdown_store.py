"""
File-system content store for markdown and MDX posts.

Each collection is a directory under the content root. Every matching file
becomes one Entry whose id is derived from its path (or its ``slug`` front
matter field) and whose data is validated against the post schema:

    title        string (optional)
    description  string
    pubDate      date, required
    updatedDate  date
    heroImage    string
    draft        bool
    tags         list of strings
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
import re
from typing import Any, Iterable

from ..core.dates import parse_pub_date
from ..core.types import Entry, PostData
from ..errors import CollectionNotFoundError, DuplicateEntryError, InvalidEntryError
from ..utils.logging import log_event
from .base import ContentStore
from .frontmatter import split_front_matter

DEFAULT_EXTENSIONS = (".md", ".mdx")

logger = logging.getLogger("devblog.content")


def slugify(text: str) -> str:
    """Convert a path segment to a URL-safe slug.

    Examples:
        >>> slugify("My First Post")
        "my-first-post"
        >>> slugify("Using_MDX")
        "using_mdx"
    """
    slug = text.strip().lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s]+", "-", slug)
    return slug.strip("-")


def entry_id_for(path: Path, collection_root: Path) -> str:
    """Derive an entry id from a file path relative to its collection.

    ``index`` files take the id of their directory, so ``post/index.md``
    and ``post.md`` both map to ``post``.
    """
    relative = PurePosixPath(path.relative_to(collection_root).as_posix())
    parts = [slugify(part) for part in relative.with_suffix("").parts]
    if len(parts) > 1 and parts[-1] == "index":
        parts = parts[:-1]
    entry_id = "/".join(part for part in parts if part)
    if not entry_id:
        raise InvalidEntryError("Cannot derive an id from the file name", path=path)
    return entry_id


class MarkdownContentStore(ContentStore):
    """Loads collections from ``<content_root>/<collection>/**/*.md(x)``."""

    def __init__(
        self,
        content_root: Path,
        include_drafts: bool = False,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ):
        self._content_root = Path(content_root)
        self._include_drafts = include_drafts
        self._extensions = tuple(ext.lower() for ext in extensions)

    @property
    def content_root(self) -> Path:
        return self._content_root

    def collection_dir(self, name: str) -> Path:
        return self._content_root / name

    def get_collection(self, name: str) -> list[Entry]:
        collection_root = self.collection_dir(name)
        if not collection_root.is_dir():
            raise CollectionNotFoundError(name, collection_root)

        entries: list[Entry] = []
        seen: dict[str, Path | None] = {}
        drafts = 0
        for path in self._iter_files(collection_root):
            entry = load_entry(path, collection_root)
            if entry.id in seen:
                raise DuplicateEntryError(entry.id, seen[entry.id], path)
            seen[entry.id] = path
            if entry.data.draft and not self._include_drafts:
                drafts += 1
                continue
            entries.append(entry)

        log_event(
            logger,
            "Collection loaded",
            event="collection_loaded",
            collection=name,
            entries=len(entries),
            drafts_skipped=drafts,
        )
        return entries

    def _iter_files(self, collection_root: Path) -> list[Path]:
        return sorted(
            path
            for path in collection_root.rglob("*")
            if path.is_file()
            and path.suffix.lower() in self._extensions
            and not _is_hidden(path.relative_to(collection_root))
        )


def _is_hidden(relative: Path) -> bool:
    """Files or directories named with a leading "_" or "." are never published."""
    return any(part.startswith(("_", ".")) for part in relative.parts)

def load_entry(path: Path, collection_root: Path) -> Entry:
    """Read one post file and validate its front matter.

    Raises:
        InvalidEntryError: If the front matter is malformed or a field fails validation
    """
    text = path.read_text(encoding="utf-8")
    try:
        meta, body = split_front_matter(text)
    except ValueError as exc:
        raise InvalidEntryError(str(exc), path=path) from exc

    slug = meta.get("slug")
    if slug is not None:
        parts = [slugify(part) for part in str(slug).split("/")]
        entry_id = "/".join(part for part in parts if part)
        if not entry_id:
            raise InvalidEntryError(f"Invalid slug: {slug!r}", path=path)
    else:
        entry_id = entry_id_for(path, collection_root)

    return Entry(
        id=entry_id,
        data=parse_post_data(meta, path),
        body=body,
        source_path=path,
    )


def parse_post_data(meta: dict[str, Any], path: Path | None = None) -> PostData:
    """Validate raw front matter against the post schema."""
    if "pubDate" not in meta:
        raise InvalidEntryError("Missing required field 'pubDate'", path=path)
    pub_date = _coerce_date(meta["pubDate"], "pubDate", path)

    updated_raw = meta.get("updatedDate")
    updated_date = _coerce_date(updated_raw, "updatedDate", path) if updated_raw is not None else None

    title = meta.get("title")
    if title is not None:
        title = str(title)

    hero_image = meta.get("heroImage")
    if hero_image is not None and not isinstance(hero_image, str):
        raise InvalidEntryError(f"heroImage must be a string, got {hero_image!r}", path=path)

    draft = meta.get("draft", False)
    if not isinstance(draft, bool):
        raise InvalidEntryError(f"draft must be true or false, got {draft!r}", path=path)

    tags = meta.get("tags") or []
    if isinstance(tags, str):
        tags = [tags]
    if not isinstance(tags, list):
        raise InvalidEntryError(f"tags must be a list, got {tags!r}", path=path)

    return PostData(
        title=title,
        pub_date=pub_date,
        description=str(meta.get("description") or ""),
        updated_date=updated_date,
        hero_image=hero_image or None,
        draft=draft,
        tags=[str(tag) for tag in tags],
    )


def _coerce_date(value: Any, field_name: str, path: Path | None):
    try:
        return parse_pub_date(value)
    except ValueError as exc:
        raise InvalidEntryError(f"Invalid {field_name}: {exc}", path=path) from exc
