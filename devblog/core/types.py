"""
Core data types for devblog.

This module defines the fundamental data structures shared by the
content store, the listing renderer and the page output:
- PostData: Validated front-matter fields of one blog post
- Entry: One post as exposed by a content store
- DisplayRow: Rendering-ready projection of an Entry for listing pages
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path


@dataclass
class PostData:
    """Front-matter record for a blog post.

    Attributes:
        title: Display title; None when the front matter omits it
        pub_date: Timezone-aware publish timestamp used for ordering and display
        description: Short summary used for meta tags and feeds
        updated_date: Optional timestamp of the last revision
        hero_image: Optional opaque image reference (URL or path relative to the post)
        draft: Drafts are excluded by the store unless explicitly included
        tags: Free-form tag list
    """
    title: str | None
    pub_date: datetime | None
    description: str = ""
    updated_date: datetime | None = None
    hero_image: str | None = None
    draft: bool = False
    tags: list[str] = field(default_factory=list)


@dataclass
class Entry:
    """A single content entry in a collection.

    Attributes:
        id: Stable identifier, unique within the collection
        data: Validated front-matter fields
        body: Raw markdown body following the front matter
        source_path: File the entry was loaded from, if any
    """
    id: str
    data: PostData
    body: str = ""
    source_path: Path | None = None


@dataclass(frozen=True)
class DisplayRow:
    """One row of the post listing.

    Attributes:
        entry_id: Id of the entry this row was projected from
        link_href: Link target built from the base path and the entry id
        title: Entry title, empty string when missing
        formatted_date: Publish date passed through the date formatter
        pub_date: Raw publish timestamp (ordering key)
        image_ref: Hero image reference, None when the entry has none
        description: Entry description, used by the home page and feed
    """
    entry_id: str
    link_href: str
    title: str
    formatted_date: str
    pub_date: datetime
    image_ref: str | None = None
    description: str = ""
