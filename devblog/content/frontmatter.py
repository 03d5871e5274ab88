"""
YAML front-matter parsing for markdown and MDX posts.

A post file starts with a ``---`` line, followed by a YAML mapping and a
closing ``---`` line; everything after that is the markdown body.
"""

from __future__ import annotations

import re
from typing import Any

import yaml

FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a document into its front-matter mapping and body.

    Documents without front matter return an empty mapping and the full text.

    Raises:
        ValueError: If the front matter is not valid YAML or not a mapping
    """
    text = text.lstrip("\ufeff")
    match = FRONT_MATTER_RE.match(text)
    if not match:
        return {}, text

    try:
        meta = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid front matter: {exc}") from exc
    if not isinstance(meta, dict):
        raise ValueError("Front matter must be a mapping")
    return meta, text[match.end():]
