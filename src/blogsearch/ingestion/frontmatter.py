"""Front-matter parsing for markdown content files.

A front-matter block is YAML enclosed by ``---`` lines at the very start of
the file. Only the metadata is read here; the markdown body is returned
untouched since rendering is left to the site generator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

LOGGER = logging.getLogger(__name__)

DELIMITER = "---"


class FrontMatterError(ValueError):
    """Raised when a front-matter block cannot be parsed."""


@dataclass(slots=True)
class ContentFile:
    """A markdown source file split into metadata and body."""

    path: Path
    meta: Dict[str, Any] = field(default_factory=dict)
    body: str = ""


def parse_front_matter(text: str) -> tuple[Dict[str, Any], str]:
    """Split ``text`` into its front-matter mapping and the remaining body."""
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        return {}, text

    for end, line in enumerate(lines[1:], start=1):
        if line.strip() in (DELIMITER, "..."):
            break
    else:
        raise FrontMatterError("Unterminated front-matter block")

    block = "".join(lines[1:end])
    body = "".join(lines[end + 1 :])
    try:
        meta = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid front-matter: {exc}") from exc

    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontMatterError("Front-matter must be a mapping")
    return meta, body


def load_content_file(path: Path) -> ContentFile:
    """Read ``path`` and parse its front-matter."""
    text = path.read_text(encoding="utf-8")
    meta, body = parse_front_matter(text)
    LOGGER.debug("Parsed %s (%d front-matter keys)", path, len(meta))
    return ContentFile(path=path, meta=meta, body=body)
