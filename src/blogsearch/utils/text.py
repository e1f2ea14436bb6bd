"""Text helpers for front-matter values."""

from __future__ import annotations

import re
from typing import Any, Iterable, List

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(lines: Iterable[str]) -> str:
    """Collapse whitespace runs and join non-empty lines with a single space."""
    parts = (_WHITESPACE_RE.sub(" ", line).strip() for line in lines)
    return " ".join(part for part in parts if part)


def title_from_stem(stem: str) -> str:
    """Turn a file stem like ``null-handling_in-java`` into a readable title."""
    words = stem.replace("-", " ").replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def coerce_tags(value: Any) -> List[str]:
    """Normalise a tags value.

    Accepts a list of strings or a single comma-separated string. Anything
    that is not a string is dropped, as are blank tags.
    """
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = value
    else:
        return []
    return [item.strip() for item in items if isinstance(item, str) and item.strip()]
