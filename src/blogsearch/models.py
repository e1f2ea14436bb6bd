"""Core blogsearch data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Tuple


@dataclass(frozen=True, slots=True)
class SearchDocument:
    """One published page as it appears in the aggregate index."""

    title: str
    url: str
    description: str = ""
    tags: FrozenSet[str] = field(default_factory=frozenset)

    def fields(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        """Searchable fields in match priority order."""
        return (
            ("title", (self.title,)),
            ("description", (self.description,)),
            ("tags", tuple(sorted(self.tags))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "description": self.description,
            "tags": sorted(self.tags),
        }
