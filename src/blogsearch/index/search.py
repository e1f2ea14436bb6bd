"""Substring and subsequence search over a loaded index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from blogsearch.index.loader import SearchIndex
from blogsearch.models import SearchDocument

FIELD_PRIORITY = ("title", "description", "tags")


@dataclass(frozen=True, slots=True)
class SearchResult:
    document: SearchDocument
    field: str

    @property
    def url(self) -> str:
        return self.document.url

    @property
    def title(self) -> str:
        return self.document.title


def contains(needle: str, haystack: str) -> bool:
    """Case-insensitive contiguous substring test."""
    return needle.lower() in haystack.lower()


def is_subsequence(needle: str, haystack: str) -> bool:
    """Case-insensitive test that every character of ``needle`` appears in order."""
    remaining = iter(haystack.lower())
    return all(char in remaining for char in needle.lower())


def matching_field(
    document: SearchDocument, query: str, matcher: Callable[[str, str], bool]
) -> Optional[str]:
    """Return the highest-priority field of ``document`` that matches ``query``."""
    for name, values in document.fields():
        if any(matcher(query, value) for value in values if value):
            return name
    return None


class Searcher:
    """Runs queries against an immutable :class:`SearchIndex`."""

    def __init__(self, index: SearchIndex) -> None:
        self.index = index

    def search(self, query: str, *, limit: int = 10, fuzzy: bool = False) -> List[SearchResult]:
        if not query:
            return []

        matcher = is_subsequence if fuzzy else contains
        buckets: dict[str, List[SearchResult]] = {name: [] for name in FIELD_PRIORITY}
        seen_urls: set[str] = set()

        for document in self.index:
            if document.url in seen_urls:
                continue
            field = matching_field(document, query, matcher)
            if field is None:
                continue
            seen_urls.add(document.url)
            buckets[field].append(SearchResult(document=document, field=field))

        ordered = [result for name in FIELD_PRIORITY for result in buckets[name]]
        return ordered[: max(limit, 0)]
