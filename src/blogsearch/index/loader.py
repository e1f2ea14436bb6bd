"""Loading the aggregate index from a URL or a local file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

import httpx

from blogsearch.models import SearchDocument
from blogsearch.utils.files import is_remote, local_path
from blogsearch.utils.text import coerce_tags

LOGGER = logging.getLogger(__name__)

FETCH_TIMEOUT = 10.0


class IndexLoadError(RuntimeError):
    """Raised when the aggregate index cannot be fetched or decoded."""


@dataclass(frozen=True, slots=True)
class SearchIndex:
    """Ordered, read-only collection of documents loaded for one widget."""

    documents: Tuple[SearchDocument, ...] = ()
    source: str = ""
    load_error: str | None = None

    def __len__(self) -> int:
        return len(self.documents)

    def __iter__(self):
        return iter(self.documents)

    @property
    def loaded(self) -> bool:
        return self.load_error is None


def parse_entry(entry: Any) -> SearchDocument | None:
    """Convert one JSON entry to a document, or ``None`` when malformed."""
    if not isinstance(entry, dict):
        return None
    title = entry.get("title")
    url = entry.get("url")
    if not isinstance(title, str) or not isinstance(url, str):
        return None
    description = entry.get("description")
    return SearchDocument(
        title=title,
        url=url,
        description=description if isinstance(description, str) else "",
        tags=frozenset(coerce_tags(entry.get("tags"))),
    )


def parse_documents(payload: Any, *, exclude: Iterable[str] = ()) -> List[SearchDocument]:
    """Validate a decoded index payload and drop excluded or malformed entries."""
    if not isinstance(payload, list):
        raise IndexLoadError(f"Index must be a JSON array, got {type(payload).__name__}")

    excluded = frozenset(exclude)
    documents: List[SearchDocument] = []
    seen_urls: set[str] = set()
    for position, entry in enumerate(payload):
        document = parse_entry(entry)
        if document is None:
            LOGGER.debug("Skipping malformed index entry at position %d", position)
            continue
        if document.title in excluded:
            continue
        if document.url in seen_urls:
            LOGGER.debug("Skipping duplicate url %s", document.url)
            continue
        seen_urls.add(document.url)
        documents.append(document)
    return documents


def fetch_payload(source: str, *, client: httpx.Client | None = None) -> Any:
    """Fetch and decode the JSON document at ``source``."""
    try:
        if is_remote(source):
            if client is None:
                with httpx.Client(timeout=FETCH_TIMEOUT, follow_redirects=True) as own_client:
                    response = own_client.get(source)
            else:
                response = client.get(source)
            response.raise_for_status()
            return response.json()
        return json.loads(local_path(source).read_text(encoding="utf-8"))
    except (httpx.HTTPError, OSError, UnicodeDecodeError, ValueError) as exc:
        raise IndexLoadError(f"Unable to load index from {source}: {exc}") from exc


def load_index(
    source: str,
    *,
    exclude: Iterable[str] = (),
    client: httpx.Client | None = None,
) -> SearchIndex:
    """Load the aggregate index once.

    Failures never propagate: the returned index is empty and carries the
    error message in ``load_error``.
    """
    try:
        documents = parse_documents(fetch_payload(source, client=client), exclude=exclude)
    except IndexLoadError as exc:
        LOGGER.warning("%s", exc)
        return SearchIndex(source=source, load_error=str(exc))

    LOGGER.info("Loaded %d documents from %s", len(documents), source)
    return SearchIndex(documents=tuple(documents), source=source)
