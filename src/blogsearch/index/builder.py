"""Aggregate index build pipeline."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Sequence

from blogsearch.ingestion.frontmatter import ContentFile, FrontMatterError, load_content_file
from blogsearch.models import SearchDocument
from blogsearch.utils.files import iter_markdown_paths
from blogsearch.utils.text import coerce_tags, normalize_whitespace, title_from_stem

LOGGER = logging.getLogger(__name__)

INDEX_STEMS = ("index", "_index")


def find_markdown(paths: Sequence[Path]) -> list[Path]:
    """Find all markdown files under the given paths."""
    return list(iter_markdown_paths(paths))


@dataclass(slots=True)
class BuildStats:
    written: int = 0
    skipped: int = 0
    failed: int = 0
    processed_files: list[Path] = field(default_factory=list)

    def increment(self, status: str, path: Path) -> None:
        if status == "written":
            self.written += 1
        elif status == "skipped":
            self.skipped += 1
        else:
            self.failed += 1
        self.processed_files.append(path)


def url_for(relative: PurePosixPath, base_url: str = "") -> str:
    """Derive the public url of a content file from its path.

    ``posts/hello.md`` maps to ``/posts/hello/`` and ``index.md`` files map
    to their directory.
    """
    parts = list(relative.parent.parts)
    if relative.stem not in INDEX_STEMS:
        parts.append(relative.stem)
    path = "/" + "/".join(parts) + "/" if parts else "/"
    return base_url.rstrip("/") + path


def is_searchable(meta: dict) -> bool:
    if meta.get("draft") is True:
        return False
    return meta.get("search", True) is not False


class IndexBuilder:
    """Turns markdown sources into the aggregate search index."""

    def __init__(
        self,
        *,
        base_url: str = "",
        exclude: Iterable[str] = (),
    ) -> None:
        self.base_url = base_url
        self.exclude = frozenset(exclude)

    def build(self, paths: Sequence[Path]) -> tuple[List[SearchDocument], BuildStats]:
        """Collect documents for every markdown file under ``paths``."""
        stats = BuildStats()
        documents: List[SearchDocument] = []
        seen_urls: set[str] = set()

        for root in paths:
            for path in find_markdown([root]):
                try:
                    content = load_content_file(path)
                except (OSError, UnicodeDecodeError, FrontMatterError) as exc:
                    LOGGER.error("Failed to read %s: %s", path, exc)
                    stats.increment("failed", path)
                    continue

                document = self._to_document(content, root)
                if document is None:
                    stats.increment("skipped", path)
                    continue
                if document.url in seen_urls:
                    LOGGER.warning("Duplicate url %s from %s, keeping the first", document.url, path)
                    stats.increment("failed", path)
                    continue

                seen_urls.add(document.url)
                documents.append(document)
                stats.increment("written", path)

        return documents, stats

    def write(self, documents: Sequence[SearchDocument], out_path: Path) -> None:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        payload = [document.to_dict() for document in documents]
        out_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        LOGGER.info("Wrote %d entries to %s", len(payload), out_path)

    def _to_document(self, content: ContentFile, root: Path) -> SearchDocument | None:
        meta = content.meta
        if not is_searchable(meta):
            LOGGER.debug("Skipping unsearchable page %s", content.path)
            return None

        title = meta.get("title")
        if not isinstance(title, str) or not title.strip():
            title = title_from_stem(content.path.stem)
        title = title.strip()
        if title in self.exclude:
            LOGGER.debug("Skipping excluded page %r", title)
            return None

        permalink = meta.get("permalink")
        if isinstance(permalink, str) and permalink.strip():
            url = self.base_url.rstrip("/") + "/" + permalink.strip().lstrip("/")
        else:
            relative = content.path.relative_to(root) if root.is_dir() else PurePosixPath(content.path.name)
            url = url_for(PurePosixPath(*Path(relative).parts), self.base_url)

        description = meta.get("description")
        if not isinstance(description, str):
            description = ""

        return SearchDocument(
            title=title,
            url=url,
            description=normalize_whitespace(description.splitlines()),
            tags=frozenset(coerce_tags(meta.get("tags"))),
        )
