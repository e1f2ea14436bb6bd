"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator
from urllib.parse import urlsplit
from urllib.request import url2pathname

MARKDOWN_SUFFIXES = (".md", ".markdown")


def iter_markdown_paths(inputs: Iterable[Path]) -> Iterator[Path]:
    """Yield markdown paths from input paths, descending into directories."""
    for item in inputs:
        if item.is_dir():
            children = (child for child in item.rglob("*") if child.is_file())
            yield from iter_markdown_paths(sorted(children))
        elif item.is_file() and item.suffix.lower() in MARKDOWN_SUFFIXES:
            yield item


def _scheme(source: str) -> str:
    return urlsplit(source).scheme.lower()


def is_remote(source: str) -> bool:
    """Return True when the index source must be fetched over HTTP."""
    return _scheme(source) in ("http", "https")


def is_file_url(source: str) -> bool:
    return _scheme(source) == "file"


def local_path(source: str | Path) -> Path:
    """Map a local index source (plain path or ``file://`` URL) to a Path."""
    text = str(source)
    if is_file_url(text):
        parts = urlsplit(text)
        path = parts.path
        if parts.netloc not in ("", "localhost"):
            path = f"//{parts.netloc}{path}"
        return Path(url2pathname(path))
    return Path(text).expanduser()
