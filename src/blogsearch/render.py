"""HTML rendering of search results."""

from __future__ import annotations

import html
import re
from typing import Iterable

from blogsearch.index.search import SearchResult

PLACEHOLDER_RE = re.compile(r"\{(url|title|desc)\}")


def render_result(result: SearchResult, template: str) -> str:
    """Fill the ``{url}``, ``{title}`` and ``{desc}`` placeholders of ``template``.

    Every interpolated value is HTML-escaped, quotes included. Braces that are
    not one of the known placeholders are left as they are.
    """
    values = {
        "url": result.document.url,
        "title": result.document.title,
        "desc": result.document.description,
    }
    return PLACEHOLDER_RE.sub(lambda match: html.escape(values[match.group(1)], quote=True), template)


def render_results(results: Iterable[SearchResult], template: str, no_results_text: str) -> str:
    rendered = [render_result(result, template) for result in results]
    if not rendered:
        return html.escape(no_results_text)
    return "".join(rendered)
