"""Search widget: one loaded index bound to an input and a result container."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Tuple

import httpx

from blogsearch.config import SearchConfig
from blogsearch.index.loader import SearchIndex, load_index
from blogsearch.index.search import Searcher, SearchResult
from blogsearch.render import render_results

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class InputElement:
    element_id: str
    value: str = ""


@dataclass(slots=True)
class ResultsElement:
    element_id: str
    html: str = ""

    def clear(self) -> None:
        self.html = ""


@dataclass(frozen=True, slots=True)
class QueryState:
    """Outcome of one input change."""

    query: str = ""
    results: Tuple[SearchResult, ...] = field(default_factory=tuple)
    html: str = ""

    @property
    def urls(self) -> list[str]:
        return [result.url for result in self.results]


class SearchWidget:
    """Instant search over an index that is fetched exactly once."""

    def __init__(self, index: SearchIndex, config: SearchConfig | None = None) -> None:
        self.config = config or SearchConfig()
        self.index = index
        self.searcher = Searcher(index)
        self.input = InputElement(self.config.input_id)
        self.results = ResultsElement(self.config.results_id)
        self.state = QueryState()

    @classmethod
    def initialize(
        cls,
        index_url: str,
        config: SearchConfig | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> "SearchWidget":
        """Fetch ``index_url`` and bind a widget to the configured elements."""
        config = config or SearchConfig()
        index = load_index(index_url, exclude=config.exclude, client=client)
        return cls(index, config)

    @property
    def load_error(self) -> str | None:
        return self.index.load_error

    def query(self, query: str, *, limit: int | None = None, fuzzy: bool | None = None) -> QueryState:
        """Compute the state for ``query`` without touching the bound elements."""
        if not query:
            return QueryState(query=query)

        results = self.searcher.search(
            query,
            limit=self.config.limit if limit is None else limit,
            fuzzy=self.config.fuzzy if fuzzy is None else fuzzy,
        )
        html = render_results(results, self.config.result_template, self.config.no_results_text)
        return QueryState(query=query, results=tuple(results), html=html)

    def on_input(self, query: str) -> QueryState:
        """Handle one change of the input value and re-render the result container."""
        self.input.value = query
        self.state = self.query(query)
        if not query:
            self.results.clear()
        else:
            self.results.html = self.state.html
        LOGGER.debug("Query %r matched %d documents", query, len(self.state.results))
        return self.state
