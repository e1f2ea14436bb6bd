"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable

DEFAULT_INDEX_PATH = Path("public/search-index.json")
DEFAULT_CONTENT_DIR = Path("content")
DEFAULT_RESULT_TEMPLATE = '<li><a href="{url}">{title}</a></li>'
DEFAULT_NO_RESULTS_TEXT = "No results found"


@dataclass(slots=True)
class AppConfig:
    index_path: Path = DEFAULT_INDEX_PATH
    content_dir: Path = DEFAULT_CONTENT_DIR
    base_url: str = ""

    def resolve_index_path(self, base_dir: Path | None = None) -> Path:
        if Path(self.index_path).is_absolute() or base_dir is None:
            return Path(self.index_path)
        return base_dir / self.index_path

    def resolve_content_dir(self, base_dir: Path | None = None) -> Path:
        if Path(self.content_dir).is_absolute() or base_dir is None:
            return Path(self.content_dir)
        return base_dir / self.content_dir


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Options bound to a search widget when it is created."""

    limit: int = 10
    fuzzy: bool = False
    exclude: FrozenSet[str] = field(default_factory=frozenset)
    result_template: str = DEFAULT_RESULT_TEMPLATE
    no_results_text: str = DEFAULT_NO_RESULTS_TEXT
    input_id: str = "search-input"
    results_id: str = "results-container"

    def __post_init__(self) -> None:
        if self.limit < 1:
            raise ValueError(f"limit must be at least 1, got {self.limit}")
        # Accept any iterable of titles but keep the stored value hashable.
        if not isinstance(self.exclude, frozenset):
            object.__setattr__(self, "exclude", frozenset(self.exclude))

    @classmethod
    def from_options(
        cls,
        *,
        limit: int | None = None,
        fuzzy: bool | None = None,
        exclude: Iterable[str] | None = None,
    ) -> "SearchConfig":
        """Build a config from optional overrides, keeping defaults for ``None``."""
        defaults = cls()
        return cls(
            limit=defaults.limit if limit is None else limit,
            fuzzy=defaults.fuzzy if fuzzy is None else fuzzy,
            exclude=frozenset(exclude or ()),
        )
