"""Command line interface for blogsearch."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from blogsearch.config import AppConfig, SearchConfig
from blogsearch.index.builder import IndexBuilder
from blogsearch.utils.files import is_file_url, is_remote, local_path
from blogsearch.web.app import app as web_app, reset_widget
from blogsearch.widget import SearchWidget


console = Console()
app = typer.Typer(help="blogsearch - build and query a blog's search index")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _resolve_index_source(index: Optional[str]) -> str:
    if index is not None and (is_remote(index) or is_file_url(index)):
        return index
    config = AppConfig(index_path=Path(index) if index is not None else AppConfig().index_path)
    return str(config.resolve_index_path(Path.cwd()))


@app.command("build-index")
def build_index(
    inputs: Optional[List[Path]] = typer.Argument(
        None, help="Content directories or markdown files.", resolve_path=True
    ),
    out: Path = typer.Option(None, "--out", "-o", help="Output JSON path"),
    base_url: str = typer.Option(AppConfig().base_url, help="Prefix for generated urls"),
    exclude: List[str] = typer.Option([], "--exclude", help="Page titles to leave out"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Build the aggregate search index from markdown front-matter."""
    _setup_logging(verbose)
    config = AppConfig(
        index_path=out if out is not None else AppConfig().index_path,
        base_url=base_url,
    )
    roots = inputs or [config.resolve_content_dir(Path.cwd())]
    resolved_out = config.resolve_index_path(Path.cwd())

    builder = IndexBuilder(base_url=config.base_url, exclude=exclude)
    documents, stats = builder.build(roots)
    if not stats.processed_files:
        console.print("[yellow]No markdown files found.[/yellow]")
        return

    builder.write(documents, resolved_out)

    console.print(f"Index written to [bold]{resolved_out}[/bold]")
    console.print(
        f"Written: {stats.written}, skipped: {stats.skipped}, failed: {stats.failed}"
    )


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    index: Optional[str] = typer.Option(None, "--index", help="Index path or URL"),
    limit: int = typer.Option(SearchConfig().limit, help="Maximum results to display"),
    fuzzy: bool = typer.Option(False, "--fuzzy", help="Ordered subsequence matching"),
    exclude: List[str] = typer.Option([], "--exclude", help="Page titles to ignore"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Query the aggregate index the same way the search widget does."""
    _setup_logging(verbose)
    source = _resolve_index_source(index)
    if not is_remote(source) and not local_path(source).exists():
        raise typer.BadParameter(f"Index not found: {source}")

    try:
        config = SearchConfig.from_options(limit=limit, fuzzy=fuzzy, exclude=exclude)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    widget = SearchWidget.initialize(source, config)
    if widget.load_error:
        console.print(f"[red]{escape(widget.load_error)}[/red]")
        raise typer.Exit(code=1)

    state = widget.on_input(query)
    if not state.results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Title")
    table.add_column("URL")
    table.add_column("Matched")

    for result in state.results:
        table.add_row(escape(result.title), escape(result.url), result.field)

    console.print(table)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    index: Optional[str] = typer.Option(None, "--index", help="Index path or URL"),
) -> None:
    """Start the web interface."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    source = _resolve_index_source(index)
    if not is_remote(source) and not local_path(source).exists():
        console.print("[yellow]Warning: index not found, searches will return no results.[/yellow]")

    web_app.state.index_source = source
    reset_widget()
    console.print(f"Starting web interface on http://{host}:{port} (index: {source})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
