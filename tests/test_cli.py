"""Tests for CLI commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from blogsearch.cli import _resolve_index_source, _setup_logging, app
from blogsearch.index.builder import find_markdown
from blogsearch.web.app import app as web_app


runner = CliRunner()


@pytest.fixture
def index_file(tmp_path: Path) -> Path:
    path = tmp_path / "search-index.json"
    path.write_text(
        json.dumps(
            [
                {"title": "Welcome", "url": "/"},
                {"title": "Null in Java", "url": "/a"},
                {"title": "Kotlin Nulls", "url": "/b"},
            ]
        ),
        encoding="utf-8",
    )
    return path


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("blogsearch.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("blogsearch.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestResolveIndexSource:
    """Tests for _resolve_index_source helper."""

    def test_remote_kept(self) -> None:
        """URLs pass through unchanged."""
        url = "https://blog.example/search-index.json"
        assert _resolve_index_source(url) == url

    def test_resolve_file_url_kept(self, tmp_path: Path) -> None:
        """file:// URLs pass through unchanged."""
        url = (tmp_path / "index.json").as_uri()
        assert _resolve_index_source(url) == url

    def test_absolute_path(self, tmp_path: Path) -> None:
        """Absolute paths are kept."""
        path = tmp_path / "index.json"
        assert _resolve_index_source(str(path)) == str(path)

    def test_default(self) -> None:
        """Defaults to the public index under the working directory."""
        expected = Path.cwd() / "public" / "search-index.json"
        assert _resolve_index_source(None) == str(expected)


class TestBuildIndexCommand:
    """Tests for the build-index command."""

    def test_no_markdown_found(self, tmp_path: Path) -> None:
        """Shows warning when no markdown files are found."""
        empty_dir = tmp_path / "empty"
        empty_dir.mkdir()

        result = runner.invoke(
            app, ["build-index", str(empty_dir), "--out", str(tmp_path / "out.json")]
        )

        assert result.exit_code == 0
        assert "No markdown files found" in result.stdout
        assert not (tmp_path / "out.json").exists()

    def test_walks_content_once(self, tmp_path: Path) -> None:
        """The content tree is scanned a single time per root."""
        content = tmp_path / "content"
        content.mkdir()
        (content / "one.md").write_text("---\ntitle: One\n---\n", encoding="utf-8")

        with patch("blogsearch.index.builder.find_markdown", wraps=find_markdown) as mock_find:
            result = runner.invoke(
                app, ["build-index", str(content), "--out", str(tmp_path / "out.json")]
            )

        assert result.exit_code == 0
        assert mock_find.call_count == 1
        assert "Written: 1, skipped: 0, failed: 0" in result.stdout

    def test_builds_index(self, tmp_path: Path) -> None:
        """Writes the index and prints stats."""
        content = tmp_path / "content"
        (content / "posts").mkdir(parents=True)
        (content / "index.md").write_text("---\ntitle: Welcome\n---\n", encoding="utf-8")
        (content / "posts" / "one.md").write_text("---\ntitle: One\n---\n", encoding="utf-8")
        (content / "posts" / "two.md").write_text(
            "---\ntitle: Two\ndraft: true\n---\n", encoding="utf-8"
        )
        out = tmp_path / "public" / "search-index.json"

        result = runner.invoke(
            app,
            [
                "build-index",
                str(content),
                "--out",
                str(out),
                "--base-url",
                "https://blog.example",
                "--exclude",
                "Welcome",
            ],
        )

        assert result.exit_code == 0
        assert "Written: 1, skipped: 2, failed: 0" in result.stdout
        payload = json.loads(out.read_text(encoding="utf-8"))
        assert payload == [
            {
                "title": "One",
                "url": "https://blog.example/posts/one/",
                "description": "",
                "tags": [],
            }
        ]


class TestSearchCommand:
    """Tests for the search command."""

    def test_index_not_found(self, tmp_path: Path) -> None:
        """Fails when the index file doesn't exist."""
        result = runner.invoke(
            app, ["search", "null", "--index", str(tmp_path / "missing.json")]
        )
        assert result.exit_code != 0

    def test_no_results(self, index_file: Path) -> None:
        """Shows message when no results found."""
        result = runner.invoke(app, ["search", "xyz", "--index", str(index_file)])
        assert result.exit_code == 0
        assert "No matches found" in result.stdout

    def test_with_results(self, index_file: Path) -> None:
        """Displays results in a table."""
        result = runner.invoke(app, ["search", "null", "--index", str(index_file)])
        assert result.exit_code == 0
        assert "Null in Java" in result.stdout
        assert "Kotlin Nulls" in result.stdout
        assert result.stdout.index("Null in Java") < result.stdout.index("Kotlin Nulls")

    def test_file_url_index(self, index_file: Path) -> None:
        """A file:// URL is accepted as the index source."""
        result = runner.invoke(app, ["search", "null", "--index", index_file.as_uri()])
        assert result.exit_code == 0
        assert "Null in Java" in result.stdout

    def test_bracketed_title(self, tmp_path: Path) -> None:
        """Titles and urls are printed literally, not as markup."""
        path = tmp_path / "search-index.json"
        path.write_text(
            json.dumps(
                [
                    {"title": "Paths like [/etc] in Linux", "url": "/a"},
                    {"title": "[red]Styled", "url": "/b[x]"},
                ]
            ),
            encoding="utf-8",
        )

        result = runner.invoke(app, ["search", "linux", "--index", str(path)])
        assert result.exit_code == 0
        assert "Paths like [/etc] in Linux" in result.stdout

        result = runner.invoke(app, ["search", "styled", "--index", str(path)])
        assert result.exit_code == 0
        assert "[red]Styled" in result.stdout
        assert "/b[x]" in result.stdout

    def test_fuzzy_and_exclude(self, index_file: Path) -> None:
        """Options reach the widget."""
        result = runner.invoke(
            app,
            ["search", "kn", "--index", str(index_file), "--fuzzy", "--exclude", "Welcome"],
        )
        assert result.exit_code == 0
        assert "Kotlin Nulls" in result.stdout
        assert "Welcome" not in result.stdout

    def test_limit(self, index_file: Path) -> None:
        """Only limit rows are shown."""
        result = runner.invoke(
            app, ["search", "null", "--index", str(index_file), "--limit", "1"]
        )
        assert result.exit_code == 0
        assert "Null in Java" in result.stdout
        assert "Kotlin Nulls" not in result.stdout

    def test_invalid_limit(self, index_file: Path) -> None:
        """A limit below one is rejected."""
        result = runner.invoke(
            app, ["search", "null", "--index", str(index_file), "--limit", "0"]
        )
        assert result.exit_code != 0

    def test_unreadable_index(self, tmp_path: Path) -> None:
        """A corrupt index exits with an error."""
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        result = runner.invoke(app, ["search", "null", "--index", str(path)])

        assert result.exit_code == 1
        assert "Unable to load index" in result.stdout


class TestWebCommand:
    """Tests for the web command."""

    def test_web_starts_server(self, index_file: Path) -> None:
        """Starts uvicorn server with correct parameters."""
        with patch("uvicorn.run") as mock_uvicorn_run:
            result = runner.invoke(
                app,
                ["web", "--host", "0.0.0.0", "--port", "9000", "--index", str(index_file)],
            )
            assert result.exit_code == 0
            mock_uvicorn_run.assert_called_once()
            call_kwargs = mock_uvicorn_run.call_args[1]
            assert call_kwargs["host"] == "0.0.0.0"
            assert call_kwargs["port"] == 9000
            assert web_app.state.index_source == str(index_file)

    def test_web_file_url_index(self, index_file: Path) -> None:
        """An existing file:// index does not trigger the warning."""
        with patch("uvicorn.run"):
            result = runner.invoke(app, ["web", "--index", index_file.as_uri()])
            assert result.exit_code == 0
            assert "index not found" not in result.stdout.lower()
            assert web_app.state.index_source == index_file.as_uri()

    def test_web_warns_missing_index(self, tmp_path: Path) -> None:
        """Shows warning when the index doesn't exist."""
        with patch("uvicorn.run"):
            result = runner.invoke(app, ["web", "--index", str(tmp_path / "missing.json")])
            assert result.exit_code == 0
            assert "index not found" in result.stdout.lower()
