"""Static HTML frontend for the blogsearch web UI."""

from __future__ import annotations

from importlib.resources import files

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

router = APIRouter()


def _load_template() -> str:
    template = files("blogsearch.web").joinpath("templates", "index.html")
    return template.read_text(encoding="utf-8")


def render_page(input_id: str, results_id: str) -> str:
    """Fill the element identifiers the page script binds to."""
    return (
        _load_template()
        .replace("{{ input_id }}", input_id)
        .replace("{{ results_id }}", results_id)
    )


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    config = request.app.state.search_config
    html = render_page(config.input_id, config.results_id)
    return HTMLResponse(content=html)
