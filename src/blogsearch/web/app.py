"""FastAPI application serving the search page and its endpoints."""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from blogsearch.config import AppConfig, SearchConfig
from blogsearch.web.frontend import router as frontend_router
from blogsearch.widget import SearchWidget

LOGGER = logging.getLogger(__name__)

MAX_LIMIT = 50

app = FastAPI(title="blogsearch", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(frontend_router)
app.state.index_source = None
app.state.search_config = SearchConfig()
app.state.widget = None

_widget_lock = threading.Lock()


class SearchPayload(BaseModel):
    query: str
    fuzzy: bool | None = None
    limit: int | None = None


class ResultItem(BaseModel):
    title: str
    url: str
    description: str
    tags: List[str]
    field: str


def _default_index_source() -> str:
    return str(AppConfig().resolve_index_path(Path.cwd()))


def get_widget() -> SearchWidget:
    """Return the application's widget, loading the index on first use."""
    widget = app.state.widget
    if widget is not None:
        return widget
    with _widget_lock:
        if app.state.widget is None:
            source = app.state.index_source or _default_index_source()
            app.state.widget = SearchWidget.initialize(source, app.state.search_config)
        return app.state.widget


def reset_widget() -> None:
    """Drop the loaded widget so the next request reloads the index."""
    with _widget_lock:
        app.state.widget = None


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/search-index.json")
async def search_index() -> List[dict[str, Any]]:
    widget = await asyncio.to_thread(get_widget)
    if widget.load_error:
        raise HTTPException(status_code=503, detail=widget.load_error)
    return [document.to_dict() for document in widget.index]


@app.post("/search")
async def search_documents(payload: SearchPayload) -> dict[str, Any]:
    widget = await asyncio.to_thread(get_widget)
    limit = payload.limit
    if limit is not None:
        limit = max(1, min(limit, MAX_LIMIT))

    state = widget.query(payload.query, limit=limit, fuzzy=payload.fuzzy)
    response: dict[str, Any] = {
        "query": state.query,
        "results": [
            ResultItem(
                title=result.document.title,
                url=result.document.url,
                description=result.document.description,
                tags=sorted(result.document.tags),
                field=result.field,
            ).model_dump()
            for result in state.results
        ],
        "html": state.html,
    }
    if widget.load_error:
        response["notice"] = "Search is unavailable: the index could not be loaded."
    return response
