"""FastAPI endpoints exposing one FAQ engine to a renderer."""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .config import config
from .engine import FaqEngine, FaqBlockHost, build_engine
from .models import CategoryNode, Entry
from .sources import SnapshotError, source_from_config

logger = logging.getLogger(__name__)


app = FastAPI(
    title="FAQ Tag Filter API",
    description="Hierarchical tag filtering and search over FAQ entries",
    version="0.1.0"
)

# Global host; one engine per served block
_host: Optional[FaqBlockHost] = None
_engine: Optional[FaqEngine] = None


class TreeNodeResponse(BaseModel):
    """One category node with its subcategories."""
    name: str
    full_path: str
    level: int
    count: int
    has_children: bool
    children: list["TreeNodeResponse"] = []


TreeNodeResponse.model_rebuild()


class EntryResponse(BaseModel):
    """Entry with its derived tag metadata and view state."""
    id: str
    question: str
    answer: str
    category: str
    tags: list[str]
    all_paths: list[str]
    visible: bool
    active: bool


class FilterOptionResponse(BaseModel):
    name: str
    full_path: str
    level: int
    has_children: bool
    count: int


class FilterLevelResponse(BaseModel):
    level: int
    parent_path: str
    label: str
    display: str
    selected_path: Optional[str]
    is_open: bool
    options: list[FilterOptionResponse]


class ViewResponse(BaseModel):
    """Visibility after a filter or search operation."""
    query: str
    visible_ids: list[str]
    visible_count: int
    no_results: bool
    message: str
    levels: list[FilterLevelResponse]


class SuggestionsResponse(BaseModel):
    query: str
    suggestions: list[str]


class SelectRequest(BaseModel):
    """Request to select a category at a dropdown level."""
    level: int
    path: str


class ClearRequest(BaseModel):
    """Request to clear a dropdown level."""
    level: int


def set_engine(engine: Optional[FaqEngine]) -> None:
    """Serve a ready-made engine (used when embedding the API)."""
    global _engine
    _engine = engine


def get_engine() -> FaqEngine:
    engine = _host.engine if _host is not None else _engine
    if engine is None:
        raise HTTPException(status_code=503, detail="No FAQ data loaded.")
    return engine


def load_entries(entries: list[Entry]) -> Optional[FaqEngine]:
    """Build and serve an engine for the given entries."""
    engine = build_engine(entries)
    set_engine(engine)
    return engine


def _node_response(node: CategoryNode) -> TreeNodeResponse:
    return TreeNodeResponse(
        name=node.name,
        full_path=node.full_path,
        level=node.level,
        count=node.count,
        has_children=node.has_children,
        children=[_node_response(child) for child in node.visible_children()],
    )


def _view_response(engine: FaqEngine) -> ViewResponse:
    state = engine.view.state
    return ViewResponse(
        query=state.query,
        visible_ids=engine.view.visible_ids(),
        visible_count=state.visible_count,
        no_results=state.no_results,
        message=state.no_results_message,
        levels=[FilterLevelResponse(**level.to_dict()) for level in engine.filter_levels],
    )


@app.on_event("startup")
async def startup():
    """Load the configured snapshot source, if any."""
    global _host

    source = source_from_config()
    if source is None:
        logger.info("No snapshot source configured; waiting for set_engine()")
        return

    host = FaqBlockHost(source)
    try:
        await host.initialize()
    except SnapshotError as e:
        logger.error(f"Error loading snapshot: {e}")
        return
    _host = host


@app.on_event("shutdown")
async def shutdown():
    """Cleanup on shutdown."""
    global _host

    if _host:
        _host.close()
        _host = None


@app.get("/")
async def root():
    """Health check endpoint."""
    engine = _host.engine if _host is not None else _engine
    return {
        "service": "FAQ Tag Filter",
        "status": "ready" if engine else "no data",
        "namespace": config.tag_namespace,
        "entries": len(engine.entries) if engine else 0,
    }


@app.get("/entries", response_model=list[EntryResponse])
async def entries():
    """All entries with their tag metadata."""
    engine = get_engine()
    state = engine.view.state
    return [
        EntryResponse(
            id=entry.id,
            question=entry.question,
            answer=entry.answer,
            category=entry.category,
            tags=entry.individual_tags,
            all_paths=entry.all_paths,
            visible=state.visible.get(entry.id, False),
            active=state.active_entry_id == entry.id,
        )
        for entry in engine.entries
    ]


@app.post("/entries/{entry_id}/toggle")
async def toggle_entry(entry_id: str):
    """Expand or collapse an entry."""
    engine = get_engine()
    if entry_id not in engine.view.state.visible:
        raise HTTPException(status_code=404, detail=f"Entry {entry_id} not found.")
    expanded = engine.toggle_entry(entry_id)
    return {"id": entry_id, "expanded": expanded}


@app.get("/tree", response_model=list[TreeNodeResponse])
async def tree():
    """Category tree, only categories with entries."""
    engine = get_engine()
    return [_node_response(node) for node in engine.hierarchy.top_level_options()]


@app.get("/filters", response_model=ViewResponse)
async def filters():
    """Current dropdown levels and visibility."""
    return _view_response(get_engine())


@app.post("/filters/select", response_model=ViewResponse)
async def select_category(request: SelectRequest):
    """Select a category at a level."""
    engine = get_engine()
    if not engine.select_category(request.level, request.path):
        raise HTTPException(
            status_code=400,
            detail=f"{request.path} is not offered at level {request.level}."
        )
    return _view_response(engine)


@app.post("/filters/clear", response_model=ViewResponse)
async def clear_category(request: ClearRequest):
    """Clear the selection at a level."""
    engine = get_engine()
    if not engine.clear_category(request.level):
        raise HTTPException(status_code=400, detail=f"No filter level {request.level}.")
    return _view_response(engine)


@app.post("/filters/{level}/toggle", response_model=ViewResponse)
async def toggle_dropdown(level: int):
    """Open or close a dropdown's option list."""
    engine = get_engine()
    if engine.controller.get_level(level) is None:
        raise HTTPException(status_code=404, detail=f"No filter level {level}.")
    engine.toggle_dropdown(level)
    return _view_response(engine)


@app.get("/search", response_model=ViewResponse)
async def search(q: str = ""):
    """Search questions and answers; an empty query shows everything."""
    engine = get_engine()
    engine.filter_faqs(q)
    return _view_response(engine)


@app.get("/suggestions", response_model=SuggestionsResponse)
async def suggestions(q: str = ""):
    """Suggestions for a partial query."""
    engine = get_engine()
    query = q.strip()
    if len(query) < config.suggestion_min_length:
        return SuggestionsResponse(query=query, suggestions=[])
    return SuggestionsResponse(query=query, suggestions=engine.get_suggestions(query))
