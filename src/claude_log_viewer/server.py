"""FastAPI web server for claude-log-viewer."""

import logging
from dataclasses import asdict

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse

from .config import get_static_dir
from .core import LogRecord
from .errors import InvalidInputError, LoadSourceError, UnknownCategoryError
from .query import QueryState, apply_state
from .session import LogSession
from .sources import get_default_sources

logger = logging.getLogger(__name__)

app = FastAPI(title="claude-log-viewer", version="0.1.0")

# Session cache (populated on first request)
_session: LogSession | None = None


def _get_session() -> LogSession:
    """Lazily create the session, preloading the report file if there is one."""
    global _session
    if _session is None:
        _session = LogSession()
        try:
            _session.load_from_sources(get_default_sources())
        except (LoadSourceError, InvalidInputError) as e:
            logger.info("No report preloaded: %s", e)
    return _session


def _stats_to_dict(session: LogSession) -> dict:
    return {
        **asdict(session.get_stats()),
        "categories": {c.value: n for c, n in session.get_category_counts().items()},
    }


def _entry_to_dict(session: LogSession, index: int, record: LogRecord) -> dict:
    """Convert a record and its extracted content to a JSON-serializable dict."""
    return {
        "index": index,
        "type": record.kind,
        "category": session.category_of(record).value,
        "meta": session.describe(record),
        "content": asdict(session.extract(record)),
    }


# ── Routes ───────────────────────────────────────────────────────


@app.get("/")
async def index():
    """Serve the frontend."""
    html_path = get_static_dir() / "index.html"
    if not html_path.exists():
        raise HTTPException(status_code=404, detail="Frontend not found")
    return HTMLResponse(html_path.read_text(encoding="utf-8"))


@app.post("/api/load")
async def load_pasted(text: str = Body(..., embed=True)):
    """Replace the loaded log with pasted JSON text."""
    session = _get_session()
    try:
        count = session.load_text(text)
    except InvalidInputError as e:
        logger.info("Rejected pasted log: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "loaded": count,
        "message": f"Successfully loaded {count} entries!",
        "stats": _stats_to_dict(session),
    }


@app.post("/api/reload")
async def reload_report():
    """Reload the log from the configured report file."""
    session = _get_session()
    try:
        count = session.load_from_sources(get_default_sources())
    except LoadSourceError as e:
        logger.error("Failed to load report: %s", e)
        raise HTTPException(status_code=503, detail=str(e))
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"loaded": count, "stats": _stats_to_dict(session)}


@app.get("/api/stats")
async def get_stats():
    """Return aggregate counts over the whole loaded log."""
    return _stats_to_dict(_get_session())


@app.get("/api/records")
async def get_records(
    filter: str = Query("all", description="Category: all, system, assistant, tool, failed-tool, user"),
    search: str = Query("", description="Case-insensitive search over raw entries"),
):
    """Return entries matching the category filter and search term."""
    session = _get_session()
    try:
        state = QueryState().with_filter(filter).with_search(search)
    except UnknownCategoryError as e:
        raise HTTPException(status_code=400, detail=str(e))

    positions = {id(record): i for i, record in enumerate(session.records)}
    filtered = apply_state(session.records, state)

    return {
        "total": len(filtered),
        "entries": [_entry_to_dict(session, positions[id(r)], r) for r in filtered],
    }


@app.get("/api/records/{index}")
async def get_record(index: int):
    """Return one entry by its position in the loaded log."""
    session = _get_session()
    if index < 0 or index >= len(session.records):
        raise HTTPException(status_code=404, detail="Entry not found")
    return _entry_to_dict(session, index, session.records[index])
