"""Visitor API endpoints.

Thin FastAPI adapter: pulls the platform geo headers off the request and
calls the recorder. Both endpoints always answer 200 with ``{"entries": [...]}``.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from globe_server.core.geo import hints_from_headers

router = APIRouter(prefix="/api")

_NO_CACHE = {"Cache-Control": "no-store"}


def _entries_response(entries) -> JSONResponse:
    return JSONResponse(
        content={"entries": [e.to_dict() for e in entries]},
        headers=_NO_CACHE,
    )


@router.get("/visitors")
async def list_visitors() -> JSONResponse:
    """Return the stored visitor list, newest first."""
    from globe_server.main import get_recorder

    entries = await get_recorder().list_visits()
    return _entries_response(entries)


@router.post("/visitors")
async def record_visitor(request: Request) -> JSONResponse:
    """Record the caller's approximate location and return the visitor list.

    The request body is ignored; location comes from the platform headers.
    """
    from globe_server.main import get_config, get_recorder

    hints = hints_from_headers(request.headers, get_config().geo)
    entries = await get_recorder().record_visit(hints)
    return _entries_response(entries)
