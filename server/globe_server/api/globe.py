"""Globe scene endpoint."""

from __future__ import annotations

import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from globe_server.globe.markers import placeholder_points
from globe_server.globe.scene import build_scene

router = APIRouter(prefix="/api")


@router.get("/globe/scene")
async def globe_scene() -> JSONResponse:
    """Return the scene description for placeholders plus stored visitors.

    Read-only: viewing the scene does not record a visit.
    """
    from globe_server.main import get_config, get_recorder

    entries = await get_recorder().list_visits()
    points = placeholder_points(int(time.time() * 1000)) + entries
    return JSONResponse(content=build_scene(points, get_config().globe))
