"""Health check and monitoring endpoints."""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(prefix="/api")

VERSION = "0.1.0"


@router.get("/health")
async def health() -> dict:
    """Basic health check.

    ``store_configured`` false means visits are served but never persisted.
    """
    from globe_server.main import get_config, get_stats

    config = get_config()
    snapshot = get_stats().snapshot()
    return {
        "status": "ok",
        "version": VERSION,
        "env": config.server.env,
        "uptime_seconds": snapshot["uptime_seconds"],
        "store_configured": config.store.configured,
        "store_errors": snapshot["store_errors"],
    }


@router.get("/stats")
async def stats() -> dict:
    """In-process counters: visits recorded, entries served, store health."""
    from globe_server.main import get_stats

    return get_stats().snapshot()
