"""Visitors globe server — main entry point.

This is the only file that knows about concrete implementations.
It wires together the core, storage, globe, and API layers.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI

from globe_server.api.globe import router as globe_router
from globe_server.api.monitoring import VERSION, router as monitoring_router
from globe_server.api.visitors import router as visitors_router
from globe_server.config import AppConfig, load_config
from globe_server.core.recorder import VisitRecorder
from globe_server.core.stats import VisitorStats
from globe_server.storage.kv_store import KVRestVisitorStore

log = structlog.get_logger()

# Module-level singletons (set during startup)
_recorder: VisitRecorder | None = None
_stats: VisitorStats | None = None
_config: AppConfig | None = None


def get_recorder() -> VisitRecorder:
    assert _recorder is not None, "Server not initialized"
    return _recorder


def get_stats() -> VisitorStats:
    assert _stats is not None, "Server not initialized"
    return _stats


def get_config() -> AppConfig:
    assert _config is not None, "Server not initialized"
    return _config


def _setup_logging(config: AppConfig) -> None:
    """Configure structlog based on the logging config."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if config.logging.format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.logging.level.upper()),
        ),
    )


def build_recorder(
    config: AppConfig,
    stats: VisitorStats,
    client: httpx.AsyncClient,
) -> tuple[VisitRecorder, KVRestVisitorStore]:
    """Create the store and recorder for ``config``."""
    store = KVRestVisitorStore(config.store, client=client, stats=stats)
    recorder = VisitRecorder(
        store=store,
        stats=stats,
        quantize_step=config.geo.quantize_step,
        max_entries=config.store.max_entries,
    )
    return recorder, store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    global _recorder, _stats, _config

    _config = load_config()
    _setup_logging(_config)

    # Checked once; an unconfigured store short-circuits every store call.
    log.info("store_config_checked",
             configured=_config.store.configured,
             has_url=bool(_config.store.url),
             has_token=bool(_config.store.token),
             list_key=_config.store.list_key)

    _stats = VisitorStats()
    client = httpx.AsyncClient(timeout=_config.store.timeout_seconds)
    _recorder, _ = build_recorder(_config, _stats, client)

    log.info("server_started",
             env=_config.server.env,
             host=_config.server.host,
             port=_config.server.port)

    yield

    # Shutdown
    await client.aclose()
    log.info("server_stopped")


app = FastAPI(
    title="Visitors Globe",
    description="Approximate visitor locations for the site globe",
    version=VERSION,
    lifespan=lifespan,
)

app.include_router(visitors_router)
app.include_router(globe_router)
app.include_router(monitoring_router)
