"""Visit recorder: locates, records and lists visitor points.

This is the core business logic behind the visitor endpoints. It depends
on the VisitorStore protocol, not a concrete implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from globe_server.core.geo import DEFAULT_STEP, locate
from globe_server.core.models import GeoHints, VisitorPoint

if TYPE_CHECKING:
    from globe_server.core.stats import VisitorStats
    from globe_server.storage.base import VisitorStore

log = structlog.get_logger()

# Hard cap on entries returned by any endpoint.
MAX_VISITORS = 200


class VisitRecorder:
    """Turns requests into visitor points and serves the rolling list."""

    def __init__(
        self,
        store: VisitorStore,
        stats: VisitorStats,
        quantize_step: float = DEFAULT_STEP,
        max_entries: int = MAX_VISITORS,
    ) -> None:
        self._store = store
        self._stats = stats
        self._step = quantize_step
        self._max_entries = max_entries

    async def record_visit(self, hints: GeoHints) -> list[VisitorPoint]:
        """Record one visit and return the current list, newest first.

        With no store configured the new point is returned alone and never
        persisted.
        """
        lat, lng, source = locate(hints, self._step)
        point = VisitorPoint.create(lat, lng)
        log.info("visit_located", source=source, lat=lat, lng=lng,
                 country=hints.country or "")

        if not self._store.configured:
            self._stats.record_visit(source, persisted=False)
            self._stats.record_served(1)
            log.info("visit_recorded", point_id=point.id, persisted=False)
            return [point]

        persisted = await self._store.append(point)
        self._stats.record_visit(source, persisted=persisted)
        entries = (await self._store.read_all())[:self._max_entries]
        self._stats.record_served(len(entries))
        log.info("visit_recorded", point_id=point.id, persisted=persisted,
                 entries=len(entries))
        return entries

    async def list_visits(self) -> list[VisitorPoint]:
        """Return the stored list verbatim. No side effects on the store."""
        entries = await self._store.read_all()
        self._stats.record_served(len(entries))
        return entries
