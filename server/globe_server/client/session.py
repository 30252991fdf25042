"""Globe session: the browser-side data flow, driven from Python.

A session starts with the placeholder points, fires a single POST to record
the visit, and swaps in placeholders + returned entries when it answers. If
the session is closed first, the late answer is dropped. A failed request
keeps the placeholders and sets a short notice for display under the globe.
"""

from __future__ import annotations

import time

import httpx
import structlog

from globe_server.config import GlobeConfig
from globe_server.core.models import VisitorPoint
from globe_server.globe.markers import placeholder_points
from globe_server.globe.scene import FrameState, GlobeAnimator

log = structlog.get_logger()

LOAD_ERROR_NOTICE = "Unable to load visitors yet"


class GlobeSession:
    def __init__(
        self,
        client: httpx.AsyncClient,
        config: GlobeConfig | None = None,
        endpoint: str = "/api/visitors",
        now_ms: int | None = None,
    ) -> None:
        self._client = client
        self._config = config or GlobeConfig()
        self._endpoint = endpoint
        self._placeholders = placeholder_points(
            int(time.time() * 1000) if now_ms is None else now_ms
        )
        self.points: list[VisitorPoint] = list(self._placeholders)
        self.error: str | None = None
        self.cancelled = False
        self.animator = GlobeAnimator(self.points, self._config)

    def _set_points(self, points: list[VisitorPoint]) -> None:
        # The globe keeps spinning from where it is; only the markers change.
        rotation = self.animator.rotation
        self.points = points
        self.animator = GlobeAnimator(points, self._config)
        self.animator.rotation = rotation

    async def load(self) -> None:
        """Record this visit and merge the returned entries. Never raises."""
        try:
            resp = await self._client.post(
                self._endpoint, headers={"Content-Type": "application/json"},
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError):
            if not self.cancelled:
                self.error = LOAD_ERROR_NOTICE
                log.warning("globe_load_failed", endpoint=self._endpoint, exc_info=True)
            return

        if self.cancelled:
            log.debug("globe_load_discarded", endpoint=self._endpoint)
            return

        raw = data.get("entries") if isinstance(data, dict) else None
        if not isinstance(raw, list):
            return

        entries = []
        for item in raw:
            try:
                entries.append(VisitorPoint.from_dict(item))
            except (KeyError, TypeError, ValueError, OverflowError):
                log.debug("globe_entry_skipped", entry=item)
        self._set_points(self._placeholders + entries)
        log.info("globe_loaded", entries=len(entries))

    def close(self) -> None:
        """Tear down: any response still in flight is ignored."""
        self.cancelled = True

    def frame(self, elapsed: float, delta: float) -> FrameState:
        """Per-frame callback for the render loop."""
        return self.animator.tick(elapsed, delta)
