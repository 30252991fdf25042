"""Key-value store implementation over the Upstash / Vercel KV REST API.

The visitor list is a single Redis list:
- LPUSH the JSON-encoded point (newest at index 0)
- LTRIM to the first ``max_entries`` elements
- LRANGE 0..max_entries-1 to read it back

Each command is one HTTP round trip and is atomic on the store side. There is
no retry and no locking: a push from one request may interleave with a trim
from another, which is fine because both converge on a capped list.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from globe_server.core.models import VisitorPoint

if TYPE_CHECKING:
    from globe_server.config import StoreConfig
    from globe_server.core.stats import VisitorStats

log = structlog.get_logger()


class KVError(Exception):
    """The store answered, but with an error instead of a result."""


class KVRestVisitorStore:
    """VisitorStore backed by a REST-accessible Redis list."""

    def __init__(
        self,
        config: StoreConfig,
        client: httpx.AsyncClient | None = None,
        stats: VisitorStats | None = None,
    ) -> None:
        self._config = config
        self._stats = stats
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.timeout_seconds)

    @property
    def configured(self) -> bool:
        return self._config.configured

    @property
    def max_entries(self) -> int:
        return self._config.max_entries

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _command(self, *args: Any) -> Any:
        """Run one Redis command and return its ``result``."""
        resp = await self._client.post(
            self._config.url.rstrip("/"),
            json=[str(a) for a in args],
            headers={"Authorization": f"Bearer {self._config.token}"},
        )
        try:
            body = resp.json()
        except ValueError:
            resp.raise_for_status()
            raise KVError(f"non-JSON response from store (status {resp.status_code})")
        if isinstance(body, dict) and "error" in body:
            raise KVError(str(body["error"]))
        resp.raise_for_status()
        if not isinstance(body, dict) or "result" not in body:
            raise KVError("store response has no result")
        return body["result"]

    def _record_error(self) -> None:
        if self._stats is not None:
            self._stats.record_store_error()

    async def append(self, point: VisitorPoint) -> bool:
        """Push ``point`` to the front of the list and trim the tail.

        Returns True when both commands succeeded. Never raises.
        """
        if not self.configured:
            log.debug("store_append_skipped", reason="unconfigured")
            return False

        payload = json.dumps(point.to_dict(), separators=(",", ":"))
        try:
            await self._command("LPUSH", self._config.list_key, payload)
            await self._command("LTRIM", self._config.list_key, 0, self.max_entries - 1)
        except (httpx.HTTPError, KVError):
            log.error("store_append_failed", key=self._config.list_key,
                      point_id=point.id, exc_info=True)
            self._record_error()
            return False

        log.debug("store_append_ok", key=self._config.list_key, point_id=point.id)
        return True

    async def read_all(self) -> list[VisitorPoint]:
        """Return up to ``max_entries`` points, newest first. Never raises."""
        if not self.configured:
            log.debug("store_read_skipped", reason="unconfigured")
            return []

        try:
            raw = await self._command("LRANGE", self._config.list_key, 0, self.max_entries - 1)
        except (httpx.HTTPError, KVError):
            log.error("store_read_failed", key=self._config.list_key, exc_info=True)
            self._record_error()
            return []

        if self._stats is not None:
            self._stats.record_store_read()

        points: list[VisitorPoint] = []
        malformed = 0
        for item in raw or []:
            try:
                data = json.loads(item) if isinstance(item, str) else item
                points.append(VisitorPoint.from_dict(data))
            except (ValueError, KeyError, TypeError, OverflowError):
                malformed += 1

        if malformed:
            log.warning("store_entries_malformed", key=self._config.list_key, count=malformed)
            if self._stats is not None:
                self._stats.record_malformed(malformed)

        log.debug("store_read_ok", key=self._config.list_key, count=len(points))
        return points[:self.max_entries]
