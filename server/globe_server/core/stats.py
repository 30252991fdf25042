"""Service statistics.

In-memory counters for the visitor endpoints. Per-process only; the
platform may run many short-lived instances, so these are for debugging,
not analytics. No framework dependencies.
"""

from __future__ import annotations

import threading
import time
from collections import Counter


class VisitorStats:
    """Thread-safe counters for recorded visits and store health."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._started_at = time.time()

        # Counters
        self.visits_recorded: int = 0
        self.visits_persisted: int = 0
        self.entries_served: int = 0
        self.store_reads: int = 0
        self.store_errors: int = 0
        self.malformed_entries: int = 0

        # How each visit was located: "headers", "centroid" or "hash".
        self._sources: Counter[str] = Counter()

    def record_visit(self, source: str, persisted: bool) -> None:
        with self._lock:
            self.visits_recorded += 1
            if persisted:
                self.visits_persisted += 1
            self._sources[source] += 1

    def record_served(self, count: int) -> None:
        with self._lock:
            self.entries_served += count

    def record_store_read(self) -> None:
        with self._lock:
            self.store_reads += 1

    def record_store_error(self) -> None:
        with self._lock:
            self.store_errors += 1

    def record_malformed(self, count: int = 1) -> None:
        with self._lock:
            self.malformed_entries += count

    def snapshot(self) -> dict:
        """Return a JSON-serializable snapshot of all stats."""
        with self._lock:
            return {
                "uptime_seconds": round(time.time() - self._started_at, 1),
                "visits_recorded": self.visits_recorded,
                "visits_persisted": self.visits_persisted,
                "entries_served": self.entries_served,
                "store_reads": self.store_reads,
                "store_errors": self.store_errors,
                "malformed_entries": self.malformed_entries,
                "location_sources": {
                    "headers": self._sources["headers"],
                    "centroid": self._sources["centroid"],
                    "hash": self._sources["hash"],
                },
            }
