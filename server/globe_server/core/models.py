"""Visitors globe — core internal data models.

These are plain dataclasses with no framework dependencies.
JSON payloads are converted to/from these at the boundary.
"""

from __future__ import annotations

import math
import time
import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class GeoHints:
    """Raw geo hints supplied by the hosting platform for one request."""
    country: str | None = None
    latitude: str | None = None
    longitude: str | None = None


@dataclass(frozen=True)
class VisitorPoint:
    id: str
    lat: float
    lng: float
    timestamp: int  # ms since epoch
    placeholder: bool = False

    @classmethod
    def create(cls, lat: float, lng: float, now_ms: int | None = None) -> VisitorPoint:
        """Synthesize a new point with a fresh id, stamped now."""
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return cls(id=str(uuid.uuid4()), lat=lat, lng=lng, timestamp=now_ms)

    def to_dict(self) -> dict:
        data = {"id": self.id, "lat": self.lat, "lng": self.lng, "ts": self.timestamp}
        if self.placeholder:
            data["isPlaceholder"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict) -> VisitorPoint:
        """Parse a stored or served entry. Raises KeyError/TypeError/ValueError/OverflowError on garbage.

        Placeholders exist only on the client, so an ``isPlaceholder`` flag in
        the data is ignored.
        """
        ts = data["ts"] if "ts" in data else data["timestamp"]
        lat = float(data["lat"])
        lng = float(data["lng"])
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise ValueError(f"non-finite coordinates: {lat!r}, {lng!r}")
        return cls(id=str(data["id"]), lat=lat, lng=lng, timestamp=int(ts))
