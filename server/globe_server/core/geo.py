"""Coordinate resolution: approximate visitor location from request headers.

Priority: platform latitude/longitude headers, then the country centroid
table, then a stable pseudo-position hashed from the country code. The
result is always quantized to a coarse grid, so nothing here ever fails.
"""

from __future__ import annotations

import math
from typing import Mapping

from globe_server.config import GeoConfig
from globe_server.core.centroids import COUNTRY_CENTROIDS
from globe_server.core.models import GeoHints

DEFAULT_STEP = 2.5

# Country code used when the platform sends no country at all.
UNKNOWN_COUNTRY = "XX"


def quantize(value: float, step: float = DEFAULT_STEP) -> float:
    """Round to the nearest multiple of ``step``; halves round up."""
    return math.floor(value / step + 0.5) * step


def _hash32(seed: str) -> int:
    """Rolling ``h * 31 + code`` hash over UTF-16 code units, as a signed 32-bit int."""
    h = 0
    data = seed.encode("utf-16-le")
    for i in range(0, len(data), 2):
        h = (h * 31 + int.from_bytes(data[i:i + 2], "little")) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def pseudo_lat_lng(seed: str, step: float = DEFAULT_STEP) -> tuple[float, float]:
    """Deterministic, geographically meaningless position for ``seed``.

    The remainders keep the dividend's sign, so negative hashes land in the
    southern/western half. Quantized latitude may fall just outside +-90.
    """
    h = _hash32(seed)
    lat = math.fmod(h, 18000) / 100 - 90
    lng = math.fmod(h / 18000, 36000) / 100 - 180
    return quantize(lat, step), quantize(lng, step)


def _parse_coordinate(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def locate(hints: GeoHints, step: float = DEFAULT_STEP) -> tuple[float, float, str]:
    """Resolve hints to ``(lat, lng, source)``.

    ``source`` is "headers", "centroid" or "hash", naming the rule that won.
    """
    lat = _parse_coordinate(hints.latitude)
    lng = _parse_coordinate(hints.longitude)
    if lat is not None and lng is not None:
        return quantize(lat, step), quantize(lng, step), "headers"

    country = (hints.country or UNKNOWN_COUNTRY).strip().upper() or UNKNOWN_COUNTRY
    centroid = COUNTRY_CENTROIDS.get(country)
    if centroid is not None:
        return quantize(centroid[0], step), quantize(centroid[1], step), "centroid"

    lat, lng = pseudo_lat_lng(country, step)
    return lat, lng, "hash"


def resolve_coordinates(hints: GeoHints, step: float = DEFAULT_STEP) -> tuple[float, float]:
    """Map geo hints to a quantized (lat, lng)."""
    lat, lng, _ = locate(hints, step)
    return lat, lng


def hints_from_headers(headers: Mapping[str, str], config: GeoConfig | None = None) -> GeoHints:
    """Pull the platform geo headers out of a request header mapping.

    Missing and empty headers both come back as ``None``.
    """
    config = config or GeoConfig()
    return GeoHints(
        country=headers.get(config.country_header) or None,
        latitude=headers.get(config.latitude_header) or None,
        longitude=headers.get(config.longitude_header) or None,
    )
