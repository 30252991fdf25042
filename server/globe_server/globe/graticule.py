"""Latitude/longitude reference grid."""

from __future__ import annotations

LatLng = tuple[float, float]

GRATICULE_STEP = 20


def latitude_rings() -> list[list[LatLng]]:
    """Parallels at -80..80 every 20 degrees, sampled every 10 degrees of longitude."""
    return [
        [(float(lat), float(-180 + j * 10)) for j in range(37)]
        for lat in range(-80, 81, GRATICULE_STEP)
    ]


def longitude_rings() -> list[list[LatLng]]:
    """Meridians at -180..160 every 20 degrees, sampled from -80 to 80 latitude."""
    return [
        [(float(-80 + j * 10), float(lng)) for j in range(17)]
        for lng in range(-180, 180, GRATICULE_STEP)
    ]
