"""Geographic to scene-space projection.

Y is up and the camera looks down -Z. Polar angle comes from latitude,
azimuth from longitude plus 180 degrees.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

# Radii relative to the unit base sphere. Overlays sit slightly above the
# surface so they never z-fight with it.
SPHERE_RADIUS = 1.0
GRATICULE_RADIUS = 1.001
OUTLINE_RADIUS = 1.005
MARKER_RADIUS = 1.02


def lat_lng_to_cartesian(lat: float, lng: float, radius: float = 1.0) -> tuple[float, float, float]:
    """Project one (lat, lng) in degrees onto a sphere of ``radius``."""
    phi = math.radians(90 - lat)
    theta = math.radians(lng + 180)
    x = -radius * math.sin(phi) * math.cos(theta)
    z = radius * math.sin(phi) * math.sin(theta)
    y = radius * math.cos(phi)
    return (x, y, z)


def project_strip(latlngs: Iterable[tuple[float, float]] | np.ndarray,
                  radius: float = 1.0) -> np.ndarray:
    """Vectorized projection of a line strip.

    Args:
        latlngs: sequence of (lat, lng) pairs in degrees, shape (N, 2).
        radius: sphere radius.

    Returns:
        Array of shape (N, 3) with x, y, z columns.
    """
    coords = np.asarray(latlngs, dtype=float).reshape(-1, 2)
    phi = np.radians(90.0 - coords[:, 0])
    theta = np.radians(coords[:, 1] + 180.0)
    sin_phi = np.sin(phi)
    return np.column_stack((
        -radius * sin_phi * np.cos(theta),
        radius * np.cos(phi),
        radius * sin_phi * np.sin(theta),
    ))
