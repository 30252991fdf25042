"""Globe scene: assembles the static geometry and drives the frame loop.

The scene description is plain JSON so any 3D front end can draw it:
a dark base sphere, graticule and land-outline polylines already projected
to 3D, one marker per display point, lights, a fixed camera and the spin
parameters. ``GlobeAnimator.tick`` is the per-frame callback.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from globe_server.config import GlobeConfig
from globe_server.core.models import VisitorPoint
from globe_server.globe.graticule import latitude_rings, longitude_rings
from globe_server.globe.markers import Marker, MarkerState, display_set
from globe_server.globe.outlines import load_outlines
from globe_server.globe.projection import (
    GRATICULE_RADIUS,
    OUTLINE_RADIUS,
    SPHERE_RADIUS,
    project_strip,
)
from globe_server.globe.rotation import GlobeRotation

CAMERA = {"position": [0, 0, 2.4], "fov": 45, "controls": False}

LIGHTS = [
    {"type": "ambient", "intensity": 0.9, "color": "#e5e7eb"},
    {"type": "point", "position": [4, 3, 5], "intensity": 1.6, "color": "#93c5fd"},
    {"type": "point", "position": [-4, -2, -5], "intensity": 0.8, "color": "#0ea5e9"},
    {"type": "point", "position": [0, -1.5, 2], "intensity": 0.6, "color": "#22d3ee"},
]

SPHERE = {
    "radius": SPHERE_RADIUS,
    "segments": 64,
    "color": "#0f172a",
    "emissive": "#0a0f1f",
    "emissive_intensity": 0.5,
    "roughness": 0.55,
    "metalness": 0.35,
}

GROUP_SCALE = 0.9


@functools.lru_cache(maxsize=4)
def cached_outlines(path: str = "") -> tuple[np.ndarray, ...]:
    """Land outlines projected to 3D, loaded once per dataset path."""
    return tuple(project_strip(strip, OUTLINE_RADIUS) for strip in load_outlines(path or None))


def _polylines(strips: Iterable[np.ndarray], color: str, width: float, opacity: float) -> list[dict]:
    return [
        {"points": np.round(strip, 5).tolist(), "color": color, "width": width, "opacity": opacity}
        for strip in strips
    ]


def build_scene(points: Iterable[VisitorPoint], config: GlobeConfig | None = None) -> dict:
    """Describe the full globe scene for the given points."""
    config = config or GlobeConfig()
    shown = display_set(points, config.max_points)
    graticule = [project_strip(r, GRATICULE_RADIUS) for r in latitude_rings() + longitude_rings()]

    return {
        "camera": CAMERA,
        "lights": LIGHTS,
        "group_scale": GROUP_SCALE,
        "sphere": SPHERE,
        "graticule": _polylines(graticule, "#6b7280", 0.75, 0.45),
        "outlines": _polylines(cached_outlines(config.land_path), "#cbd5e1", 1.2, 0.9),
        "markers": [Marker.for_point(p).to_dict() for p in shown],
        "rotation": {
            "tilt_deg": config.tilt_deg,
            "initial_speed": config.initial_speed,
            "steady_speed": config.steady_speed,
            "ease_seconds": config.spin_ease_seconds,
        },
    }


@dataclass(frozen=True)
class FrameState:
    rotation_x: float
    rotation_y: float
    markers: list[MarkerState]


class GlobeAnimator:
    """Per-frame state for one globe: rotation plus marker pulses.

    Markers are fixed at construction; swap the animator when the point set
    changes.
    """

    def __init__(self, points: Iterable[VisitorPoint], config: GlobeConfig | None = None) -> None:
        config = config or GlobeConfig()
        self.markers = [Marker.for_point(p) for p in display_set(points, config.max_points)]
        self.rotation = GlobeRotation(
            tilt_deg=config.tilt_deg,
            initial_speed=config.initial_speed,
            steady_speed=config.steady_speed,
            ease_seconds=config.spin_ease_seconds,
        )

    def tick(self, elapsed: float, delta: float) -> FrameState:
        """Advance one frame. ``elapsed`` is session time, ``delta`` the frame length."""
        y = self.rotation.advance(elapsed, delta)
        return FrameState(
            rotation_x=self.rotation.x,
            rotation_y=y,
            markers=[m.state_at(elapsed) for m in self.markers],
        )
