"""Visitor markers: placeholders, display-set policy and the pulse animation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from globe_server.core.models import VisitorPoint
from globe_server.globe.projection import MARKER_RADIUS, lat_lng_to_cartesian

MAX_DISPLAY_POINTS = 200

MARKER_SIZE = 0.015
PULSE_RATE = 1.4

# (color, emissive)
PLACEHOLDER_COLORS = ("#e9d5ff", "#c084fc")
VISITOR_COLORS = ("#dbeafe", "#93c5fd")

# Decorative points shown even when no visitor data is available.
PLACEHOLDER_LOCATIONS = (
    ("placeholder-1", 12.9, 74.85),    # Mangalore, India
    ("placeholder-2", 25.2, 55.27),    # Dubai, UAE
    ("placeholder-3", 39.77, -86.15),  # Indianapolis, IN
    ("placeholder-4", 37.77, -122.42),  # San Francisco, CA
)


def placeholder_points(now_ms: int) -> list[VisitorPoint]:
    """The fixed placeholder set, stamped with the session start time."""
    return [
        VisitorPoint(id=pid, lat=lat, lng=lng, timestamp=now_ms, placeholder=True)
        for pid, lat, lng in PLACEHOLDER_LOCATIONS
    ]


def display_set(points: Iterable[VisitorPoint], limit: int = MAX_DISPLAY_POINTS) -> list[VisitorPoint]:
    """Points to draw: every placeholder plus the newest real points, newest first.

    Real points fill whatever room the placeholders leave under ``limit``.
    """
    points = list(points)
    placeholders = [p for p in points if p.placeholder]
    real = sorted((p for p in points if not p.placeholder),
                  key=lambda p: p.timestamp, reverse=True)
    room = max(limit - len(placeholders), 0)
    shown = placeholders[:limit] + real[:room]
    return sorted(shown, key=lambda p: p.timestamp, reverse=True)


def phase_seed(timestamp: int) -> float:
    """Per-marker phase offset in [0, 1), so markers pulse out of step."""
    return abs(math.fmod(timestamp, 10000)) / 10000


@dataclass(frozen=True)
class MarkerState:
    """Animated properties of one marker at a given instant."""
    scale: float
    emissive_intensity: float
    opacity: float


def pulse(elapsed: float, seed: float) -> MarkerState:
    p = 0.7 + math.sin(elapsed * PULSE_RATE + seed * math.pi * 2) * 0.25
    return MarkerState(scale=p, emissive_intensity=1.5 + p * 1.5, opacity=0.85 + p * 0.15)


@dataclass(frozen=True)
class Marker:
    point: VisitorPoint
    position: tuple[float, float, float]
    seed: float
    color: str
    emissive: str

    @classmethod
    def for_point(cls, point: VisitorPoint, radius: float = MARKER_RADIUS) -> Marker:
        color, emissive = PLACEHOLDER_COLORS if point.placeholder else VISITOR_COLORS
        return cls(
            point=point,
            position=lat_lng_to_cartesian(point.lat, point.lng, radius),
            seed=phase_seed(point.timestamp),
            color=color,
            emissive=emissive,
        )

    def state_at(self, elapsed: float) -> MarkerState:
        return pulse(elapsed, self.seed)

    def to_dict(self) -> dict:
        return {
            "id": self.point.id,
            "position": [round(c, 5) for c in self.position],
            "size": MARKER_SIZE,
            "seed": self.seed,
            "color": self.color,
            "emissive": self.emissive,
            "placeholder": self.point.placeholder,
        }
