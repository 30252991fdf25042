"""Globe spin: fast start, cubic ease-out to a slow steady rate, fixed tilt."""

from __future__ import annotations

import math
from dataclasses import dataclass


def spin_speed(elapsed: float, initial: float, steady: float, ease_seconds: float) -> float:
    """Angular speed (rad/s) at ``elapsed`` seconds into the session."""
    if ease_seconds <= 0:
        return steady
    t = min(max(elapsed / ease_seconds, 0.0), 1.0)
    if t >= 1:
        return steady
    ease_out = 1 - (1 - t) ** 3
    return initial + (steady - initial) * ease_out


@dataclass
class GlobeRotation:
    """Mutable rotation of the globe group, advanced once per frame."""
    tilt_deg: float = 25.0
    initial_speed: float = 1.5
    steady_speed: float = 0.02
    ease_seconds: float = 8.0
    y: float = 0.0

    @property
    def x(self) -> float:
        return math.radians(self.tilt_deg)

    def advance(self, elapsed: float, delta: float) -> float:
        """Spin by one frame of ``delta`` seconds and return the new y angle."""
        self.y += spin_speed(elapsed, self.initial_speed, self.steady_speed, self.ease_seconds) * delta
        return self.y
