"""Checks that stop the controllers when the ball leaves the plate."""

from __future__ import annotations

import math

MAX_RADIUS = 0.10


def ball_out_of_bounds(y: float, z: float, radius: float = MAX_RADIUS) -> bool:
    """True when the ball lies farther than ``radius`` from the plate centre."""
    return math.hypot(y, z) > radius