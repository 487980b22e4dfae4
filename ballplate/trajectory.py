"""Reference trajectories for the ball position on the plate."""

from __future__ import annotations

import math
from dataclasses import dataclass

DEFAULT_T_CAMP = 0.017


@dataclass(frozen=True)
class DesiredState:
    """Desired ball position and velocity on both plate axes."""

    y: float
    z: float
    vel_y: float = 0.0
    vel_z: float = 0.0


def _filter_coefficient(t_camp: float, time_constant: float) -> float:
    if t_camp <= 0:
        raise ValueError("sampling time must be positive")
    if time_constant < 0:
        raise ValueError("time constant must not be negative")
    return t_camp / (time_constant + t_camp)


class SquareWave:
    """Square wave on the y axis, smoothed by a first-order low-pass filter.

    The raw set point starts at zero and, every ``half_period`` seconds,
    jumps to ``-amplitude`` and ``+amplitude`` in turn.
    """

    def __init__(
        self,
        t_camp: float = DEFAULT_T_CAMP,
        amplitude: float = 0.04,
        half_period: float = 10.0,
        time_constant: float = 0.5,
    ):
        self.t_camp = t_camp
        self.amplitude = amplitude
        self.half_period = half_period
        self._alpha = _filter_coefficient(t_camp, time_constant)
        self._count = 0
        self._negative = False
        self._y_des = 0.0
        self._z_des = 0.0
        self._y_filtered = 0.0
        self._z_filtered = 0.0

    def step(self) -> DesiredState:
        """Advance one sample and return the filtered set point."""
        if self._count * self.t_camp >= self.half_period:
            if self._negative:
                self._y_des = self.amplitude
                self._negative = False
            else:
                self._y_des = -self.amplitude
                self._negative = True
            self._count = 0
        self._y_filtered += self._alpha * (self._y_des - self._y_filtered)
        self._z_filtered += self._alpha * (self._z_des - self._z_filtered)
        self._count += 1
        return DesiredState(self._y_filtered, self._z_filtered)


class Diamond:
    """Set point visiting the four points of a diamond, low-pass filtered.

    Each corner is held for ``leg_duration`` seconds, in the order
    +y, +z, -y, -z.
    """

    def __init__(
        self,
        t_camp: float = DEFAULT_T_CAMP,
        amplitude: float = 0.04,
        leg_duration: float = 15.0,
        time_constant: float = 0.5,
    ):
        self.t_camp = t_camp
        self.amplitude = amplitude
        self.leg_duration = leg_duration
        self._alpha = _filter_coefficient(t_camp, time_constant)
        self._count = 0
        self._y_des = 0.0
        self._z_des = 0.0
        self._y_filtered = 0.0
        self._z_filtered = 0.0

    def step(self) -> DesiredState:
        """Advance one sample and return the filtered set point."""
        elapsed = self._count * self.t_camp
        a = self.amplitude
        if elapsed < self.leg_duration:
            self._y_des, self._z_des = a, 0.0
        elif elapsed < 2 * self.leg_duration:
            self._y_des, self._z_des = 0.0, a
        elif elapsed < 3 * self.leg_duration:
            self._y_des, self._z_des = -a, 0.0
        elif elapsed < 4 * self.leg_duration:
            self._y_des, self._z_des = 0.0, -a
        else:
            self._count = 0
        self._y_filtered += self._alpha * (self._y_des - self._y_filtered)
        self._z_filtered += self._alpha * (self._z_des - self._z_filtered)
        self._count += 1
        return DesiredState(self._y_filtered, self._z_filtered)


def circle_reference(
    k: int,
    t_camp: float = DEFAULT_T_CAMP,
    radius: float = 0.05,
    frequency: float = 0.05,
) -> DesiredState:
    """Point and velocity of a circle traced at ``frequency`` Hz, sample ``k``."""
    omega = 2 * math.pi * frequency
    angle = omega * k * t_camp
    return DesiredState(
        y=radius * math.cos(angle),
        z=radius * math.sin(angle),
        vel_y=-radius * omega * math.sin(angle),
        vel_z=radius * omega * math.cos(angle),
    )