"""LQG controller: LQR state feedback on Kalman estimates, tracking a circle."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from ballplate.kalman import AxisKalman, plant_model
from ballplate.safety import ball_out_of_bounds
from ballplate.trajectory import DEFAULT_T_CAMP, DesiredState, circle_reference

DEFAULT_GAIN: tuple[float, ...] = (
    -4.1615,
    -1.6530,
    1.1867,
    2.4560,
    0.1677,
    0.1593,
    0.1509,
    0.1425,
)


def soft_start_weight(k: int, t_camp: float = DEFAULT_T_CAMP, tau: float = 0.5) -> float:
    """Weight rising from 0 towards 1 that ramps the control action in."""
    if tau <= 0:
        raise ValueError("tau must be positive")
    return 1.0 - math.exp(-(k * t_camp) / tau)


def _as_float32(value: float) -> float:
    return float(np.float32(value))


class LQGController:
    """Drives both plate axes so the ball follows a circular reference.

    ``step`` returns ``(angle_y, angle_z)``: the rotation about y comes from
    the z axis loop and the rotation about z from the y axis loop.
    """

    def __init__(
        self,
        gain: Sequence[float] = DEFAULT_GAIN,
        t_camp: float = DEFAULT_T_CAMP,
        tau: float = 0.5,
    ):
        model = plant_model()
        if len(gain) != model.state_size:
            raise ValueError(
                f"gain must have {model.state_size} entries, got {len(gain)}"
            )
        if t_camp <= 0:
            raise ValueError("sampling time must be positive")
        if tau <= 0:
            raise ValueError("tau must be positive")
        self.gain = np.array(gain, dtype=float)
        self.t_camp = t_camp
        self.tau = tau
        self.started = False
        self.running = False
        self.reference: DesiredState | None = None
        self._y_filter = AxisKalman(model)
        self._z_filter = AxisKalman(model)
        self._y = 0.0
        self._z = 0.0
        self._k = 0

    def start(self) -> None:
        """Begin accepting ball positions."""
        self.started = True

    def stop(self) -> None:
        """Stop accepting ball positions."""
        self.started = False

    def on_position(self, y: float, z: float) -> bool:
        """Take a ball measurement; return True if the ball left the plate.

        The first measurement after start seeds both filters and enables
        ``step``. Leaving the plate stops the controller.
        """
        if not self.started:
            return False
        self._y = _as_float32(y)
        self._z = _as_float32(z)
        if not self.running:
            self.running = True
            self._y_filter.state[0] = self._y
            self._z_filter.state[0] = self._z
        if ball_out_of_bounds(self._y, self._z):
            self.started = False
            return True
        return False

    def _axis_control(
        self,
        kalman: AxisKalman,
        measurement: float,
        desired: float,
        vel_desired: float,
        weight: float,
    ) -> float:
        error_state = kalman.state.copy()
        error_state[0] -= desired
        error_state[1] -= vel_desired
        u = -float(self.gain @ error_state) * weight
        kalman.step(u, measurement)
        return u

    def step(self) -> tuple[float, float]:
        """Run one control period and return ``(angle_y, angle_z)``."""
        if not self.running:
            raise RuntimeError("no ball position received yet")
        reference = circle_reference(self._k, self.t_camp)
        self.reference = reference
        weight = soft_start_weight(self._k, self.t_camp, self.tau)
        self._k += 1
        phi = self._axis_control(
            self._y_filter, self._y, reference.y, reference.vel_y, weight
        )
        theta = self._axis_control(
            self._z_filter, self._z, reference.z, reference.vel_z, weight
        )
        return _as_float32(theta), _as_float32(phi)