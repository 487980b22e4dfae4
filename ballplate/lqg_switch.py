"""LQG regulator with a Tustin integrator that switches on and off near the set point."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ballplate.kalman import AxisKalman, PlantModel, plant_model
from ballplate.lqg import soft_start_weight
from ballplate.safety import ball_out_of_bounds
from ballplate.trajectory import DEFAULT_T_CAMP

MAX_SETPOINT = 0.1

DEFAULT_GAIN: tuple[float, ...] = (
    -2.080362627078236,
    -0.960230563876182,
    0.706774617862321,
    1.448576232766547,
    0.100233668147942,
    0.09636265455696977,
    0.092359760467111,
    0.088517529490856,
)
DEFAULT_INTEGRAL_GAIN = -1.777826783310392

INTEGRATOR_OFF_BAND = 0.006
INTEGRATOR_ON_BAND = 0.01


def _as_float32(value: float) -> float:
    return float(np.float32(value))


class _AxisLoop:
    """Kalman estimate and integrator memory of one plate axis."""

    def __init__(self, model: PlantModel):
        self.kalman = AxisKalman(model)
        self.integral = 0.0
        self.error_old = 0.0

    def seed(self, position: float, desired: float) -> None:
        self.kalman.state[0] = position
        self.error_old = desired - position


class SwitchingLQGController:
    """Regulates the ball to a set point with LQR plus a switched integral action.

    The integrator is turned off once the ball is within 6 mm of the set point
    on both axes and turned back on when it drifts more than 1 cm away on
    either. While off, the last integral value keeps contributing.

    ``step`` returns ``(angle_y, angle_z)``: the rotation about y comes from
    the z axis loop and the rotation about z from the y axis loop.
    """

    def __init__(
        self,
        gain: Sequence[float] = DEFAULT_GAIN,
        integral_gain: float = DEFAULT_INTEGRAL_GAIN,
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
        self.integral_gain = float(integral_gain)
        self.t_camp = t_camp
        self.tau = tau
        self.y_des = 0.0
        self.z_des = 0.0
        self.started = False
        self.running = False
        self.integrator_on = True
        self._y_loop = _AxisLoop(model)
        self._z_loop = _AxisLoop(model)
        self._y = 0.0
        self._z = 0.0
        self._k = 0

    @property
    def integral(self) -> tuple[float, float]:
        """Current integrator values ``(y, z)``."""
        return self._y_loop.integral, self._z_loop.integral

    def start(self) -> None:
        """Begin accepting ball positions."""
        self.started = True

    def stop(self) -> None:
        """Stop accepting ball positions."""
        self.started = False

    def set_setpoint(self, y_des: float, z_des: float) -> None:
        """Move the set point and restart the soft start ramp.

        Raises ValueError when either coordinate lies outside the plate limit.
        """
        for name, value in (("y_des", y_des), ("z_des", z_des)):
            if not -MAX_SETPOINT <= value <= MAX_SETPOINT:
                raise ValueError(
                    f"{name}={value} is outside [-{MAX_SETPOINT}, {MAX_SETPOINT}]"
                )
        self.y_des = float(y_des)
        self.z_des = float(z_des)
        self._k = 0

    def on_position(self, y: float, z: float) -> bool:
        """Take a ball measurement; return True if the ball left the plate.

        The first measurement after start seeds both loops and enables
        ``step``. Leaving the plate stops the controller.
        """
        if not self.started:
            return False
        self._y = _as_float32(y)
        self._z = _as_float32(z)
        if not self.running:
            self.running = True
            self._y_loop.seed(self._y, self.y_des)
            self._z_loop.seed(self._z, self.z_des)

        dy = abs(self.y_des - self._y)
        dz = abs(self.z_des - self._z)
        if self.integrator_on and dy < INTEGRATOR_OFF_BAND and dz < INTEGRATOR_OFF_BAND:
            self.integrator_on = False
        elif not self.integrator_on and (
            dy > INTEGRATOR_ON_BAND or dz > INTEGRATOR_ON_BAND
        ):
            self.integrator_on = True

        if ball_out_of_bounds(self._y, self._z):
            self.started = False
            return True
        return False

    def _axis_control(
        self, loop: _AxisLoop, measurement: float, desired: float, weight: float
    ) -> float:
        error = desired - measurement
        if self.integrator_on:
            loop.integral += (self.t_camp / 2.0) * (error + loop.error_old)
            loop.error_old = error
        error_state = loop.kalman.state.copy()
        error_state[0] -= desired
        u = -float(self.gain @ error_state) + self.integral_gain * loop.integral
        u *= weight
        loop.kalman.step(u, measurement)
        return u

    def step(self) -> tuple[float, float]:
        """Run one control period and return ``(angle_y, angle_z)``."""
        if not self.running:
            raise RuntimeError("no ball position received yet")
        weight = soft_start_weight(self._k, self.t_camp, self.tau)
        self._k += 1
        theta = self._axis_control(self._y_loop, self._y, self.y_des, weight)
        phi = self._axis_control(self._z_loop, self._z, self.z_des, weight)
        return _as_float32(phi), _as_float32(theta)