"""Discrete PD-type controller tilting the plate from the ball position."""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence

DEFAULT_NUMERATOR: tuple[float, ...] = (-0.01984, -0.01994, 0.01966, 0.01975)
DEFAULT_DENOMINATOR: tuple[float, ...] = (1.0, -2.53, 2.134, -0.5998)


class _DifferenceEquation:
    """One channel of ``den(z) u = num(z) e``, zero initial history."""

    def __init__(self, numerator: Sequence[float], denominator: Sequence[float]):
        lead = denominator[0]
        self._num = [b / lead for b in numerator]
        self._den = [a / lead for a in denominator]
        self._errors: deque[float] = deque(maxlen=len(numerator))
        self._outputs: deque[float] = deque(maxlen=len(denominator) - 1)

    def reset(self) -> None:
        self._errors.clear()
        self._outputs.clear()

    def step(self, error: float) -> float:
        self._errors.appendleft(error)
        value = sum(b * e for b, e in zip(self._num, self._errors))
        value -= sum(a * u for a, u in zip(self._den[1:], self._outputs))
        if self._outputs.maxlen:
            self._outputs.appendleft(value)
        return value


class PDController:
    """Runs the same discrete controller on both plate axes.

    ``step`` takes the measured ball position and returns the commanded
    ``(angle_y, angle_z)``: the rotation about y is driven by the z error and
    the rotation about z by the y error.
    """

    def __init__(
        self,
        numerator: Sequence[float] = DEFAULT_NUMERATOR,
        denominator: Sequence[float] = DEFAULT_DENOMINATOR,
        y_des: float = 0.0,
        z_des: float = 0.0,
    ):
        if not numerator or not denominator:
            raise ValueError("numerator and denominator must not be empty")
        if len(numerator) != len(denominator):
            raise ValueError("numerator and denominator must have the same length")
        if denominator[0] == 0:
            raise ValueError("leading denominator coefficient must be non-zero")
        self.numerator = tuple(float(b) for b in numerator)
        self.denominator = tuple(float(a) for a in denominator)
        self.y_des = y_des
        self.z_des = z_des
        self._phi = _DifferenceEquation(self.numerator, self.denominator)
        self._theta = _DifferenceEquation(self.numerator, self.denominator)

    def reset(self) -> None:
        """Forget all past errors and outputs."""
        self._phi.reset()
        self._theta.reset()

    def step(self, y: float, z: float) -> tuple[float, float]:
        """Advance one sample and return ``(angle_y, angle_z)``."""
        phi = self._phi.step(self.y_des - y)
        theta = self._theta.step(self.z_des - z)
        return theta, phi