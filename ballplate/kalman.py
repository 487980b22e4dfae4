"""Discrete plant model of one plate axis and its Kalman filter."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

STATE_SIZE = 8


@dataclass(frozen=True, eq=False)
class PlantModel:
    """State-space model ``x' = A x + B u``, ``y = C x + D u`` with noise covariances."""

    a: np.ndarray
    b: np.ndarray
    c: np.ndarray
    d: np.ndarray
    w: np.ndarray
    v: np.ndarray

    @property
    def state_size(self) -> int:
        return self.a.shape[0]


def plant_model() -> PlantModel:
    """The identified ball-on-plate axis model sampled at 17 ms."""
    a = np.zeros((STATE_SIZE, STATE_SIZE))
    a[0, 0] = 1.0
    a[0, 1] = 0.0170000000000000
    a[0, 3] = -0.00465318080357143
    a[1, 1] = 1.0
    a[1, 3] = -0.547433035714286
    a[2, 2] = 0.0730621448838791
    a[2, 3] = -0.270971779676069
    a[2, 4] = 0.0589634592575126
    a[3, 2] = 0.471707674060101
    a[3, 3] = 0.801434288653152
    a[3, 4] = 0.043207898789074
    a[4, 5] = 1.0
    a[5, 6] = 1.0
    a[6, 7] = 1.0

    b = np.zeros((STATE_SIZE, 1))
    b[7, 0] = 1.0

    c = np.zeros((1, STATE_SIZE))
    c[0, 0] = 1.0

    d = np.zeros((1, 1))

    w = np.eye(STATE_SIZE) * 1e-8
    v = np.array([[1e-6]])
    return PlantModel(a=a, b=b, c=c, d=d, w=w, v=v)


class AxisKalman:
    """Kalman filter estimating the state of one plate axis."""

    def __init__(self, model: PlantModel | None = None):
        self.model = model if model is not None else plant_model()
        n = self.model.state_size
        self.state = np.zeros(n)
        self.covariance = np.zeros((n, n))
        self.output = np.zeros(1)

    def reset(self, position: float) -> None:
        """Start from rest at ``position`` with zero covariance."""
        n = self.model.state_size
        self.state = np.zeros(n)
        self.state[0] = position
        self.covariance = np.zeros((n, n))
        self.output = np.zeros(1)

    def step(self, u: float, measurement: float) -> np.ndarray:
        """Predict with input ``u``, correct with ``measurement``; return the estimate."""
        m = self.model
        u_vec = np.array([u], dtype=float)

        x = m.a @ self.state + m.b @ u_vec
        p = m.a @ self.covariance @ m.a.T + m.w
        self.output = m.c @ x + m.d @ u_vec

        s = m.c @ p @ m.c.T + m.v
        gain = p @ m.c.T @ np.linalg.inv(s)

        x = x + gain @ (np.array([measurement], dtype=float) - self.output)
        p = p - gain @ m.c @ p

        self.state = x
        self.covariance = p
        return x.copy()