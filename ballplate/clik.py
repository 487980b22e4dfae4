"""Orientation kinematics used by the closed-loop inverse kinematics of the plate."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

DEFAULT_VELOCITY_LIMITS: tuple[float, ...] = (
    2.1750,
    2.1750,
    2.1750,
    2.1750,
    2.61,
    2.61,
    2.61,
)

CONTINUITY_THRESHOLD = -0.01


def _as_rotation(rotation) -> np.ndarray:
    matrix = np.asarray(rotation, dtype=float)
    if matrix.shape != (3, 3):
        raise ValueError(f"rotation must be 3x3, got shape {matrix.shape}")
    return matrix


def _as_quaternion(q) -> np.ndarray:
    quat = np.asarray(q, dtype=float)
    if quat.shape != (4,):
        raise ValueError(f"quaternion must have 4 entries (w, x, y, z), got {quat.shape}")
    return quat


def _normalized(q: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(q)
    if norm == 0:
        raise ValueError("quaternion has zero norm")
    return q / norm


def _multiply(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    aw, ax, ay, az = a
    bw, bx, by, bz = b
    return np.array(
        [
            aw * bw - ax * bx - ay * by - az * bz,
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
        ]
    )


def _inverse(q: np.ndarray) -> np.ndarray:
    norm2 = float(q @ q)
    if norm2 == 0:
        raise ValueError("quaternion has zero norm")
    return np.array([q[0], -q[1], -q[2], -q[3]]) / norm2


def quaternion_from_rotation(rotation) -> np.ndarray:
    """Unit quaternion ``(w, x, y, z)`` of a 3x3 rotation matrix."""
    m = _as_rotation(rotation)
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    q = np.zeros(4)
    if trace > 0:
        t = math.sqrt(trace + 1.0)
        q[0] = 0.5 * t
        t = 0.5 / t
        q[1] = (m[2, 1] - m[1, 2]) * t
        q[2] = (m[0, 2] - m[2, 0]) * t
        q[3] = (m[1, 0] - m[0, 1]) * t
    else:
        i = 0
        if m[1, 1] > m[0, 0]:
            i = 1
        if m[2, 2] > m[i, i]:
            i = 2
        j = (i + 1) % 3
        k = (j + 1) % 3
        t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
        q[1 + i] = 0.5 * t
        t = 0.5 / t
        q[0] = (m[k, j] - m[j, k]) * t
        q[1 + j] = (m[j, i] + m[i, j]) * t
        q[1 + k] = (m[k, i] + m[i, k]) * t
    return _normalized(q)


def rotation_from_quaternion(q) -> np.ndarray:
    """3x3 rotation matrix of a quaternion ``(w, x, y, z)``, normalised first."""
    w, x, y, z = _normalized(_as_quaternion(q))
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
        ]
    )


def quaternion_continuity(q, old_q) -> np.ndarray:
    """Return ``q`` or ``-q``, whichever keeps the vector part close to ``old_q``.

    The sign is flipped when the dot product of the vector parts falls below
    -0.01.
    """
    quat = _as_quaternion(q)
    old = _as_quaternion(old_q)
    if float(quat[1:] @ old[1:]) < CONTINUITY_THRESHOLD:
        return -quat
    return quat.copy()


def _rot_y(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])


def _rot_z(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def desired_orientation(r_init, angle_y: float, angle_z: float) -> np.ndarray:
    """Base-frame rotation of the plate tilted by ``angle_y`` then ``angle_z``.

    The tilt ``Ry(angle_y) Rz(angle_z)`` is expressed in the initial plate
    frame ``r_init``.
    """
    base = _as_rotation(r_init)
    return base @ (_rot_y(angle_y) @ _rot_z(angle_z))


def orientation_error(q_des, q) -> np.ndarray:
    """Vector part of the normalised ``q_des * q^-1``."""
    desired = _as_quaternion(q_des)
    current = _as_quaternion(q)
    delta = _normalized(_multiply(desired, _inverse(current)))
    return delta[1:].copy()


def plate_angles(r_init, rotation) -> tuple[float, float]:
    """Tilt ``(angle_y, angle_z)`` of ``rotation`` relative to the initial frame."""
    relative = _as_rotation(r_init).T @ _as_rotation(rotation)
    sin_y = min(1.0, max(-1.0, relative[0, 2]))
    angle_y = math.asin(sin_y)
    angle_z = math.atan2(-relative[0, 1], relative[0, 0])
    return angle_y, angle_z


def velocity_limits_exceeded(
    q_dot: Sequence[float], limits: Sequence[float] = DEFAULT_VELOCITY_LIMITS
) -> bool:
    """True if the sizes differ or any joint speed exceeds its limit."""
    if len(q_dot) != len(limits):
        return True
    return any(abs(v) > limit for v, limit in zip(q_dot, limits))


class VelocityFilter:
    """First-order Tustin low-pass filter applied to joint velocity commands."""

    def __init__(self, size: int = 7, t_pub: float = 0.001, tau_f: float = 0.00159):
        if size <= 0:
            raise ValueError("size must be positive")
        if t_pub <= 0:
            raise ValueError("t_pub must be positive")
        if tau_f < 0:
            raise ValueError("tau_f must not be negative")
        self.size = size
        self.alpha = t_pub / (t_pub + 2 * tau_f)
        self.beta = (t_pub - 2 * tau_f) / (t_pub + 2 * tau_f)
        self._last_input = [0.0] * size
        self._last_output = [0.0] * size

    def apply(self, velocities: Sequence[float]) -> list[float]:
        """Filter one sample of joint velocities and return the result."""
        if len(velocities) != self.size:
            raise ValueError(
                f"expected {self.size} velocities, got {len(velocities)}"
            )
        current = [float(v) for v in velocities]
        output = [
            self.alpha * (v + old_v) - self.beta * old_out
            for v, old_v, old_out in zip(
                current, self._last_input, self._last_output
            )
        ]
        self._last_input = current
        self._last_output = output
        return list(output)