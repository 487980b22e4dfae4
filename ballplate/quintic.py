"""Quintic point-to-point velocity profile used to drive the arm home."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

HOME_POSITION: tuple[float, ...] = (
    -0.217350,
    -1.297263,
    1.653361,
    -1.267326,
    -0.30480,
    1.4763787,
    -1.594,
)

JOINT_NAMES: tuple[str, ...] = tuple(f"panda_joint{i}" for i in range(1, 8))


def quintic(t: float, qi: float, qf: float, tf: float) -> float:
    """Velocity at time ``t`` of a quintic move from ``qi`` to ``qf`` lasting ``tf``.

    The velocity is zero outside the open interval ``(0, tf)``.
    """
    if t <= 0.0 or t >= tf:
        return 0.0
    tau = t / tf
    qhat_dot = 30 * tau**4 - 60 * tau**3 + 30 * tau**2
    return (qf - qi) * qhat_dot / tf


def joint_velocities(
    t: float, q0: Sequence[float], qf: Sequence[float], duration: float
) -> list[float]:
    """Quintic velocities of every joint at time ``t``."""
    if len(q0) != len(qf):
        raise ValueError(
            f"start and goal have different lengths: {len(q0)} != {len(qf)}"
        )
    return [quintic(t, start, goal, duration) for start, goal in zip(q0, qf)]


def home_velocity_profile(
    q0: Sequence[float],
    qf: Sequence[float] = HOME_POSITION,
    duration: float = 5.0,
    rate: float = 1000.0,
) -> Iterator[tuple[float, list[float]]]:
    """Yield ``(t, velocities)`` sampled at ``rate`` Hz over the move.

    Sampling continues while the previous sample time is within the
    duration, so the last sample lies just past it and commands zero velocity.
    """
    if rate <= 0:
        raise ValueError("rate must be positive")
    if duration < 0:
        raise ValueError("duration must not be negative")
    if len(q0) != len(qf):
        raise ValueError(
            f"start and goal have different lengths: {len(q0)} != {len(qf)}"
        )
    k = 0
    while True:
        t = k / rate
        yield t, joint_velocities(t, q0, qf, duration)
        if t > duration:
            return
        k += 1