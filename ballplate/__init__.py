"""Control, estimation and orientation kinematics for a ball-on-plate balancing robot."""

__version__ = "0.1.0"

__all__ = [
    "quintic",
    "safety",
    "pd",
    "trajectory",
    "kalman",
    "lqg",
    "lqg_switch",
    "clik",
]