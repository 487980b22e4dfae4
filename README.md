# ballplate

Building blocks for a robot arm that balances a ball on a plate held at its
flange. Each controller and filter is a plain Python object that you drive one
sample at a time. That makes it usable inside any real-time loop or simulation.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `ballplate.quintic`: a quintic point-to-point velocity profile.
  - `quintic(t, qi, qf, tf)` gives the velocity of a single joint. It is zero outside `(0, tf)`.
  - `joint_velocities(t, q0, qf, duration)` gives the velocities of all joints.
  - `home_velocity_profile(q0, qf=HOME_POSITION, duration=5.0, rate=1000.0)` yields `(t, velocities)` samples until just past the duration.
  - `HOME_POSITION` and `JOINT_NAMES` describe the seven-joint home configuration.
- `ballplate.safety`: `ball_out_of_bounds(y, z, radius=0.10)` returns true when the ball lies farther than `radius` from the plate centre.
- `ballplate.pd`: `PDController`, a discrete controller given by a numerator and a denominator.
  - The defaults are a fourth-order design for a 17 ms sample time.
  - The same controller runs on the position error of both axes.
  - `step(y, z)` returns `(angle_y, angle_z)`.
  - `reset()` clears the history.
- `ballplate.trajectory`: reference generators that return a `DesiredState` with `y`, `z`, `vel_y` and `vel_z`.
  - `circle_reference(k, ...)` gives the point and velocity of a circle.
  - `SquareWave` is a square wave on the y axis, low-pass filtered.
  - `Diamond` visits +y, +z, -y and -z in turn, low-pass filtered.
- `ballplate.kalman`:
  - `plant_model()` returns the 8-state discrete axis model as a `PlantModel`, including its noise covariances.
  - `AxisKalman` is a Kalman filter over that model, with `reset(position)` and `step(u, measurement)`.
- `ballplate.lqg`: `LQGController`, LQR state feedback on the Kalman estimates of both axes.
  - The ball follows a circular reference.
  - The action is ramped in by `soft_start_weight`.
- `ballplate.lqg_switch`: `SwitchingLQGController`, LQR feedback plus a Tustin integral action.
  - The integral action switches off within 6 mm of the set point on both axes.
  - It switches back on beyond 1 cm on either axis.
  - `set_setpoint(y_des, z_des)` raises `ValueError` outside ±0.1 m and restarts the soft start.
- `ballplate.clik`: orientation helpers for closed-loop inverse kinematics.
  - `quaternion_from_rotation`, `rotation_from_quaternion` and `quaternion_continuity` handle quaternions.
  - `desired_orientation`, `orientation_error` and `plate_angles` work with plate orientations.
  - `velocity_limits_exceeded` checks joint speeds against their limits.
  - `VelocityFilter` is a first-order Tustin low-pass filter for joint velocity commands.

Quaternions are `(w, x, y, z)` arrays.

## Example

```python
from ballplate.lqg import LQGController

controller = LQGController()
controller.start()
left_plate = controller.on_position(0.01, -0.02)  # ball position, metres
angle_y, angle_z = controller.step()               # plate tilt for this sample
```

`on_position` returns `True` and stops the controller when the ball leaves the
plate. `step` raises `RuntimeError` until a first position has been received.

```python
from ballplate.pd import PDController

pd = PDController()
angle_y, angle_z = pd.step(0.01, 0.0)
```

## What this package does not do

- It has no robot model. Forward kinematics and the Jacobian of the arm are not computed here.
- The `clik` helpers work on rotation matrices that you supply.
- It does not talk to any robot, camera or messaging middleware.
- It does not run timers, services or action servers.
- It installs no commands. You wire the objects into your own loop.