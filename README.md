# robotnav

Decision-making code for a small differential-drive robot with a 2D laser
scanner. The package holds the logic only. You give it laser ranges,
odometry and key presses, and it returns the velocity command to send.
Diagnostics go through the standard `logging` module, under each module's
own logger name (for example `robotnav.teleop`).

## Modules

- `robotnav.pid`: `PIDController` has output saturation and integral
  anti-windup. `compute`, `compute_with_components` and the
  `last_components` record (`PIDComponents`) report each step's terms.
  `reset`, `set_gains` and `set_output_limits` change its state and settings,
  and the `error` and `integral` properties read it. `AngularPIDController`
  adds angle wrapping, a deadband and feedforward through `compute_angular`.
  `normalize_angle` wraps an angle into [-π, π].
- `robotnav.messages`: plain dataclasses for velocity commands (`Twist`),
  laser scans (`LaserScan`) and sphere markers (`Marker`). It also has
  `forward_velocity()`, a constant 0.2 m/s forward command, and
  `describe_scan(scan)`, a text summary of a scan.
- `robotnav.services`: the arithmetic behind two request/reply services,
  `add_two_ints` and `multiply_two_floats`. It also has three input parsers:
  - `parse_operands(argv)` reads two integers from argument strings.
  - `parse_int_pair(line)` reads two integers from a typed line.
  - `bridge_operands(data)` turns a two-element integer array into two floats.

  Each parser raises `ValueError` on bad input.
- `robotnav.matrix`: a small row-major `Matrix` with `rows`, `cols` and
  `flatten()`. It also has the fixed 2×3 `sample_matrix()`,
  `reshape(data, rows, cols)` and `format_matrix(rows)`.
- `robotnav.obstacle`: `front_blocked(ranges, window, threshold)` checks the
  readings around the centre of a scan. `avoid_obstacles(ranges)` either
  turns in place or drives forward.
- `robotnav.keyboard`: `read_key(stream)` is a non-blocking single-key read.
  On a terminal it uses unbuffered, unechoed mode. It returns `""` when no
  key is waiting.
- `robotnav.teleop`: `assess_scan(ranges, angle_increment)` returns a
  `ScanSafety` for the front arc. `TeleopController` is keyboard driving
  (w/a/d/s/q) that refuses to move forward into an obstacle. It issues an
  emergency stop when needed and allows a two-second grace period after
  start-up.
- `robotnav.wall_follower`: `WallFollower` is a rule-based wall follower
  with a manual mode and an autonomous mode. `m` toggles between them. In
  manual mode the keys are w/a/d/x. `WallSide` records which wall it prefers.
- `robotnav.pid_wall_follower`: `PIDWallFollower` follows walls, avoids
  obstacles and explores, using three PID loops. `p` cycles the wall PID
  between gain presets. The module also provides:
  - scan summaries: `summarize_scan` returns `LaserSectors`, built with
    `sector_min`;
  - `yaw_from_quaternion`;
  - the `Behavior` enum;
  - marker output (`laser_markers`) and tuning values (`debug_values`).
- `robotnav.goals`: navigation goals (`NavGoal`) and outcomes
  (`GoalOutcome`). `default_goal()` returns a single fixed goal.
  `MultiGoalSender` runs a fixed tour of three goals. `RandomGoalSender`
  picks random goals in the square [-2, 2] × [-2, 2], with an optional seed.
  Each sender's `report_result` returns the delay in seconds before the
  next goal.

## Examples

A PID loop:

```python
from robotnav.pid import PIDController

pid = PIDController(2.0, 0.1, 0.5)
command = pid.compute(0.5, 0.8, 0.05)   # setpoint, measurement, dt
pid.reset()
```

Angles are wrapped into [-π, π]:

```python
import math
from robotnav.pid import normalize_angle

normalize_angle(3 * math.pi / 2)   # -π/2
```

Reacting to a laser scan:

```python
from robotnav.obstacle import avoid_obstacles

ranges = [2.0] * 360
command = avoid_obstacles(ranges)   # Twist(linear_x=0.2, angular_z=0.0)
```

Guarded teleoperation:

```python
import math
from robotnav.messages import LaserScan
from robotnav.teleop import TeleopController

teleop = TeleopController(startup_time=0.0)
teleop.tick("w")                      # forward command; no scan seen yet
scan = LaserScan(ranges=[0.2] * 360, angle_increment=math.radians(1))
stop, marker = teleop.on_scan(scan, now=5.0)   # stop is Twist(), marker is red
teleop.tick("")                       # None: held by the emergency stop
```

A tour of goals:

```python
from robotnav.goals import GoalOutcome, MultiGoalSender

sender = MultiGoalSender()
goal = sender.next_goal()                        # NavGoal(x=1.5, y=1.5, ...)
delay = sender.report_result(GoalOutcome.ABORTED)  # 2.0 seconds; moves on
```

Service arithmetic and matrix reshaping:

```python
from robotnav.services import add_two_ints, multiply_two_floats
from robotnav.matrix import reshape

add_two_ints(2, 3)              # 5
multiply_two_floats(1.5, 4.0)   # 6.0
reshape([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], 2, 3)
```

## What it does not do

The package does not connect to a robot or to any messaging system. It
does not subscribe to topics, publish commands, host services or send
navigation actions. It has no timers, no event loop and no command-line
programs. Your own code must call the controllers at its control rate,
pass in the current time, and deliver the `Twist`, `Marker` and goal values
they return.

## Running the tests

Install the package with its `test` extra and run `pytest` from the project
directory.