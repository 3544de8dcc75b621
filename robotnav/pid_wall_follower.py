"""A wall follower driven by PID controllers, with a manual keyboard mode."""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Optional

from robotnav.messages import LaserScan, Marker, Twist
from robotnav.pid import PIDController

logger = logging.getLogger(__name__)

NO_READING = 999.0
MIN_VALID_RANGE = 0.1

DESIRED_WALL_DISTANCE = 0.5
WALL_DETECTION_THRESHOLD = 1.2
OBSTACLE_THRESHOLD = 0.6
CRITICAL_DISTANCE = 0.35
TARGET_LINEAR_SPEED = 0.25
MIN_LINEAR_SPEED = 0.05

DEFAULT_DT = 0.05
MAX_DT = 0.2
PREFERENCE_MARGIN = 0.1
OBSTACLE_CLEARANCE_MARGIN = 0.2
BACKUP_SPEED = 0.1
EXPLORATION_SPEED_FACTOR = 0.7
EXPLORATION_TURN_RATE = 0.3
AVOIDANCE_SPEED_FACTOR = 0.3
MANUAL_TURN_RATE = 1.0
MARKER_MAX_DISTANCE = 3.0

GAIN_PRESETS = (
    ("Conservative", (1.5, 0.05, 0.3)),
    ("Balanced", (2.0, 0.1, 0.5)),
    ("Aggressive", (3.0, 0.2, 0.8)),
)

_RED = (1.0, 0.0, 0.0)
_GREEN = (0.0, 1.0, 0.0)
_BLUE = (0.0, 0.0, 1.0)


class Behavior(enum.Enum):
    """The behaviour the autonomous controller is currently running."""

    NONE = 0
    LEFT_WALL = 1
    RIGHT_WALL = 2
    OBSTACLE_AVOIDANCE = 3

    @property
    def label(self) -> str:
        return {
            Behavior.NONE: "EXPLORATION",
            Behavior.LEFT_WALL: "LEFT_WALL",
            Behavior.RIGHT_WALL: "RIGHT_WALL",
            Behavior.OBSTACLE_AVOIDANCE: "OBSTACLE_AVOID",
        }[self]


@dataclass(frozen=True)
class LaserSectors:
    """Nearest valid readings in the key directions around the robot."""

    front: float = NO_READING
    left: float = NO_READING
    right: float = NO_READING
    front_left: float = NO_READING
    front_right: float = NO_READING


def sector_min(ranges: Sequence[float], center: int, window: int) -> float:
    """Nearest finite reading above 0.1 m within center +/- window, wrapping round."""
    total = len(ranges)
    if total == 0:
        raise ValueError("scan has no range readings")
    readings = (
        ranges[(center + offset) % total] for offset in range(-window, window + 1)
    )
    return min(
        (r for r in readings if math.isfinite(r) and r > MIN_VALID_RANGE),
        default=NO_READING,
    )


def summarize_scan(ranges: Sequence[float]) -> LaserSectors:
    """Reduce a counter-clockwise scan starting straight ahead to sector minimums."""
    total = len(ranges)
    if total == 0:
        raise ValueError("scan has no range readings")
    return LaserSectors(
        front=sector_min(ranges, 0, 8),
        left=sector_min(ranges, total // 4, 6),
        right=sector_min(ranges, 3 * total // 4, 6),
        front_left=sector_min(ranges, total // 8, 5),
        front_right=sector_min(ranges, 7 * total // 8, 5),
    )


def yaw_from_quaternion(x: float, y: float, z: float, w: float) -> float:
    """The rotation about the vertical axis encoded by a quaternion."""
    return math.atan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))


class PIDWallFollower:
    """Follows walls, avoids obstacles and explores, or obeys keyboard commands."""

    def __init__(self, now: float = 0.0) -> None:
        self.autonomous = False
        self.wall_distance_pid = PIDController(2.0, 0.1, 0.5, -1.5, 1.5, 2.0)
        self.obstacle_avoidance_pid = PIDController(3.0, 0.0, 0.8, -2.0, 2.0)
        self.linear_speed_pid = PIDController(1.5, 0.05, 0.3, 0.0, 0.4, 1.0)
        self.manual_command = Twist()
        self.last_control_time = now
        self.last_dt = DEFAULT_DT
        self.laser: Optional[LaserSectors] = None
        self.linear_vel = 0.0
        self.angular_vel = 0.0
        self.current_mode = Behavior.NONE
        self.preferred_mode = Behavior.LEFT_WALL
        self.gain_set = 0

    def on_scan(self, scan: LaserScan) -> list[Marker]:
        """Take in a scan; return the markers showing the key readings."""
        self.laser = summarize_scan(scan.ranges)
        return self.laser_markers()

    def on_odometry(self, linear_vel: float, angular_vel: float) -> None:
        """Record the robot's measured velocities."""
        self.linear_vel = linear_vel
        self.angular_vel = angular_vel

    def control_step(self, key: str, now: float) -> Twist:
        """Run one control cycle at time now and return the command to send."""
        if key == "m":
            self.autonomous = not self.autonomous
            if self.autonomous:
                self.wall_distance_pid.reset()
                self.obstacle_avoidance_pid.reset()
                self.linear_speed_pid.reset()
            logger.info("Mode: %s", "AUTONOMOUS" if self.autonomous else "MANUAL")
        elif key == "p":
            self.cycle_gains()

        dt = now - self.last_control_time
        self.last_control_time = now
        if dt > MAX_DT or dt <= 0.0:
            dt = DEFAULT_DT
        self.last_dt = dt

        if self.autonomous:
            return self._autonomous_control(dt)
        return self._manual_control(key)

    def _autonomous_control(self, dt: float) -> Twist:
        if self.laser is None:
            logger.warning("No laser data - stopping")
            return Twist()

        new_mode = self.determine_behavior()
        if new_mode is not self.current_mode:
            logger.info(
                "Mode change: %s -> %s", self.current_mode.label, new_mode.label
            )
            self.current_mode = new_mode
            self.wall_distance_pid.reset()
            self.obstacle_avoidance_pid.reset()

        if self.current_mode is Behavior.OBSTACLE_AVOIDANCE:
            return self._obstacle_avoidance(self.laser, dt)
        if self.current_mode is Behavior.LEFT_WALL:
            return self._wall_following(self.laser, dt, follow_left=True)
        if self.current_mode is Behavior.RIGHT_WALL:
            return self._wall_following(self.laser, dt, follow_left=False)
        return self._exploration()

    def determine_behavior(self) -> Behavior:
        """Choose a behaviour from the latest scan, updating the wall preference."""
        laser = self.laser if self.laser is not None else LaserSectors()
        if laser.front < OBSTACLE_THRESHOLD:
            return Behavior.OBSTACLE_AVOIDANCE

        left_wall = laser.left < WALL_DETECTION_THRESHOLD
        right_wall = laser.right < WALL_DETECTION_THRESHOLD

        if left_wall and right_wall:
            left_error = abs(laser.left - DESIRED_WALL_DISTANCE)
            right_error = abs(laser.right - DESIRED_WALL_DISTANCE)
            if (
                self.preferred_mode is Behavior.LEFT_WALL
                and left_error < right_error + PREFERENCE_MARGIN
            ):
                return Behavior.LEFT_WALL
            if (
                self.preferred_mode is Behavior.RIGHT_WALL
                and right_error < left_error + PREFERENCE_MARGIN
            ):
                return Behavior.RIGHT_WALL
            return Behavior.LEFT_WALL if left_error < right_error else Behavior.RIGHT_WALL
        if left_wall:
            self.preferred_mode = Behavior.LEFT_WALL
            return Behavior.LEFT_WALL
        if right_wall:
            self.preferred_mode = Behavior.RIGHT_WALL
            return Behavior.RIGHT_WALL
        return Behavior.NONE

    def _obstacle_avoidance(self, laser: LaserSectors, dt: float) -> Twist:
        if laser.front < CRITICAL_DISTANCE:
            logger.warning("CRITICAL! Backing up (%.2fm)", laser.front)
            return Twist(linear_x=-BACKUP_SPEED, angular_z=0.0)

        setpoint = OBSTACLE_THRESHOLD + OBSTACLE_CLEARANCE_MARGIN
        output = self.obstacle_avoidance_pid.compute_with_components(
            setpoint, laser.front, dt
        )
        left_clearance = min(laser.left, laser.front_left)
        right_clearance = min(laser.right, laser.front_right)
        direction = 1 if left_clearance > right_clearance else -1

        parts = self.obstacle_avoidance_pid.last_components
        logger.debug(
            "Obstacle Avoid: Front=%.2f, Turn=%s, PID(P=%.2f I=%.2f D=%.2f)=%.2f",
            laser.front,
            "LEFT" if direction > 0 else "RIGHT",
            parts.proportional,
            parts.integral,
            parts.derivative,
            output,
        )
        return Twist(
            linear_x=max(MIN_LINEAR_SPEED, TARGET_LINEAR_SPEED * AVOIDANCE_SPEED_FACTOR),
            angular_z=direction * abs(output),
        )

    def _wall_following(self, laser: LaserSectors, dt: float, follow_left: bool) -> Twist:
        wall_distance = laser.left if follow_left else laser.right
        front_diagonal = laser.front_left if follow_left else laser.front_right

        output = self.wall_distance_pid.compute_with_components(
            DESIRED_WALL_DISTANCE, wall_distance, dt
        )
        angular = -output if follow_left else output

        speed_setpoint = TARGET_LINEAR_SPEED
        front_clearance = min(laser.front, front_diagonal)
        if front_clearance < OBSTACLE_THRESHOLD:
            speed_setpoint = TARGET_LINEAR_SPEED * (front_clearance / OBSTACLE_THRESHOLD)
        linear = self.linear_speed_pid.compute(speed_setpoint, self.linear_vel, dt)
        linear = min(max(linear, MIN_LINEAR_SPEED), TARGET_LINEAR_SPEED)

        parts = self.wall_distance_pid.last_components
        logger.debug(
            "%s Wall: Dist=%.2f->%.2f, PID(P=%.2f I=%.2f D=%.2f)=%.2f, Speed=%.2f",
            "LEFT" if follow_left else "RIGHT",
            wall_distance,
            DESIRED_WALL_DISTANCE,
            parts.proportional,
            parts.integral,
            parts.derivative,
            output,
            linear,
        )
        return Twist(linear_x=linear, angular_z=angular)

    @staticmethod
    def _exploration() -> Twist:
        logger.debug("Exploring: No walls detected, searching...")
        return Twist(
            linear_x=TARGET_LINEAR_SPEED * EXPLORATION_SPEED_FACTOR,
            angular_z=EXPLORATION_TURN_RATE,
        )

    def _manual_control(self, key: str) -> Twist:
        if key == "w":
            self.manual_command = Twist(linear_x=TARGET_LINEAR_SPEED, angular_z=0.0)
        elif key == "a":
            self.manual_command = Twist(linear_x=0.0, angular_z=MANUAL_TURN_RATE)
        elif key == "d":
            self.manual_command = Twist(linear_x=0.0, angular_z=-MANUAL_TURN_RATE)
        elif key == "x":
            self.manual_command = Twist()
        return replace(self.manual_command)

    def cycle_gains(self) -> str:
        """Switch the wall PID to the next gain preset and return its name."""
        self.gain_set = (self.gain_set + 1) % len(GAIN_PRESETS)
        name, (kp, ki, kd) = GAIN_PRESETS[self.gain_set]
        self.wall_distance_pid.set_gains(kp, ki, kd)
        logger.info("PID: %s (P=%s, I=%s, D=%s)", name, kp, ki, kd)
        self.wall_distance_pid.reset()
        return name

    def laser_markers(self) -> list[Marker]:
        """Sphere markers at the front, left and right readings."""
        laser = self.laser if self.laser is not None else LaserSectors()
        specs = (
            (laser.front, 0.0, 0, _RED),
            (laser.left, math.pi / 2, 1, _GREEN),
            (laser.right, -math.pi / 2, 2, _BLUE),
        )
        markers = []
        for distance, angle, marker_id, color in specs:
            shown = min(distance, MARKER_MAX_DISTANCE)
            markers.append(
                Marker(
                    namespace="laser_readings",
                    marker_id=marker_id,
                    x=shown * math.cos(angle),
                    y=shown * math.sin(angle),
                    z=0.1,
                    scale=0.1,
                    color=color,
                    alpha=1.0,
                    lifetime=0.2,
                )
            )
        return markers

    def debug_values(self, dt: float) -> list[float]:
        """Readings, mode and wall PID state, as published for tuning."""
        laser = self.laser if self.laser is not None else LaserSectors()
        return [
            laser.front,
            laser.left,
            laser.right,
            float(self.current_mode.value),
            self.wall_distance_pid.error,
            self.wall_distance_pid.integral,
            dt,
        ]