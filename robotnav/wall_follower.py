"""A reactive wall follower with a manual keyboard mode."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import replace
from typing import Optional

from robotnav.messages import LaserScan, Twist

logger = logging.getLogger(__name__)

NO_READING = 999.0

DESIRED_WALL_DISTANCE = 0.4
FRONT_COLLISION_THRESHOLD = 0.5
CRITICAL_DISTANCE = 0.3
WALL_DETECTION_THRESHOLD = 1.0

COMMIT_WINDOW = 3.0
WALL_MEMORY = 2.0
INITIAL_TURN_RATE = 1.5
COMMITTED_TURN_RATE = 2.0
BACKUP_SPEED = 0.1
COMMITTED_BACKUP_SPEED = 0.15

WALL_FOLLOW_SPEED = 0.2
TOO_FAR_MARGIN = 0.2
TOO_CLOSE_MARGIN = 0.15
GENTLE_TURN_RATE = 0.2
PROPORTIONAL_GAIN = 0.3

SEARCH_SPEED = 0.15
SEARCH_TURN_RATE = 0.2

MANUAL_FORWARD_SPEED = 0.2
MANUAL_TURN_RATE = 0.5


class WallSide(enum.Enum):
    """Which wall, if any, the robot prefers to follow."""

    NONE = 0
    LEFT = 1
    RIGHT = 2


def _reading(ranges, index: int) -> float:
    value = ranges[index]
    return value if math.isfinite(value) else NO_READING


class WallFollower:
    """Keeps a wall at a set distance, avoiding obstacles ahead, or obeys keys."""

    def __init__(self, now: float = 0.0) -> None:
        self.autonomous = False
        self.command = Twist()
        self.last_turn_direction = 0
        self.last_turn_time = now
        self.preferred_wall = WallSide.NONE
        self.wall_following_start_time = now

    def on_scan(self, scan: LaserScan, now: float) -> Optional[Twist]:
        """Update the command from a scan; None while in manual mode."""
        if not self.autonomous:
            return None
        ranges = scan.ranges
        if not ranges:
            raise ValueError("scan has no range readings")
        total = len(ranges)
        front = _reading(ranges, 0)
        left = _reading(ranges, total // 4)
        right = _reading(ranges, 3 * total // 4)

        wall_on_left = left < WALL_DETECTION_THRESHOLD
        wall_on_right = right < WALL_DETECTION_THRESHOLD
        logger.debug(
            "Front: %.2f, Left: %.2f, Right: %.2f | Wall_L: %s, Wall_R: %s",
            front,
            left,
            right,
            "YES" if wall_on_left else "NO",
            "YES" if wall_on_right else "NO",
        )

        if front < FRONT_COLLISION_THRESHOLD:
            self._avoid_front(front, left, right, now)
        elif wall_on_left or wall_on_right:
            self._follow_wall(left, right, wall_on_left, wall_on_right, now)
        else:
            self.command.linear_x = SEARCH_SPEED
            self.command.angular_z = SEARCH_TURN_RATE
            logger.debug("No walls detected, searching...")
        return replace(self.command)

    def _avoid_front(self, front: float, left: float, right: float, now: float) -> None:
        self.command.linear_x = 0.0
        elapsed = now - self.last_turn_time
        if elapsed < COMMIT_WINDOW and self.last_turn_direction != 0:
            direction = self.last_turn_direction
            self.command.angular_z = direction * COMMITTED_TURN_RATE
            if front < CRITICAL_DISTANCE:
                self.command.linear_x = -COMMITTED_BACKUP_SPEED
            logger.warning(
                "COMMITTED TURN: %s at %.1f rad/s (%.1fs elapsed)",
                "LEFT" if direction > 0 else "RIGHT",
                self.command.angular_z,
                elapsed,
            )
            return

        if left < right:
            direction = -1
            logger.info("NEW obstacle! Choose RIGHT (L:%.2f < R:%.2f)", left, right)
        else:
            direction = 1
            logger.info("NEW obstacle! Choose LEFT (R:%.2f < L:%.2f)", right, left)
        self.command.angular_z = direction * INITIAL_TURN_RATE
        if front < CRITICAL_DISTANCE:
            self.command.linear_x = -BACKUP_SPEED
            logger.warning("CRITICAL distance! Backing up (Front: %.2f)", front)
        self.last_turn_direction = direction
        self.last_turn_time = now

    def _choose_wall(self, wall_on_left: bool, wall_on_right: bool, now: float) -> WallSide:
        if self.preferred_wall is WallSide.NONE:
            if wall_on_left:
                self.preferred_wall = WallSide.LEFT
                self.wall_following_start_time = now
                logger.info("Starting LEFT wall following (counter-clockwise)")
                return WallSide.LEFT
            if wall_on_right:
                self.preferred_wall = WallSide.RIGHT
                self.wall_following_start_time = now
                logger.info("Starting RIGHT wall following (clockwise)")
                return WallSide.RIGHT
            return WallSide.NONE

        following_for = now - self.wall_following_start_time
        preferred = self.preferred_wall
        other = WallSide.RIGHT if preferred is WallSide.LEFT else WallSide.LEFT
        preferred_seen = wall_on_left if preferred is WallSide.LEFT else wall_on_right
        other_seen = wall_on_right if preferred is WallSide.LEFT else wall_on_left

        if preferred_seen or following_for < WALL_MEMORY:
            if preferred_seen:
                self.wall_following_start_time = now
            return preferred
        if other_seen:
            self.preferred_wall = other
            self.wall_following_start_time = now
            logger.warning(
                "SWITCHING: %s wall lost, now following %s wall",
                preferred.name.capitalize(),
                other.name,
            )
            return other
        return WallSide.NONE

    def _follow_wall(
        self,
        left: float,
        right: float,
        wall_on_left: bool,
        wall_on_right: bool,
        now: float,
    ) -> None:
        side = self._choose_wall(wall_on_left, wall_on_right, now)
        self.command.linear_x = WALL_FOLLOW_SPEED
        if side is WallSide.NONE:
            return
        # Turning towards the wall is positive yaw for the left wall, negative for the right.
        toward = 1.0 if side is WallSide.LEFT else -1.0
        distance = left if side is WallSide.LEFT else right
        error = distance - DESIRED_WALL_DISTANCE
        if error > TOO_FAR_MARGIN:
            self.command.angular_z = toward * GENTLE_TURN_RATE
            logger.debug("Too far from %s wall (%.2f)", side.name, distance)
        elif error < -TOO_CLOSE_MARGIN:
            self.command.angular_z = -toward * GENTLE_TURN_RATE
            logger.debug("Too close to %s wall (%.2f)", side.name, distance)
        else:
            self.command.angular_z = -toward * error * PROPORTIONAL_GAIN
            logger.debug("Following %s wall smoothly (%.2f)", side.name, distance)

    def tick(self, key: str) -> Twist:
        """Handle one control cycle's key press and return the command to send."""
        if key == "m":
            self.autonomous = not self.autonomous
            logger.info(
                "Mode switched to: %s", "AUTONOMOUS" if self.autonomous else "MANUAL"
            )
        if not self.autonomous:
            if key == "w":
                self.command = Twist(linear_x=MANUAL_FORWARD_SPEED, angular_z=0.0)
            elif key == "a":
                self.command = Twist(linear_x=0.0, angular_z=MANUAL_TURN_RATE)
            elif key == "d":
                self.command = Twist(linear_x=0.0, angular_z=-MANUAL_TURN_RATE)
            elif key == "x":
                self.command = Twist()
        return replace(self.command)