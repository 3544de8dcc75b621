"""Keyboard teleoperation with laser-based forward collision protection."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from collections.abc import Sequence
from typing import Optional

from robotnav.messages import LaserScan, Marker, Twist

logger = logging.getLogger(__name__)

FRONT_WINDOW = 10
WIDE_WINDOW = 30
FRONT_SAFETY_DISTANCE = 0.3
SIDE_SAFETY_DISTANCE = 0.3
MIN_VALID_RANGE = 0.15
MAX_VALID_RANGE = 5.0
STARTUP_GRACE = 2.0
MARKER_MAX_DISTANCE = 2.0

FORWARD_SPEED = 0.3
TURN_SPEED = 0.5

_RED = (1.0, 0.0, 0.0)
_GREEN = (0.0, 1.0, 0.0)


@dataclass(frozen=True)
class ScanSafety:
    """What one scan says about obstacles ahead of the robot."""

    front_obstacle: bool
    side_obstacle: bool
    front_min_distance: float
    wide_min_distance: float
    obstacle_count: int
    front_angle_span: float
    wide_angle_span: float

    @property
    def obstacle_detected(self) -> bool:
        return self.front_obstacle or self.side_obstacle

    @property
    def closest(self) -> float:
        """The nearest valid reading in either sector (inf if none)."""
        return min(self.front_min_distance, self.wide_min_distance)

    @property
    def detection_type(self) -> str:
        if self.front_obstacle:
            return "FRONT"
        return "SIDE" if self.side_obstacle else "CLEAR"

    @property
    def effective_safety_distance(self) -> float:
        return FRONT_SAFETY_DISTANCE if self.front_obstacle else SIDE_SAFETY_DISTANCE


def _sector(ranges: Sequence[float], window: int) -> list[float]:
    total = len(ranges)
    readings = (ranges[offset % total] for offset in range(-window, window + 1))
    return [
        r for r in readings if math.isfinite(r) and MIN_VALID_RANGE < r < MAX_VALID_RANGE
    ]


def assess_scan(ranges: Sequence[float], angle_increment: float) -> ScanSafety:
    """Check the narrow front sector and the wider front arc around index 0."""
    if not ranges:
        raise ValueError("scan has no range readings")
    front = _sector(ranges, FRONT_WINDOW)
    wide = _sector(ranges, WIDE_WINDOW)
    increment_deg = math.degrees(angle_increment)
    return ScanSafety(
        front_obstacle=any(r < FRONT_SAFETY_DISTANCE for r in front),
        side_obstacle=any(r < SIDE_SAFETY_DISTANCE for r in wide),
        front_min_distance=min(front, default=math.inf),
        wide_min_distance=min(wide, default=math.inf),
        obstacle_count=sum(1 for r in wide if r < SIDE_SAFETY_DISTANCE),
        front_angle_span=FRONT_WINDOW * increment_deg,
        wide_angle_span=WIDE_WINDOW * increment_deg,
    )


class TeleopController:
    """Turns key presses into velocity commands, refusing to drive into obstacles."""

    def __init__(self, startup_time: float = 0.0) -> None:
        self.startup_time = startup_time
        self.last_command = Twist()
        self.safe_to_move = True
        self.front_distance = 0.0
        self.received_scan = False
        self.has_pending_forward = False
        self.emergency_stop = False
        self.quit_requested = False

    def on_scan(
        self, scan: LaserScan, now: float
    ) -> tuple[Optional[Twist], Marker]:
        """Update safety state from a scan.

        Returns an immediate stop command if one must be sent (or None), and
        the obstacle marker to display.
        """
        safety = assess_scan(scan.ranges, scan.angle_increment)
        detected = safety.obstacle_detected
        in_grace = now - self.startup_time < STARTUP_GRACE

        self.safe_to_move = not detected or in_grace
        self.front_distance = safety.closest
        self.received_scan = True

        stop: Optional[Twist] = None
        if detected and not in_grace and self.has_pending_forward:
            stop = Twist()
            self.emergency_stop = True
            logger.warning(
                "EMERGENCY STOP! Immediate halt for obstacle at %.2f m",
                self.front_distance,
            )
        elif not detected:
            self.emergency_stop = False

        if detected:
            logger.warning(
                "STOPPING! %s obstacle: %.2f m < %.2f m safety, "
                "Front(±%.1f°): %.2f m, Wide(±%.1f°): %d danger pts",
                safety.detection_type,
                self.front_distance,
                safety.effective_safety_distance,
                safety.front_angle_span,
                safety.front_min_distance,
                safety.wide_angle_span,
                safety.obstacle_count,
            )
        else:
            logger.debug(
                "Safe: Front(±%.1f°) %.2f m > %.2f m, Wide(±%.1f°) %.2f m > %.2f m",
                safety.front_angle_span,
                safety.front_min_distance,
                FRONT_SAFETY_DISTANCE,
                safety.wide_angle_span,
                safety.wide_min_distance,
                SIDE_SAFETY_DISTANCE,
            )
        return stop, self._marker(detected)

    def _marker(self, obstacle_detected: bool) -> Marker:
        return Marker(
            namespace="obstacle_detection",
            marker_id=0,
            x=min(self.front_distance, MARKER_MAX_DISTANCE),
            y=0.0,
            z=0.1,
            scale=0.15,
            color=_RED if obstacle_detected else _GREEN,
            alpha=1.0,
            lifetime=0.5,
        )

    def tick(self, key: str) -> Optional[Twist]:
        """Handle one control cycle; return the command to send, or None."""
        new_input = bool(key)
        if key == "w":
            self.last_command = Twist(linear_x=FORWARD_SPEED, angular_z=0.0)
            self.has_pending_forward = True
            logger.info("FORWARD command")
        elif key == "a":
            self.last_command = Twist(linear_x=0.0, angular_z=TURN_SPEED)
            self.has_pending_forward = False
            logger.info("TURN LEFT command")
        elif key == "d":
            self.last_command = Twist(linear_x=0.0, angular_z=-TURN_SPEED)
            self.has_pending_forward = False
            logger.info("TURN RIGHT command")
        elif key == "s":
            self.last_command = Twist()
            self.has_pending_forward = False
            logger.info("STOP command")
        elif key == "q":
            logger.info("Quitting... Stopping robot.")
            self.quit_requested = True
            return Twist()
        else:
            new_input = False

        if not (new_input or not self.emergency_stop):
            return None
        if self.last_command.linear_x <= 0.0:
            return replace(self.last_command)
        if not self.received_scan:
            logger.warning("No laser data - allowing movement")
            return replace(self.last_command)
        if self.safe_to_move and not self.emergency_stop:
            return replace(self.last_command)
        self.has_pending_forward = False
        return Twist()