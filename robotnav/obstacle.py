"""Stop-and-turn obstacle avoidance from the front arc of a laser scan."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from robotnav.messages import Twist

logger = logging.getLogger(__name__)

FRONT_WINDOW = 15
STOP_DISTANCE = 0.3
FORWARD_SPEED = 0.2
TURN_SPEED = 0.5


def front_blocked(
    ranges: Sequence[float],
    window: int = FRONT_WINDOW,
    threshold: float = STOP_DISTANCE,
) -> bool:
    """Whether any finite reading around the scan centre is closer than threshold.

    The readings checked run from centre - window up to, but not including,
    centre + window.
    """
    center = len(ranges) // 2
    start, stop = center - window, center + window
    if start < 0 or stop > len(ranges):
        raise ValueError(
            f"scan of {len(ranges)} readings is too short for a window of {window}"
        )
    return any(
        math.isfinite(dist) and dist < threshold for dist in ranges[start:stop]
    )


def avoid_obstacles(ranges: Sequence[float]) -> Twist:
    """The velocity command for one scan: turn in place if blocked, else go."""
    if front_blocked(ranges):
        logger.info("Obstacle detected! Stopping...")
        return Twist(linear_x=0.0, angular_z=TURN_SPEED)
    logger.info("Path clear, moving forward")
    logger.info("Front center reading: %f", ranges[len(ranges) // 2])
    return Twist(linear_x=FORWARD_SPEED, angular_z=0.0)