"""Navigation goals: a single fixed goal, a fixed tour and random wandering."""

from __future__ import annotations

import enum
import logging
import random
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

MAP_FRAME = "map"
SERVER_WAIT = 3.0
NEXT_GOAL_DELAY = 2.0
RANDOM_SUCCESS_DELAY = 5.0
RANDOM_RETRY_DELAY = 3.0
RANDOM_RANGE = (-2.0, 2.0)


@dataclass(frozen=True)
class NavGoal:
    """A target pose on the map: position and the w part of its orientation."""

    x: float
    y: float
    orientation_w: float = 1.0
    frame_id: str = MAP_FRAME


class GoalOutcome(enum.Enum):
    """How a navigation action ended."""

    SUCCEEDED = "succeeded"
    ABORTED = "aborted"
    CANCELED = "canceled"
    UNKNOWN = "unknown"

    @property
    def succeeded(self) -> bool:
        return self is GoalOutcome.SUCCEEDED


DEFAULT_GOALS = (
    NavGoal(1.5, 1.5, 1.0),
    NavGoal(-1.0, 2.0, 0.707),
    NavGoal(0.0, -1.5, 0.0),
)


def default_goal() -> NavGoal:
    """The single goal sent once by the simple goal sender."""
    goal = DEFAULT_GOALS[0]
    logger.info("Sending goal to (%.2f, %.2f)", goal.x, goal.y)
    return goal


class MultiGoalSender:
    """Visits a fixed list of goals in order, moving on whether or not each succeeds."""

    def __init__(self, goals: Optional[Iterable[NavGoal]] = None) -> None:
        self.goals = list(DEFAULT_GOALS if goals is None else goals)
        self.current_index = 0

    @property
    def done(self) -> bool:
        return self.current_index >= len(self.goals)

    def next_goal(self) -> Optional[NavGoal]:
        """The goal to send now, or None once every goal has been tried."""
        if self.done:
            logger.info("All goals completed!")
            return None
        goal = self.goals[self.current_index]
        logger.info(
            "Sending goal %d/%d to (%.2f, %.2f) with orientation %.3f",
            self.current_index + 1,
            len(self.goals),
            goal.x,
            goal.y,
            goal.orientation_w,
        )
        return goal

    def report_result(self, outcome: GoalOutcome) -> float:
        """Record how the current goal ended; return the delay before the next one."""
        if outcome.succeeded:
            logger.info(
                "Goal %d succeeded! Moving to next goal...", self.current_index + 1
            )
        else:
            logger.warning(
                "Goal %d failed or canceled. Skipping to next goal...",
                self.current_index + 1,
            )
        self.current_index += 1
        return NEXT_GOAL_DELAY


class RandomGoalSender:
    """Sends goals at uniformly random positions within a square around the origin."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(time.monotonic_ns() if seed is None else seed)
        self.goal_count = 0

    def next_goal(self) -> NavGoal:
        """Draw and count a fresh random goal."""
        low, high = RANDOM_RANGE
        goal = NavGoal(self._rng.uniform(low, high), self._rng.uniform(low, high), 1.0)
        self.goal_count += 1
        logger.info(
            "Sending random goal #%d to (%.2f, %.2f)", self.goal_count, goal.x, goal.y
        )
        return goal

    def report_result(self, outcome: GoalOutcome) -> float:
        """Record how the last goal ended; return the delay before the next one."""
        if outcome.succeeded:
            logger.info(
                "Random goal #%d succeeded! Generating next goal in 5 seconds...",
                self.goal_count,
            )
            return RANDOM_SUCCESS_DELAY
        logger.warning(
            "Random goal #%d failed. Trying new goal in 3 seconds...", self.goal_count
        )
        return RANDOM_RETRY_DELAY