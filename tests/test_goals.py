import pytest

from robotnav.goals import (
    DEFAULT_GOALS,
    NEXT_GOAL_DELAY,
    RANDOM_RANGE,
    RANDOM_RETRY_DELAY,
    RANDOM_SUCCESS_DELAY,
    GoalOutcome,
    MultiGoalSender,
    NavGoal,
    RandomGoalSender,
    default_goal,
)


def test_default_goal_matches_source():
    goal = default_goal()
    assert (goal.x, goal.y, goal.orientation_w) == (1.5, 1.5, 1.0)
    assert goal.frame_id == "map"


def test_multi_sender_visits_all_goals_in_order():
    sender = MultiGoalSender()
    sent = []
    while (goal := sender.next_goal()) is not None:
        sent.append(goal)
        assert sender.report_result(GoalOutcome.SUCCEEDED) == NEXT_GOAL_DELAY
    assert sent == list(DEFAULT_GOALS)
    assert sender.done


def test_multi_sender_second_goal_from_source():
    sender = MultiGoalSender()
    sender.next_goal()
    sender.report_result(GoalOutcome.SUCCEEDED)
    assert sender.next_goal() == NavGoal(-1.0, 2.0, 0.707)


def test_multi_sender_resends_same_goal_until_reported():
    sender = MultiGoalSender()
    assert sender.next_goal() == sender.next_goal()
    assert sender.current_index == 0


@pytest.mark.parametrize(
    "outcome", [GoalOutcome.ABORTED, GoalOutcome.CANCELED, GoalOutcome.UNKNOWN]
)
def test_multi_sender_skips_failed_goal(outcome):
    sender = MultiGoalSender()
    first = sender.next_goal()
    assert sender.report_result(outcome) == NEXT_GOAL_DELAY
    assert sender.next_goal() == DEFAULT_GOALS[1]
    assert first == DEFAULT_GOALS[0]


def test_multi_sender_custom_goals():
    goals = [NavGoal(3.0, 4.0), NavGoal(5.0, 6.0, 0.5)]
    sender = MultiGoalSender(goals)
    assert sender.next_goal() == goals[0]
    sender.report_result(GoalOutcome.SUCCEEDED)
    assert sender.next_goal() == goals[1]
    sender.report_result(GoalOutcome.ABORTED)
    assert sender.next_goal() is None


def test_multi_sender_empty_list_is_done():
    sender = MultiGoalSender([])
    assert sender.done
    assert sender.next_goal() is None


def test_random_sender_goals_within_range_and_counted():
    sender = RandomGoalSender(seed=7)
    low, high = RANDOM_RANGE
    for expected_count in range(1, 51):
        goal = sender.next_goal()
        assert low <= goal.x <= high
        assert low <= goal.y <= high
        assert goal.orientation_w == 1.0
        assert goal.frame_id == "map"
        assert sender.goal_count == expected_count


def test_random_sender_is_reproducible_with_seed():
    first = [RandomGoalSender(seed=42).next_goal() for _ in range(1)]
    a, b = RandomGoalSender(seed=42), RandomGoalSender(seed=42)
    assert [a.next_goal() for _ in range(5)] == [b.next_goal() for _ in range(5)]
    assert first[0] == RandomGoalSender(seed=42).next_goal()


def test_random_sender_delays():
    sender = RandomGoalSender(seed=1)
    sender.next_goal()
    assert sender.report_result(GoalOutcome.SUCCEEDED) == RANDOM_SUCCESS_DELAY
    assert sender.report_result(GoalOutcome.ABORTED) == RANDOM_RETRY_DELAY
    assert sender.goal_count == 1


@pytest.mark.parametrize(
    "outcome, delay, succeeded",
    [
        (GoalOutcome.SUCCEEDED, RANDOM_SUCCESS_DELAY, True),
        (GoalOutcome.CANCELED, RANDOM_RETRY_DELAY, False),
    ],
)
def test_outcome_succeeded_flag(outcome, delay, succeeded):
    sender = RandomGoalSender(seed=3)
    sender.next_goal()
    assert sender.report_result(outcome) == delay
    assert outcome.succeeded is succeeded