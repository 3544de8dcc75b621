import math

import pytest

from robotnav.messages import LaserScan, Twist
from robotnav import wall_follower as wf
from robotnav.wall_follower import WallFollower, WallSide

N = 360
FAR = 5.0


def make_scan(front=FAR, left=FAR, right=FAR):
    ranges = [FAR] * N
    ranges[0] = front
    ranges[N // 4] = left
    ranges[3 * N // 4] = right
    return LaserScan(ranges=ranges)


def autonomous(now=0.0):
    follower = WallFollower(now=now)
    follower.tick("m")
    return follower


def test_manual_mode_ignores_scans():
    follower = WallFollower()
    assert follower.on_scan(make_scan(front=0.1), now=1.0) is None
    assert follower.command == Twist()


@pytest.mark.parametrize(
    "key, linear, angular",
    [
        ("w", wf.MANUAL_FORWARD_SPEED, 0.0),
        ("a", 0.0, wf.MANUAL_TURN_RATE),
        ("d", 0.0, -wf.MANUAL_TURN_RATE),
    ],
)
def test_manual_keys(key, linear, angular):
    follower = WallFollower()
    assert follower.tick(key) == Twist(linear_x=linear, angular_z=angular)


def test_manual_stop_and_unknown_key_keeps_command():
    follower = WallFollower()
    follower.tick("w")
    assert follower.tick("z") == Twist(linear_x=wf.MANUAL_FORWARD_SPEED)
    assert follower.tick("x") == Twist()


def test_toggle_mode_and_keys_ignored_when_autonomous():
    follower = autonomous()
    assert follower.autonomous
    assert follower.tick("w") == Twist()
    follower.tick("m")
    assert not follower.autonomous


def test_front_obstacle_turns_towards_more_space():
    follower = autonomous()
    cmd = follower.on_scan(make_scan(front=0.45, left=0.6, right=0.9), now=0.5)
    assert cmd.linear_x == 0.0
    assert cmd.angular_z == -wf.INITIAL_TURN_RATE
    assert follower.last_turn_direction == -1

    other = autonomous()
    cmd = other.on_scan(make_scan(front=0.45, left=0.9, right=0.6), now=0.5)
    assert cmd.angular_z == wf.INITIAL_TURN_RATE


def test_critical_front_backs_up():
    follower = autonomous()
    cmd = follower.on_scan(make_scan(front=0.2), now=0.5)
    assert cmd.linear_x == -wf.BACKUP_SPEED


def test_committed_turn_keeps_direction():
    follower = autonomous()
    follower.on_scan(make_scan(front=0.45, left=0.6, right=0.9), now=1.0)
    cmd = follower.on_scan(make_scan(front=0.2, left=0.9, right=0.6), now=2.0)
    assert cmd.angular_z == -wf.COMMITTED_TURN_RATE
    assert cmd.linear_x == -wf.COMMITTED_BACKUP_SPEED
    assert follower.last_turn_time == 1.0


def test_commitment_expires():
    follower = autonomous()
    follower.on_scan(make_scan(front=0.45, left=0.6, right=0.9), now=1.0)
    cmd = follower.on_scan(make_scan(front=0.45, left=0.9, right=0.6), now=4.5)
    assert cmd.angular_z == wf.INITIAL_TURN_RATE
    assert follower.last_turn_time == 4.5


def test_no_walls_searches():
    follower = autonomous()
    cmd = follower.on_scan(make_scan(), now=1.0)
    assert cmd == Twist(linear_x=wf.SEARCH_SPEED, angular_z=wf.SEARCH_TURN_RATE)


def test_infinite_readings_count_as_absent():
    follower = autonomous()
    cmd = follower.on_scan(
        make_scan(front=math.inf, left=math.nan, right=math.inf), now=1.0
    )
    assert cmd == Twist(linear_x=wf.SEARCH_SPEED, angular_z=wf.SEARCH_TURN_RATE)


def test_left_wall_at_target_goes_straight():
    follower = autonomous()
    cmd = follower.on_scan(make_scan(left=wf.DESIRED_WALL_DISTANCE), now=1.0)
    assert follower.preferred_wall is WallSide.LEFT
    assert cmd.linear_x == wf.WALL_FOLLOW_SPEED
    assert cmd.angular_z == pytest.approx(0.0)


def test_left_wall_too_far_and_too_close():
    far = autonomous().on_scan(make_scan(left=0.8), now=1.0)
    near = autonomous().on_scan(make_scan(left=0.2), now=1.0)
    assert far.angular_z == wf.GENTLE_TURN_RATE
    assert near.angular_z == -wf.GENTLE_TURN_RATE


def test_right_wall_mirrors_left():
    far = autonomous().on_scan(make_scan(right=0.8), now=1.0)
    near = autonomous().on_scan(make_scan(right=0.2), now=1.0)
    assert far.angular_z == -wf.GENTLE_TURN_RATE
    assert near.angular_z == wf.GENTLE_TURN_RATE


def test_proportional_band_signs():
    left = autonomous().on_scan(make_scan(left=0.5), now=1.0)
    right = autonomous().on_scan(make_scan(right=0.5), now=1.0)
    assert left.angular_z < 0.0 < right.angular_z
    assert left.angular_z == pytest.approx(-right.angular_z)


def test_left_preferred_when_both_walls():
    follower = autonomous()
    follower.on_scan(make_scan(left=0.5, right=0.5), now=1.0)
    assert follower.preferred_wall is WallSide.LEFT


def test_preferred_wall_persists_briefly_then_switches():
    follower = autonomous()
    follower.on_scan(make_scan(left=0.4), now=1.0)
    cmd = follower.on_scan(make_scan(right=0.4), now=2.0)
    assert follower.preferred_wall is WallSide.LEFT
    assert cmd.angular_z == wf.GENTLE_TURN_RATE

    follower.on_scan(make_scan(right=0.4), now=3.5)
    assert follower.preferred_wall is WallSide.RIGHT
    assert follower.wall_following_start_time == 3.5


def test_empty_scan_rejected_in_autonomous_mode():
    with pytest.raises(ValueError):
        autonomous().on_scan(LaserScan(ranges=[]), now=1.0)


def test_tick_returns_copy():
    follower = WallFollower()
    cmd = follower.tick("w")
    cmd.linear_x = -9.0
    assert follower.command.linear_x == wf.MANUAL_FORWARD_SPEED