import math

import pytest

from archery.aim import advance_aim, aim_speed_for_round


@pytest.mark.parametrize("round_no, expected", [
    (1, 0.01),
    (2, 0.012),
    (10, 0.028),
    (36, 0.08),
    (100, 0.08),
])
def test_aim_speed_ramp(round_no, expected):
    assert aim_speed_for_round(round_no) == pytest.approx(expected)


def test_aim_speed_never_decreases():
    speeds = [aim_speed_for_round(r) for r in range(1, 80)]
    assert all(b >= a for a, b in zip(speeds, speeds[1:]))
    assert max(speeds) == pytest.approx(0.08)


def test_advance_moves_by_speed_and_direction():
    angle, direction = advance_aim(0.0, 0.01, 1)
    assert angle == pytest.approx(0.01)
    assert direction == 1

    angle, direction = advance_aim(0.2, 0.05, -1)
    assert angle == pytest.approx(0.15)
    assert direction == -1


def test_upper_bound_clamps_and_reflects():
    angle, direction = advance_aim(math.pi / 3 - 0.005, 0.01, 1)
    assert angle == math.pi / 3
    assert direction == -1


def test_lower_bound_clamps_and_reflects():
    angle, direction = advance_aim(-math.pi / 3 + 0.005, 0.01, -1)
    assert angle == -math.pi / 3
    assert direction == 1


def test_angle_stays_in_range_over_many_ticks():
    angle, direction = 0.0, 1
    flips = 0
    for _ in range(2000):
        new_angle, new_direction = advance_aim(angle, 0.08, direction)
        if new_direction != direction:
            flips += 1
            assert abs(new_angle) == pytest.approx(math.pi / 3)
        angle, direction = new_angle, new_direction
        assert -math.pi / 3 <= angle <= math.pi / 3
    assert flips > 0
