"""Tests for wheel angle geometry and rotation planning."""
import numpy as np
import pytest

from spinwheel.core.errors import ValidationError
from spinwheel.geometry.angles import (
    POINTER_ANGLE,
    angular_distance,
    landing_errors,
    normalize_angle,
    segment_center_angle,
    segment_under_pointer,
)
from spinwheel.geometry.planner import (
    RotationPlanner,
    alignment_delta,
    initial_alignment_rotation,
)
from spinwheel.prizes.rng import Mulberry32


def landing_error(index, count, rotation):
    return angular_distance(segment_center_angle(index, count) + rotation, POINTER_ANGLE)


@pytest.mark.parametrize("angle, expected", [
    (0.0, 0.0),
    (-90.0, 270.0),
    (720.0, 0.0),
    (359.5, 359.5),
    (-725.0, 355.0),
])
def test_normalize_angle(angle, expected):
    assert normalize_angle(angle) == pytest.approx(expected)


def test_segment_center_angle():
    assert segment_center_angle(0, 8) == pytest.approx(-67.5)
    assert segment_center_angle(0, 4) == pytest.approx(-45.0)
    assert segment_center_angle(0, 1) == pytest.approx(90.0)


def test_angular_distance_wraps():
    assert angular_distance(350.0, 10.0) == pytest.approx(20.0)
    assert angular_distance(-90.0, 270.0) == pytest.approx(0.0)
    assert angular_distance(0.0, 180.0) == pytest.approx(180.0)


def test_landing_errors_match_scalar_form():
    indices = [0, 3, 7, 5]
    rotations = [0.0, 1234.5, -400.0, 99999.25]
    expected = [landing_error(i, 8, r) for i, r in zip(indices, rotations)]
    np.testing.assert_allclose(landing_errors(indices, rotations, 8), expected, atol=1e-9)


def test_eight_segment_scenario():
    """Verify segment 0 of 8 from rest lands at 337.5° mod 360."""
    planner = RotationPlanner(Mulberry32(1))
    plan = planner.plan(0.0, 0, 8)
    assert normalize_angle(plan.target_rotation) == pytest.approx(337.5)
    assert plan.delta == pytest.approx(337.5)


@pytest.mark.parametrize("current", [0.0, 123.456, -987.6, 1e6 + 0.3])
def test_landing_invariant_all_counts(current):
    """Verify every segment of every wheel size lands under the pointer."""
    planner = RotationPlanner(Mulberry32(555))
    for count in range(1, 101):
        for index in range(count):
            plan = planner.plan(current, index, count)
            assert landing_error(index, count, plan.target_rotation) < 1e-6


def test_forward_progress():
    planner = RotationPlanner(Mulberry32(8), min_full_spins=4, max_full_spins=5)
    current = 0.0
    for step in range(500):
        plan = planner.plan(current, step % 12, 12)
        assert plan.target_rotation - current >= 4 * 360
        assert plan.target_rotation - current < 6 * 360
        assert plan.full_spins in (4, 5)
        assert 0.0 <= plan.delta < 360.0
        current = plan.target_rotation


def test_overshoot_drawn_only_when_configured():
    plain = RotationPlanner(Mulberry32(3)).plan(0.0, 1, 6)
    assert plain.overshoot == 0.0
    assert plain.rotation_with_overshoot == plain.target_rotation

    bouncy = RotationPlanner(Mulberry32(3), min_overshoot=15, max_overshoot=25).plan(0.0, 1, 6)
    assert 15.0 <= bouncy.overshoot < 25.0
    assert bouncy.rotation_with_overshoot == pytest.approx(bouncy.target_rotation + bouncy.overshoot)


def test_planner_is_deterministic():
    a = RotationPlanner(Mulberry32(77))
    b = RotationPlanner(Mulberry32(77))
    assert [a.plan(0.0, i, 8) for i in range(8)] == [b.plan(0.0, i, 8) for i in range(8)]


@pytest.mark.parametrize("index, count", [(0, 0), (8, 8), (-1, 8)])
def test_plan_rejects_bad_segment(index, count):
    with pytest.raises(ValidationError):
        RotationPlanner(Mulberry32(1)).plan(0.0, index, count)


@pytest.mark.parametrize("kwargs", [
    {"min_full_spins": -1},
    {"min_full_spins": 5, "max_full_spins": 4},
    {"min_overshoot": 25, "max_overshoot": 15},
])
def test_planner_rejects_bad_ranges(kwargs):
    with pytest.raises(ValidationError):
        RotationPlanner(Mulberry32(1), **kwargs)


def test_alignment_delta_zero_when_already_aligned():
    rotation = initial_alignment_rotation(2, 5)
    # Float noise may put an exact alignment a hair below 360
    assert angular_distance(alignment_delta(rotation, 2, 5), 0.0) < 1e-9


@pytest.mark.parametrize("count", [1, 3, 8, 13, 100])
def test_initial_alignment_puts_segment_under_pointer(count):
    for index in range(count):
        rotation = initial_alignment_rotation(index, count)
        assert landing_error(index, count, rotation) < 1e-9
        assert segment_under_pointer(rotation, count) == index


def test_segment_under_pointer_at_rest():
    # Segment 0 spans 12 o'clock to 12:45 on an 8-wheel
    assert segment_under_pointer(0.0, 8) == 0
    assert segment_under_pointer(-1.0, 8) == 0
    assert segment_under_pointer(1.0, 8) == 7
