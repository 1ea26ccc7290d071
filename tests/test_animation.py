"""Tests for easing curves and the spin timeline."""
import pytest

from spinwheel.animation.easing import Easing, get_easing, interpolate
from spinwheel.animation.timeline import PlayState, SpinTimeline, Track


@pytest.mark.parametrize("easing", list(Easing))
def test_curves_hit_endpoints(easing):
    curve = get_easing(easing)
    assert curve(0.0) == pytest.approx(0.0, abs=1e-9)
    assert curve(1.0) == pytest.approx(1.0)


def test_lookup_by_name():
    assert get_easing("ease_out_quint") is get_easing(Easing.EASE_OUT_QUINT)
    assert get_easing("EASE_IN_OUT_SINE")(0.5) == pytest.approx(0.5)


def test_unknown_name_raises():
    with pytest.raises(ValueError):
        get_easing("ease_sideways")


def test_interpolate_clamps():
    assert interpolate(10.0, 20.0, 2.0) == 20.0
    assert interpolate(10.0, 20.0, -1.0) == 10.0
    assert interpolate(0.0, 100.0, 0.5, Easing.EASE_OUT_QUAD) == pytest.approx(75.0)


def test_track_value_between_keyframes():
    track = Track("rotation").add_keyframe(1.0, 100.0).add_keyframe(0.0, 0.0)
    assert track.get_value_at(0.25) == pytest.approx(25.0)
    assert Track("empty").get_value_at(0.5) is None


def test_spin_timeline_plays_to_target():
    timeline = SpinTimeline.spin(0.0, 1800.0, 5000).play()
    assert timeline.is_playing
    assert timeline.value == 0.0

    midway = timeline.update(2500)
    assert 900.0 < midway < 1800.0

    assert timeline.update(5000) == 1800.0
    assert timeline.state == PlayState.FINISHED
    assert timeline.progress == 1.0


def test_spin_with_settle_passes_overshoot():
    timeline = SpinTimeline.spin_with_settle(0.0, 1820.0, 1800.0, 5000, 1500).play()
    assert timeline.duration == 6500

    assert timeline.update(5000) == pytest.approx(1820.0)
    settling = timeline.update(750)
    assert 1800.0 < settling < 1820.0
    assert timeline.update(750) == pytest.approx(1800.0)


def test_stop_rewinds():
    timeline = SpinTimeline.spin(0.0, 360.0, 1000).play()
    timeline.update(500)
    timeline.stop()
    assert timeline.state == PlayState.STOPPED
    assert timeline.value == 0.0
    # A stopped timeline does not advance
    assert timeline.update(500) == 0.0


def test_zero_duration_is_complete():
    timeline = SpinTimeline.spin(0.0, 720.0, 0)
    assert timeline.progress == 1.0
    assert timeline.value == 720.0
