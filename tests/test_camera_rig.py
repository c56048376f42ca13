import math

import numpy as np
import pytest

from orrery.controller.camera_rig import (
    DEFAULT_POSITION, CameraMode, CameraPose, CameraRig, ease_out_cubic
)
from orrery.model.transforms import angle_difference

TARGET = np.array([10.0, 0.0, 0.0])
END = np.array([15.0, 2.5, 5.0])


def _azimuth(rig):
    offset = rig.pose.position - rig.pose.focal_point
    return math.atan2(offset[0], offset[2])


# ---- Transitions ----

def test_transition_ends_at_offset_from_target(rig):
    transition = rig.begin_transition(TARGET, 1.0, now=0.0)

    assert transition.end_position == pytest.approx(END)
    assert rig.mode is CameraMode.TRANSITIONING
    assert rig.pose.focal_point == pytest.approx(TARGET)


def test_transition_samples_start_and_end(rig):
    rig.begin_transition(TARGET, 1.0, now=0.0)

    assert rig.sample(0.0) == pytest.approx(DEFAULT_POSITION)
    assert rig.sample(1000.0) == pytest.approx(END)
    assert rig.sample(2500.0) == pytest.approx(END)


def test_transition_progress_is_eased_and_monotonic(rig):
    start = np.array(DEFAULT_POSITION)
    rig.begin_transition(TARGET, 1.0, now=0.0)
    span = np.linalg.norm(END - start)

    fractions = []
    for t in range(0, 1001, 50):
        fraction = np.linalg.norm(rig.sample(float(t)) - start) / span
        assert fraction == pytest.approx(ease_out_cubic(t / 1000.0))
        fractions.append(fraction)

    assert fractions == sorted(fractions)
    # Ease-out: more than half the way after a quarter of the time
    assert fractions[5] > 0.5


def test_transition_returns_to_free_mode(rig):
    rig.begin_transition(TARGET, 1.0, now=0.0)

    assert rig.update(400.0)
    assert rig.is_transitioning

    rig.update(1000.0)
    assert rig.mode is CameraMode.FREE
    assert rig.transition is None
    assert rig.pose.position == pytest.approx(END)
    assert rig.pose.focal_point == pytest.approx(TARGET)
    assert rig.progress(1000.0) == 1.0


def test_restart_begins_from_current_position(rig):
    rig.begin_transition(TARGET, 1.0, now=0.0)
    midway = rig.sample(500.0)

    second = rig.begin_transition([0.0, 0.0, 20.0], 2.0, now=500.0)

    assert second.start_position == pytest.approx(midway)
    assert rig.sample(500.0) == pytest.approx(midway)
    assert second.end_position == pytest.approx([10.0, 5.0, 30.0])
    assert rig.progress(500.0) == 0.0


def test_camera_keeps_aiming_at_a_moving_target(rig):
    target = {"position": TARGET.copy()}
    rig.begin_transition(TARGET, 1.0, now=0.0, target_provider=lambda: target["position"])

    target["position"] = np.array([9.0, 0.0, -3.0])
    rig.update(300.0)

    assert rig.pose.focal_point == pytest.approx([9.0, 0.0, -3.0])


def test_input_is_ignored_while_transitioning(rig):
    rig.begin_transition(TARGET, 1.0, now=0.0)

    rig.rotate(1.0, 0.5)
    rig.zoom(3)
    rig.pan(40, 40, 600)

    assert not rig.has_pending_motion


def test_transition_discards_pending_input(rig):
    rig.rotate(1.0, 0.0)
    assert rig.has_pending_motion

    rig.begin_transition(TARGET, 1.0, now=0.0)
    rig.update(1000.0)

    assert not rig.has_pending_motion
    assert not rig.update(1016.0)


def test_reset_cancels_a_transition(rig):
    rig.begin_transition(TARGET, 1.0, now=0.0)
    rig.update(500.0)

    rig.reset()

    assert rig.mode is CameraMode.FREE
    assert rig.transition is None
    assert rig.pose.position == pytest.approx(DEFAULT_POSITION)
    assert rig.pose.focal_point == pytest.approx([0.0, 0.0, 0.0])


# ---- Free mode ----

def test_idle_rig_does_not_move(rig):
    assert not rig.update(0.0)
    assert rig.pose.position == pytest.approx(DEFAULT_POSITION)


def test_rotation_is_damped(rig):
    distance = rig.pose.distance
    rig.rotate(1.0, 0.0)

    assert rig.update(0.0)
    assert _azimuth(rig) == pytest.approx(0.05)
    assert rig.pose.distance == pytest.approx(distance)
    assert rig.has_pending_motion

    for _ in range(1000):
        rig.update(0.0)

    assert _azimuth(rig) == pytest.approx(1.0, abs=1e-4)
    assert not rig.has_pending_motion
    assert not rig.update(0.0)


def test_drag_of_full_height_is_one_turn(rig):
    rig.rotate_by_pixels(-600, 0, 600)
    for _ in range(1000):
        rig.update(0.0)
    assert angle_difference(_azimuth(rig), 0.0) < 1e-3


def test_polar_angle_stays_off_the_poles(rig):
    rig.rotate(0.0, -100.0)
    for _ in range(500):
        rig.update(0.0)

    offset = rig.pose.position - rig.pose.focal_point
    assert math.hypot(offset[0], offset[2]) > 0.0
    assert np.isfinite(rig.pose.position).all()
    right, _, _ = rig.pose.basis()
    assert np.linalg.norm(right) == pytest.approx(1.0)


@pytest.mark.parametrize("steps,expected", [(1000, 5.0), (-1000, 100.0)])
def test_zoom_is_clamped(rig, steps, expected):
    rig.zoom(steps)
    for _ in range(300):
        rig.update(0.0)
    assert rig.pose.distance == pytest.approx(expected)


def test_zoom_in_moves_closer(rig):
    distance = rig.pose.distance
    rig.zoom(1)
    rig.update(0.0)
    assert rig.pose.distance < distance


def test_pan_moves_the_focal_point(rig):
    distance = rig.pose.distance
    rig.pan(100, 0, 600)
    rig.update(0.0)

    # Dragging right slides the scene right, so the view moves left (-X here)
    assert rig.pose.focal_point[0] < 0.0
    assert rig.pose.distance == pytest.approx(distance)


def test_free_mode_orbits_the_focused_body_after_transition(rig):
    rig.begin_transition(TARGET, 1.0, now=0.0)
    rig.update(1000.0)

    rig.rotate(0.5, 0.0)
    rig.update(1016.0)

    assert rig.pose.focal_point == pytest.approx(TARGET)
    assert rig.pose.distance == pytest.approx(np.linalg.norm(END - TARGET))


def test_flight_to_small_body_respects_distance_bounds(rig):
    target = np.array([4.0, 0.0, 0.0])
    rig.begin_transition(target, 0.4, now=0.0)

    for t in range(0, 1001, 16):
        rig.update(float(t))
        assert rig.min_distance - 1e-9 <= rig.pose.distance <= rig.max_distance + 1e-9
    rig.update(1000.0)

    assert not rig.is_transitioning
    assert rig.pose.distance == pytest.approx(rig.min_distance)
    # Stopped on the ray toward the planned end pose
    direction = (rig.pose.position - target) / rig.pose.distance
    assert direction == pytest.approx(np.array([3.0, 1.5, 3.0]) / 4.5)

    settled = rig.pose.distance
    rig.rotate(1e-4, 0.0)
    rig.update(1016.0)
    assert abs(rig.pose.distance - settled) < 0.01


def test_custom_default_pose():
    pose = CameraPose(position=[0.0, 0.0, 50.0])
    rig = CameraRig(pose=pose)
    rig.rotate(1.0, 0.0)
    rig.update(0.0)
    rig.reset()
    assert rig.pose.position == pytest.approx([0.0, 0.0, 50.0])


@pytest.mark.parametrize("kwargs", [
    {"transition_duration": 0.0},
    {"damping_factor": 0.0},
    {"damping_factor": 1.5},
    {"min_distance": 50.0, "max_distance": 10.0},
])
def test_invalid_configuration(kwargs):
    with pytest.raises(ValueError):
        CameraRig(**kwargs)
