import numpy as np
import pytest

from orrery.model.starfield import generate_starfield
from orrery.model.state import GLOW_RANGE, SPEED_RANGE, AnimationState, SelectionState
from orrery.model.transforms import TWO_PI, angle_difference, wrap_angle


def test_animation_defaults():
    state = AnimationState()
    assert state.show_orbit_paths is True
    assert state.speed_multiplier == 1.0
    assert state.glow_intensity == 1.2


@pytest.mark.parametrize("value", [SPEED_RANGE[0], 2.5, SPEED_RANGE[1]])
def test_speed_multiplier_accepts_range(value):
    state = AnimationState()
    state.set_speed_multiplier(value)
    assert state.speed_multiplier == value


@pytest.mark.parametrize("value", [0.0, 0.09, 5.01, -1.0])
def test_speed_multiplier_rejects_out_of_range(value):
    state = AnimationState()
    with pytest.raises(ValueError):
        state.set_speed_multiplier(value)
    assert state.speed_multiplier == 1.0


@pytest.mark.parametrize("value", [-0.1, 3.1])
def test_glow_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        AnimationState().set_glow_intensity(value)


def test_glow_accepts_zero():
    state = AnimationState()
    state.set_glow_intensity(GLOW_RANGE[0])
    assert state.glow_intensity == 0.0


def test_reset_restores_defaults():
    state = AnimationState()
    state.set_speed_multiplier(4.0)
    state.set_glow_intensity(0.5)
    state.set_show_orbit_paths(False)

    state.reset()

    assert state == AnimationState()


def test_hover_change_is_reported_once():
    selection = SelectionState()
    body = object()

    assert selection.set_hovered(body)
    assert not selection.set_hovered(body)
    assert selection.set_hovered(None)
    assert not selection.set_hovered(None)


# ---- Transforms ----

@pytest.mark.parametrize("angle,expected", [
    (0.0, 0.0),
    (TWO_PI, 0.0),
    (TWO_PI + 0.5, 0.5),
    (-0.5, TWO_PI - 0.5),
    (-1e-17, 0.0),
])
def test_wrap_angle(angle, expected):
    wrapped = wrap_angle(angle)
    assert 0.0 <= wrapped < TWO_PI
    assert wrapped == pytest.approx(expected)


def test_angle_difference_wraps_around():
    assert angle_difference(0.1, TWO_PI - 0.1) == pytest.approx(0.2)
    assert angle_difference(1.0, 1.0 + 3 * TWO_PI) == pytest.approx(0.0, abs=1e-12)


# ---- Starfield ----

def test_starfield_shape_and_bounds():
    stars = generate_starfield(count=500, spread=100.0, seed=1)
    assert stars.shape == (500, 3)
    assert np.all(np.abs(stars) <= 50.0)


def test_starfield_seed_is_reproducible():
    assert np.array_equal(generate_starfield(50, seed=7), generate_starfield(50, seed=7))
    assert not np.array_equal(generate_starfield(50, seed=7), generate_starfield(50, seed=8))


def test_empty_starfield():
    assert generate_starfield(count=0).shape == (0, 3)


def test_negative_star_count_is_rejected():
    with pytest.raises(ValueError):
        generate_starfield(count=-1)
