import math

import pytest

from orrery.controller.animator import OrbitAnimator
from orrery.model.catalog import PLANET_CATALOG
from orrery.model.scene_graph import NodeKind, SceneGraph, SceneGraphBuilder
from orrery.model.transforms import TWO_PI, angle_difference

from conftest import make_body, make_moon


def _build(catalog):
    graph = SceneGraph()
    return graph, SceneGraphBuilder(graph).build(catalog)


@pytest.mark.parametrize("ticks,multiplier", [(1, 1.0), (250, 1.0), (1000, 0.1), (777, 5.0)])
def test_angles_advance_linearly_with_ticks(ticks, multiplier):
    _, handles = _build(PLANET_CATALOG)
    animator = OrbitAnimator()

    for _ in range(ticks):
        animator.tick(handles, speed_multiplier=multiplier)

    for handle in handles:
        body = handle.definition
        expected_revolution = ticks * body.orbit_speed * multiplier
        expected_rotation = ticks * body.rotation_speed * multiplier
        assert angle_difference(handle.revolution_angle, expected_revolution) < 1e-9
        assert angle_difference(handle.rotation_angle, expected_rotation) < 1e-9


def test_hundred_ticks_reach_one_radian():
    _, handles = _build([make_body(distance=10.0, orbit_speed=0.01)])
    animator = OrbitAnimator()

    for _ in range(100):
        animator.tick(handles)

    assert handles[0].revolution_angle == pytest.approx(1.0, abs=1e-9)
    position = handles[0].world_position()
    assert position == pytest.approx([10.0 * math.cos(1.0), 0.0, -10.0 * math.sin(1.0)], abs=1e-9)


def test_angles_stay_wrapped():
    _, handles = _build([make_body(orbit_speed=1.0, rotation_speed=-0.3)])
    animator = OrbitAnimator()

    for _ in range(50):
        animator.tick(handles)
        assert 0.0 <= handles[0].revolution_angle < TWO_PI
        assert 0.0 <= handles[0].rotation_angle < TWO_PI


def test_update_order_does_not_matter():
    _, forward = _build(PLANET_CATALOG)
    _, backward = _build(PLANET_CATALOG)
    animator = OrbitAnimator()

    for _ in range(40):
        animator.tick(forward)
        animator.tick(list(reversed(backward)))

    for a, b in zip(forward, backward):
        assert a.revolution_angle == b.revolution_angle
        assert a.rotation_angle == b.rotation_angle


def test_moon_angles_advance():
    _, handles = _build([make_body(moon=make_moon(orbit_speed=0.05))])
    animator = OrbitAnimator()

    for _ in range(10):
        animator.tick(handles, speed_multiplier=2.0)

    assert handles[0].moon_revolution_angle == pytest.approx(10 * 0.05 * 2.0)
    assert handles[0].moon_rotation_angle == pytest.approx(10 * 0.01 * 2.0)


def test_spin_advances_a_single_node():
    graph = SceneGraph()
    star = graph.add_node(NodeKind.STAR, "Star")

    OrbitAnimator.spin(graph, star, 0.001, speed_multiplier=3.0)
    OrbitAnimator.spin(graph, star, 0.001, speed_multiplier=3.0)

    assert graph.node(star).angle == pytest.approx(0.006)
