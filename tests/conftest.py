from __future__ import annotations

import pytest

from orrery.controller.camera_rig import CameraRig
from orrery.model.catalog import Appearance, CelestialBodyDefinition, MoonDefinition, PLANET_CATALOG
from orrery.model.scene_graph import SceneGraph, SceneGraphBuilder
from orrery.model.state import SelectionState


def make_body(
    name: str = "Test",
    radius: float = 1.0,
    distance: float = 10.0,
    rotation_speed: float = 0.01,
    orbit_speed: float = 0.01,
    axial_tilt: float = 0.0,
    moon: MoonDefinition | None = None,
) -> CelestialBodyDefinition:
    return CelestialBodyDefinition(
        name=name,
        radius=radius,
        distance=distance,
        rotation_speed=rotation_speed,
        orbit_speed=orbit_speed,
        appearance=Appearance(texture=f"{name.lower()}.jpg"),
        axial_tilt=axial_tilt,
        moon=moon,
    )


def make_moon(distance: float = 2.0, orbit_speed: float = 0.05) -> MoonDefinition:
    return MoonDefinition(
        name="TestMoon",
        radius=0.27,
        distance=distance,
        rotation_speed=0.01,
        orbit_speed=orbit_speed,
        appearance=Appearance(texture="testmoon.jpg"),
    )


@pytest.fixture
def solar_system():
    """Graph and handles for the full planet catalog."""
    graph = SceneGraph()
    handles = SceneGraphBuilder(graph).build(PLANET_CATALOG)
    return graph, handles


@pytest.fixture
def rig() -> CameraRig:
    return CameraRig()


@pytest.fixture
def selection() -> SelectionState:
    return SelectionState()
