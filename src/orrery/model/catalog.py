"""
Celestial Body Catalog
======================
Static table of the bodies shown in the viewer.

Distances and sizes are visual units, not astronomical ones. Speeds are the
angle (radians) advanced per nominal frame at speed multiplier 1.

Classes:
    Appearance: Texture reference plus placeholder/glow colours.
    RingDefinition: Annulus attached to a planet.
    MoonDefinition: A single moon orbiting a planet.
    CelestialBodyDefinition: One planet.
    StarDefinition: The central star.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a catalog entry cannot produce a sane scene."""


@dataclass(frozen=True)
class Appearance:
    texture: str  # logical texture name, resolved against the textures directory
    glow_tint: int = 0x000000  # emissive tint, 0xRRGGBB
    base_color: str = "white"  # shown until the texture resolves

    @property
    def glow_rgb(self) -> tuple[float, float, float]:
        """Glow tint as an (r, g, b) tuple in [0, 1]."""
        return (
            ((self.glow_tint >> 16) & 0xFF) / 255.0,
            ((self.glow_tint >> 8) & 0xFF) / 255.0,
            (self.glow_tint & 0xFF) / 255.0,
        )


@dataclass(frozen=True)
class RingDefinition:
    """Flat annulus spanning [radius + inner_offset, radius + outer_offset]."""
    texture: str = "saturn_rings.jpg"
    inner_offset: float = 0.5
    outer_offset: float = 2.0
    opacity: float = 0.9
    base_color: str = "#C8B58A"


@dataclass(frozen=True)
class MoonDefinition:
    name: str
    radius: float
    distance: float
    rotation_speed: float
    orbit_speed: float
    appearance: Appearance
    axial_tilt: float = 0.0  # degrees


@dataclass(frozen=True)
class CelestialBodyDefinition:
    name: str
    radius: float
    distance: float
    rotation_speed: float
    orbit_speed: float
    appearance: Appearance
    axial_tilt: float = 0.0  # degrees
    moon: Optional[MoonDefinition] = None
    rings: Optional[RingDefinition] = None

    @property
    def has_moon(self) -> bool:
        return self.moon is not None

    @property
    def has_rings(self) -> bool:
        return self.rings is not None


@dataclass(frozen=True)
class StarDefinition:
    name: str
    radius: float
    rotation_speed: float
    appearance: Appearance
    glow_radius: float


# ------------------------------------------------------------------------------
# Solar System
# ------------------------------------------------------------------------------

SUN = StarDefinition(
    name="Sun",
    radius=3.0,
    rotation_speed=0.001,
    appearance=Appearance(texture="sun.jpg", glow_tint=0xFFFF00, base_color="#FFD54A"),
    glow_radius=3.5,
)

PLANET_CATALOG: tuple[CelestialBodyDefinition, ...] = (
    CelestialBodyDefinition(
        name="Mercury",
        radius=0.4,
        distance=4.0,
        rotation_speed=0.004,
        orbit_speed=0.04,
        appearance=Appearance(texture="mercury.jpg", glow_tint=0x555555, base_color="#9E9E9E"),
        axial_tilt=0.034,
    ),
    CelestialBodyDefinition(
        name="Venus",
        radius=0.9,
        distance=7.0,
        rotation_speed=0.002,
        orbit_speed=0.015,
        appearance=Appearance(texture="venus.jpg", glow_tint=0x553311, base_color="#E3C07B"),
        axial_tilt=3.86,
    ),
    CelestialBodyDefinition(
        name="Earth",
        radius=1.0,
        distance=10.0,
        rotation_speed=0.01,
        orbit_speed=0.01,
        appearance=Appearance(texture="earth.jpg", glow_tint=0x113355, base_color="#3B7DD8"),
        axial_tilt=23.44,
        moon=MoonDefinition(
            name="Moon",
            radius=0.27,
            distance=2.0,
            rotation_speed=0.01,
            orbit_speed=0.05,
            appearance=Appearance(texture="moon.jpg", glow_tint=0x222222, base_color="#BDBDBD"),
        ),
    ),
    CelestialBodyDefinition(
        name="Mars",
        radius=0.5,
        distance=14.0,
        rotation_speed=0.008,
        orbit_speed=0.008,
        appearance=Appearance(texture="mars.jpg", glow_tint=0x551111, base_color="#C1440E"),
        axial_tilt=25.19,
    ),
    CelestialBodyDefinition(
        name="Jupiter",
        radius=2.5,
        distance=20.0,
        rotation_speed=0.04,
        orbit_speed=0.002,
        appearance=Appearance(texture="jupiter.jpg", glow_tint=0x554433, base_color="#D8B48A"),
        axial_tilt=3.13,
    ),
    CelestialBodyDefinition(
        name="Saturn",
        radius=2.2,
        distance=26.0,
        rotation_speed=0.038,
        orbit_speed=0.0009,
        appearance=Appearance(texture="saturn.jpg", glow_tint=0x665522, base_color="#E8D29A"),
        axial_tilt=26.73,
        rings=RingDefinition(),
    ),
    CelestialBodyDefinition(
        name="Uranus",
        radius=1.8,
        distance=32.0,
        rotation_speed=0.03,
        orbit_speed=0.0004,
        appearance=Appearance(texture="uranus.jpg", glow_tint=0x115566, base_color="#9FE3E8"),
        axial_tilt=97.77,
    ),
    CelestialBodyDefinition(
        name="Neptune",
        radius=1.7,
        distance=36.0,
        rotation_speed=0.032,
        orbit_speed=0.0001,
        appearance=Appearance(texture="neptune.jpg", glow_tint=0x1133AA, base_color="#3F54BA"),
        axial_tilt=28.32,
    ),
)


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------

def validate_catalog(catalog: Sequence[CelestialBodyDefinition]) -> None:
    """
    Check a catalog before building a scene from it.

    Raises:
        CatalogError: On a non-positive radius/distance or a duplicate name.
    """
    seen: set[str] = set()
    previous_distance = 0.0

    for body in catalog:
        if body.name in seen:
            raise CatalogError(f"Duplicate body name '{body.name}'.")
        seen.add(body.name)

        _check_positive(body.name, "radius", body.radius)
        _check_positive(body.name, "distance", body.distance)
        if body.moon is not None:
            _check_positive(body.moon.name, "radius", body.moon.radius)
            _check_positive(body.moon.name, "distance", body.moon.distance)

        # Layout only: overlapping orbits still render
        if body.distance <= previous_distance:
            logger.warning(
                f"'{body.name}' at distance {body.distance} does not lie outside "
                f"the previous orbit ({previous_distance})."
            )
        previous_distance = body.distance


def _check_positive(name: str, field_name: str, value: float) -> None:
    if value <= 0.0:
        raise CatalogError(f"'{name}' has non-positive {field_name} ({value}).")


def texture_manifest(
    catalog: Sequence[CelestialBodyDefinition],
    star: Optional[StarDefinition],
    textures_dir: str,
) -> dict[str, str]:
    """
    Map every logical texture name used by the scene to a file path.

    Each name appears once, in the order it is first met (star, then each
    planet followed by its moon and rings).
    """
    names: list[str] = []
    if star is not None:
        names.append(star.appearance.texture)
    for body in catalog:
        names.append(body.appearance.texture)
        if body.moon is not None:
            names.append(body.moon.appearance.texture)
        if body.rings is not None:
            names.append(body.rings.texture)

    return {name: os.path.join(textures_dir, name) for name in dict.fromkeys(names)}
