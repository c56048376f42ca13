"""
Orbit Animator
==============
Advances revolution and rotation angles once per frame.

Speeds are angle increments per nominal frame, so the apparent speed follows
the frame rate. There is no coupling between bodies; update order is
irrelevant.
"""
from __future__ import annotations

import logging
from typing import Sequence

from orrery.model.scene_graph import BodyHandle, SceneGraph
from orrery.model.transforms import wrap_angle

logger = logging.getLogger(__name__)


class OrbitAnimator:
    def tick(
        self,
        handles: Sequence[BodyHandle],
        dt_units: float = 1.0,
        speed_multiplier: float = 1.0,
    ) -> None:
        """Advance every body (and moon) by one frame."""
        step = dt_units * speed_multiplier

        for handle in handles:
            body = handle.definition
            handle.revolution_angle = wrap_angle(handle.revolution_angle + body.orbit_speed * step)
            handle.rotation_angle = wrap_angle(handle.rotation_angle + body.rotation_speed * step)

            if body.moon is not None and handle.has_moon:
                moon = body.moon
                handle.moon_revolution_angle = wrap_angle(handle.moon_revolution_angle + moon.orbit_speed * step)
                handle.moon_rotation_angle = wrap_angle(handle.moon_rotation_angle + moon.rotation_speed * step)

    @staticmethod
    def spin(
        graph: SceneGraph,
        index: int,
        rate: float,
        speed_multiplier: float = 1.0,
        dt_units: float = 1.0,
    ) -> None:
        """Advance a single node's angle, e.g. the star's spin."""
        node = graph.node(index)
        node.angle = wrap_angle(node.angle + rate * speed_multiplier * dt_units)
