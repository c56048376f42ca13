"""
Frame Loop
==========
One tick per display refresh: animate orbits, move the camera, render.

The loop is driven from outside (a QTimer in the view). Pointer handlers run
between ticks on the same thread, so no locking is needed.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from orrery.controller.animator import OrbitAnimator
from orrery.controller.camera_rig import CameraRig
from orrery.model.scene_graph import BodyHandle, SceneGraph
from orrery.model.state import AnimationState

logger = logging.getLogger(__name__)


class FrameLoop:
    def __init__(
        self,
        graph: SceneGraph,
        handles: Sequence[BodyHandle],
        animator: OrbitAnimator,
        rig: CameraRig,
        animation: AnimationState,
        render: Callable[[], None],
        sun_index: Optional[int] = None,
        sun_rotation_speed: float = 0.0,
        dt_units: float = 1.0,
    ) -> None:
        self.graph = graph
        self.handles = list(handles)
        self.animator = animator
        self.rig = rig
        self.animation = animation
        self.render = render
        self.sun_index = sun_index
        self.sun_rotation_speed = sun_rotation_speed
        self.dt_units = dt_units
        self.frame_count = 0

    def tick(self, now: float) -> None:
        speed = self.animation.speed_multiplier
        self.animator.tick(self.handles, self.dt_units, speed)
        if self.sun_index is not None:
            self.animator.spin(self.graph, self.sun_index, self.sun_rotation_speed, speed, self.dt_units)

        self.rig.update(now)
        self.render()
        self.frame_count += 1
