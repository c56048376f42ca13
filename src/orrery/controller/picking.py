"""
Pointer Picking
===============
Maps pointer positions to the planet under the cursor.

Rays are cast from the camera through the pointer in normalized device
coordinates (x right, y up, both in [-1, 1]) and tested against the planet
bodies as spheres. Only the planets' own body nodes take part: the star,
moons, rings and orbit paths can never be hovered or focused.
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Protocol, Sequence, TYPE_CHECKING

import numpy as np

from orrery.model.transforms import normalize

if TYPE_CHECKING:
    import numpy.typing as npt

    from orrery.controller.camera_rig import CameraPose, CameraRig
    from orrery.model.scene_graph import BodyHandle
    from orrery.model.state import SelectionState

logger = logging.getLogger(__name__)

# Hover label sits this many pixels right of and below the pointer
LABEL_OFFSET_PX = 10


class HoverLabel(Protocol):
    def show_label(self, text: str, x: int, y: int) -> None: ...
    def move_label(self, x: int, y: int) -> None: ...
    def hide_label(self) -> None: ...


def pixel_to_ndc(x: float, y: float, width: float, height: float) -> tuple[float, float]:
    """Convert viewport pixels (origin top-left) to normalized device coordinates."""
    width = max(1.0, float(width))
    height = max(1.0, float(height))
    return (x / width) * 2.0 - 1.0, -(y / height) * 2.0 + 1.0


def ray_from_camera(
    ndc: tuple[float, float],
    pose: CameraPose,
    fov_deg: float,
    aspect: float,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Build a picking ray for a perspective camera.

    Args:
        ndc: Pointer position in normalized device coordinates.
        pose: Camera pose.
        fov_deg: Vertical field of view.
        aspect: Viewport width / height.

    Returns:
        (origin, unit direction)
    """
    right, up, forward = pose.basis()
    tan_half = math.tan(math.radians(fov_deg) / 2.0)
    direction = forward + right * (ndc[0] * tan_half * aspect) + up * (ndc[1] * tan_half)
    return pose.position.copy(), normalize(direction)


def intersect_sphere(
    origin: npt.NDArray[np.float64],
    direction: npt.NDArray[np.float64],
    center: npt.NDArray[np.float64],
    radius: float,
) -> Optional[float]:
    """
    Distance along a unit-direction ray to the first hit on a sphere.

    Returns None if the ray misses or the sphere is entirely behind the origin.
    """
    oc = origin - center
    b = float(np.dot(oc, direction))
    c = float(np.dot(oc, oc)) - radius * radius
    discriminant = b * b - c
    if discriminant < 0.0:
        return None

    root = math.sqrt(discriminant)
    near = -b - root
    if near >= 0.0:
        return near
    far = -b + root
    # Origin inside the sphere
    return far if far >= 0.0 else None


class PickingService:
    def __init__(
        self,
        handles: Sequence[BodyHandle],
        selection: SelectionState,
        rig: CameraRig,
        label: Optional[HoverLabel] = None,
    ) -> None:
        self.handles = list(handles)
        self.selection = selection
        self.rig = rig
        self.label = label

    def pick(
        self,
        ndc: tuple[float, float],
        pose: CameraPose,
        aspect: float,
    ) -> Optional[BodyHandle]:
        """Nearest planet under the pointer, or None."""
        origin, direction = ray_from_camera(ndc, pose, self.rig.fov_deg, aspect)

        nearest: Optional[BodyHandle] = None
        nearest_distance = math.inf
        for handle in self.handles:
            hit = intersect_sphere(origin, direction, handle.world_position(), handle.definition.radius)
            if hit is not None and hit < nearest_distance:
                nearest = handle
                nearest_distance = hit
        return nearest

    def on_pointer_move(
        self,
        ndc: tuple[float, float],
        pose: CameraPose,
        aspect: float,
        pixel: tuple[int, int],
    ) -> Optional[BodyHandle]:
        hit = self.pick(ndc, pose, aspect)
        label_x, label_y = pixel[0] + LABEL_OFFSET_PX, pixel[1] + LABEL_OFFSET_PX

        if self.selection.set_hovered(hit):
            logger.debug(f"Hovered: {hit.name if hit else None}")
            if self.label is not None:
                if hit is None:
                    self.label.hide_label()
                else:
                    self.label.show_label(hit.name, label_x, label_y)
        elif hit is not None and self.label is not None:
            self.label.move_label(label_x, label_y)
        return hit

    def on_pointer_click(
        self,
        ndc: tuple[float, float],
        pose: CameraPose,
        aspect: float,
        now: float,
    ) -> Optional[BodyHandle]:
        """Focus the clicked planet. A miss keeps the current focus."""
        hit = self.pick(ndc, pose, aspect)
        if hit is None:
            return None

        self.selection.set_focused(hit)
        self.rig.begin_transition(
            hit.world_position(),
            hit.definition.radius,
            now,
            target_provider=hit.world_position,
        )
        return hit

    def on_pointer_leave(self) -> None:
        """Pointer left the viewport: nothing is hovered any more."""
        if self.selection.set_hovered(None) and self.label is not None:
            self.label.hide_label()
