"""
Viewer State (Data Model)
=========================
Process-wide state shared between the control panel, the pointer handlers
and the frame loop.

Why is this file needed?
------------------------
1. State Management: The values the user can adjust live in one place and are
   passed explicitly to whoever reads them.
2. Decoupling: The control panel writes AnimationState, the pointer handlers
   write SelectionState; the frame loop and the view only read.

Classes:
    AnimationState: Speed multiplier, glow intensity, orbit path visibility.
    SelectionState: Hovered and focused bodies.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from orrery.model.scene_graph import BodyHandle

logger = logging.getLogger(__name__)

SPEED_RANGE: tuple[float, float] = (0.1, 5.0)
GLOW_RANGE: tuple[float, float] = (0.0, 3.0)


@dataclass
class AnimationState:
    show_orbit_paths: bool = True
    speed_multiplier: float = 1.0
    glow_intensity: float = 1.2

    def set_speed_multiplier(self, value: float) -> None:
        self.speed_multiplier = _checked("speed multiplier", value, SPEED_RANGE)
        logger.debug(f"Speed multiplier set to {self.speed_multiplier}")

    def set_glow_intensity(self, value: float) -> None:
        self.glow_intensity = _checked("glow intensity", value, GLOW_RANGE)
        logger.debug(f"Glow intensity set to {self.glow_intensity}")

    def set_show_orbit_paths(self, visible: bool) -> None:
        self.show_orbit_paths = bool(visible)
        logger.debug(f"Orbit paths visible: {self.show_orbit_paths}")

    def reset(self) -> None:
        """Restore defaults."""
        self.show_orbit_paths = True
        self.speed_multiplier = 1.0
        self.glow_intensity = 1.2


@dataclass
class SelectionState:
    hovered: Optional[BodyHandle] = None
    focused: Optional[BodyHandle] = None

    def set_hovered(self, handle: Optional[BodyHandle]) -> bool:
        """Update the hovered body. Returns True if it changed."""
        if handle is self.hovered:
            return False
        self.hovered = handle
        return True

    def set_focused(self, handle: BodyHandle) -> None:
        self.focused = handle
        logger.info(f"Focused on {handle.name}")


def _checked(label: str, value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    value = float(value)
    if not low <= value <= high:
        raise ValueError(f"The {label} must be within [{low}, {high}], got {value}.")
    return value
