"""
Camera Rig
==========
Owns the camera pose and its two modes.

FREE
    Orbit-style control around a focal point. Drag, pan and wheel input is
    accumulated into pending deltas; every frame applies a fraction
    (`damping_factor`) of what is pending and keeps the rest, so motion
    glides to a stop after input ends. Distance to the focal point stays
    within [min_distance, max_distance].

TRANSITIONING
    Entered by `begin_transition`. The position is interpolated from the pose
    at the moment of the request toward an offset from the target body, with
    an ease-out cubic curve, while the camera keeps aiming at the (moving)
    body. The distance bounds apply during the flight too, so small bodies
    are approached only to min_distance. Falls back to FREE once progress
    reaches 1. A new request restarts from wherever the camera currently is.

`reset()` snaps back to the default pose from either mode.

All times are milliseconds from any monotonic clock.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import math
from typing import Callable, Optional, TYPE_CHECKING

import numpy as np

from orrery.model.transforms import normalize

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

DEFAULT_POSITION = (0.0, 20.0, 30.0)
DEFAULT_FOCAL_POINT = (0.0, 0.0, 0.0)
DEFAULT_UP = (0.0, 1.0, 0.0)
DEFAULT_FOV_DEG = 75.0

# Keeps the camera off the poles so the up vector stays well defined
POLAR_EPSILON = 1e-6
# Pending deltas below this are dropped
SETTLE_THRESHOLD = 1e-6


def ease_out_cubic(progress: float) -> float:
    return 1.0 - (1.0 - progress) ** 3


@dataclass
class CameraPose:
    position: npt.NDArray[np.float64] = field(default_factory=lambda: np.array(DEFAULT_POSITION))
    focal_point: npt.NDArray[np.float64] = field(default_factory=lambda: np.array(DEFAULT_FOCAL_POINT))
    up: npt.NDArray[np.float64] = field(default_factory=lambda: np.array(DEFAULT_UP))

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=np.float64)
        self.focal_point = np.asarray(self.focal_point, dtype=np.float64)
        self.up = np.asarray(self.up, dtype=np.float64)

    def copy(self) -> CameraPose:
        return CameraPose(self.position.copy(), self.focal_point.copy(), self.up.copy())

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.position - self.focal_point))

    @property
    def forward(self) -> npt.NDArray[np.float64]:
        return normalize(self.focal_point - self.position)

    def basis(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """(right, up, forward) unit vectors of the view."""
        forward = self.forward
        right = normalize(np.cross(forward, self.up))
        true_up = np.cross(right, forward)
        return right, true_up, forward


class CameraMode(Enum):
    FREE = "free"
    TRANSITIONING = "transitioning"


@dataclass
class CameraTransition:
    start_position: npt.NDArray[np.float64]
    end_position: npt.NDArray[np.float64]
    target_position: npt.NDArray[np.float64]  # aim point at request time
    start_time: float
    duration: float
    target_provider: Optional[Callable[[], npt.NDArray[np.float64]]] = None

    def progress(self, now: float) -> float:
        return min(max((now - self.start_time) / self.duration, 0.0), 1.0)

    def position_at(self, now: float) -> npt.NDArray[np.float64]:
        eased = ease_out_cubic(self.progress(now))
        return self.start_position + (self.end_position - self.start_position) * eased

    def aim_point(self) -> npt.NDArray[np.float64]:
        if self.target_provider is None:
            return self.target_position.copy()
        return np.asarray(self.target_provider(), dtype=np.float64)


class CameraRig:
    def __init__(
        self,
        pose: Optional[CameraPose] = None,
        fov_deg: float = DEFAULT_FOV_DEG,
        min_distance: float = 5.0,
        max_distance: float = 100.0,
        damping_factor: float = 0.05,
        zoom_speed: float = 2.0,
        rotate_speed: float = 1.0,
        transition_duration: float = 1000.0,
    ) -> None:
        if transition_duration <= 0:
            raise ValueError(f"Transition duration must be positive, got {transition_duration}.")
        if not 0.0 < damping_factor <= 1.0:
            raise ValueError(f"Damping factor must be within (0, 1], got {damping_factor}.")
        if min_distance > max_distance:
            raise ValueError(f"min_distance ({min_distance}) exceeds max_distance ({max_distance}).")

        self._default_pose = (pose or CameraPose()).copy()
        self.pose = self._default_pose.copy()
        self.fov_deg = fov_deg
        self.min_distance = min_distance
        self.max_distance = max_distance
        self.damping_factor = damping_factor
        self.zoom_speed = zoom_speed
        self.rotate_speed = rotate_speed
        self.transition_duration = transition_duration

        self.mode = CameraMode.FREE
        self.transition: Optional[CameraTransition] = None

        # Pending user input, consumed gradually by update()
        self._d_azimuth = 0.0
        self._d_polar = 0.0
        self._d_log_distance = 0.0
        self._d_pan = np.zeros(3)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def is_transitioning(self) -> bool:
        return self.mode is CameraMode.TRANSITIONING

    @property
    def has_pending_motion(self) -> bool:
        return (
            abs(self._d_azimuth) > SETTLE_THRESHOLD
            or abs(self._d_polar) > SETTLE_THRESHOLD
            or abs(self._d_log_distance) > SETTLE_THRESHOLD
            or float(np.linalg.norm(self._d_pan)) > SETTLE_THRESHOLD
        )

    def rotate(self, d_azimuth: float, d_polar: float) -> None:
        """Queue a rotation about the focal point (radians)."""
        if self.is_transitioning:
            return
        self._d_azimuth += d_azimuth
        self._d_polar += d_polar

    def rotate_by_pixels(self, dx: float, dy: float, viewport_height: float) -> None:
        """Queue a rotation from a pointer drag; a full viewport height is one turn."""
        height = max(1.0, float(viewport_height))
        self.rotate(
            -2.0 * math.pi * dx / height * self.rotate_speed,
            -2.0 * math.pi * dy / height * self.rotate_speed,
        )

    def zoom(self, steps: float) -> None:
        """Queue a zoom; positive steps move toward the focal point."""
        if self.is_transitioning:
            return
        self._d_log_distance += steps * self.zoom_speed * math.log(0.95)

    def pan(self, dx: float, dy: float, viewport_height: float) -> None:
        """Queue a pan from a pointer drag in pixels (screen y grows downward)."""
        if self.is_transitioning:
            return
        height = max(1.0, float(viewport_height))
        visible_half_height = self.pose.distance * math.tan(math.radians(self.fov_deg) / 2.0)
        right, up, _ = self.pose.basis()
        self._d_pan += -right * (2.0 * dx * visible_half_height / height)
        self._d_pan += up * (2.0 * dy * visible_half_height / height)

    def begin_transition(
        self,
        target_position: npt.ArrayLike,
        radius: float,
        now: float,
        target_provider: Optional[Callable[[], npt.NDArray[np.float64]]] = None,
    ) -> CameraTransition:
        """
        Fly toward a body at `target_position` of the given radius.

        The flight ends at target + (5r, 2.5r, 5r).
        """
        if self.is_transitioning:
            # Start from where the running flight has got to
            self._advance_transition(now)

        target = np.asarray(target_position, dtype=np.float64)
        distance = radius * 5.0
        end = target + np.array([distance, distance / 2.0, distance])

        self.transition = CameraTransition(
            start_position=self.pose.position.copy(),
            end_position=end,
            target_position=target.copy(),
            start_time=now,
            duration=self.transition_duration,
            target_provider=target_provider,
        )
        self.mode = CameraMode.TRANSITIONING
        self._clear_pending()
        self.pose.focal_point = self.transition.aim_point()

        logger.info(f"Camera transition started toward {np.round(end, 3).tolist()}")
        return self.transition

    def sample(self, now: float) -> npt.NDArray[np.float64]:
        """Camera position at time `now` without changing state."""
        if self.transition is None:
            return self.pose.position.copy()
        return self.transition.position_at(now)

    def progress(self, now: float) -> float:
        if self.transition is None:
            return 1.0
        return self.transition.progress(now)

    def update(self, now: float) -> bool:
        """Advance one frame. Returns True if the pose changed."""
        if self.is_transitioning:
            self._advance_transition(now)
            return True
        return self._apply_damping()

    def reset(self) -> None:
        """Return to the default pose aimed at the origin, cancelling any flight."""
        self.pose = self._default_pose.copy()
        self.mode = CameraMode.FREE
        self.transition = None
        self._clear_pending()
        logger.info("Camera reset to default pose.")

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _advance_transition(self, now: float) -> None:
        transition = self.transition
        focal = transition.aim_point()
        self.pose.focal_point = focal
        self.pose.position = self._clamp_distance(transition.position_at(now), focal)
        if transition.progress(now) >= 1.0:
            self.mode = CameraMode.FREE
            self.transition = None
            logger.debug("Camera transition finished.")

    def _clamp_distance(
        self,
        position: npt.NDArray[np.float64],
        focal: npt.NDArray[np.float64],
    ) -> npt.NDArray[np.float64]:
        """Slide `position` along its ray from `focal` into [min_distance, max_distance]."""
        offset = position - focal
        distance = float(np.linalg.norm(offset))
        if distance == 0.0:
            return position
        clamped = min(max(distance, self.min_distance), self.max_distance)
        return focal + offset * (clamped / distance)

    def _apply_damping(self) -> bool:
        if not self.has_pending_motion:
            self._clear_pending()
            return False

        f = self.damping_factor
        focal = self.pose.focal_point + self._d_pan * f
        offset = self.pose.position - self.pose.focal_point

        radius = float(np.linalg.norm(offset))
        azimuth = math.atan2(offset[0], offset[2])
        polar = math.acos(min(max(offset[1] / radius, -1.0), 1.0)) if radius > 0 else math.pi / 2

        azimuth += self._d_azimuth * f
        polar = min(max(polar + self._d_polar * f, POLAR_EPSILON), math.pi - POLAR_EPSILON)
        radius = min(max(radius * math.exp(self._d_log_distance * f), self.min_distance), self.max_distance)

        sin_polar = math.sin(polar)
        offset = radius * np.array([
            sin_polar * math.sin(azimuth),
            math.cos(polar),
            sin_polar * math.cos(azimuth),
        ])
        self.pose.focal_point = focal
        self.pose.position = focal + offset

        decay = 1.0 - f
        self._d_azimuth *= decay
        self._d_polar *= decay
        self._d_log_distance *= decay
        self._d_pan *= decay
        return True

    def _clear_pending(self) -> None:
        self._d_azimuth = 0.0
        self._d_polar = 0.0
        self._d_log_distance = 0.0
        self._d_pan = np.zeros(3)
