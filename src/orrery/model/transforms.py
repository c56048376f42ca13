"""
Homogeneous 4x4 transform helpers (Y-up, right-handed).
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

TWO_PI = 2.0 * math.pi


def translation(offset: npt.ArrayLike) -> npt.NDArray[np.float64]:
    m = np.eye(4)
    m[:3, 3] = np.asarray(offset, dtype=np.float64)
    return m


def rotation_x(angle: float) -> npt.NDArray[np.float64]:
    c, s = math.cos(angle), math.sin(angle)
    m = np.eye(4)
    m[1, 1], m[1, 2] = c, -s
    m[2, 1], m[2, 2] = s, c
    return m


def rotation_y(angle: float) -> npt.NDArray[np.float64]:
    c, s = math.cos(angle), math.sin(angle)
    m = np.eye(4)
    m[0, 0], m[0, 2] = c, s
    m[2, 0], m[2, 2] = -s, c
    return m


def compose(*matrices: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Left-to-right product, i.e. compose(A, B) applies B first."""
    result = np.eye(4)
    for m in matrices:
        result = result @ m
    return result


def wrap_angle(angle: float) -> float:
    """Wrap an angle into [0, 2*pi)."""
    wrapped = angle % TWO_PI
    # -1e-17 % 2pi rounds to exactly 2pi
    return 0.0 if wrapped >= TWO_PI else wrapped


def angle_difference(a: float, b: float) -> float:
    """Smallest absolute difference between two angles, in [0, pi]."""
    d = abs(wrap_angle(a) - wrap_angle(b))
    return min(d, TWO_PI - d)


def normalize(v: npt.ArrayLike) -> npt.NDArray[np.float64]:
    arr = np.asarray(v, dtype=np.float64)
    norm = np.linalg.norm(arr)
    if norm == 0.0:
        return np.zeros_like(arr)
    return arr / norm
