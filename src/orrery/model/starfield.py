"""
Background star point cloud.
"""
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def generate_starfield(
    count: int = 10000,
    spread: float = 2000.0,
    seed: Optional[int] = None,
) -> npt.NDArray[np.float64]:
    """
    Scatter `count` points uniformly in a cube of edge `spread` centred on the origin.

    Args:
        count: Number of stars.
        spread: Edge length of the cube in world units.
        seed: Optional seed for a reproducible sky.

    Returns:
        (count, 3) array of positions.
    """
    if count < 0:
        raise ValueError(f"Star count must be non-negative, got {count}.")

    rng = np.random.default_rng(seed)
    half = spread / 2.0
    return rng.uniform(-half, half, size=(count, 3))
