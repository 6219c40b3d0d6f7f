"""
World to map coordinate projection.
"""

import math
import numbers
from typing import Optional, Tuple

DEFAULT_BOUNDS = 240.0
DEFAULT_PADDING = 34.0


class MapProjection:
    """
    Maps world (x, z) into a fixed display area with padding.

    World coordinates in [-bounds, bounds] fill the padded area. North
    (-z) is up. Points outside the bounds project outside the padded area;
    they are not clamped.
    """

    def __init__(
        self,
        bounds: Optional[float] = None,
        width: int = 900,
        height: int = 700,
        padding: float = DEFAULT_PADDING
    ):
        if (
            not isinstance(bounds, numbers.Real)
            or isinstance(bounds, bool)
            or not math.isfinite(bounds)
            or bounds <= 0
        ):
            bounds = DEFAULT_BOUNDS
        self.bounds = float(bounds)
        self.width = width
        self.height = height
        self.padding = padding

    def world_to_map(self, x: float, z: float) -> Tuple[float, float]:
        """Project a world point to pixel coordinates."""

        b = self.bounds
        pad = self.padding
        nx = (x + b) / (2 * b)
        nz = (z + b) / (2 * b)
        return (
            pad + nx * (self.width - pad * 2),
            pad + nz * (self.height - pad * 2)
        )

    def contains(self, x: float, z: float) -> bool:
        """Whether a world point lands inside the normalized map area."""
        return abs(x) <= self.bounds and abs(z) <= self.bounds
