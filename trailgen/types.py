"""
World data structures shared by generation and every renderer.

All records are frozen and hold tuples, so a built World can be handed to
any number of consumers without copying.
"""

from dataclasses import dataclass, field
from typing import Tuple, Optional

LANDMARK_TYPES = ("stone", "water", "rock", "tree")


@dataclass(frozen=True)
class Point:
    x: float
    z: float


@dataclass(frozen=True)
class Patch:
    """Ground cover disc. `color` is a 24-bit RGB integer."""
    x: float
    z: float
    r: float
    color: int


@dataclass(frozen=True)
class Path:
    """
    Walkable corridor as a polyline.

    Points are in walk order, the first one is the path origin. Consumers
    rebuild the geometry by joining consecutive points.
    """
    width: float
    points: Tuple[Point, ...]

    @property
    def origin(self) -> Point:
        return self.points[0]

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class Landmark:
    id: str
    name: str
    type: str
    x: float
    z: float


@dataclass(frozen=True)
class ScatterInstance:
    """One placed decorative entity (a tree)."""
    x: float
    z: float
    scale: float


@dataclass(frozen=True)
class World:
    """
    Renderer-agnostic output of world generation.

    `bounds` is the half extent used to normalize coordinates for the map.
    It is independent of the patch and scatter spread, so content can lie
    outside of it.
    """
    bounds: float
    patches: Tuple[Patch, ...] = ()
    paths: Tuple[Path, ...] = ()
    landmarks: Tuple[Landmark, ...] = ()
    trees: Tuple[ScatterInstance, ...] = ()
    seed: Optional[int] = None
    world_size: Optional[float] = field(default=None)

    def landmark(self, landmark_id: str) -> Optional[Landmark]:
        """Look up a landmark by id."""
        for lm in self.landmarks:
            if lm.id == landmark_id:
                return lm
        return None
