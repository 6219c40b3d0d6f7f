"""
Landmark registry.

Named points of interest used for navigation and on the map. Pure data:
nothing here touches the random source.
"""

from typing import Dict, Iterable, Optional, Tuple

from ...procgen.rng import SeededRNG
from ...types import Landmark, LANDMARK_TYPES
from .base import FeatureGenerator

DEFAULT_LANDMARKS = (
    Landmark(id="stone_ring", name="Stone Ring", type="stone", x=-120, z=-80),
    Landmark(id="pond", name="Pond", type="water", x=110, z=90),
    Landmark(id="watch_rock", name="Watch Rock", type="rock", x=-140, z=120),
    Landmark(id="dead_tree", name="Dead Tree", type="tree", x=150, z=-110),
)


class LandmarkRegistry(FeatureGenerator):
    """
    Ordered set of landmarks with unique ids.

    Registration order is preserved and is the order renderers see.
    """

    consumes_rng = False

    def __init__(self, landmarks: Optional[Iterable[Landmark]] = None):
        self._landmarks: Dict[str, Landmark] = {}
        for lm in DEFAULT_LANDMARKS if landmarks is None else landmarks:
            self.register(lm)

    def register(self, landmark: Landmark) -> None:
        """Add a landmark; ids must be unique and types known."""

        if landmark.id in self._landmarks:
            raise ValueError(f"Duplicate landmark id: {landmark.id}")
        if landmark.type not in LANDMARK_TYPES:
            raise ValueError(
                f"Unknown landmark type '{landmark.type}' (expected one of {', '.join(LANDMARK_TYPES)})"
            )
        self._landmarks[landmark.id] = landmark

    def get(self, landmark_id: str) -> Optional[Landmark]:
        return self._landmarks.get(landmark_id)

    def landmarks(self) -> Tuple[Landmark, ...]:
        return tuple(self._landmarks.values())

    def generate(self, rng: Optional[SeededRNG] = None) -> Tuple[Landmark, ...]:
        """Return the landmarks; `rng` is accepted for interface parity and ignored."""
        return self.landmarks()

    def __len__(self) -> int:
        return len(self._landmarks)

    def __contains__(self, landmark_id: str) -> bool:
        return landmark_id in self._landmarks
