"""
Scatter placer for decorative entities (trees).

Distributes instances uniformly over a square while thinning them inside
corridors so paths stay readable.
"""

from typing import Sequence, Tuple

from ...config import Corridor
from ...procgen.rng import SeededRNG
from ...types import ScatterInstance
from .base import FeatureGenerator, centered


class ScatterPlacer(FeatureGenerator):
    """
    Places a variable number of scaled instances.

    The returned count is an expected value, not exactly `count`: every
    candidate that lands inside a corridor survives only with probability
    1 - thin_chance. The skip decision still draws from the RNG, so the
    content for a given seed never shifts.
    """

    def generate(
        self,
        rng: SeededRNG,
        count: int = 650,
        spread: float = 360.0,
        scale: Tuple[float, float] = (0.75, 0.9),
        corridors: Sequence[Corridor] = (),
        thin_chance: float = 0.75
    ) -> Tuple[ScatterInstance, ...]:
        """
        Draw `count` candidates and keep the ones that survive thinning.

        Args:
            rng: Shared random source
            count: Number of candidates
            spread: Edge length of the square, centered on the origin
            scale: (base, span); the size scale is base + next() * span
            corridors: Exclusion zones, tested inclusively
            thin_chance: Probability of dropping a candidate inside a corridor

        Returns:
            Placed instances in candidate order
        """

        scale_base, scale_span = scale
        instances = []

        for _ in range(count):
            x = centered(rng, spread)
            z = centered(rng, spread)
            if self.in_corridor(x, z, corridors) and rng.next() < thin_chance:
                continue
            size = scale_base + rng.next() * scale_span
            instances.append(ScatterInstance(x=x, z=z, scale=size))

        return tuple(instances)

    @staticmethod
    def in_corridor(x: float, z: float, corridors: Sequence[Corridor]) -> bool:
        for corridor in corridors:
            if corridor.contains(x, z):
                return True
        return False
