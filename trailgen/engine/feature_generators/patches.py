"""
Ground cover patch generator.
"""

from typing import Tuple

from ...procgen.rng import SeededRNG
from ...types import Patch
from .base import FeatureGenerator, centered


class PatchGenerator(FeatureGenerator):
    """Scatters subtle ground-cover discs over a square area."""

    def generate(
        self,
        rng: SeededRNG,
        count: int = 70,
        spread: float = 350.0,
        radius: Tuple[float, float] = (6.0, 14.0),
        color: int = 0x2B5F34
    ) -> Tuple[Patch, ...]:
        """
        Draw `count` patches. Each patch consumes three values: x, z, radius.

        `radius` is (base, span): r = base + next() * span.
        """

        r_base, r_span = radius
        patches = []
        for _ in range(count):
            x = centered(rng, spread)
            z = centered(rng, spread)
            r = r_base + rng.next() * r_span
            patches.append(Patch(x=x, z=z, r=r, color=color))

        return tuple(patches)
