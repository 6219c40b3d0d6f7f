"""
Footpath carver.

Creates winding corridors with a seeded random walk.
"""

import math

from ...config import PathSpec
from ...procgen.rng import SeededRNG
from ...types import Path, Point
from .base import FeatureGenerator

# Heading perturbation is (next() - 0.5) * TURN_SCALE, i.e. [-0.6, 0.6) rad
TURN_SCALE = 1.2


class PathCarver(FeatureGenerator):
    """
    Generates footpaths as polylines.

    The walk keeps a position and a heading. The heading starts at a random
    angle and wobbles with probability `turn_chance` on every step.
    """

    def generate(self, rng: SeededRNG, spec: PathSpec) -> Path:
        """Carve the path described by a PathSpec."""

        return self.carve(
            rng,
            start_x=spec.start_x,
            start_z=spec.start_z,
            steps=int(spec.steps),
            step_len=spec.step_len,
            width=spec.width,
            turn_chance=spec.turn_chance
        )

    def carve(
        self,
        rng: SeededRNG,
        start_x: float,
        start_z: float,
        steps: int,
        step_len: float,
        width: float = 5.0,
        turn_chance: float = 0.12
    ) -> Path:
        """
        Walk `steps` steps from the start point.

        Args:
            rng: Shared random source
            start_x: Origin X
            start_z: Origin Z
            steps: Number of steps; 0 gives a single-point path
            step_len: Distance advanced per step
            width: Corridor width carried on the result
            turn_chance: Probability per step that the heading changes

        Returns:
            Path with steps + 1 points, origin first
        """

        x, z = start_x, start_z
        heading = rng.next() * math.pi * 2
        points = [Point(x, z)]

        for _ in range(steps):
            if rng.next() < turn_chance:
                heading += (rng.next() - 0.5) * TURN_SCALE
            x = x + math.cos(heading) * step_len
            z = z + math.sin(heading) * step_len
            points.append(Point(x, z))

        return Path(width=width, points=tuple(points))
