"""
World composition engine.

Orchestrates the feature generators into one immutable World. The draw
order is fixed and part of the output contract:

    patches -> paths (configured order) -> scatter -> landmarks (no draws)

Changing that order changes every downstream value for the same seed.
"""

from typing import Any, Optional

from ..config import WorldConfig, WorldConfigError, validate_config
from ..procgen.rng import SeededRNG
from ..types import World
from .feature_generators import (
    PatchGenerator, PathCarver, ScatterPlacer, LandmarkRegistry
)

_UNSET = object()


class WorldComposer:
    """
    Builds worlds from a seed and a WorldConfig.

    Generation is a single synchronous pass: the configuration is validated
    first, then one SeededRNG is created and handed to each generator in
    turn. Either a complete World comes back or WorldConfigError is raised
    before anything is drawn.
    """

    def __init__(self, config: Optional[WorldConfig] = None):
        self.config = config if config is not None else WorldConfig()

        self.feature_generators = {
            "patches": PatchGenerator(),
            "paths": PathCarver(),
            "scatter": ScatterPlacer(),
        }

    def validate(self) -> None:
        errors = validate_config(self.config)
        if errors:
            raise WorldConfigError(errors)

    def generate(self, seed: Any = _UNSET, include_trees: bool = True) -> World:
        """
        Generate a world.

        Args:
            seed: Overrides config.seed when given (string or integer;
                invalid seeds fall back to the default seed)
            include_trees: Run the scatter pass; when False the RNG
                stream for everything before it is unchanged

        Returns:
            Immutable World
        """

        self.validate()
        cfg = self.config
        landmark_registry = LandmarkRegistry(cfg.landmarks)

        rng = SeededRNG(cfg.seed if seed is _UNSET else seed)

        patches = self.feature_generators["patches"].generate(
            rng,
            count=int(cfg.patch_count),
            spread=cfg.patch_spread,
            radius=cfg.patch_radius,
            color=int(cfg.patch_color)
        )

        carver = self.feature_generators["paths"]
        paths = tuple(carver.generate(rng, spec) for spec in cfg.paths)

        trees = ()
        if include_trees:
            trees = self.feature_generators["scatter"].generate(
                rng,
                count=int(cfg.tree_count),
                spread=cfg.tree_spread,
                scale=cfg.tree_scale,
                corridors=cfg.corridors,
                thin_chance=cfg.thin_chance
            )

        landmarks = landmark_registry.generate()

        return World(
            bounds=cfg.bounds,
            patches=patches,
            paths=paths,
            landmarks=landmarks,
            trees=trees,
            seed=rng.seed,
            world_size=cfg.world_size
        )


def build_world(seed: Any = _UNSET, config: Optional[WorldConfig] = None) -> World:
    """Convenience wrapper: one world from a seed and an optional config (config.seed when no seed is given)."""
    return WorldComposer(config).generate(seed=seed)
