"""
World dataset generator.

Builds worlds for a list of seeds and writes them as renderer JSON,
optionally with a top-down map image per world, plus a manifest with
per-world analysis.
"""

import json
import argparse
import re
import sys
import time
from pathlib import Path
from typing import Dict, List, Any, Optional, Sequence

import numpy as np
from tqdm import tqdm

from ..config import WorldConfig, WorldConfigError, load_config
from ..engine import WorldComposer, WorldAnalyzer
from ..compatibility import WorldAdapter, WorldValidator
from ..procgen.rng import parse_seed_text


def seed_slug(seed: Any) -> str:
    """File-name safe form of a seed."""
    slug = re.sub(r"[^A-Za-z0-9_.-]+", "_", str(seed)).strip("_")
    return slug or "seed"


class WorldDatasetGenerator:
    """
    Generates and stores worlds for many seeds.

    Every world is validated against the renderer JSON contract before it
    is written.
    """

    def __init__(
        self,
        output_dir: str,
        config: Optional[WorldConfig] = None,
        include_trees: bool = True,
        write_maps: bool = False
    ):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.config = config if config is not None else WorldConfig()
        self.include_trees = include_trees
        self.write_maps = write_maps

        self.composer = WorldComposer(self.config)
        self.analyzer = WorldAnalyzer(self.config.corridors)
        self.adapter = WorldAdapter()
        self.validator = WorldValidator()

        self.stats = {
            "total_generated": 0,
            "total_valid": 0,
            "validation_failures": 0,
            "generation_times": [],
            "tree_counts": []
        }

    def generate_world_file(self, seed: Any) -> Dict[str, Any]:
        """
        Generate one world and write it to disk.

        Returns:
            Manifest entry for the world
        """

        start = time.time()
        world = self.composer.generate(seed=seed, include_trees=self.include_trees)
        elapsed = time.time() - start

        self.stats["total_generated"] += 1
        self.stats["generation_times"].append(elapsed)
        self.stats["tree_counts"].append(len(world.trees))

        data = self.adapter.to_dict(world, include_scatter=self.include_trees)
        is_valid, errors = self.validator.validate(data)
        if not is_valid:
            self.stats["validation_failures"] += 1
            return {"seed": seed, "valid": False, "errors": errors}

        self.stats["total_valid"] += 1
        slug = seed_slug(seed)
        world_path = self.output_dir / f"world_{slug}.json"
        world_path.write_text(self.adapter.dumps(world, include_scatter=self.include_trees), encoding="utf-8")

        entry = {
            "seed": seed,
            "resolved_seed": world.seed,
            "valid": True,
            "world_file": world_path.name,
            "analysis": self.analyzer.analyze(world)
        }

        if self.write_maps:
            from ..render import MapRenderer
            map_path = self.output_dir / f"map_{slug}.png"
            MapRenderer().save(world, map_path)
            entry["map_file"] = map_path.name

        return entry

    def generate_dataset(self, seeds: Sequence[Any]) -> str:
        """
        Generate all worlds and write the manifest.

        Args:
            seeds: Seeds to generate, in order

        Returns:
            Path to the manifest file
        """

        print(f"Generating {len(seeds)} worlds to {self.output_dir}")

        entries = []
        for seed in tqdm(seeds, desc="Generating worlds"):
            entries.append(self.generate_world_file(seed))

        manifest = {
            "dataset_info": {
                "total_worlds": self.stats["total_valid"],
                "attempted_worlds": len(seeds),
                "output_dir": str(self.output_dir),
                "include_trees": self.include_trees,
                "config": self.config.to_dict(),
                "generation_stats": self._finalize_stats()
            },
            "worlds": entries
        }

        manifest_path = self.output_dir / "worlds_manifest.json"
        with open(manifest_path, 'w') as f:
            json.dump(manifest, f, indent=2, default=str)

        print(f"Successfully generated {self.stats['total_valid']} valid worlds out of {len(seeds)} attempts")
        print(f"Manifest: {manifest_path}")

        return str(manifest_path)

    def _finalize_stats(self) -> Dict[str, Any]:
        """Summarize generation statistics."""

        if not self.stats["generation_times"]:
            return dict(self.stats)

        return {
            "total_generated": self.stats["total_generated"],
            "total_valid": self.stats["total_valid"],
            "validation_failures": self.stats["validation_failures"],
            "avg_generation_time": float(np.mean(self.stats["generation_times"])),
            "avg_tree_count": float(np.mean(self.stats["tree_counts"])),
            "min_tree_count": int(np.min(self.stats["tree_counts"])),
            "max_tree_count": int(np.max(self.stats["tree_counts"]))
        }


def resolve_seeds(seeds: Optional[List[str]], count: Optional[int]) -> List[Any]:
    """Seeds from the command line; numeric strings become integers."""

    if seeds:
        return [parse_seed_text(s) for s in seeds]
    if count:
        return [f"default-{i}" for i in range(count)]
    return ["default"]


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for world generation."""

    parser = argparse.ArgumentParser(description="Generate trailgen worlds as renderer JSON")
    parser.add_argument("--seed", action="append", dest="seeds",
                        help="World seed (string or integer); repeat for several worlds")
    parser.add_argument("--count", type=int, default=None,
                        help="Generate seeds default-0 .. default-N-1 when no --seed is given")
    parser.add_argument("--output", type=str, required=True, help="Output directory")
    parser.add_argument("--config", type=str, default=None, help="JSON configuration file")
    parser.add_argument("--map", action="store_true", help="Also write a top-down map PNG per world")
    parser.add_argument("--no-trees", action="store_true", help="Skip tree scatter")

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else WorldConfig()
        generator = WorldDatasetGenerator(
            output_dir=args.output,
            config=config,
            include_trees=not args.no_trees,
            write_maps=args.map
        )
        generator.composer.validate()
    except (WorldConfigError, OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}")
        return 2

    generator.generate_dataset(resolve_seeds(args.seeds, args.count))
    return 0


if __name__ == "__main__":
    sys.exit(main())
