"""
World format adapter.

Converts between World objects and the plain JSON structure consumed by
renderers (the 3D scene and the 2D map).
"""

import json
from typing import Dict, List, Any

from ..types import World, Patch, Path, Point, Landmark, ScatterInstance


class WorldAdapter:
    """
    Converts World objects to and from renderer JSON.

    The JSON layout is:

        {
          "bounds": number,
          "patches":   [{"x", "z", "r", "color"}],
          "paths":     [{"width", "points": [{"x", "z"}, ...]}],
          "landmarks": [{"id", "name", "type", "x", "z"}],
          "trees":     [{"x", "z", "scale"}],
          "seed": int, "world_size": number
        }

    `dumps` is canonical (sorted keys, compact separators), so two runs with
    the same seed and configuration produce identical bytes.
    """

    def to_dict(self, world: World, include_scatter: bool = True) -> Dict[str, Any]:
        """
        Convert a World to renderer JSON.

        Args:
            world: World to convert
            include_scatter: Include the "trees" list

        Returns:
            JSON-serializable dictionary
        """

        data = {
            "bounds": world.bounds,
            "patches": [
                {"x": p.x, "z": p.z, "r": p.r, "color": p.color}
                for p in world.patches
            ],
            "paths": [
                {
                    "width": path.width,
                    "points": [{"x": pt.x, "z": pt.z} for pt in path.points]
                }
                for path in world.paths
            ],
            "landmarks": [
                {"id": lm.id, "name": lm.name, "type": lm.type, "x": lm.x, "z": lm.z}
                for lm in world.landmarks
            ],
            "seed": world.seed,
            "world_size": world.world_size
        }

        if include_scatter:
            data["trees"] = [
                {"x": t.x, "z": t.z, "scale": t.scale}
                for t in world.trees
            ]

        return data

    def from_dict(self, data: Dict[str, Any]) -> World:
        """
        Rebuild a World from renderer JSON.

        Raises:
            KeyError / TypeError when required fields are missing; run
            WorldValidator first for a full error list.
        """

        return World(
            bounds=data["bounds"],
            patches=tuple(
                Patch(x=p["x"], z=p["z"], r=p["r"], color=p["color"])
                for p in data.get("patches", [])
            ),
            paths=tuple(
                Path(
                    width=path["width"],
                    points=tuple(Point(x=pt["x"], z=pt["z"]) for pt in path["points"])
                )
                for path in data.get("paths", [])
            ),
            landmarks=tuple(
                Landmark(id=lm["id"], name=lm["name"], type=lm["type"], x=lm["x"], z=lm["z"])
                for lm in data.get("landmarks", [])
            ),
            trees=tuple(
                ScatterInstance(x=t["x"], z=t["z"], scale=t["scale"])
                for t in data.get("trees", [])
            ),
            seed=data.get("seed"),
            world_size=data.get("world_size")
        )

    def dumps(self, world: World, include_scatter: bool = True) -> str:
        """Canonical JSON text for a World."""
        return json.dumps(
            self.to_dict(world, include_scatter=include_scatter),
            sort_keys=True,
            separators=(',', ':'),
            allow_nan=False
        )

    def loads(self, text: str) -> World:
        return self.from_dict(json.loads(text))

    def path_polylines(self, world: World) -> List[List[tuple]]:
        """Paths as lists of (x, z) tuples, the form most drawing APIs take."""
        return [[(pt.x, pt.z) for pt in path.points] for path in world.paths]
