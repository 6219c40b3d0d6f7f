"""
World analysis for generated content.

Summarizes paths, patches and scatter, and reports how much content falls
outside the map normalization bounds.
"""

import numpy as np
from typing import Dict, Any, Sequence
from scipy.spatial import cKDTree

from ..config import Corridor, DEFAULT_CORRIDORS
from ..types import World, Path


class WorldAnalyzer:
    """
    Analyzes worlds for validation and reporting.

    Used by the dataset generator manifest and by the HTTP stats endpoint.
    """

    def __init__(self, corridors: Sequence[Corridor] = DEFAULT_CORRIDORS):
        self.corridors = tuple(corridors)

    def analyze(self, world: World) -> Dict[str, Any]:
        """
        Comprehensive world analysis.

        Args:
            world: World to analyze

        Returns:
            Dictionary with path, patch, scatter and bounds statistics
        """

        return {
            "path_stats": self._analyze_paths(world.paths),
            "patch_stats": self._analyze_patches(world),
            "scatter_stats": self._analyze_scatter(world),
            "bounds_report": self._analyze_bounds(world),
            "analysis_metadata": {
                "seed": world.seed,
                "landmark_count": len(world.landmarks),
                "analysis_version": "1.0"
            }
        }

    def _analyze_paths(self, paths: Sequence[Path]) -> list:
        """Per path point count, polyline length and bounding box."""

        stats = []
        for path in paths:
            pts = self._path_array(path)
            if len(pts) == 0:
                stats.append({"points": 0, "width": float(path.width), "length": 0.0})
                continue
            if len(pts) > 1:
                length = float(np.sum(np.linalg.norm(np.diff(pts, axis=0), axis=1)))
            else:
                length = 0.0
            stats.append({
                "points": int(len(pts)),
                "width": float(path.width),
                "length": length,
                "min_x": float(pts[:, 0].min()),
                "max_x": float(pts[:, 0].max()),
                "min_z": float(pts[:, 1].min()),
                "max_z": float(pts[:, 1].max())
            })
        return stats

    def _analyze_patches(self, world: World) -> Dict[str, Any]:

        if not world.patches:
            return {"count": 0, "radius_min": 0.0, "radius_mean": 0.0, "radius_max": 0.0}

        radii = np.array([p.r for p in world.patches])
        return {
            "count": int(len(radii)),
            "radius_min": float(radii.min()),
            "radius_mean": float(radii.mean()),
            "radius_max": float(radii.max())
        }

    def _analyze_scatter(self, world: World) -> Dict[str, Any]:
        """Tree count, scale, corridor occupancy and clearance from paths."""

        if not world.trees:
            return {
                "count": 0,
                "scale_mean": 0.0,
                "corridor_fraction": 0.0,
                "path_clearance_min": None,
                "path_clearance_mean": None
            }

        trees = np.array([(t.x, t.z) for t in world.trees])
        scales = np.array([t.scale for t in world.trees])

        in_corridor = np.zeros(len(trees), dtype=bool)
        for c in self.corridors:
            d2 = (trees[:, 0] - c.x) ** 2 + (trees[:, 1] - c.z) ** 2
            in_corridor |= d2 <= c.r * c.r

        clearance_min = None
        clearance_mean = None
        path_points = self._all_path_points(world.paths)
        if len(path_points):
            distances, _ = cKDTree(path_points).query(trees)
            clearance_min = float(distances.min())
            clearance_mean = float(distances.mean())

        return {
            "count": int(len(trees)),
            "scale_mean": float(scales.mean()),
            "corridor_fraction": float(in_corridor.mean()),
            "path_clearance_min": clearance_min,
            "path_clearance_mean": clearance_mean
        }

    def _analyze_bounds(self, world: World) -> Dict[str, Any]:
        """
        Content outside [-bounds, bounds].

        The map normalizes by `bounds` while patches and trees use their own
        spread, so this is expected to be non-zero for the default config.
        """

        b = float(world.bounds)
        report = {"bounds": b}
        extent = 0.0

        groups = {
            "path_points": self._all_path_points(world.paths),
            "landmarks": np.array([(lm.x, lm.z) for lm in world.landmarks], dtype=float).reshape(-1, 2),
            "trees": np.array([(t.x, t.z) for t in world.trees], dtype=float).reshape(-1, 2),
            "patches": np.array([(p.x, p.z) for p in world.patches], dtype=float).reshape(-1, 2),
        }

        outside_total = 0
        for name, pts in groups.items():
            if len(pts) == 0:
                report[f"{name}_outside"] = 0
                report[f"{name}_outside_fraction"] = 0.0
                continue
            outside = np.any(np.abs(pts) > b, axis=1)
            report[f"{name}_outside"] = int(outside.sum())
            report[f"{name}_outside_fraction"] = float(outside.mean())
            outside_total += int(outside.sum())
            extent = max(extent, float(np.abs(pts).max()))

        report["content_extent"] = extent
        report["mismatch"] = outside_total > 0
        return report

    @staticmethod
    def _path_array(path: Path) -> np.ndarray:
        return np.array([(p.x, p.z) for p in path.points], dtype=float).reshape(-1, 2)

    def _all_path_points(self, paths: Sequence[Path]) -> np.ndarray:
        arrays = [self._path_array(p) for p in paths if p.points]
        if not arrays:
            return np.empty((0, 2))
        return np.vstack(arrays)
