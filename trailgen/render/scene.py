"""
Scene description builder for 3D renderers.

Turns a World into a flat list of primitive nodes (boxes, discs, cylinders,
cones, spheres, polyhedra) with positions, sizes and colors. No graphics
API is touched; a renderer maps each node kind to its own mesh type.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..types import World, Landmark, ScatterInstance, Path

Vec3 = Tuple[float, float, float]

GROUND_COLOR = 0x2F6B3A
PATH_COLOR = 0xA58B5A
TRUNK_COLOR = 0x5B3A22
LEAF_COLOR = 0x1F4F2C
STONE_COLOR = 0x6C717A
WATER_COLOR = 0x1D3D66
ROCK_COLOR = 0x61666F
DEAD_WOOD_COLOR = 0x3E2A1C

PATH_THICKNESS = 0.08
# Segments overlap slightly so joints don't show gaps
SEGMENT_OVERLAP = 0.5


@dataclass(frozen=True)
class SceneNode:
    kind: str
    name: str
    position: Vec3
    size: Tuple[float, ...]
    color: int
    rotation: Vec3 = (0.0, 0.0, 0.0)
    tags: Tuple[str, ...] = field(default=())


class SceneBuilder:
    """
    Builds renderer-agnostic scene nodes from a World.

    Node sizes follow the kind:
    - box: (width, height, length)
    - disc: (radius,)
    - cylinder: (radius_top, radius_bottom, height)
    - cone: (radius, height)
    - sphere / polyhedron: (radius,)
    """

    def build(self, world: World) -> List[SceneNode]:
        nodes = [self.ground(world)]
        nodes.extend(self.patches(world))
        for i, path in enumerate(world.paths):
            nodes.extend(self.path_segments(path, index=i))
        for tree in world.trees:
            nodes.extend(self.tree(tree))
        for lm in world.landmarks:
            nodes.extend(self.landmark(lm))
        return nodes

    def summary(self, nodes: List[SceneNode]) -> Dict[str, int]:
        """Node count per kind."""
        counts: Dict[str, int] = {}
        for node in nodes:
            counts[node.kind] = counts.get(node.kind, 0) + 1
        return counts

    def ground(self, world: World) -> SceneNode:
        size = world.world_size if world.world_size is not None else world.bounds * 2
        return SceneNode("plane", "ground", (0.0, 0.0, 0.0), (size, size), GROUND_COLOR)

    def patches(self, world: World) -> List[SceneNode]:
        return [
            SceneNode("disc", f"patch_{i}", (p.x, 0.01, p.z), (p.r,), p.color, tags=("patch",))
            for i, p in enumerate(world.patches)
        ]

    def path_segments(self, path: Path, index: int = 0) -> List[SceneNode]:
        """One flat box per step, centered between consecutive points."""

        nodes = []
        pts = path.points
        for j in range(1, len(pts)):
            a, b = pts[j - 1], pts[j]
            dx, dz = b.x - a.x, b.z - a.z
            length = math.hypot(dx, dz) + SEGMENT_OVERLAP
            nodes.append(SceneNode(
                "box",
                f"path_{index}_{j - 1}",
                ((a.x + b.x) / 2, PATH_THICKNESS / 2, (a.z + b.z) / 2),
                (path.width, PATH_THICKNESS, length),
                PATH_COLOR,
                rotation=(0.0, -math.atan2(dz, dx), 0.0),
                tags=("path",)
            ))
        return nodes

    def tree(self, tree: ScatterInstance) -> List[SceneNode]:
        """Trunk, canopy and a highlight blob, all scaled by the instance scale."""

        s, x, z = tree.scale, tree.x, tree.z
        return [
            SceneNode("cylinder", "trunk", (x, 0.7 * s, z), (0.18 * s, 0.22 * s, 1.4 * s), TRUNK_COLOR, tags=("tree",)),
            SceneNode("cone", "canopy", (x, 2.0 * s, z), (1.0 * s, 2.2 * s), LEAF_COLOR, tags=("tree",)),
            SceneNode("sphere", "canopy_highlight", (x - 0.35 * s, 2.2 * s, z - 0.25 * s), (0.45 * s,),
                      GROUND_COLOR, tags=("tree",)),
        ]

    def landmark(self, lm: Landmark) -> List[SceneNode]:
        builder = getattr(self, f"_landmark_{lm.type}", None)
        if builder is None:
            return [SceneNode("sphere", lm.id, (lm.x, 1.0, lm.z), (1.0,), STONE_COLOR, tags=("landmark",))]
        return builder(lm)

    def _landmark_stone(self, lm: Landmark) -> List[SceneNode]:
        """Ring of eleven standing stones."""

        nodes = []
        count, radius = 11, 7.5
        for i in range(count):
            ang = (i / count) * math.pi * 2
            h = 2.0 + (i % 3) * 0.5
            nodes.append(SceneNode(
                "cylinder",
                f"{lm.id}_{i}",
                (lm.x + math.cos(ang) * radius, h / 2, lm.z + math.sin(ang) * radius),
                (0.5, 0.7, h),
                STONE_COLOR,
                rotation=(0.0, ang * 0.7, 0.0),
                tags=("landmark", lm.id)
            ))
        return nodes

    def _landmark_water(self, lm: Landmark) -> List[SceneNode]:
        return [SceneNode("disc", lm.id, (lm.x, 0.02, lm.z), (11.0,), WATER_COLOR, tags=("landmark", lm.id))]

    def _landmark_rock(self, lm: Landmark) -> List[SceneNode]:
        return [SceneNode(
            "polyhedron", lm.id, (lm.x, 3.4, lm.z), (5.0,), ROCK_COLOR,
            rotation=(0.2, 0.6, -0.1), tags=("landmark", lm.id)
        )]

    def _landmark_tree(self, lm: Landmark) -> List[SceneNode]:
        """Leafless trunk with two branches."""

        tags = ("landmark", lm.id)
        return [
            SceneNode("cylinder", f"{lm.id}_trunk", (lm.x, 2.6, lm.z), (0.3, 0.5, 5.2), DEAD_WOOD_COLOR, tags=tags),
            SceneNode("cylinder", f"{lm.id}_branch_0", (lm.x + 0.8, 4.0, lm.z), (0.12, 0.2, 2.6),
                      DEAD_WOOD_COLOR, rotation=(0.0, 0.0, -0.9), tags=tags),
            SceneNode("cylinder", f"{lm.id}_branch_1", (lm.x - 0.7, 3.6, lm.z - 0.4), (0.10, 0.18, 2.2),
                      DEAD_WOOD_COLOR, rotation=(0.0, 0.0, 0.85), tags=tags),
        ]
