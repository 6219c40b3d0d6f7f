"""
Trailgen: deterministic procedural outdoor worlds.

A seed and a configuration produce an immutable world description
(ground patches, carved paths, tree scatter and named landmarks) that
3D scene builders and top-down map renderers consume.
"""

__version__ = "0.1.0"

from .types import World, Patch, Path, Point, Landmark, ScatterInstance
from .config import WorldConfig, WorldConfigError, load_config
from .procgen import SeededRNG, hash_string_to_uint32
from .engine import WorldComposer, build_world

__all__ = [
    "__version__",
    "World",
    "Patch",
    "Path",
    "Point",
    "Landmark",
    "ScatterInstance",
    "WorldConfig",
    "WorldConfigError",
    "load_config",
    "SeededRNG",
    "hash_string_to_uint32",
    "WorldComposer",
    "build_world",
]
