"""
World feature generators.

Each generator produces one kind of world data from the shared random
source (landmarks excepted, they are fixed data).
"""

from .base import FeatureGenerator
from .patches import PatchGenerator
from .paths import PathCarver
from .scatter import ScatterPlacer
from .landmarks import LandmarkRegistry, DEFAULT_LANDMARKS

__all__ = [
    "FeatureGenerator", "PatchGenerator", "PathCarver",
    "ScatterPlacer", "LandmarkRegistry", "DEFAULT_LANDMARKS"
]
