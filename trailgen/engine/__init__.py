"""
World generation engine.

Deterministic, renderer-agnostic generation of ground patches, footpaths,
tree scatter and landmarks.
"""

from .world_composer import WorldComposer, build_world
from .world_analyzer import WorldAnalyzer

__all__ = ["WorldComposer", "build_world", "WorldAnalyzer"]
