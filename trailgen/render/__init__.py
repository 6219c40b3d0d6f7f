"""
Renderer adapters.

Read-only consumers of world data: the top-down map (Pillow) and a scene
description for 3D renderers. Generation never imports from here.
"""

from .map_projection import MapProjection
from .map_image import MapRenderer, render_map
from .scene import SceneBuilder, SceneNode

__all__ = ["MapProjection", "MapRenderer", "render_map", "SceneBuilder", "SceneNode"]
