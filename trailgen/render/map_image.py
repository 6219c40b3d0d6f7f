"""
Top-down map renderer using Pillow.

Draws paths and landmarks from world data. The player is never drawn:
the map only knows about the world, not about who is looking at it.
"""

import io
import math
import numbers
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ..compatibility import WorldAdapter
from ..types import World
from .map_projection import MapProjection

Color = Tuple[int, int, int, int]

LANDMARK_COLORS: Dict[str, Color] = {
    "water": (120, 175, 255, 230),
    "stone": (210, 210, 210, 217),
    "rock": (175, 190, 205, 217),
    "tree": (205, 160, 120, 217),
}
DEFAULT_LANDMARK_COLOR: Color = (220, 220, 220, 217)

BACKGROUND: Color = (15, 15, 18, 255)
PATH_COLOR: Color = (195, 165, 115, 230)
BORDER_COLOR: Color = (255, 255, 255, 41)
ARROW_COLOR: Color = (255, 255, 255, 166)
LABEL_COLOR: Color = (255, 255, 255, 219)

TITLE = "Map (you are not shown)"
LEGEND = "Legend: paths (tan), water (blue), stone (gray), rock (slate), dead tree (brown)    North is up"


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _as_list(value: Any) -> list:
    return value if isinstance(value, (list, tuple)) else []


class MapRenderer:
    """
    Renders a world's paths and landmarks to an image.

    Accepts either a World or its JSON dictionary. Elements with missing
    or non-numeric fields are skipped rather than failing the whole map.
    """

    def __init__(
        self,
        width: int = 900,
        height: int = 700,
        scale: float = 1.0,
        noise_seed: int = 0
    ):
        self.width = width
        self.height = height
        self.scale = scale
        self.noise_seed = noise_seed
        self.adapter = WorldAdapter()
        self.font = ImageFont.load_default()

    def render(self, world: Union[World, Dict[str, Any]]) -> Image.Image:
        """
        Draw the map.

        Args:
            world: World or world JSON dictionary

        Returns:
            RGBA image of size (width, height)
        """

        data = self._as_dict(world)
        projection = MapProjection(data.get("bounds"), self.width, self.height)

        image = Image.new("RGBA", (self.width, self.height), BACKGROUND)
        draw = ImageDraw.Draw(image, "RGBA")

        self._draw_background(draw)
        self._draw_north_arrow(draw)
        self._draw_paths(draw, projection, _as_list(data.get("paths")))
        self._draw_landmarks(draw, projection, _as_list(data.get("landmarks")))
        self._draw_text(draw)

        return image

    def save(self, world: Union[World, Dict[str, Any]], output_path: Union[str, Path]) -> Path:
        output_path = Path(output_path)
        self.render(world).save(output_path, format="PNG")
        return output_path

    def to_png_bytes(self, world: Union[World, Dict[str, Any]]) -> bytes:
        buffer = io.BytesIO()
        self.render(world).save(buffer, format="PNG")
        return buffer.getvalue()

    def _as_dict(self, world: Union[World, Dict[str, Any]]) -> Dict[str, Any]:
        if isinstance(world, World):
            return self.adapter.to_dict(world, include_scatter=False)
        return world if isinstance(world, dict) else {}

    def _draw_background(self, draw: ImageDraw.ImageDraw) -> None:
        """Faint parchment noise and a border."""

        s = self.scale
        rng = np.random.default_rng(self.noise_seed)
        xs = rng.integers(0, self.width, size=2200)
        ys = rng.integers(0, self.height, size=2200)
        draw.point(list(zip(xs.tolist(), ys.tolist())), fill=(255, 255, 255, 5))

        inset = 16 * s
        draw.rectangle(
            [inset, inset, self.width - inset, self.height - inset],
            outline=BORDER_COLOR,
            width=max(1, int(2 * s))
        )

    def _draw_north_arrow(self, draw: ImageDraw.ImageDraw) -> None:

        s = self.scale
        cx, cy = self.width - 70 * s, 60 * s
        draw.line([(cx, cy + 28 * s), (cx, cy - 18 * s)], fill=ARROW_COLOR, width=max(1, int(2 * s)))
        draw.polygon(
            [(cx, cy - 22 * s), (cx - 7 * s, cy - 10 * s), (cx + 7 * s, cy - 10 * s)],
            fill=ARROW_COLOR
        )
        draw.text((cx + 10 * s, cy - 8 * s), "N", fill=ARROW_COLOR, font=self.font)

    def _draw_paths(
        self,
        draw: ImageDraw.ImageDraw,
        projection: MapProjection,
        paths: List[Dict[str, Any]]
    ) -> int:
        """Draw each path as a polyline; returns the number drawn."""

        drawn = 0
        for path in paths:
            if not isinstance(path, dict):
                continue
            width = path.get("width")
            if width is None:
                width = 5
            elif not _is_number(width):
                continue
            pts = self._project_points(projection, _as_list(path.get("points")))
            if len(pts) < 2:
                continue
            width = (width or 5) * 0.9
            draw.line(pts, fill=PATH_COLOR, width=max(1, int(width * 0.7 * self.scale)), joint="curve")
            drawn += 1
        return drawn

    def _draw_landmarks(
        self,
        draw: ImageDraw.ImageDraw,
        projection: MapProjection,
        landmarks: List[Dict[str, Any]]
    ) -> int:
        """Draw a dot and a label per landmark; returns the number drawn."""

        s = self.scale
        radius = 6 * s
        drawn = 0
        for lm in landmarks:
            if not isinstance(lm, dict) or not _is_number(lm.get("x")) or not _is_number(lm.get("z")):
                continue
            px, py = projection.world_to_map(lm["x"], lm["z"])
            color = LANDMARK_COLORS.get(lm.get("type"), DEFAULT_LANDMARK_COLOR)
            draw.ellipse(
                [px - radius, py - radius, px + radius, py + radius],
                fill=color,
                outline=(0, 0, 0, 153),
                width=max(1, int(2 * s))
            )
            draw.text((px + 10 * s, py - 8 * s), str(lm.get("name", "")), fill=LABEL_COLOR, font=self.font)
            drawn += 1
        return drawn

    def _draw_text(self, draw: ImageDraw.ImageDraw) -> None:
        s = self.scale
        draw.text((24 * s, 22 * s), TITLE, fill=LABEL_COLOR, font=self.font)
        draw.text((24 * s, self.height - 30 * s), LEGEND, fill=LABEL_COLOR, font=self.font)

    @staticmethod
    def _project_points(projection: MapProjection, points: List[Any]) -> List[Tuple[float, float]]:
        projected = []
        for pt in points:
            if isinstance(pt, dict) and _is_number(pt.get("x")) and _is_number(pt.get("z")):
                projected.append(projection.world_to_map(pt["x"], pt["z"]))
        return projected


def render_map(world: Union[World, Dict[str, Any]], output_path: Optional[Union[str, Path]] = None, **kwargs):
    """Render a map; saves it when output_path is given, else returns the image."""

    renderer = MapRenderer(**kwargs)
    if output_path is not None:
        return renderer.save(world, output_path)
    return renderer.render(world)
