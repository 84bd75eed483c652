"""PNG rendering of homing vector fields.

Draws the world window with obstacles as black discs, one arrow per grid
cell pointing along its homing vector, a cross at home and the average
angular error as a caption.

Usage:
    from snapshot_homing.visualize import FieldRenderer
    FieldRenderer().render(vector_field, world, "homing.png")
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from snapshot_homing.core.geometry import Vec2
from snapshot_homing.modules.obstacles import CircleObstacle
from snapshot_homing.scenarios.field import CellStatus, VectorField
from snapshot_homing.schemas.world import World
from snapshot_homing.utils.config import (
    RENDER_BACKGROUND,
    RENDER_PLOT_BOX,
    RENDER_SIZE,
    RENDER_WORLD_WINDOW,
)
from snapshot_homing.utils.logging import get_logger

logger = logging.getLogger(__name__)

# Arrow outline in pixels, pointing along +x, tail at -17 and tip at +17
ARROW_SHAPE = np.array(
    [(-17, -1), (6, -1), (5, -3), (17, 0), (5, 3), (6, 1), (-17, 1)],
    dtype=np.float64,
)

BLACK = (0, 0, 0)
GREY = (150, 150, 150)


def rotate_arrow(angle: float, shape: np.ndarray = ARROW_SHAPE) -> np.ndarray:
    """Rotate the arrow outline to ``angle`` in screen coordinates.

    Screen y grows downward, so the rotated y component is negated.
    """
    c, s = math.cos(angle), math.sin(angle)
    rotation = np.array([[c, -s], [s, c]])
    rotated = shape @ rotation.T
    rotated[:, 1] *= -1.0
    return rotated


class FieldRenderer:
    """Rasterizes a vector field with Pillow."""

    def __init__(
        self,
        size: tuple[int, int] = RENDER_SIZE,
        plot_box: tuple[int, int, int, int] = RENDER_PLOT_BOX,
        window: tuple[float, float] = RENDER_WORLD_WINDOW,
        background: tuple[int, int, int] = RENDER_BACKGROUND,
    ) -> None:
        """Initialize the renderer.

        Args:
            size: Canvas (width, height) in pixels.
            plot_box: (left, top, right, bottom) pixel box of the plot.
            window: (min, max) world coordinates shown on both axes.
            background: Canvas fill color.
        """
        self._size = size
        self._plot_box = plot_box
        self._window = window
        self._background = background

    # -------------------------------------------------------------------------
    # Coordinates
    # -------------------------------------------------------------------------

    @property
    def scale(self) -> float:
        """Pixels per world unit along x."""
        left, _, right, _ = self._plot_box
        lo, hi = self._window
        return (right - left) / (hi - lo)

    def to_pixel(self, x: float, y: float) -> tuple[float, float]:
        """World coordinates to pixel coordinates (y up in the world)."""
        left, top, right, bottom = self._plot_box
        lo, hi = self._window
        px = left + (x - lo) / (hi - lo) * (right - left)
        py = top + (hi - y) / (hi - lo) * (bottom - top)
        return (px, py)

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def _draw_obstacles(self, draw: ImageDraw.ImageDraw, world: World) -> None:
        for obstacle in world.obstacles:
            if not isinstance(obstacle, CircleObstacle):
                logger.debug("No renderer for %s", type(obstacle).__name__)
                continue
            cx, cy = self.to_pixel(obstacle.center.x, obstacle.center.y)
            r = obstacle.radius * self.scale
            draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=BLACK)

    def _draw_arrow(self, draw: ImageDraw.ImageDraw, x: float, y: float, vector: Vec2) -> None:
        cx, cy = self.to_pixel(x, y)
        outline = rotate_arrow(math.atan2(vector.y, vector.x)) + np.array([cx, cy])
        draw.polygon([tuple(p) for p in outline.tolist()], fill=BLACK)

    def _draw_cross(self, draw: ImageDraw.ImageDraw, x: float, y: float, size: int = 10) -> None:
        cx, cy = self.to_pixel(x, y)
        draw.line((cx - size, cy - size, cx + size, cy + size), fill=BLACK, width=3)
        draw.line((cx - size, cy + size, cx + size, cy - size), fill=BLACK, width=3)

    def _draw_marker(self, draw: ImageDraw.ImageDraw, x: float, y: float, r: float = 3.0) -> None:
        cx, cy = self.to_pixel(x, y)
        draw.ellipse((cx - r, cy - r, cx + r, cy + r), outline=GREY)

    def draw(self, vector_field: VectorField, world: World) -> Image.Image:
        """Render the field into an in-memory RGB image."""
        canvas = Image.new("RGB", self._size, self._background)
        draw = ImageDraw.Draw(canvas)

        self._draw_obstacles(draw, world)

        for cell in vector_field.cells:
            p = cell.point
            if p == vector_field.home:
                self._draw_cross(draw, p.x, p.y)
            elif cell.status == CellStatus.CORRECTION and cell.vector is not None:
                self._draw_arrow(draw, p.x, p.y, cell.vector)
            else:
                self._draw_marker(draw, p.x, p.y)

        caption = f"average angular error: {math.degrees(vector_field.avg_angular_error):.2f} deg"
        left, _, _, bottom = self._plot_box
        draw.text((left + 150, bottom + 40), caption, fill=BLACK, font=ImageFont.load_default())
        return canvas

    def render(self, vector_field: VectorField, world: World, path: str | Path) -> Path:
        """Render the field and save it as PNG.

        Returns:
            The written path.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.draw(vector_field, world).save(path, format="PNG")
        get_logger().render(f"Wrote vector field to {path}")
        return path


def render_field(vector_field: VectorField, world: World, path: str | Path) -> Path:
    """Render with the default layout."""
    return FieldRenderer().render(vector_field, world, path)
