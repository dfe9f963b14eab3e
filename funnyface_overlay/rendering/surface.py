"""
Drawing Surface Module
======================

Off-screen canvas for one overlay request.

Design:
- Explicit handle, acquired and released within a single call
  (acquire_surface context manager), never ambient global state
- The canvas is a private copy: the source buffer is only read
- Primitives delegate to supervision drawing utilities
- Not thread-safe; one surface per request
"""

from contextlib import contextmanager
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np
import supervision as sv

from funnyface_overlay.exceptions import SurfaceUnavailableError
from funnyface_overlay.schemas.common import AbsolutePoint, AbsoluteRect


def _to_polygon(points: Sequence[AbsolutePoint]) -> np.ndarray:
    """Round points to the Nx2 int32 array cv2 expects."""
    return np.round(np.array([p.as_tuple() for p in points], dtype=np.float64)).astype(np.int32)


class DrawingSurface:
    """
    Canvas handle with shape primitives.

    Usage:
        with acquire_surface(image.pixels) as surface:
            surface.fill_ellipse(rect, sv.Color(r=255, g=0, b=0))
            pixels = surface.take_pixels()
    """

    def __init__(self, canvas: np.ndarray, ellipse_segments: int = 64):
        self._canvas: Optional[np.ndarray] = canvas
        self.ellipse_segments = ellipse_segments

    @property
    def released(self) -> bool:
        return self._canvas is None

    @property
    def canvas(self) -> np.ndarray:
        """
        Current canvas.

        Raises:
            SurfaceUnavailableError: If the surface was released
        """
        if self._canvas is None:
            raise SurfaceUnavailableError("Drawing surface used after release")
        return self._canvas

    @property
    def size_wh(self) -> Tuple[int, int]:
        height, width = self.canvas.shape[:2]
        return (width, height)

    def fill_ellipse(self, bounds: AbsoluteRect, color: sv.Color) -> None:
        """Fill the ellipse inscribed in bounds. Zero-area bounds draw nothing."""
        if bounds.width <= 0 or bounds.height <= 0:
            return

        center = bounds.center
        angles = np.linspace(0, 2 * np.pi, self.ellipse_segments, endpoint=False)
        points = [
            AbsolutePoint(
                x=center.x + bounds.width / 2 * np.cos(a),
                y=center.y + bounds.height / 2 * np.sin(a),
            )
            for a in angles
        ]
        self._canvas = sv.draw_filled_polygon(
            scene=self.canvas,
            polygon=_to_polygon(points),
            color=color,
        )

    def fill_rect(self, rect: AbsoluteRect, color: sv.Color, opacity: float = 1.0) -> None:
        """Fill a rectangle, blended with the canvas at the given opacity."""
        if rect.width <= 0 or rect.height <= 0:
            return

        corners = [
            AbsolutePoint(rect.x, rect.y),
            AbsolutePoint(rect.max_x, rect.y),
            AbsolutePoint(rect.max_x, rect.max_y),
            AbsolutePoint(rect.x, rect.max_y),
        ]
        self._canvas = sv.draw_filled_polygon(
            scene=self.canvas,
            polygon=_to_polygon(corners),
            color=color,
            opacity=opacity,
        )

    def stroke_rect(self, rect: AbsoluteRect, color: sv.Color, thickness: int) -> None:
        """Stroke a rectangle's border."""
        self._canvas = sv.draw_rectangle(
            scene=self.canvas,
            rect=sv.Rect(x=rect.x, y=rect.y, width=rect.width, height=rect.height),
            color=color,
            thickness=thickness,
        )

    def stroke_closed_polyline(
        self,
        points: Sequence[AbsolutePoint],
        color: sv.Color,
        thickness: int
    ) -> None:
        """Stroke a closed outline through points in the given order."""
        if not points:
            return
        self._canvas = sv.draw_polygon(
            scene=self.canvas,
            polygon=_to_polygon(points),
            color=color,
            thickness=thickness,
        )

    def take_pixels(self) -> np.ndarray:
        """
        Hand over the finished canvas and release the surface.

        Raises:
            SurfaceUnavailableError: If the surface was already released
        """
        pixels = self.canvas
        self.release()
        return pixels

    def release(self) -> None:
        """Drop the canvas. Safe to call more than once."""
        self._canvas = None


@contextmanager
def acquire_surface(pixels: np.ndarray, ellipse_segments: int = 64) -> Iterator[DrawingSurface]:
    """
    Acquire a drawing surface backed by a copy of pixels.

    The surface is released on every exit path, including exceptions
    raised while drawing.

    Raises:
        SurfaceUnavailableError: If the canvas cannot be allocated
    """
    try:
        canvas = np.array(pixels, dtype=np.uint8, copy=True, order="C")
    except MemoryError as e:
        raise SurfaceUnavailableError(f"Cannot allocate canvas of shape {pixels.shape}") from e

    surface = DrawingSurface(canvas, ellipse_segments=ellipse_segments)
    try:
        yield surface
    finally:
        surface.release()
