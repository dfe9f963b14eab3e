"""
Raster Image Module
===================

Pixel buffer plus the metadata needed to display it.

Design:
- Frozen dataclass holding a read-only view of the buffer, so a source
  image cannot be drawn on by accident; the caller's array is untouched
- Pixels are BGR uint8 (OpenCV / supervision convention)
- `pixels=None` models a source with no accessible pixel representation
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from funnyface_overlay.exceptions import ImageUnreadableError
from funnyface_overlay.orientation import Orientation, apply_orientation


@dataclass(frozen=True)
class RasterImage:
    """
    Immutable raster image.

    Attributes:
        pixels: HxWx3 uint8 BGR array in raw (unrotated, unmirrored) order,
            or None when the frame source could not provide pixels
        scale: Display scale factor (points to pixels)
        orientation: How the display layer should rotate/mirror the buffer
    """

    pixels: Optional[np.ndarray]
    scale: float = 1.0
    orientation: Orientation = Orientation.UP

    def __post_init__(self):
        """Validate metadata and freeze the buffer."""
        if self.scale <= 0:
            raise ValueError(f"scale must be > 0, got {self.scale}")
        object.__setattr__(self, 'orientation', Orientation(self.orientation))

        if self.pixels is not None and isinstance(self.pixels, np.ndarray):
            # Freeze a view, not the caller's array
            view = self.pixels.view()
            view.flags.writeable = False
            object.__setattr__(self, 'pixels', view)

    @property
    def width(self) -> int:
        """Buffer width in pixels (0 without pixels)."""
        return 0 if self.pixels is None else int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        """Buffer height in pixels (0 without pixels)."""
        return 0 if self.pixels is None else int(self.pixels.shape[0])

    @property
    def size_wh(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def require_pixels(self) -> np.ndarray:
        """
        Return the buffer if it can be drawn from.

        Raises:
            ImageUnreadableError: If there are no pixels, or they are not a
                non-empty HxWx3 uint8 array
        """
        pixels = self.pixels
        if pixels is None:
            raise ImageUnreadableError("Image has no pixel representation")
        if not isinstance(pixels, np.ndarray):
            raise ImageUnreadableError(
                f"Image pixels must be np.ndarray, got {type(pixels).__name__}"
            )
        if pixels.dtype != np.uint8:
            raise ImageUnreadableError(f"Image pixels must be uint8, got {pixels.dtype}")
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ImageUnreadableError(f"Image pixels must be HxWx3, got shape {pixels.shape}")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ImageUnreadableError(f"Image has no area, got shape {pixels.shape}")
        return pixels

    def with_pixels(self, pixels: np.ndarray, orientation: Orientation) -> 'RasterImage':
        """New image sharing this image's scale."""
        return RasterImage(pixels=pixels, scale=self.scale, orientation=orientation)

    def display_pixels(self) -> np.ndarray:
        """
        Pixels as a viewer would show them, orientation applied.

        Raises:
            ImageUnreadableError: If the image has no usable pixels
        """
        return apply_orientation(self.require_pixels(), self.orientation)
