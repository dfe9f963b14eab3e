"""
Orientation Module
==================

Bounded Context: Display orientation metadata.

An orientation tag tells the display layer how to rotate/mirror a raw
pixel buffer. Drawing never consults it; the renderer only retags its
output so it displays like the source did.

Design:
- Closed Enum of the 8 rotation x mirror states
- Explicit lookup tables, no platform rotation primitives
- EXIF orientation (tag 274) interop for the file frame source
"""

from enum import Enum
from typing import Dict

import numpy as np


class Orientation(str, Enum):
    """Orientation tag of a raster image."""

    UP = "up"
    UP_MIRRORED = "up_mirrored"
    DOWN = "down"
    DOWN_MIRRORED = "down_mirrored"
    LEFT = "left"
    LEFT_MIRRORED = "left_mirrored"
    RIGHT = "right"
    RIGHT_MIRRORED = "right_mirrored"

    @property
    def is_mirrored(self) -> bool:
        return self.value.endswith("_mirrored")

    @property
    def exif_value(self) -> int:
        """EXIF orientation value (1-8) for this tag."""
        return _ORIENTATION_TO_EXIF[self]

    @property
    def inverse(self) -> 'Orientation':
        """Tag whose pixel transform undoes this tag's transform."""
        return _INVERSE.get(self, self)

    @classmethod
    def from_exif(cls, value: int) -> 'Orientation':
        """
        Orientation for an EXIF value. Unknown or missing values map to UP,
        which is how viewers treat them.
        """
        return _EXIF_TO_ORIENTATION.get(value, cls.UP)


# Bijection over the 8 tags. The left/right tags pair off (each maps back
# to its source when applied twice); the up/down tags form the 4-cycle
# up -> down_mirrored -> down -> up_mirrored -> up.
_RECONCILED: Dict[Orientation, Orientation] = {
    Orientation.UP: Orientation.DOWN_MIRRORED,
    Orientation.UP_MIRRORED: Orientation.UP,
    Orientation.DOWN: Orientation.UP_MIRRORED,
    Orientation.DOWN_MIRRORED: Orientation.DOWN,
    Orientation.LEFT: Orientation.RIGHT_MIRRORED,
    Orientation.RIGHT_MIRRORED: Orientation.LEFT,
    Orientation.RIGHT: Orientation.LEFT_MIRRORED,
    Orientation.LEFT_MIRRORED: Orientation.RIGHT,
}

_ORIENTATION_TO_EXIF: Dict[Orientation, int] = {
    Orientation.UP: 1,
    Orientation.UP_MIRRORED: 2,
    Orientation.DOWN: 3,
    Orientation.DOWN_MIRRORED: 4,
    Orientation.LEFT_MIRRORED: 5,
    Orientation.RIGHT: 6,
    Orientation.RIGHT_MIRRORED: 7,
    Orientation.LEFT: 8,
}

_EXIF_TO_ORIENTATION: Dict[int, Orientation] = {
    value: orientation for orientation, value in _ORIENTATION_TO_EXIF.items()
}

# Every transform is its own inverse except the two quarter turns
_INVERSE: Dict[Orientation, Orientation] = {
    Orientation.LEFT: Orientation.RIGHT,
    Orientation.RIGHT: Orientation.LEFT,
}


def reconcile_orientation(source: Orientation) -> Orientation:
    """
    Orientation tag carried by an image rendered from a source tagged
    `source`. The renderer rearranges its output buffer (reorient_pixels)
    so that, under this tag, it displays the way the source did.

    Args:
        source: Orientation tag of the source image

    Returns:
        Mirrored/rotated counterpart of the source tag
    """
    return _RECONCILED[Orientation(source)]


def apply_orientation(pixels: np.ndarray, orientation: Orientation) -> np.ndarray:
    """
    Produce the as-displayed pixel array for a buffer and its tag.

    Follows the EXIF transpose convention (same operations as
    PIL.ImageOps.exif_transpose). Returns a new array; `pixels` is not
    modified.

    Args:
        pixels: HxW or HxWxC array in raw buffer order
        orientation: Tag describing how the buffer should be displayed

    Returns:
        Array as a viewer would show it (H and W swapped for left/right tags)
    """
    orientation = Orientation(orientation)

    if orientation is Orientation.UP:
        result = pixels
    elif orientation is Orientation.UP_MIRRORED:
        result = np.fliplr(pixels)
    elif orientation is Orientation.DOWN:
        result = np.rot90(pixels, 2)
    elif orientation is Orientation.DOWN_MIRRORED:
        result = np.flipud(pixels)
    elif orientation is Orientation.LEFT_MIRRORED:
        result = np.swapaxes(pixels, 0, 1)
    elif orientation is Orientation.RIGHT:
        result = np.rot90(pixels, -1)
    elif orientation is Orientation.RIGHT_MIRRORED:
        result = np.swapaxes(np.rot90(pixels, 2), 0, 1)
    else:  # LEFT
        result = np.rot90(pixels, 1)

    return np.array(result, copy=True)


def reorient_pixels(
    pixels: np.ndarray,
    source: Orientation,
    target: Orientation
) -> np.ndarray:
    """
    Rearrange a buffer tagged `source` so that, tagged `target`, it
    displays exactly as before.

    Source and target must be in the same family (both up/down or both
    left/right), which keeps the buffer dimensions unchanged.

    Args:
        pixels: Buffer in raw order for the source tag
        source: Current tag
        target: Tag the result will carry

    Returns:
        New buffer satisfying
        apply_orientation(result, target) == apply_orientation(pixels, source)
    """
    displayed = apply_orientation(pixels, source)
    return apply_orientation(displayed, Orientation(target).inverse)
