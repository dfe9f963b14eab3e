"""
Image File I/O
==============

File-based frame source: decodes images into RasterImage and encodes
results back to disk.

Design:
- Pillow for decoding/encoding, numpy for the buffer
- EXIF orientation (tag 274) becomes the orientation tag; pixels stay in
  stored order, exactly as a camera frame source would deliver them
- Writing either keeps the tag in EXIF or bakes it into the pixels
"""

from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from funnyface_overlay.exceptions import ImageUnreadableError
from funnyface_overlay.image import RasterImage
from funnyface_overlay.logging import LogEvent, StructuredLogger, create_logger
from funnyface_overlay.orientation import Orientation

EXIF_ORIENTATION_TAG = 274

PathLike = Union[str, Path]


def load_image(
    path: PathLike,
    scale: float = 1.0,
    logger: Optional[StructuredLogger] = None,
) -> RasterImage:
    """
    Decode an image file.

    Args:
        path: Any format Pillow can read
        scale: Display scale factor to attach
        logger: Structured logger (default: "io" component)

    Returns:
        RasterImage with BGR pixels and the EXIF orientation tag

    Raises:
        FileNotFoundError: If the file does not exist
        ImageUnreadableError: If the file cannot be decoded
    """
    logger = logger or create_logger("io")
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    try:
        with Image.open(path) as pil_image:
            exif_value = pil_image.getexif().get(EXIF_ORIENTATION_TAG, 1)
            rgb = np.array(pil_image.convert("RGB"))
    except (UnidentifiedImageError, OSError) as e:
        logger.error(
            event=LogEvent.IMAGE_IO_ERROR,
            message="Failed to decode image",
            metadata={'path': str(path)},
            exc_info=e,
        )
        raise ImageUnreadableError(f"Cannot decode image {path}: {e}") from e

    image = RasterImage(
        pixels=np.ascontiguousarray(rgb[..., ::-1]),
        scale=scale,
        orientation=Orientation.from_exif(exif_value),
    )
    logger.info(
        event=LogEvent.IMAGE_LOADED,
        message="Loaded image",
        metadata={
            'path': str(path),
            'size_wh': list(image.size_wh),
            'orientation': image.orientation.value,
        },
    )
    return image


def save_image(
    image: RasterImage,
    path: PathLike,
    bake_orientation: bool = False,
    logger: Optional[StructuredLogger] = None,
) -> Path:
    """
    Encode an image to disk; the format follows the file extension.

    Args:
        image: Image to write
        path: Destination file
        bake_orientation: Rotate/mirror the pixels upright and tag them
            "up", instead of storing the orientation in EXIF
        logger: Structured logger (default: "io" component)

    Returns:
        The written path

    Raises:
        ImageUnreadableError: If the image has no usable pixels
        ValueError: If Pillow cannot encode to the requested format
    """
    logger = logger or create_logger("io")
    path = Path(path)

    if bake_orientation:
        bgr = image.display_pixels()
        orientation = Orientation.UP
    else:
        bgr = image.require_pixels()
        orientation = image.orientation

    pil_image = Image.fromarray(np.ascontiguousarray(bgr[..., ::-1]))
    exif = Image.Exif()
    exif[EXIF_ORIENTATION_TAG] = orientation.exif_value

    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        pil_image.save(path, exif=exif.tobytes())
    except (KeyError, OSError) as e:
        logger.error(
            event=LogEvent.IMAGE_IO_ERROR,
            message="Failed to encode image",
            metadata={'path': str(path)},
            exc_info=e,
        )
        raise ValueError(f"Cannot write image {path}: {e}") from e

    logger.info(
        event=LogEvent.IMAGE_SAVED,
        message="Saved image",
        metadata={
            'path': str(path),
            'orientation': orientation.value,
            'baked': bake_orientation,
        },
    )
    return path
