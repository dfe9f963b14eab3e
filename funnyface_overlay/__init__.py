"""
Funny Face Overlay v1.0
=======================

Bounded Context: Landmark-to-raster overlay engine.

Burns clown eyes, noses and mouths (and debug rectangles) into images,
from face observations produced by an external landmark detector.

Design Philosophy:
- Separation of Concerns: Geometry, Rendering, Orientation separated
- Pure transformations: no state survives a call
- All-or-nothing drawing: a failed render returns None, never a
  half-drawn image

Architecture:

    funnyface_overlay/
    ├── schemas/           # Immutable data (points, rects, observations)
    ├── geometry/          # Pure math (stateless)
    │   ├── mapper.py      # CoordinateMapper: normalized → pixels
    │   └── features.py    # Eye / nose / mouth geometry
    │
    ├── rendering/         # Drawing (per-call surfaces)
    │   ├── surface.py     # DrawingSurface, acquire_surface
    │   ├── painter.py     # One function per feature
    │   └── renderer.py    # FaceOverlayRenderer (public operations)
    │
    ├── orientation.py     # Orientation tags, reconciliation, EXIF
    ├── image.py           # RasterImage
    ├── io.py              # File frame source (Pillow)
    ├── config.py          # OverlayStyle, OverlayConfig (YAML)
    └── logging/           # Structured JSON logging

Usage:

    from funnyface_overlay import (
        FaceOverlayRenderer, FeatureFlags, load_image, save_image, observations_from_dict,
    )

    image = load_image("selfie.jpg")
    observations = observations_from_dict(json.load(open("faces.json")))

    renderer = FaceOverlayRenderer()
    result = renderer.render_funny_face(image, observations, FeatureFlags(mouth=False))
    if result is not None:
        save_image(result, "clown.png")
"""

# Schemas
from funnyface_overlay.schemas import (
    NormalizedPoint,
    NormalizedRect,
    AbsolutePoint,
    AbsoluteRect,
    LandmarkRegion,
    FaceLandmarks,
    FaceObservation,
    FeatureFlags,
    OverlayRequest,
    observations_from_dict,
    observations_to_dict,
)

# Geometry (stateless)
from funnyface_overlay.geometry import CoordinateMapper

# Image + orientation
from funnyface_overlay.orientation import (
    Orientation,
    reconcile_orientation,
    apply_orientation,
    reorient_pixels,
)
from funnyface_overlay.image import RasterImage

# Rendering
from funnyface_overlay.config import OverlayStyle, OverlayConfig
from funnyface_overlay.rendering import (
    FaceOverlayRenderer,
    render_debug_rect,
    render_funny_face,
)

# File frame source
from funnyface_overlay.io import load_image, save_image

from funnyface_overlay.exceptions import (
    FunnyFaceError,
    ImageUnreadableError,
    SurfaceUnavailableError,
)

__all__ = [
    # Schemas
    "NormalizedPoint",
    "NormalizedRect",
    "AbsolutePoint",
    "AbsoluteRect",
    "LandmarkRegion",
    "FaceLandmarks",
    "FaceObservation",
    "FeatureFlags",
    "OverlayRequest",
    "observations_from_dict",
    "observations_to_dict",
    # Geometry
    "CoordinateMapper",
    # Image
    "Orientation",
    "reconcile_orientation",
    "apply_orientation",
    "reorient_pixels",
    "RasterImage",
    # Rendering
    "OverlayStyle",
    "OverlayConfig",
    "FaceOverlayRenderer",
    "render_debug_rect",
    "render_funny_face",
    # I/O
    "load_image",
    "save_image",
    # Errors
    "FunnyFaceError",
    "ImageUnreadableError",
    "SurfaceUnavailableError",
]

__version__ = "1.0.0"
