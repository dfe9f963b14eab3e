"""
Rendering Layer
===============

Bounded Context: Compositing overlays into pixel buffers.

Responsibilities:
- Scoped drawing surfaces over a copy of the source buffer
- Drawing the debug rectangle and clown features
- Retagging the output orientation

Non-responsibilities:
- Coordinate math (handled by geometry)
- Face detection (external collaborator)
- File I/O (handled by funnyface_overlay.io)

Design:
- Explicit surface handles, no ambient drawing state
- Uses supervision drawing utilities
- Configurable styles
"""

from funnyface_overlay.rendering.surface import DrawingSurface, acquire_surface
from funnyface_overlay.rendering.renderer import (
    FaceOverlayRenderer,
    default_renderer,
    render_debug_rect,
    render_funny_face,
)

__all__ = [
    "DrawingSurface",
    "acquire_surface",
    "FaceOverlayRenderer",
    "default_renderer",
    "render_debug_rect",
    "render_funny_face",
]
