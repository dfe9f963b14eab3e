"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for the overlay engine's structured logs.

Event Naming Convention:
    <component>.<category>.<action>

    component: image, render, config, observations, error
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - image.*: Frame source interactions and orientation metadata
    - render.*: Overlay rendering
    - config.* / observations.*: Input loading
    - error.*: Error conditions
    """

    # ========== Image Events ==========
    IMAGE_ORIENTATION = "image.orientation"
    """Source and output orientation tags of a render."""

    IMAGE_LOADED = "image.loaded"
    """Raster image decoded from disk."""

    IMAGE_SAVED = "image.saved"
    """Raster image encoded to disk."""

    # ========== Render Events ==========
    RENDER_DEBUG_RECT = "render.debug_rect.completed"
    """Debug rectangle composited."""

    RENDER_DEBUG_RECT_NOOP = "render.debug_rect.noop"
    """No rectangle supplied, source returned unchanged."""

    RENDER_FUNNY_FACE = "render.funny_face.completed"
    """Clown features composited for all observations."""

    FEATURE_SKIPPED = "render.feature.skipped"
    """Requested feature has no landmark region on an observation."""

    # ========== Input Events ==========
    CONFIG_LOADED = "config.loaded"
    """Overlay configuration parsed."""

    OBSERVATIONS_LOADED = "observations.loaded"
    """Face observations parsed from detector output."""

    # ========== Error Events ==========
    IMAGE_UNREADABLE = "error.image_unreadable"
    """Source image has no usable pixel representation."""

    SURFACE_UNAVAILABLE = "error.surface_unavailable"
    """Drawing surface could not be acquired or was lost mid-draw."""

    IMAGE_IO_ERROR = "error.image_io"
    """Failed to read or write an image file."""

    CONFIG_ERROR = "error.config"
    """Configuration file missing or failed validation."""

    OBSERVATIONS_ERROR = "error.observations"
    """Detector output missing or malformed."""


RENDER_EVENTS = {
    LogEvent.RENDER_DEBUG_RECT,
    LogEvent.RENDER_DEBUG_RECT_NOOP,
    LogEvent.RENDER_FUNNY_FACE,
    LogEvent.FEATURE_SKIPPED,
}

ERROR_EVENTS = {
    LogEvent.IMAGE_UNREADABLE,
    LogEvent.SURFACE_UNAVAILABLE,
    LogEvent.IMAGE_IO_ERROR,
    LogEvent.CONFIG_ERROR,
    LogEvent.OBSERVATIONS_ERROR,
}
