"""
Face Overlay Renderer Module
============================

The engine's two public operations: render_debug_rect and
render_funny_face.

Flow per call:
    RasterImage ─┬─ require_pixels ── acquire_surface ── draw ── take_pixels ──┐
                 └─ orientation ── reconcile_orientation ── reorient_pixels ───┴─→ RasterImage

Failure policy (all-or-nothing):
- Source without usable pixels → None
- Surface cannot be acquired or the drawing backend fails → None
- Missing landmark region → that feature is skipped, the rest renders
"""

from functools import lru_cache
from typing import Iterable, Optional

import cv2
import numpy as np

from funnyface_overlay.config import OverlayStyle
from funnyface_overlay.exceptions import ImageUnreadableError, SurfaceUnavailableError
from funnyface_overlay.geometry.mapper import CoordinateMapper
from funnyface_overlay.image import RasterImage
from funnyface_overlay.logging import LogEvent, StructuredLogger, create_logger
from funnyface_overlay.orientation import reconcile_orientation, reorient_pixels
from funnyface_overlay.rendering import painter
from funnyface_overlay.rendering.surface import DrawingSurface, acquire_surface
from funnyface_overlay.schemas.common import NormalizedRect
from funnyface_overlay.schemas.observation import (
    FaceObservation,
    FeatureFlags,
    OverlayRequest,
)


class FaceOverlayRenderer:
    """
    Composites debug rectangles and clown features onto raster images.

    Holds only configuration (style, logger); every call allocates its own
    surface and output buffer, so one renderer can serve many requests.

    Usage:
        renderer = FaceOverlayRenderer(style=OverlayStyle(nose_ratio=0.8))

        debug = renderer.render_debug_rect(image, face.bounding_box)
        funny = renderer.render_funny_face(
            image, observations, FeatureFlags(eyes=True, nose=True, mouth=False)
        )
    """

    def __init__(
        self,
        style: Optional[OverlayStyle] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            style: Drawing constants (default: stock clown style)
            logger: Structured logger (default: "renderer" component)
        """
        self.style = style or OverlayStyle()
        self.logger = logger or create_logger("renderer")

    def render_debug_rect(
        self,
        image: RasterImage,
        rect: Optional[NormalizedRect],
    ) -> Optional[RasterImage]:
        """
        Draw an image-normalized rectangle: translucent red fill, blue border.

        Args:
            image: Source image (not modified)
            rect: Rectangle relative to the whole image, or None

        Returns:
            New image with the rectangle and a reconciled orientation tag;
            `image` itself when rect is None; None if rendering failed
        """
        pixels = self._readable_pixels(image)
        if pixels is None:
            return None

        if rect is None:
            self.logger.debug(
                event=LogEvent.RENDER_DEBUG_RECT_NOOP,
                message="No rectangle supplied, returning source image",
            )
            return image

        height, width = pixels.shape[:2]
        try:
            with acquire_surface(pixels, self.style.ellipse_segments) as surface:
                absolute = CoordinateMapper.map_rect(rect, width, height)
                painter.draw_debug_rect(surface, absolute, self.style)
                result = surface.take_pixels()
        except (SurfaceUnavailableError, cv2.error) as e:
            self._surface_failed(e)
            return None

        self.logger.debug(
            event=LogEvent.RENDER_DEBUG_RECT,
            message="Rendered debug rectangle",
            metadata={'rect': absolute.to_dict()},
        )
        return self._finish(image, result)

    def render_funny_face(
        self,
        image: RasterImage,
        observations: Iterable[FaceObservation],
        features: Optional[FeatureFlags] = None,
    ) -> Optional[RasterImage]:
        """
        Draw clown eyes, nose and mouth for every observation.

        Observations are drawn in the given order; within one observation
        the order is left eye, right eye, nose, mouth. A full pass runs even
        when no feature is enabled, so the output is always a fresh buffer
        with a reconciled orientation tag.

        Args:
            image: Source image (not modified)
            observations: Detector output, in detector order
            features: Which features to draw (default: all)

        Returns:
            New image, or None if rendering failed
        """
        request = OverlayRequest(
            observations=tuple(observations),
            features=features or FeatureFlags(),
        )

        pixels = self._readable_pixels(image)
        if pixels is None:
            return None

        try:
            with acquire_surface(pixels, self.style.ellipse_segments) as surface:
                for index, observation in enumerate(request.observations):
                    self._draw_observation(surface, index, observation, request.features)
                result = surface.take_pixels()
        except (SurfaceUnavailableError, cv2.error) as e:
            self._surface_failed(e)
            return None

        self.logger.debug(
            event=LogEvent.RENDER_FUNNY_FACE,
            message="Rendered funny face",
            metadata={
                'observations': request.observation_count,
                'features': request.features.to_dict(),
            },
        )
        return self._finish(image, result)

    def _draw_observation(
        self,
        surface: DrawingSurface,
        index: int,
        observation: FaceObservation,
        features: FeatureFlags,
    ) -> None:
        landmarks = observation.landmarks
        if landmarks is None:
            if features.any_enabled:
                self._feature_skipped(index, "landmarks")
            return

        width, height = surface.size_wh
        box = observation.bounding_box

        def absolute(name):
            region = landmarks.region(name)
            if region is None:
                self._feature_skipped(index, name)
                return None
            return CoordinateMapper.map_landmark_region(region, box, width, height)

        if features.eyes:
            for name in ("left_eye", "right_eye"):
                points = absolute(name)
                if points is not None:
                    painter.draw_eye(surface, points, self.style)

        if features.nose:
            points = absolute("nose")
            if points is not None:
                painter.draw_nose(surface, points, self.style)

        if features.mouth:
            points = absolute("outer_lips")
            if points is not None:
                painter.draw_mouth(surface, points, self.style)

    def _readable_pixels(self, image: RasterImage) -> Optional[np.ndarray]:
        try:
            return image.require_pixels()
        except ImageUnreadableError as e:
            self.logger.error(
                event=LogEvent.IMAGE_UNREADABLE,
                message="Source image has no usable pixels",
                metadata={'orientation': image.orientation.value},
                exc_info=e,
            )
            return None

    def _finish(self, source: RasterImage, pixels: np.ndarray) -> RasterImage:
        # Drawing happens in the raw buffer frame; rearrange the canvas so the
        # reconciled tag still displays it like the source
        orientation = reconcile_orientation(source.orientation)
        pixels = reorient_pixels(pixels, source.orientation, orientation)
        self.logger.debug(
            event=LogEvent.IMAGE_ORIENTATION,
            message="Output retagged to display like the source",
            metadata={
                'source_orientation': source.orientation.value,
                'output_orientation': orientation.value,
            },
        )
        return source.with_pixels(pixels, orientation)

    def _surface_failed(self, error: Exception) -> None:
        self.logger.error(
            event=LogEvent.SURFACE_UNAVAILABLE,
            message="Drawing surface failed, no result produced",
            exc_info=error,
        )

    def _feature_skipped(self, index: int, feature: str) -> None:
        self.logger.debug(
            event=LogEvent.FEATURE_SKIPPED,
            message=f"Observation {index} has no {feature}",
            metadata={'observation': index, 'feature': feature},
        )


@lru_cache(maxsize=1)
def default_renderer() -> FaceOverlayRenderer:
    """Shared renderer with the stock style."""
    return FaceOverlayRenderer()


def render_debug_rect(
    image: RasterImage,
    rect: Optional[NormalizedRect],
) -> Optional[RasterImage]:
    """Module-level shortcut for FaceOverlayRenderer.render_debug_rect."""
    return default_renderer().render_debug_rect(image, rect)


def render_funny_face(
    image: RasterImage,
    observations: Iterable[FaceObservation],
    features: Optional[FeatureFlags] = None,
) -> Optional[RasterImage]:
    """Module-level shortcut for FaceOverlayRenderer.render_funny_face."""
    return default_renderer().render_funny_face(image, observations, features)
