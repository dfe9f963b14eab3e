"""
Coordinate Mapper Module
========================

Pure conversions from detector space to pixel space - NO state.

Two normalized frames exist and must not be confused:
- Image-normalized: rectangles relative to the whole image
- Face-landmark-normalized: points relative to a face bounding box,
  which is itself image-normalized

Both have their origin at the bottom-left; pixel space has its origin at
the top-left, so every mapping flips the vertical axis.
"""

from typing import Tuple

from funnyface_overlay.schemas.common import (
    AbsolutePoint,
    AbsoluteRect,
    NormalizedPoint,
    NormalizedRect,
)
from funnyface_overlay.schemas.observation import LandmarkRegion


class CoordinateMapper:
    """
    Stateless normalized-to-absolute coordinate mapper.

    All methods are static. Results are computed per call and never cached,
    since landmarks change every frame.

    Usage:
        rect = CoordinateMapper.map_rect(face.bounding_box, 1280, 720)
        points = CoordinateMapper.map_landmark_region(
            face.landmarks.nose, face.bounding_box, 1280, 720
        )
    """

    @staticmethod
    def map_rect(
        rect: NormalizedRect,
        image_width: int,
        image_height: int
    ) -> AbsoluteRect:
        """
        Map an image-normalized rectangle to pixel space.

        Args:
            rect: Rectangle relative to the whole image
            image_width: Buffer width in pixels
            image_height: Buffer height in pixels

        Returns:
            Rectangle in pixels, origin top-left
        """
        return AbsoluteRect(
            x=rect.x * image_width,
            y=(1.0 - rect.y - rect.height) * image_height,
            width=rect.width * image_width,
            height=rect.height * image_height,
        )

    @staticmethod
    def compose_landmark_point(
        point: NormalizedPoint,
        bounding_box: NormalizedRect
    ) -> NormalizedPoint:
        """
        Move a face-landmark-normalized point into the image-normalized frame.

        Args:
            point: Point relative to the face bounding box
            bounding_box: Image-normalized face box

        Returns:
            Same point relative to the whole image
        """
        return NormalizedPoint(
            x=bounding_box.x + point.x * bounding_box.width,
            y=bounding_box.y + point.y * bounding_box.height,
        )

    @staticmethod
    def map_landmark_point(
        point: NormalizedPoint,
        bounding_box: NormalizedRect,
        image_width: int,
        image_height: int
    ) -> AbsolutePoint:
        """
        Map a face-landmark-normalized point to pixel space.

        The point is first composed through the face bounding box, then
        flipped and scaled. Scaling the landmark point by the image size
        directly would place it relative to the image corner instead of
        the face.

        Args:
            point: Point relative to the face bounding box
            bounding_box: Image-normalized face box
            image_width: Buffer width in pixels
            image_height: Buffer height in pixels

        Returns:
            Point in pixels, origin top-left
        """
        global_point = CoordinateMapper.compose_landmark_point(point, bounding_box)
        return AbsolutePoint(
            x=global_point.x * image_width,
            y=(1.0 - global_point.y) * image_height,
        )

    @staticmethod
    def map_landmark_region(
        region: LandmarkRegion,
        bounding_box: NormalizedRect,
        image_width: int,
        image_height: int
    ) -> Tuple[AbsolutePoint, ...]:
        """
        Map every point of a landmark region, preserving detector order.

        Returns:
            Absolute points in the same order as region.points
        """
        return tuple(
            CoordinateMapper.map_landmark_point(point, bounding_box, image_width, image_height)
            for point in region.points
        )

    @staticmethod
    def region_bounds(
        region: LandmarkRegion,
        bounding_box: NormalizedRect,
        image_width: int,
        image_height: int
    ) -> AbsoluteRect:
        """
        Pixel bounding box of a landmark region.

        Raises:
            ValueError: If the region has no points
        """
        if region.is_empty:
            raise ValueError("Cannot map an empty landmark region")
        return AbsoluteRect.bounding(
            CoordinateMapper.map_landmark_region(region, bounding_box, image_width, image_height)
        )
