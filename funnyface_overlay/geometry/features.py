"""
Feature Geometry Module
=======================

Pure geometry of the clown features - NO drawing, NO state.

Each function turns absolute landmark points into the shapes the painter
draws, so the math can be checked without a drawing surface.

Design:
- Immutable results (frozen dataclasses)
- Size factors are parameters; defaults give the stock clown look
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from funnyface_overlay.schemas.common import AbsolutePoint, AbsoluteRect


EYE_SIZE_MULTIPLIER = 2.0
PUPIL_RATIO = 0.6
PUPIL_OFFSET_RATIO = 0.15
NOSE_RATIO = 0.6
MOUTH_INNER_OFFSET = 5.0


@dataclass(frozen=True)
class CircleGeometry:
    """Circle in pixel space."""
    center: AbsolutePoint
    radius: float

    @property
    def bounds(self) -> AbsoluteRect:
        return AbsoluteRect.around(self.center, self.radius)


@dataclass(frozen=True)
class EyeGeometry:
    """
    Clown eye: white eyeball with a lowered black pupil.

    Attributes:
        eyeball: Outer circle, drawn first
        pupil: Inner circle, drawn on top
    """
    eyeball: CircleGeometry
    pupil: CircleGeometry


@dataclass(frozen=True)
class MouthGeometry:
    """
    Clown mouth: two closed outlines through the lip contour.

    Attributes:
        outer: Contour points in detector order
        inner: Same points shifted down, drawn on top
    """
    outer: Tuple[AbsolutePoint, ...]
    inner: Tuple[AbsolutePoint, ...]


def eye_geometry(
    points: Sequence[AbsolutePoint],
    size_multiplier: float = EYE_SIZE_MULTIPLIER,
    pupil_ratio: float = PUPIL_RATIO,
    pupil_offset_ratio: float = PUPIL_OFFSET_RATIO,
) -> EyeGeometry:
    """
    Compute eyeball and pupil from an eye's absolute landmark points.

    eye_size = min(bbox width, bbox height) * size_multiplier is used as the
    eyeball radius; the pupil is pupil_ratio of it, moved down by
    pupil_offset_ratio of it.

    Raises:
        ValueError: If points is empty
    """
    bounds = AbsoluteRect.bounding(points)
    center = bounds.center
    eye_size = min(bounds.width, bounds.height) * size_multiplier

    return EyeGeometry(
        eyeball=CircleGeometry(center=center, radius=eye_size),
        pupil=CircleGeometry(
            center=center.offset(dy=eye_size * pupil_offset_ratio),
            radius=eye_size * pupil_ratio,
        ),
    )


def nose_geometry(
    points: Sequence[AbsolutePoint],
    ratio: float = NOSE_RATIO,
) -> CircleGeometry:
    """
    Compute the clown nose circle from the nose's absolute landmark points.

    Raises:
        ValueError: If points is empty
    """
    bounds = AbsoluteRect.bounding(points)
    return CircleGeometry(
        center=bounds.center,
        radius=min(bounds.width, bounds.height) * ratio,
    )


def mouth_geometry(
    points: Sequence[AbsolutePoint],
    inner_offset: float = MOUTH_INNER_OFFSET,
) -> MouthGeometry:
    """
    Compute both mouth outlines. Point order is kept as given; reordering
    would scramble the lip contour.

    Raises:
        ValueError: If points is empty
    """
    outer = tuple(points)
    if not outer:
        raise ValueError("Cannot build a mouth from an empty contour")
    inner = tuple(point.offset(dy=inner_offset) for point in outer)
    return MouthGeometry(outer=outer, inner=inner)
