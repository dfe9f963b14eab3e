"""
Geometry Layer
==============

Bounded Context: Coordinate mapping and shape geometry.

Responsibilities:
- Normalized (detector) to absolute (pixel) coordinate mapping
- Clown feature geometry from landmark points
- NO state, NO drawing

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Fail-fast validation
"""

from funnyface_overlay.geometry.mapper import CoordinateMapper
from funnyface_overlay.geometry.features import (
    CircleGeometry,
    EyeGeometry,
    MouthGeometry,
    eye_geometry,
    nose_geometry,
    mouth_geometry,
)

__all__ = [
    "CoordinateMapper",
    "CircleGeometry",
    "EyeGeometry",
    "MouthGeometry",
    "eye_geometry",
    "nose_geometry",
    "mouth_geometry",
]
