"""
Funny Face Overlay Schemas
==========================

Bounded Context: Data Structures

Immutable, typed data structures shared by the geometry, rendering and I/O
layers.

Public API
----------
Geometry Types:
    NormalizedPoint, NormalizedRect: Detector space (origin bottom-left)
    AbsolutePoint, AbsoluteRect: Pixel space (origin top-left)

Observation Types:
    LandmarkRegion: Ordered points outlining one feature
    FaceLandmarks: Named regions of one face
    FaceObservation: Bounding box + landmarks
    FeatureFlags: Eyes / nose / mouth selection
    OverlayRequest: Observations + feature selection
"""

from .common import NormalizedPoint, NormalizedRect, AbsolutePoint, AbsoluteRect
from .observation import (
    REGION_NAMES,
    LandmarkRegion,
    FaceLandmarks,
    FaceObservation,
    FeatureFlags,
    OverlayRequest,
    observations_from_dict,
    observations_to_dict,
)

__all__ = [
    # Geometry types
    'NormalizedPoint',
    'NormalizedRect',
    'AbsolutePoint',
    'AbsoluteRect',
    # Observation types
    'REGION_NAMES',
    'LandmarkRegion',
    'FaceLandmarks',
    'FaceObservation',
    'FeatureFlags',
    'OverlayRequest',
    'observations_from_dict',
    'observations_to_dict',
]
