"""
Face Observation Schema
=======================

Bounded Context: Face Detector Output

Data structures for what the external face detector hands to the overlay
engine, plus the per-request feature selection.

Message Flow:
    Face Detector → observations JSON → FaceObservation → FaceOverlayRenderer

Document format:
    {
        "faces": [
            {
                "bounding_box": {"x": 0.25, "y": 0.25, "width": 0.5, "height": 0.5},
                "landmarks": {
                    "left_eye": [[0.3, 0.7], [0.35, 0.72], ...],
                    "right_eye": [...],
                    "nose": [...],
                    "outer_lips": [...]
                }
            }
        ]
    }

Landmark points are relative to the face bounding box, which is itself
relative to the whole image. Both use a bottom-left origin.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .common import NormalizedPoint, NormalizedRect, points_to_lists


# Region keys in detector output, in drawing order
REGION_NAMES = ("left_eye", "right_eye", "nose", "outer_lips")


@dataclass(frozen=True)
class LandmarkRegion:
    """
    Ordered outline of one facial feature.

    Point order is significant: the mouth contour is drawn through the
    points exactly as the detector listed them.

    Attributes:
        points: Face-landmark-normalized points
    """
    points: Tuple[NormalizedPoint, ...] = ()

    def __post_init__(self):
        # Accept any sequence, store a tuple
        object.__setattr__(self, 'points', tuple(self.points))

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0

    def __len__(self) -> int:
        return len(self.points)

    def to_list(self) -> list:
        return points_to_lists(self.points)

    @classmethod
    def from_list(cls, data: Sequence[Any]) -> 'LandmarkRegion':
        """Deserialize from a list of [x, y] pairs.

        Raises:
            ValueError: If data is not a list of points
        """
        if isinstance(data, (str, bytes, dict)):
            raise ValueError(f"LandmarkRegion must be a list of points, got {type(data).__name__}")
        try:
            return cls(points=tuple(NormalizedPoint.from_value(p) for p in data))
        except TypeError as e:
            raise ValueError(f"Invalid LandmarkRegion data: {e}")


@dataclass(frozen=True)
class FaceLandmarks:
    """
    Named landmark regions of one face. Every region is optional.

    Use region() rather than the attributes directly: it folds empty
    regions into "absent".
    """
    left_eye: Optional[LandmarkRegion] = None
    right_eye: Optional[LandmarkRegion] = None
    nose: Optional[LandmarkRegion] = None
    outer_lips: Optional[LandmarkRegion] = None

    def region(self, name: str) -> Optional[LandmarkRegion]:
        """
        Get a region by name, or None if missing or empty.

        Raises:
            KeyError: If name is not a known region
        """
        if name not in REGION_NAMES:
            raise KeyError(f"Unknown landmark region: {name}")
        region = getattr(self, name)
        if region is None or region.is_empty:
            return None
        return region

    def to_dict(self) -> Dict[str, list]:
        """Serialize present regions to JSON-compatible dict."""
        return {
            name: getattr(self, name).to_list()
            for name in REGION_NAMES
            if getattr(self, name) is not None
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FaceLandmarks':
        """Deserialize from dict. Unknown keys are ignored.

        Raises:
            ValueError: If a region is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"landmarks must be an object, got {type(data).__name__}")
        regions = {
            name: LandmarkRegion.from_list(data[name])
            for name in REGION_NAMES
            if data.get(name) is not None
        }
        return cls(**regions)


@dataclass(frozen=True)
class FaceObservation:
    """
    One detected face.

    Attributes:
        bounding_box: Image-normalized face box
        landmarks: Located landmark regions, None if the detector
            produced no landmarks for this face

    Example:
        >>> face = FaceObservation(
        ...     bounding_box=NormalizedRect(x=0.25, y=0.25, width=0.5, height=0.5),
        ...     landmarks=FaceLandmarks(nose=LandmarkRegion([NormalizedPoint(0.5, 0.5)]))
        ... )
    """
    bounding_box: NormalizedRect
    landmarks: Optional[FaceLandmarks] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        data: Dict[str, Any] = {'bounding_box': self.bounding_box.to_dict()}
        if self.landmarks is not None:
            data['landmarks'] = self.landmarks.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FaceObservation':
        """Deserialize from dict.

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            landmarks_data = data.get('landmarks')
            return cls(
                bounding_box=NormalizedRect.from_dict(data['bounding_box']),
                landmarks=(
                    FaceLandmarks.from_dict(landmarks_data)
                    if landmarks_data is not None else None
                )
            )
        except KeyError as e:
            raise ValueError(f"Missing required FaceObservation field: {e}")
        except (AttributeError, TypeError) as e:
            raise ValueError(f"Invalid FaceObservation data: {e}")


@dataclass(frozen=True)
class FeatureFlags:
    """Which clown features to draw."""
    eyes: bool = True
    nose: bool = True
    mouth: bool = True

    @property
    def any_enabled(self) -> bool:
        return self.eyes or self.nose or self.mouth

    def to_dict(self) -> Dict[str, bool]:
        return {'eyes': self.eyes, 'nose': self.nose, 'mouth': self.mouth}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FeatureFlags':
        """Deserialize from dict; missing keys keep their default (True)."""
        unknown = set(data) - {'eyes', 'nose', 'mouth'}
        if unknown:
            raise ValueError(f"Unknown feature flags: {sorted(unknown)}")
        for key, value in data.items():
            if not isinstance(value, bool):
                raise ValueError(f"Feature flag '{key}' must be a boolean, got {value!r}")
        return cls(**data)


@dataclass(frozen=True)
class OverlayRequest:
    """
    Transient parameter object for one funny-face render.

    Attributes:
        observations: Faces in detector order
        features: Feature selection
    """
    observations: Tuple[FaceObservation, ...] = field(default_factory=tuple)
    features: FeatureFlags = field(default_factory=FeatureFlags)

    def __post_init__(self):
        object.__setattr__(self, 'observations', tuple(self.observations))

    @property
    def observation_count(self) -> int:
        return len(self.observations)


def observations_from_dict(data: Dict[str, Any]) -> List[FaceObservation]:
    """
    Parse a detector output document into observations, keeping order.

    Raises:
        ValueError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise ValueError(f"Observation document must be an object, got {type(data).__name__}")
    faces = data.get('faces', [])
    if not isinstance(faces, list):
        raise ValueError("'faces' must be a list")
    return [FaceObservation.from_dict(face) for face in faces]


def observations_to_dict(observations: Sequence[FaceObservation]) -> Dict[str, Any]:
    """Serialize observations into a detector output document."""
    return {'faces': [observation.to_dict() for observation in observations]}
