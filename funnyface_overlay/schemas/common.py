"""
Common Geometry Types
=====================

Bounded Context: Shared Data Structures

Points and rectangles in the two coordinate spaces the engine works with.

Coordinate spaces:
- Normalized: unit square, origin bottom-left. Used by the face detector,
  either relative to the whole image or relative to a face bounding box.
- Absolute: pixels in the unrotated buffer, origin top-left.

Design Principles:
- Immutability: frozen=True prevents accidental mutation
- Serialization: to_dict()/from_dict() for detector output
- Validation: Constructor validates invariants
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, Iterable, Sequence


@dataclass(frozen=True)
class NormalizedPoint:
    """
    Point in a normalized frame (origin bottom-left).

    Whether the frame is the whole image or a face bounding box is decided
    by the caller; see CoordinateMapper.

    Example:
        >>> NormalizedPoint(x=0.5, y=0.5).to_list()
        [0.5, 0.5]
    """
    x: float
    y: float

    def to_list(self) -> list:
        """Serialize to the detector's [x, y] pair."""
        return [self.x, self.y]

    @classmethod
    def from_value(cls, value: Any) -> 'NormalizedPoint':
        """Deserialize from an [x, y] pair or an {'x', 'y'} dict.

        Raises:
            ValueError: If the value is not a 2D point
        """
        try:
            if isinstance(value, dict):
                return cls(x=float(value['x']), y=float(value['y']))
            x, y = value
            return cls(x=float(x), y=float(y))
        except KeyError as e:
            raise ValueError(f"Missing required point field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid point {value!r}: {e}")


@dataclass(frozen=True)
class NormalizedRect:
    """
    Rectangle in a normalized frame (origin bottom-left).

    Attributes:
        x: Left edge
        y: Bottom edge
        width: Horizontal extent
        height: Vertical extent

    Invariants:
        - width >= 0
        - height >= 0

    Coordinates are not clamped to [0, 1]: detectors report faces that are
    partially outside the frame.
    """
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        """Validate invariants."""
        if self.width < 0:
            raise ValueError(f"NormalizedRect width must be >= 0, got {self.width}")
        if self.height < 0:
            raise ValueError(f"NormalizedRect height must be >= 0, got {self.height}")

    def to_dict(self) -> Dict[str, float]:
        """Serialize to JSON-compatible dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NormalizedRect':
        """Deserialize from dict.

        Args:
            data: Dictionary with keys: x, y, width, height

        Raises:
            ValueError: If required keys missing or invalid values
        """
        try:
            return cls(
                x=float(data['x']),
                y=float(data['y']),
                width=float(data['width']),
                height=float(data['height'])
            )
        except KeyError as e:
            raise ValueError(f"Missing required NormalizedRect field: {e}")
        except TypeError as e:
            raise ValueError(f"Invalid NormalizedRect data: {e}")


@dataclass(frozen=True)
class AbsolutePoint:
    """Pixel position in the unrotated buffer (origin top-left)."""
    x: float
    y: float

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> 'AbsolutePoint':
        """Return a copy moved by (dx, dy) pixels."""
        return AbsolutePoint(x=self.x + dx, y=self.y + dy)

    def as_tuple(self) -> tuple:
        return (self.x, self.y)


@dataclass(frozen=True)
class AbsoluteRect:
    """
    Pixel rectangle in the unrotated buffer (origin top-left).

    Invariants:
        - width >= 0
        - height >= 0
    """
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        """Validate invariants."""
        if self.width < 0:
            raise ValueError(f"AbsoluteRect width must be >= 0, got {self.width}")
        if self.height < 0:
            raise ValueError(f"AbsoluteRect height must be >= 0, got {self.height}")

    @property
    def center(self) -> AbsolutePoint:
        return AbsolutePoint(x=self.x + self.width / 2, y=self.y + self.height / 2)

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @classmethod
    def around(cls, center: AbsolutePoint, radius: float) -> 'AbsoluteRect':
        """Square that circumscribes a circle."""
        return cls(
            x=center.x - radius,
            y=center.y - radius,
            width=radius * 2,
            height=radius * 2
        )

    @classmethod
    def bounding(cls, points: Iterable[AbsolutePoint]) -> 'AbsoluteRect':
        """
        Axis-aligned bounding box of a set of points.

        Raises:
            ValueError: If no points are given. Empty landmark regions must be
                treated as absent before reaching this point.
        """
        points = list(points)
        if not points:
            raise ValueError("Cannot compute bounds of an empty point set")

        min_x = min(p.x for p in points)
        min_y = min(p.y for p in points)
        max_x = max(p.x for p in points)
        max_y = max(p.y for p in points)
        return cls(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)

    def to_dict(self) -> Dict[str, float]:
        """Serialize to JSON-compatible dict."""
        return asdict(self)


def points_to_lists(points: Sequence[NormalizedPoint]) -> list:
    """Serialize a point sequence to nested [x, y] lists."""
    return [point.to_list() for point in points]
