"""
Configuration schema for the overlay renderer.

Defines drawing style, default feature selection and output options.
Loaded from YAML and validated at construction.
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from funnyface_overlay.geometry import features as feature_geometry
from funnyface_overlay.schemas.observation import FeatureFlags


RGB = Tuple[int, int, int]

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


def _validate_rgb(name: str, value: Any) -> RGB:
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 3
        or not all(isinstance(c, int) and 0 <= c <= 255 for c in value)
    ):
        raise ValueError(f"{name} must be three integers in [0, 255], got {value}")
    return tuple(value)


@dataclass(frozen=True)
class OverlayStyle:
    """
    Drawing constants for the debug rectangle and clown features.

    Colors are (r, g, b). Widths are in pixels, ratios are relative to
    the feature size computed from the landmarks.
    """

    # Debug rectangle
    debug_fill_color: RGB = (255, 0, 0)
    debug_fill_opacity: float = 0.3
    debug_stroke_color: RGB = (0, 0, 255)
    debug_stroke_width: int = 2

    # Eyes
    eye_color: RGB = (255, 255, 255)
    pupil_color: RGB = (0, 0, 0)
    eye_size_multiplier: float = feature_geometry.EYE_SIZE_MULTIPLIER
    pupil_ratio: float = feature_geometry.PUPIL_RATIO
    pupil_offset_ratio: float = feature_geometry.PUPIL_OFFSET_RATIO

    # Nose
    nose_color: RGB = (255, 0, 0)
    nose_ratio: float = feature_geometry.NOSE_RATIO

    # Mouth
    mouth_outer_color: RGB = (255, 255, 255)
    mouth_outer_width: int = 50
    mouth_inner_color: RGB = (255, 0, 0)
    mouth_inner_width: int = 20
    mouth_inner_offset: float = feature_geometry.MOUTH_INNER_OFFSET

    # Circles are filled as polygons with this many vertices
    ellipse_segments: int = 64

    def __post_init__(self):
        """Validate style configuration."""
        for name in (
            "debug_fill_color", "debug_stroke_color", "eye_color", "pupil_color",
            "nose_color", "mouth_outer_color", "mouth_inner_color",
        ):
            object.__setattr__(self, name, _validate_rgb(name, getattr(self, name)))

        if not 0.0 <= self.debug_fill_opacity <= 1.0:
            raise ValueError(
                f"debug_fill_opacity must be in [0.0, 1.0], got {self.debug_fill_opacity}"
            )

        for name in ("debug_stroke_width", "mouth_outer_width", "mouth_inner_width"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")

        for name in ("eye_size_multiplier", "pupil_ratio", "nose_ratio"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0, got {getattr(self, name)}")

        if self.ellipse_segments < 8:
            raise ValueError(f"ellipse_segments must be >= 8, got {self.ellipse_segments}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OverlayStyle":
        """
        Build a style from a partial dict; missing keys keep defaults.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown style keys: {sorted(unknown)}")
        return cls(**data)


@dataclass(frozen=True)
class OverlayConfig:
    """
    Top-level configuration.

    Immutable after construction (frozen dataclass).
    """

    style: OverlayStyle = field(default_factory=OverlayStyle)
    features: FeatureFlags = field(default_factory=FeatureFlags)
    log_level: str = "INFO"
    bake_orientation: bool = False

    def __post_init__(self):
        """Validate configuration."""
        level = str(self.log_level).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of {sorted(VALID_LOG_LEVELS)}"
            )
        object.__setattr__(self, "log_level", level)

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OverlayConfig":
        """Build configuration from a parsed YAML mapping."""
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        return cls(
            style=OverlayStyle.from_dict(data.get("style") or {}),
            features=FeatureFlags.from_dict(data.get("features") or {}),
            log_level=data.get("log_level", "INFO"),
            bake_orientation=bool(data.get("bake_orientation", False)),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "OverlayConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            log_level: "DEBUG"
            bake_orientation: false

            features:
              eyes: true
              nose: true
              mouth: false

            style:
              nose_color: [255, 0, 0]
              mouth_outer_width: 40

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML is invalid or fails validation
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(yaml_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}")

        return cls.from_dict(data)
