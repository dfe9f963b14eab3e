"""
Feature Painter Module
======================

Draws one feature per call onto an explicit surface.

Design:
- Plain functions: geometry + surface + style in, nothing out
- Geometry comes from funnyface_overlay.geometry, so the math is
  testable on its own
"""

from typing import Sequence

import supervision as sv

from funnyface_overlay.config import OverlayStyle, RGB
from funnyface_overlay.geometry.features import (
    eye_geometry,
    mouth_geometry,
    nose_geometry,
)
from funnyface_overlay.rendering.surface import DrawingSurface
from funnyface_overlay.schemas.common import AbsolutePoint, AbsoluteRect


def to_color(rgb: RGB) -> sv.Color:
    r, g, b = rgb
    return sv.Color(r=r, g=g, b=b)


def draw_debug_rect(surface: DrawingSurface, rect: AbsoluteRect, style: OverlayStyle) -> None:
    """Translucent fill, then a solid border."""
    surface.fill_rect(rect, to_color(style.debug_fill_color), opacity=style.debug_fill_opacity)
    surface.stroke_rect(rect, to_color(style.debug_stroke_color), thickness=style.debug_stroke_width)


def draw_eye(surface: DrawingSurface, points: Sequence[AbsolutePoint], style: OverlayStyle) -> None:
    """White eyeball, then the lowered black pupil on top."""
    eye = eye_geometry(
        points,
        size_multiplier=style.eye_size_multiplier,
        pupil_ratio=style.pupil_ratio,
        pupil_offset_ratio=style.pupil_offset_ratio,
    )
    surface.fill_ellipse(eye.eyeball.bounds, to_color(style.eye_color))
    surface.fill_ellipse(eye.pupil.bounds, to_color(style.pupil_color))


def draw_nose(surface: DrawingSurface, points: Sequence[AbsolutePoint], style: OverlayStyle) -> None:
    nose = nose_geometry(points, ratio=style.nose_ratio)
    surface.fill_ellipse(nose.bounds, to_color(style.nose_color))


def draw_mouth(surface: DrawingSurface, points: Sequence[AbsolutePoint], style: OverlayStyle) -> None:
    """Wide outer outline, then the narrower shifted inner outline on top."""
    mouth = mouth_geometry(points, inner_offset=style.mouth_inner_offset)
    surface.stroke_closed_polyline(
        mouth.outer, to_color(style.mouth_outer_color), thickness=style.mouth_outer_width
    )
    surface.stroke_closed_polyline(
        mouth.inner, to_color(style.mouth_inner_color), thickness=style.mouth_inner_width
    )
