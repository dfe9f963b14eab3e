"""
Test Overlay Configuration
==========================

Usage:
    pytest test_config.py
"""

import logging
from pathlib import Path

import pytest

from funnyface_overlay import FeatureFlags, OverlayConfig, OverlayStyle


def test_defaults():
    config = OverlayConfig()

    assert config.features == FeatureFlags()
    assert config.log_level == "INFO"
    assert config.logging_level == logging.INFO
    assert config.bake_orientation is False
    assert config.style.nose_color == (255, 0, 0)
    assert config.style.mouth_outer_width == 50
    assert config.style.mouth_inner_width == 20
    assert config.style.eye_size_multiplier == 2.0


def test_from_yaml(tmp_path):
    path = tmp_path / "overlay.yaml"
    path.write_text(
        """
log_level: debug
bake_orientation: true

features:
  mouth: false

style:
  nose_color: [0, 255, 0]
  mouth_outer_width: 40
"""
    )

    config = OverlayConfig.from_yaml(path)

    assert config.log_level == "DEBUG"
    assert config.bake_orientation is True
    assert config.features == FeatureFlags(eyes=True, nose=True, mouth=False)
    assert config.style.nose_color == (0, 255, 0)
    assert config.style.mouth_outer_width == 40
    assert config.style.mouth_inner_width == 20


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert OverlayConfig.from_yaml(path) == OverlayConfig()


def test_shipped_config_matches_defaults():
    assert OverlayConfig.from_yaml(Path(__file__).parent / "config" / "overlay.yaml") == OverlayConfig()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        OverlayConfig.from_yaml(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("style: [unclosed\n")

    with pytest.raises(ValueError):
        OverlayConfig.from_yaml(path)


@pytest.mark.parametrize("data", [
    ["not", "a", "mapping"],
    {"log_level": "LOUD"},
    {"features": {"ears": True}},
    {"style": {"nose_colour": [255, 0, 0]}},
    {"style": {"nose_color": [256, 0, 0]}},
    {"style": {"nose_color": [255, 0]}},
    {"style": {"nose_color": "red"}},
    {"style": {"debug_fill_opacity": 1.5}},
    {"style": {"mouth_inner_width": 0}},
    {"style": {"nose_ratio": 0}},
    {"style": {"ellipse_segments": 4}},
])
def test_invalid_config(data):
    with pytest.raises(ValueError):
        OverlayConfig.from_dict(data)


def test_style_colors_are_tuples():
    style = OverlayStyle(eye_color=[10, 20, 30])

    assert style.eye_color == (10, 20, 30)
