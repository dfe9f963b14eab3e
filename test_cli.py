"""
Test Funny Face CLI
===================

Runs funnyface-cli end to end against temporary files.

Usage:
    pytest test_cli.py
"""

import json
import logging

import numpy as np
import pytest

from funnyface_cli.cli import build_parser, main, resolve_features
from funnyface_overlay import Orientation, OverlayConfig, RasterImage, load_image, save_image


OBSERVATIONS = {
    "faces": [
        {
            "bounding_box": {"x": 0.25, "y": 0.25, "width": 0.5, "height": 0.5},
            "landmarks": {
                "left_eye": [[0.27, 0.73], [0.33, 0.73], [0.33, 0.77], [0.27, 0.77]],
                "right_eye": [[0.67, 0.73], [0.73, 0.73], [0.73, 0.77], [0.67, 0.77]],
                "nose": [[0.45, 0.42], [0.55, 0.42], [0.55, 0.58], [0.45, 0.58]],
                "outer_lips": [[0.35, 0.2], [0.5, 0.15], [0.65, 0.2], [0.5, 0.25]],
            },
        }
    ]
}

GRAY = [128, 128, 128]
RED = [0, 0, 255]
BLACK = [0, 0, 0]


@pytest.fixture
def inputs(tmp_path):
    """Gray 400x400 PNG plus a detector document for one centered face."""
    image_path = save_image(
        RasterImage(pixels=np.full((400, 400, 3), 128, dtype=np.uint8)),
        tmp_path / "input.png",
    )
    observations_path = tmp_path / "faces.json"
    observations_path.write_text(json.dumps(OBSERVATIONS))
    return image_path, observations_path


def test_face_command(inputs, tmp_path, capsys):
    image_path, observations_path = inputs
    output = tmp_path / "out" / "clown.png"

    code = main(["face", str(image_path), str(observations_path), "-o", str(output)])

    assert code == 0
    summary = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert summary == {
        "command": "face",
        "output": str(output),
        "orientation": "down_mirrored",
        "baked": False,
    }

    result = load_image(output)
    assert result.orientation is Orientation.DOWN_MIRRORED
    assert result.display_pixels()[200, 200].tolist() == RED
    assert result.display_pixels()[150, 160].tolist() == BLACK


def test_face_command_feature_switches(inputs, tmp_path):
    image_path, observations_path = inputs
    output = tmp_path / "no_nose.png"

    code = main([
        "face", str(image_path), str(observations_path), "-o", str(output), "--no-nose",
    ])

    assert code == 0
    result = load_image(output)
    assert result.display_pixels()[200, 200].tolist() == GRAY
    assert result.display_pixels()[150, 160].tolist() == BLACK


def test_bake_orientation_flag(inputs, tmp_path):
    image_path, observations_path = inputs
    output = tmp_path / "baked.png"

    code = main([
        "--bake-orientation",
        "face", str(image_path), str(observations_path), "-o", str(output),
    ])

    assert code == 0
    result = load_image(output)
    assert result.orientation is Orientation.UP
    # Baked pixels are upright: the pupil sits where it was drawn
    assert result.pixels[150, 160].tolist() == BLACK
    assert result.pixels[200, 200].tolist() == RED


def test_config_file(inputs, tmp_path):
    image_path, observations_path = inputs
    config_path = tmp_path / "overlay.yaml"
    config_path.write_text("features:\n  nose: false\nstyle:\n  pupil_color: [0, 255, 0]\n")
    output = tmp_path / "styled.png"

    code = main([
        "--config", str(config_path),
        "face", str(image_path), str(observations_path), "-o", str(output),
    ])

    assert code == 0
    result = load_image(output)
    assert result.display_pixels()[200, 200].tolist() == GRAY
    assert result.display_pixels()[150, 160].tolist() == [0, 255, 0]


def test_debug_rect_command(inputs, tmp_path):
    image_path, _ = inputs
    output = tmp_path / "debug.png"

    code = main([
        "debug-rect", str(image_path), "-o", str(output), "--rect", "0.25", "0.25", "0.5", "0.5",
    ])

    assert code == 0
    result = load_image(output)
    assert result.display_pixels()[100, 100].tolist() == [255, 0, 0]
    assert result.display_pixels()[10, 10].tolist() == GRAY


def test_debug_rect_without_rect_copies_image(inputs, tmp_path):
    image_path, _ = inputs
    output = tmp_path / "copy.png"

    assert main(["debug-rect", str(image_path), "-o", str(output)]) == 0

    result = load_image(output)
    assert result.orientation is Orientation.UP
    assert np.array_equal(result.display_pixels(), load_image(image_path).pixels)


def test_missing_observations_file(inputs, tmp_path, capsys):
    image_path, _ = inputs

    code = main(["face", str(image_path), str(tmp_path / "none.json"), "-o", str(tmp_path / "x.png")])

    assert code == 1
    assert "Observations file not found" in capsys.readouterr().err


def test_invalid_observations_json(inputs, tmp_path, capsys):
    image_path, _ = inputs
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")

    code = main(["face", str(image_path), str(bad), "-o", str(tmp_path / "x.png")])

    assert code == 1
    assert "Invalid JSON" in capsys.readouterr().err


def test_undecodable_image(tmp_path):
    image_path = tmp_path / "broken.png"
    image_path.write_bytes(b"nope")

    assert main(["debug-rect", str(image_path), "-o", str(tmp_path / "x.png")]) == 1


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_output_is_required():
    with pytest.raises(SystemExit):
        main(["debug-rect", "input.png"])


def test_resolve_features_combines_config_and_switches():
    args = build_parser().parse_args(["face", "a.png", "b.json", "-o", "c.png", "--no-eyes"])
    config = OverlayConfig.from_dict({"features": {"mouth": False}})

    flags = resolve_features(config, args)

    assert flags.to_dict() == {"eyes": False, "nose": True, "mouth": False}


def logged_events(caplog, name="funnyface_overlay.cli"):
    return [json.loads(r.getMessage())["event"] for r in caplog.records if r.name == name]


def test_invalid_config_is_logged(inputs, tmp_path, caplog):
    image_path, observations_path = inputs
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("style:\n  nose_color: red\n")

    with caplog.at_level(logging.INFO, logger="funnyface_overlay.cli"):
        code = main([
            "--config", str(config_path),
            "face", str(image_path), str(observations_path), "-o", str(tmp_path / "x.png"),
        ])

    assert code == 1
    assert "error.config" in logged_events(caplog)


def test_malformed_observations_are_logged(inputs, tmp_path, caplog):
    image_path, _ = inputs
    bad = tmp_path / "faces.json"
    bad.write_text(json.dumps({"faces": [{"landmarks": {}}]}))

    with caplog.at_level(logging.INFO, logger="funnyface_overlay.cli"):
        code = main(["face", str(image_path), str(bad), "-o", str(tmp_path / "x.png")])

    assert code == 1
    assert "error.observations" in logged_events(caplog)
