"""
Test Image File I/O
===================

PNG round trips through Pillow, EXIF orientation and channel order.

Usage:
    pytest test_io.py
"""

import numpy as np
import pytest
from PIL import Image

from funnyface_overlay import Orientation, RasterImage, load_image, save_image
from funnyface_overlay.exceptions import ImageUnreadableError
from funnyface_overlay.io import EXIF_ORIENTATION_TAG
from funnyface_overlay.orientation import apply_orientation


def random_image(width=20, height=10, orientation=Orientation.UP):
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return RasterImage(pixels=pixels, orientation=orientation)


def test_round_trip_keeps_pixels_and_orientation(tmp_path):
    image = random_image(orientation=Orientation.RIGHT)

    path = save_image(image, tmp_path / "frame.png")
    loaded = load_image(path, scale=2.0)

    assert np.array_equal(loaded.pixels, image.pixels)
    assert loaded.orientation is Orientation.RIGHT
    assert loaded.scale == 2.0


def test_orientation_written_as_exif(tmp_path):
    image = random_image(orientation=Orientation.LEFT_MIRRORED)

    path = save_image(image, tmp_path / "frame.png")

    with Image.open(path) as pil_image:
        assert pil_image.getexif()[EXIF_ORIENTATION_TAG] == 5


def test_pixels_are_bgr(tmp_path):
    pixels = np.zeros((4, 4, 3), dtype=np.uint8)
    pixels[..., 0] = 255
    path = save_image(RasterImage(pixels=pixels), tmp_path / "blue.png")

    with Image.open(path) as pil_image:
        assert pil_image.convert("RGB").getpixel((0, 0)) == (0, 0, 255)

    assert load_image(path).pixels[0, 0].tolist() == [255, 0, 0]


def test_bake_orientation(tmp_path):
    image = random_image(width=20, height=10, orientation=Orientation.RIGHT)

    path = save_image(image, tmp_path / "baked.png", bake_orientation=True)
    loaded = load_image(path)

    assert loaded.orientation is Orientation.UP
    assert loaded.size_wh == (10, 20)
    assert np.array_equal(loaded.pixels, apply_orientation(image.pixels, Orientation.RIGHT))


def test_save_creates_parent_directories(tmp_path):
    path = save_image(random_image(), tmp_path / "a" / "b" / "frame.png")

    assert path.exists()


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image(tmp_path / "missing.png")


def test_load_undecodable_file(tmp_path):
    path = tmp_path / "garbage.png"
    path.write_bytes(b"definitely not an image")

    with pytest.raises(ImageUnreadableError):
        load_image(path)


def test_save_without_pixels(tmp_path):
    with pytest.raises(ImageUnreadableError):
        save_image(RasterImage(pixels=None), tmp_path / "empty.png")


def test_save_unknown_format(tmp_path):
    with pytest.raises(ValueError):
        save_image(random_image(), tmp_path / "frame.unknownformat")
