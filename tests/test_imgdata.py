import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from vino.gui.imgdata import ImgData, configure_texture
from vino.gui.window import WindowError

TOP_LEFT = (10, 20, 30, 255)
BOTTOM_LEFT = (200, 100, 50, 255)
TRANSLUCENT = (1, 2, 3, 128)


def _make_surface():
    surface = pygame.Surface((3, 2), pygame.SRCALPHA)
    surface.fill((90, 90, 90, 255))
    surface.set_at((0, 0), TOP_LEFT)
    surface.set_at((0, 1), BOTTOM_LEFT)
    surface.set_at((2, 0), TRANSLUCENT)
    return surface


@pytest.fixture
def png_path(tmp_path):
    path = tmp_path / "picture.png"
    pygame.image.save(_make_surface(), str(path))
    return path


def test_empty_image():
    img = ImgData()
    assert img.empty is True
    assert img.data is None
    assert (img.width, img.height) == (0, 0)


def test_loaded_dimensions(png_path):
    img = ImgData(png_path)
    assert img.empty is False
    assert (img.width, img.height) == (3, 2)
    assert len(img.data) == img.width * img.height * 4


def test_png_with_alpha_has_four_channels(png_path):
    assert ImgData(png_path).num_color_channels == 4


def test_unflipped_first_row_is_top(png_path):
    img = ImgData(png_path, flipped=False)
    assert tuple(img.data[0:4]) == TOP_LEFT


def test_flipped_first_row_is_bottom(png_path):
    img = ImgData(png_path)
    assert img.flipped is True
    assert tuple(img.data[0:4]) == BOTTOM_LEFT


def test_flip_reverses_rows(png_path):
    upright = ImgData(png_path, flipped=False).data
    flipped = ImgData(png_path, flipped=True).data
    row = 3 * 4
    assert flipped[:row] == upright[row:]
    assert flipped[row:] == upright[:row]


def test_missing_file_raises(tmp_path):
    with pytest.raises(WindowError, match="doesn't exist or not image"):
        ImgData(tmp_path / "absent.png")


def test_wrong_extension_raises(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    with pytest.raises(WindowError):
        ImgData(path)


def test_undecodable_image_raises(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not a png")
    with pytest.raises(WindowError):
        ImgData(path)


def test_extension_check_ignores_case(tmp_path):
    surface = pygame.Surface((2, 2))
    surface.fill((5, 6, 7))
    path = tmp_path / "PLAIN.BMP"
    pygame.image.save(surface, str(path))
    img = ImgData(path, flipped=False)
    assert (img.width, img.height) == (2, 2)
    assert img.num_color_channels == 3
    assert tuple(img.data[0:3]) == (5, 6, 7)


def test_texture_of_empty_image_is_white_pixel():
    texture = configure_texture(ImgData())
    assert texture.get_size() == (1, 1)
    assert tuple(texture.get_at((0, 0))) == (255, 255, 255, 255)


@pytest.mark.parametrize("flipped", [True, False])
def test_texture_round_trip_is_upright(png_path, flipped):
    original = _make_surface()
    texture = configure_texture(ImgData(png_path, flipped=flipped))
    assert texture.get_size() == original.get_size()
    for x in range(3):
        for y in range(2):
            assert texture.get_at((x, y)) == original.get_at((x, y))


def test_texture_keeps_alpha(png_path):
    texture = configure_texture(ImgData(png_path))
    assert tuple(texture.get_at((2, 0))) == TRANSLUCENT