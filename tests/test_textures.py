import pytest

from mlx42.errors import MlxErrno, MlxError
from mlx42.images import Image
from mlx42.textures import Texture, draw_texture, texture_area_to_image, texture_to_image


def _pattern(width, height):
    """Texture whose pixel (x, y) holds the bytes (x, y, 7, 255)."""
    data = bytes(b for y in range(height) for x in range(width) for b in (x, y, 7, 255))
    return Texture(width, height, bytearray(data))


def test_texture_default_buffer_is_blank():
    texture = Texture(3, 2)
    assert texture.pixels == bytearray(3 * 2 * 4)


def test_texture_rejects_wrong_buffer_size():
    with pytest.raises(ValueError):
        Texture(2, 2, bytearray(5))


def test_texture_to_image_copies_everything():
    texture = _pattern(4, 3)
    image = texture_to_image(texture)
    assert (image.width, image.height) == (4, 3)
    assert image.pixels == texture.pixels


def test_area_copy_takes_requested_region():
    texture = _pattern(4, 4)
    image = texture_area_to_image(texture, (1, 2), (2, 2))
    assert (image.width, image.height) == (2, 2)
    assert bytes(image.pixels[0:4]) == bytes((1, 2, 7, 255))
    assert bytes(image.pixels[12:16]) == bytes((2, 3, 7, 255))


def test_area_larger_than_texture_is_invalid_dimension():
    with pytest.raises(MlxError) as info:
        texture_area_to_image(_pattern(2, 2), (0, 0), (3, 1))
    assert info.value.errno == MlxErrno.INVDIM


def test_area_position_outside_texture_is_invalid_position():
    with pytest.raises(MlxError) as info:
        texture_area_to_image(_pattern(2, 2), (3, 0), (1, 1))
    assert info.value.errno == MlxErrno.INVPOS


def test_area_overflowing_edge_is_invalid_position():
    with pytest.raises(MlxError) as info:
        texture_area_to_image(_pattern(4, 4), (3, 3), (2, 2))
    assert info.value.errno == MlxErrno.INVPOS


def test_empty_area_is_invalid_dimension():
    with pytest.raises(MlxError) as info:
        texture_area_to_image(_pattern(2, 2), (0, 0), (0, 1))
    assert info.value.errno == MlxErrno.INVDIM


def test_draw_texture_places_pixels():
    image = Image(5, 5)
    texture = _pattern(2, 2)
    draw_texture(image, texture, 2, 1)
    start = (1 * 5 + 2) * 4
    assert bytes(image.pixels[start:start + 4]) == bytes((0, 0, 7, 255))
    assert image.get_pixel(0, 0) == 0
    assert image.get_pixel(4, 4) == 0


def test_draw_texture_too_large():
    with pytest.raises(MlxError) as info:
        draw_texture(Image(2, 2), _pattern(3, 1), 0, 0)
    assert info.value.errno == MlxErrno.INVDIM


def test_draw_texture_out_of_position():
    with pytest.raises(MlxError) as info:
        draw_texture(Image(4, 4), _pattern(2, 2), 5, 0)
    assert info.value.errno == MlxErrno.INVPOS


def test_draw_texture_overflowing_edge():
    with pytest.raises(MlxError) as info:
        draw_texture(Image(4, 4), _pattern(2, 2), 3, 0)
    assert info.value.errno == MlxErrno.INVPOS