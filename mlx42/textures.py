"""Textures: plain RGBA pixel buffers and copies between them and images."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import MlxErrno, MlxError
from .images import BPP, Image


@dataclass
class Texture:
    """An RGBA pixel buffer that is not shown in any window."""

    width: int
    height: int
    pixels: bytearray | None = None
    bytes_per_pixel: int = BPP

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("texture dimensions must not be negative")
        size = self.width * self.height * self.bytes_per_pixel
        if self.pixels is None:
            self.pixels = bytearray(size)
        else:
            self.pixels = bytearray(self.pixels)
            if len(self.pixels) != size:
                raise ValueError(
                    f"pixel buffer holds {len(self.pixels)} bytes, expected {size}"
                )


def _copy_rows(src: bytearray, src_width: int, src_x: int, src_y: int,
               dst: bytearray, dst_width: int, dst_x: int, dst_y: int,
               width: int, height: int, bpp: int) -> None:
    span = width * bpp
    for row in range(height):
        src_start = ((src_y + row) * src_width + src_x) * bpp
        dst_start = ((dst_y + row) * dst_width + dst_x) * bpp
        dst[dst_start:dst_start + span] = src[src_start:src_start + span]


def texture_area_to_image(texture: Texture, xy: tuple[int, int], wh: tuple[int, int]) -> Image:
    """Copy the ``wh``-sized area of ``texture`` starting at ``xy`` into a new image."""
    x, y = xy
    width, height = wh
    if width < 0 or height < 0 or width > texture.width or height > texture.height:
        raise MlxError(MlxErrno.INVDIM)
    if x < 0 or y < 0 or x > texture.width or y > texture.height:
        raise MlxError(MlxErrno.INVPOS)
    if x + width > texture.width or y + height > texture.height:
        raise MlxError(MlxErrno.INVPOS)
    image = Image(width, height)
    _copy_rows(texture.pixels, texture.width, x, y,
               image.pixels, width, 0, 0, width, height, BPP)
    return image


def texture_to_image(texture: Texture) -> Image:
    """Copy a whole texture into a new image."""
    return texture_area_to_image(texture, (0, 0), (texture.width, texture.height))


def draw_texture(image: Image, texture: Texture, x: int, y: int) -> None:
    """Paint ``texture`` onto ``image`` with its top-left corner at ``(x, y)``."""
    if texture.width > image.width or texture.height > image.height:
        raise MlxError(MlxErrno.INVDIM)
    if x < 0 or y < 0 or x > image.width or y > image.height:
        raise MlxError(MlxErrno.INVPOS)
    if x + texture.width > image.width or y + texture.height > image.height:
        raise MlxError(MlxErrno.INVPOS)
    _copy_rows(texture.pixels, texture.width, 0, 0,
               image.pixels, image.width, x, y,
               texture.width, texture.height, texture.bytes_per_pixel)