"""Images, their on-screen instances and the depth-ordered render queue."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .errors import MlxErrno, MlxError
from .utils import pixel_bytes

BPP = 4
_MAX_DIM = 32767


def _check_dimensions(width: int, height: int) -> None:
    if not width or not height or width < 0 or height < 0 or width > _MAX_DIM or height > _MAX_DIM:
        raise MlxError(MlxErrno.INVDIM)


@dataclass
class Instance:
    """One placement of an image in the window."""

    x: int
    y: int
    z: int = 0
    enabled: bool = True


class Image:
    """An RGBA pixel buffer that can be shown in the window one or more times."""

    def __init__(self, width: int, height: int) -> None:
        _check_dimensions(width, height)
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height * BPP)
        self.instances: list[Instance] = []
        self.enabled = True

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height}, instances={len(self.instances)})"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width) or not (0 <= y < self.height):
            raise IndexError("Pixel is out of bounds")
        return (y * self.width + x) * BPP

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Write an RGBA colour at ``(x, y)``."""
        start = self._offset(x, y)
        self.pixels[start:start + BPP] = pixel_bytes(color)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the RGBA colour stored at ``(x, y)``."""
        start = self._offset(x, y)
        return int.from_bytes(self.pixels[start:start + BPP], "big")

    def resize(self, width: int, height: int) -> None:
        """Change the image's size, keeping the leading bytes of the buffer."""
        _check_dimensions(width, height)
        if width == self.width and height == self.height:
            return
        size = width * height * BPP
        if size <= len(self.pixels):
            del self.pixels[size:]
        else:
            self.pixels.extend(bytes(size - len(self.pixels)))
        self.width = width
        self.height = height


@dataclass(eq=False)
class DrawCall:
    """A request to draw one instance of an image."""

    image: Image
    instance_id: int

    @property
    def instance(self) -> Instance:
        return self.image.instances[self.instance_id]

    @property
    def z(self) -> int:
        return self.instance.z


class RenderQueue:
    """Draw calls, kept in the order they are drawn."""

    def __init__(self) -> None:
        self._calls: list[DrawCall] = []

    def add(self, image: Image, instance_id: int) -> DrawCall:
        """Queue a draw call at the front and return it."""
        call = DrawCall(image, instance_id)
        self._calls.insert(0, call)
        return call

    def remove_image(self, image: Image) -> int:
        """Drop every draw call for ``image``; return how many were removed."""
        before = len(self._calls)
        self._calls = [call for call in self._calls if call.image is not image]
        return before - len(self._calls)

    def sort(self) -> None:
        """Order calls by ascending depth; among equal depths the later call comes first."""
        self._calls.reverse()
        self._calls.sort(key=lambda call: call.z)

    def __iter__(self) -> Iterator[DrawCall]:
        return iter(list(self._calls))

    def __len__(self) -> int:
        return len(self._calls)