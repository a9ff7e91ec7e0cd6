"""Reader for the XPM42 image format."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import MlxErrno, MlxError
from .images import BPP
from .textures import Texture
from .utils import fnv_hash, pixel_bytes, rgba_to_mono

_MAGIC = "!XPM42"
_TABLE_SIZE = 65535
_MAX_DIM = 32767
_MAX_CPP = 10

_INT = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_CHAR = re.compile(r"\s*(\S)")
_HEX = re.compile(r"\s*([+-]?)([0-9a-fA-F]*)")
_LINE = re.compile(r"[^\n]*\n|[^\n]+")


@dataclass
class Xpm:
    """A decoded XPM42 image."""

    texture: Texture
    color_count: int
    cpp: int
    mode: str


def _invalid() -> MlxError:
    return MlxError(MlxErrno.INVXPM)


def _c_int(sign: str, digits: str) -> int:
    if digits[:2].lower() == "0x":
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8) if len(digits) > 1 else 0
    else:
        value = int(digits)
    return -value if sign == "-" else value


def _scan_header(line: str) -> tuple[int, int, int, int, str] | None:
    numbers = []
    pos = 0
    for _ in range(4):
        match = _INT.match(line, pos)
        if match is None:
            return None
        numbers.append(_c_int(match.group(1), match.group(2)))
        pos = match.end()
    match = _CHAR.match(line, pos)
    if match is None:
        return None
    width, height, count, cpp = numbers
    return width, height, count, cpp, match.group(1)


def _encode(key: str) -> bytes:
    try:
        return key.encode("latin-1")
    except UnicodeEncodeError:
        return key.encode("utf-8")


def _slot(key: str) -> int:
    return fnv_hash(_encode(key)) % _TABLE_SIZE


def _hex_channel(text: str) -> int:
    match = _HEX.match(text)
    digits = match.group(2)
    value = int(digits, 16) if digits else 0
    if match.group(1) == "-":
        value = -value
    return value & 0xFF


def _parse_entry(line: str, cpp: int) -> tuple[str, int] | None:
    if line.rfind(" ") != cpp:
        return None
    if len(line) < cpp + 3 or line[cpp + 1] != "#":
        return None
    first = line[cpp + 2]
    if not (first.isascii() and first.isalnum()):
        return None
    start = cpp + 2
    color = 0
    for shift, offset in zip((24, 16, 8, 0), range(start, start + 8, 2)):
        color |= _hex_channel(line[offset:offset + 2]) << shift
    return line[:cpp], color


def parse_xpm42(lines: Iterable[str]) -> Xpm:
    """Decode XPM42 data given as lines of text, line endings included."""
    it: Iterator[str] = iter(lines)
    magic = next(it, None)
    if magic is None or magic.removesuffix("\n") != _MAGIC:
        raise _invalid()
    header = next(it, None)
    fields = _scan_header(header) if header is not None else None
    if fields is None:
        raise _invalid()
    width, height, color_count, cpp, mode = fields
    if (width < 0 or height < 0 or width > _MAX_DIM or height > _MAX_DIM
            or mode not in ("c", "m") or cpp < 0 or cpp > _MAX_CPP):
        raise _invalid()

    table: dict[int, int] = {}
    for _ in range(color_count):
        line = next(it, None)
        entry = _parse_entry(line, cpp) if line is not None else None
        if entry is None:
            raise _invalid()
        key, color = entry
        table[_slot(key)] = rgba_to_mono(color) if mode == "m" else color

    texture = Texture(width, height)
    for y in range(height):
        line = next(it, None)
        if not line:
            raise _invalid()
        line = line.removesuffix("\n")
        if len(line) != width * cpp:
            raise _invalid()
        row = b"".join(
            pixel_bytes(table.get(_slot(line[start:start + cpp]), 0))
            for start in range(0, width * cpp, cpp)
        ) if cpp else pixel_bytes(table.get(_slot(""), 0)) * width
        begin = y * width * BPP
        texture.pixels[begin:begin + width * BPP] = row
    return Xpm(texture, color_count, cpp, mode)


def load_xpm42(path: str | os.PathLike[str]) -> Xpm:
    """Read and decode an ``.xpm42`` file."""
    if ".xpm42" not in os.fspath(path):
        raise MlxError(MlxErrno.INVEXT)
    try:
        with open(path, "rb") as handle:
            text = handle.read().decode("latin-1")
    except OSError:
        raise MlxError(MlxErrno.INVFILE) from None
    return parse_xpm42(match.group(0) for match in _LINE.finditer(text))