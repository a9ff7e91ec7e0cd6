"""Small helpers: string hashing, grayscale conversion and pixel encoding."""

from __future__ import annotations

import struct

_FNV_PRIME = 0x100000001B3
_FNV_OFFSET = 0xCBF29CE484222325
_MASK64 = 0xFFFFFFFFFFFFFFFF


def fnv_hash(data: bytes | str) -> int:
    """Return the 64-bit FNV-1a hash of ``data``.

    Bytes are treated as signed chars, so values above 127 are sign-extended
    before being mixed in.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    value = _FNV_OFFSET
    for byte in data:
        signed = byte - 256 if byte >= 128 else byte
        value ^= signed & _MASK64
        value = (value * _FNV_PRIME) & _MASK64
    return value


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


_R_WEIGHT = _f32(0.299)
_G_WEIGHT = _f32(0.587)
_B_WEIGHT = _f32(0.114)


def rgba_to_mono(color: int) -> int:
    """Convert an RGBA colour to grayscale, keeping its alpha channel."""
    color &= 0xFFFFFFFF
    r = int(_f32(_R_WEIGHT * ((color >> 24) & 0xFF))) & 0xFF
    g = int(_f32(_G_WEIGHT * ((color >> 16) & 0xFF))) & 0xFF
    b = int(_f32(_B_WEIGHT * ((color >> 8) & 0xFF))) & 0xFF
    y = (r + g + b) & 0xFF
    return (y << 24) | (y << 16) | (y << 8) | (color & 0xFF)


def pixel_bytes(color: int) -> bytes:
    """Return the four bytes (R, G, B, A) stored for an RGBA colour."""
    return (color & 0xFFFFFFFF).to_bytes(4, "big")