"""Packing palette indices into CPC screen bytes."""

# Reference: mode 1 byte layout (pixel 0 is the leftmost)
# bit    | 7   6   5   4   | 3   2   1   0
# -------|-----------------|----------------
# pixel  | p0  p1  p2  p3  | p0  p1  p2  p3
# plane  | bit 0 of index  | bit 1 of index
#
# Each pixel shifts the byte left once, then adds bit 1 of its index at bit 0
# and bit 0 of its index at bit 4.

from __future__ import annotations

from typing import List, Sequence

from .errors import PaletteIndexOutOfRangeError, UnalignedWidthError, UnsupportedModeError
from .modes import Mode


def width_in_bytes(width: int, mode: Mode) -> int:
    """Return the byte width of a scanline, rejecting widths that need padding."""

    width_bytes = width // mode.pixels_per_byte
    if width_bytes * mode.pixels_per_byte != width:
        raise UnalignedWidthError(width, mode)
    return width_bytes


def _mode1_bits(index: int) -> int:
    return ((index & 2) >> 1) | ((index & 1) << 4)


def pack_pixels(
    indices: Sequence[int],
    width: int,
    height: int,
    mode: Mode,
    color_limit: int | None = None,
) -> bytes:
    """Pack row-major palette indices into sprite bytes.

    ``color_limit`` caps the valid indices below the mode's color count, e.g.
    to the length of a bound palette.
    """

    width_bytes = width_in_bytes(width, mode)
    if mode is not Mode.MODE1:
        raise UnsupportedModeError(mode)

    limit = mode.max_colors if color_limit is None else min(color_limit, mode.max_colors)
    sprite_bytes = width_bytes * height
    if len(indices) != width * height:
        raise ValueError(
            f"Expected {width * height} pixels for {width}x{height}, got {len(indices)}"
        )

    data = bytearray(sprite_bytes)
    pixels_per_byte = mode.pixels_per_byte
    pixel = 0
    for offset in range(sprite_bytes):
        cpc_byte = 0
        for _ in range(pixels_per_byte):
            index = indices[pixel]
            if index < 0 or index >= limit:
                raise PaletteIndexOutOfRangeError(pixel, index, limit)
            cpc_byte = (cpc_byte << 1) | _mode1_bits(index)
            pixel += 1
        data[offset] = cpc_byte & 0xFF
    return bytes(data)


def unpack_pixels(data: bytes, width_bytes: int, height: int, mode: Mode) -> List[int]:
    """Recover row-major palette indices from packed sprite bytes."""

    if mode is not Mode.MODE1:
        raise UnsupportedModeError(mode)
    if len(data) != width_bytes * height:
        raise ValueError(f"Expected {width_bytes * height} bytes, got {len(data)}")

    indices: List[int] = []
    for cpc_byte in data:
        for position in range(3, -1, -1):
            low = (cpc_byte >> (position + 4)) & 1
            high = (cpc_byte >> position) & 1
            indices.append((high << 1) | low)
    return indices
