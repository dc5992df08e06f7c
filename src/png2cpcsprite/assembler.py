"""Scanline ordering and sdas assembly source rendering for packed sprites."""
from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, List

if TYPE_CHECKING:
    from .converter import EncodedSprite

SYMBOL_FORMAT_DEFAULT = "sprite_%s"
MODULE_FORMAT_DEFAULT = "module_%s"
BYTES_PER_DIRECTIVE = 12

# sdas symbols: letters, digits, '_' (also '$' and '.', not generated here)
_INVALID_SYMBOL_CHARS = re.compile(r"[^A-Za-z0-9_]")


def iter_scanlines(
    data: bytes, width_bytes: int, height: int, bottom_to_top: bool = False
) -> Iterator[bytes]:
    """Yield each scanline of ``data`` in the requested row order."""

    for row in range(height):
        y = height - 1 - row if bottom_to_top else row
        start = width_bytes * y
        yield data[start : start + width_bytes]


def make_name_stem(path: str | Path) -> str:
    """Turn the file part of ``path`` into a string usable in symbol names."""

    return _INVALID_SYMBOL_CHARS.sub("_", Path(path).name)


def format_name(template: str, stem: str) -> str:
    return template.replace("%s", stem)


def _byte_lines(scanline: bytes) -> List[str]:
    lines = []
    for start in range(0, len(scanline), BYTES_PER_DIRECTIVE):
        chunk = scanline[start : start + BYTES_PER_DIRECTIVE]
        lines.append("\t.byte " + ", ".join(f"0x{value:02x}" for value in chunk))
    return lines


def render_assembly(
    sprite: "EncodedSprite",
    symbol: str,
    module: str,
    bottom_to_top: bool = False,
    hardware_inks: bool = False,
) -> str:
    """Render a packed sprite as assembly source with metadata symbols."""

    lines = [
        f".module {module}",
        "",
        f"{symbol}_bytes == 0x{len(sprite.data):04x}",
        f"{symbol}_height == {sprite.height}",
        f"{symbol}_pixels_per_line == {sprite.width_pixels}",
        f"{symbol}_bytes_per_line == {sprite.width_bytes}",
        f"{symbol}_crtc_mode == {sprite.mode.crtc_mode}",
    ]

    if sprite.palette:
        lines.append("")
        lines.append(f"{symbol}_palette_count == {len(sprite.palette)}")
        for i, color in enumerate(sprite.palette):
            lines.append(f"{symbol}_palette_ink_{i} == {color.value}")
        if hardware_inks:
            for i, color in enumerate(sprite.palette):
                lines.append(f"{symbol}_palette_hw_{i} == 0x{color.hardware_ink:02x}")

    lines.append("")
    lines.append(f"{symbol}_data::")
    lines.append("")
    for scanline in iter_scanlines(sprite.data, sprite.width_bytes, sprite.height, bottom_to_top):
        lines.extend(_byte_lines(scanline))

    return "\n".join(lines) + "\n"
