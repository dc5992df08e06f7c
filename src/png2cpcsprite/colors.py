"""Amstrad CPC hardware palette and nearest-color matching."""

# Reference: CPC firmware ink numbers
# Ink = 9 * G + 3 * R + B with each level in 0..2 (off, half, full).
# The gate array uses its own 5-bit numbering; the value written to the
# gate array for INKR is 0x40 | hardware number (e.g. black = 0x54).
#
#  0 Black          9 Green          18 Bright Green
#  1 Blue          10 Cyan           19 Sea Green
#  2 Bright Blue   11 Sky Blue       20 Bright Cyan
#  3 Red           12 Yellow         21 Lime
#  4 Magenta       13 White          22 Pastel Green
#  5 Mauve         14 Pastel Blue    23 Pastel Cyan
#  6 Bright Red    15 Orange         24 Bright Yellow
#  7 Purple        16 Pink           25 Pastel Yellow
#  8 Bright Magenta 17 Pastel Magenta 26 Bright White

from __future__ import annotations

from enum import IntEnum
from typing import List, Sequence, Tuple

Color = Tuple[int, int, int]

LEVELS = (0, 128, 255)

# Nominal RGB, one row per green level.
CPC_RGB: List[Color] = [
    (0, 0, 0), (0, 0, 128), (0, 0, 255),
    (128, 0, 0), (128, 0, 128), (128, 0, 255),
    (255, 0, 0), (255, 0, 128), (255, 0, 255),

    (0, 128, 0), (0, 128, 128), (0, 128, 255),
    (128, 128, 0), (128, 128, 128), (128, 128, 255),
    (255, 128, 0), (255, 128, 128), (255, 128, 255),

    (0, 255, 0), (0, 255, 128), (0, 255, 255),
    (128, 255, 0), (128, 255, 128), (128, 255, 255),
    (255, 255, 0), (255, 255, 128), (255, 255, 255),
]

# Values measured on real hardware (gate array output voltages).
CPC_RGB_MEASURED: List[Color] = [
    (0x00, 0x02, 0x01), (0x00, 0x02, 0x6B), (0x0C, 0x02, 0xF4),
    (0x6C, 0x02, 0x01), (0x69, 0x02, 0x68), (0x6C, 0x02, 0xF2),
    (0xF3, 0x05, 0x06), (0xF0, 0x02, 0x68), (0xF3, 0x02, 0xF4),
    (0x02, 0x78, 0x01), (0x00, 0x78, 0x68), (0x0C, 0x7B, 0xF4),
    (0x6E, 0x7B, 0x01), (0x6E, 0x7D, 0x6B), (0x6E, 0x7B, 0xF6),
    (0xF3, 0x7D, 0x0D), (0xF3, 0x7D, 0x6B), (0xFA, 0x80, 0xF9),
    (0x02, 0xF0, 0x01), (0x00, 0xF3, 0x6B), (0x0F, 0xF3, 0xF2),
    (0x71, 0xF5, 0x04), (0x71, 0xF3, 0x6B), (0x71, 0xF3, 0xF4),
    (0xF3, 0xF3, 0x0D), (0xF3, 0xF3, 0x6D), (0xFF, 0xF3, 0xF9),
]

HARDWARE_INKS: Tuple[int, ...] = (
    20, 4, 21, 28, 24, 29, 12, 5, 13,
    22, 6, 23, 30, 0, 31, 14, 7, 15,
    18, 2, 19, 26, 25, 27, 10, 3, 11,
)


class HardwareColor(IntEnum):
    """The 27 colors of the CPC, numbered like firmware/BASIC inks."""

    BLACK = 0
    BLUE = 1
    BRIGHT_BLUE = 2
    RED = 3
    MAGENTA = 4
    MAUVE = 5
    BRIGHT_RED = 6
    PURPLE = 7
    BRIGHT_MAGENTA = 8
    GREEN = 9
    CYAN = 10
    SKY_BLUE = 11
    YELLOW = 12
    WHITE = 13
    PASTEL_BLUE = 14
    ORANGE = 15
    PINK = 16
    PASTEL_MAGENTA = 17
    BRIGHT_GREEN = 18
    SEA_GREEN = 19
    BRIGHT_CYAN = 20
    LIME = 21
    PASTEL_GREEN = 22
    PASTEL_CYAN = 23
    BRIGHT_YELLOW = 24
    PASTEL_YELLOW = 25
    BRIGHT_WHITE = 26

    @classmethod
    def from_levels(cls, r: int, g: int, b: int) -> "HardwareColor":
        for level in (r, g, b):
            if level not in (0, 1, 2):
                raise ValueError(f"Color level must be 0, 1 or 2, got {level}")
        return cls(9 * g + 3 * r + b)

    @property
    def levels(self) -> Tuple[int, int, int]:
        """(r, g, b) levels, each 0..2."""
        return (self.value // 3) % 3, self.value // 9, self.value % 3

    @property
    def rgb(self) -> Color:
        return CPC_RGB[self.value]

    @property
    def measured_rgb(self) -> Color:
        return CPC_RGB_MEASURED[self.value]

    @property
    def hardware_ink(self) -> int:
        """Gate array INKR command byte for this color."""
        return 0x40 | HARDWARE_INKS[self.value]

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


def nearest(rgb: Sequence[int], candidates: Sequence[Color]) -> int:
    """
    Return the index of the candidate closest to ``rgb`` using squared distance.

    Candidates are scanned in order and a later candidate only wins with a
    strictly smaller distance, so ties go to the lowest index. The scan stops
    at the first exact match.
    """
    r, g, b = rgb[0], rgb[1], rgb[2]
    best_idx = -1
    best_dist = -1
    for i, (cr, cg, cb) in enumerate(candidates):
        dist = (r - cr) ** 2 + (g - cg) ** 2 + (b - cb) ** 2
        if best_idx < 0 or dist < best_dist:
            best_idx = i
            best_dist = dist
            if dist == 0:
                break
    if best_idx < 0:
        raise ValueError("No candidate colors to match against")
    return best_idx


def reference_table(measured: bool = False) -> List[Color]:
    return CPC_RGB_MEASURED if measured else CPC_RGB


def nearest_hardware_color(rgb: Sequence[int], measured: bool = False) -> HardwareColor:
    return HardwareColor(nearest(rgb, reference_table(measured)))


def format_palette_text(palette: Sequence[HardwareColor]) -> str:
    return ", ".join(f"{idx}: {color.value} ({color.label})" for idx, color in enumerate(palette))
