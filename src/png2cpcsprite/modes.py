"""CRTC pixel modes and mode guessing from a color count."""

# Reference: CPC screen modes
# Mode | Bits per pixel | Pixels per byte | Colors | Screen width
# -----|----------------|-----------------|--------|-------------
#  0   | 4              | 2               | 16     | 160
#  1   | 2              | 4               | 4      | 320
#  2   | 1              | 8               | 2      | 640

from __future__ import annotations

import warnings
from enum import Enum

from .errors import DegeneratePaletteWarning, TooManyColorsError


class Mode(Enum):
    MODE0 = 0
    MODE1 = 1
    MODE2 = 2

    @classmethod
    def from_crtc(cls, crtc_mode: int) -> "Mode":
        try:
            return cls(crtc_mode)
        except ValueError as exc:
            raise ValueError(f"CPC mode must be 0, 1 or 2, got {crtc_mode}") from exc

    @property
    def crtc_mode(self) -> int:
        return self.value

    @property
    def bits_per_pixel(self) -> int:
        return 4 >> self.value

    @property
    def pixels_per_byte(self) -> int:
        return 2 << self.value

    @property
    def max_colors(self) -> int:
        return 1 << self.bits_per_pixel


def resolve_mode(color_count: int) -> Mode:
    """Guess the CPC mode from the number of colors in a palette.

    This only looks at the count; unused colormap entries push the guess
    toward a mode with more colors. Pass an explicit mode to bypass it.
    """

    if color_count < 2:
        warnings.warn(
            f"Less than 2 colors in palette ({color_count}), moving along anyway.",
            DegeneratePaletteWarning,
            stacklevel=2,
        )
    if color_count == 2:
        return Mode.MODE2
    if color_count <= 4:
        return Mode.MODE1
    if color_count <= 16:
        return Mode.MODE0
    raise TooManyColorsError(color_count)
