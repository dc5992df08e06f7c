"""Exceptions and warnings raised while converting images to CPC sprites."""
from __future__ import annotations


class ConversionError(Exception):
    """Custom exception for conversion errors."""


class TooManyColorsError(ConversionError):
    """Raised when a palette has more colors than any CPC mode can show."""

    def __init__(self, color_count: int):
        self.color_count = color_count
        super().__init__(
            f"{color_count} colors is more than the 16 a CPC mode can display. "
            "Prepare the picture for the CPC, or set the mode explicitly if only "
            "the first palette indices are actually used."
        )


class UnalignedWidthError(ConversionError):
    """Raised when the image width cannot be packed into whole bytes."""

    def __init__(self, width: int, mode):
        self.width = width
        self.mode = mode
        width_bytes = width // mode.pixels_per_byte
        super().__init__(
            f"In CPC mode {mode.crtc_mode}, image width {width} pixels turns into "
            f"{width_bytes} bytes which expand to {width_bytes * mode.pixels_per_byte} "
            f"pixels, not {width}."
        )


class UnsupportedModeError(ConversionError):
    """Raised when the packer has no bit layout for the requested mode."""

    def __init__(self, mode):
        self.mode = mode
        super().__init__(f"Only CPC mode 1 is supported for packing, not {mode.crtc_mode}.")


class PaletteIndexOutOfRangeError(ConversionError):
    """Raised when a pixel references a color the active palette cannot show."""

    def __init__(self, pixel: int, index: int, limit: int):
        self.pixel = pixel
        self.index = index
        self.limit = limit
        super().__init__(
            f"Pixel number {pixel} uses palette index {index}, which is too high "
            f"(>={limit}). Prepare the image for the CPC beforehand."
        )


class PaletteSyntaxError(ConversionError):
    """Raised when a palette declaration string cannot be parsed."""

    def __init__(self, message: str, text: str, position: int, unit: str = "character"):
        self.text = text
        self.position = position
        super().__init__(f"{message} at {unit} {position} of '{text}'")


class DegeneratePaletteWarning(UserWarning):
    """Fewer than two colors were found when guessing the mode."""


class AlphaIgnoredWarning(UserWarning):
    """The input declares transparency, which is flattened onto black."""


class ColormapOverflowWarning(UserWarning):
    """The colormap is larger than the selected mode can display."""
