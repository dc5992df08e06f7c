"""PNG to Amstrad CPC sprite converter.

This package converts palette-based PNG images into the packed byte layout of
the CPC screen modes and renders it as assembly source. It can be invoked
through the CLI (``python -m png2cpcsprite``) or imported to convert images.
"""

from .colors import CPC_RGB, CPC_RGB_MEASURED, HardwareColor, nearest, nearest_hardware_color
from .converter import (
    ConvertOptions,
    EncodedSprite,
    SpriteImage,
    convert_png,
    convert_png_to_asm,
    encode_sprite,
    load_image,
    load_png,
    encode_preview,
    render_preview,
    sprite_to_assembly,
)
from .errors import (
    ConversionError,
    PaletteIndexOutOfRangeError,
    PaletteSyntaxError,
    TooManyColorsError,
    UnalignedWidthError,
    UnsupportedModeError,
)
from .modes import Mode, resolve_mode
from .palette import bind_explicit_palette, derive_palette, parse_palette

__all__ = [
    "CPC_RGB",
    "CPC_RGB_MEASURED",
    "ConversionError",
    "ConvertOptions",
    "EncodedSprite",
    "HardwareColor",
    "Mode",
    "PaletteIndexOutOfRangeError",
    "PaletteSyntaxError",
    "SpriteImage",
    "TooManyColorsError",
    "UnalignedWidthError",
    "UnsupportedModeError",
    "bind_explicit_palette",
    "convert_png",
    "convert_png_to_asm",
    "derive_palette",
    "encode_sprite",
    "load_image",
    "load_png",
    "nearest",
    "nearest_hardware_color",
    "parse_palette",
    "encode_preview",
    "render_preview",
    "resolve_mode",
    "sprite_to_assembly",
]
