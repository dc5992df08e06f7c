"""Core conversion logic from PNG images to CPC sprite data."""

# Reference: flow of a conversion
# Step            | Module       | Fails with
# ----------------|--------------|------------------------------------------
# Decode PNG      | converter    | ConversionError (missing/unreadable file)
# Pick CPC mode   | modes        | TooManyColorsError
# Bind palette    | palette      | PaletteSyntaxError, TooManyColorsError
# Check width     | packer       | UnalignedWidthError
# Pack pixels     | packer       | UnsupportedModeError, PaletteIndexOutOfRangeError
# Render source   | assembler    | -

from __future__ import annotations

import io
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from PIL import Image

from .assembler import (
    MODULE_FORMAT_DEFAULT,
    SYMBOL_FORMAT_DEFAULT,
    format_name,
    iter_scanlines,
    make_name_stem,
    render_assembly,
)
from .colors import Color, nearest
from .errors import AlphaIgnoredWarning, ColormapOverflowWarning, ConversionError
from .modes import Mode, resolve_mode
from .packer import pack_pixels, unpack_pixels, width_in_bytes
from .palette import Palette, bind_explicit_palette, derive_palette

Pixel = Union[int, Color]

_ALPHA_MODES = ("RGBA", "LA", "PA")


@dataclass
class ConvertOptions:
    """Options for mode, palette and output naming."""

    mode: Optional[Mode] = None  # None guesses from the palette size
    palette: Sequence[int] = field(default_factory=tuple)  # firmware ink numbers
    bottom_to_top: bool = False
    measured_colors: bool = False
    name_stem: Optional[str] = None
    symbol_format: str = SYMBOL_FORMAT_DEFAULT
    module_format: str = MODULE_FORMAT_DEFAULT
    hardware_inks: bool = False


@dataclass(frozen=True)
class SpriteImage:
    """A decoded image: row-major pixels plus the colormap they index, if any.

    When ``colormap`` is ``None`` the pixels are RGB triplets.
    """

    width: int
    height: int
    pixels: Sequence[Pixel]
    colormap: Optional[Sequence[Color]] = None


@dataclass(frozen=True)
class EncodedSprite:
    data: bytes
    width_bytes: int
    width_pixels: int
    height: int
    mode: Mode
    palette: Palette

    def scanlines(self, bottom_to_top: bool = False) -> List[bytes]:
        return list(iter_scanlines(self.data, self.width_bytes, self.height, bottom_to_top))


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in _ALPHA_MODES or "transparency" in image.info


def _flatten_to_rgb(image: Image.Image) -> Image.Image:
    if _has_alpha(image):
        rgba = image.convert("RGBA")
        background = Image.new("RGBA", image.size, (0, 0, 0, 255))
        return Image.alpha_composite(background, rgba).convert("RGB")
    return image.convert("RGB")


def _colormap_on_black(colormap: List[Color], transparency) -> List[Color]:
    """Composite colormap entries onto black using a tRNS index or alpha table."""

    if isinstance(transparency, int):
        alphas = {transparency: 0}
    else:
        alphas = dict(enumerate(transparency))
    flattened: List[Color] = []
    for index, color in enumerate(colormap):
        alpha = alphas.get(index, 255)
        flattened.append(tuple(int(round(c * alpha / 255)) for c in color))  # type: ignore[misc]
    return flattened


def _rgb_pixels(image: Image.Image) -> List[Color]:
    raw = image.tobytes()
    return [(raw[i], raw[i + 1], raw[i + 2]) for i in range(0, len(raw), 3)]


def load_image(image: Image.Image, rgb: bool = False) -> SpriteImage:
    """Decode a Pillow image into a :class:`SpriteImage`.

    Palette images keep their colormap and indices. Other images get a
    colormap of their exact colors in order of first appearance; no color
    reduction is attempted. With ``rgb`` the pixels are always returned as
    RGB triplets without a colormap.
    """

    width, height = image.size

    if _has_alpha(image):
        warnings.warn(
            "Image declares transparency. Sprites cannot have transparent areas, "
            "so transparent parts are flattened onto black.",
            AlphaIgnoredWarning,
            stacklevel=2,
        )

    if image.mode == "P" and not rgb:
        flat_palette = image.getpalette() or []
        usable = len(flat_palette) - len(flat_palette) % 3
        colormap = [tuple(flat_palette[i : i + 3]) for i in range(0, usable, 3)]
        if "transparency" in image.info:
            colormap = _colormap_on_black(colormap, image.info["transparency"])  # type: ignore[arg-type]
        return SpriteImage(width, height, list(image.tobytes()), colormap)  # type: ignore[arg-type]

    pixels = _rgb_pixels(_flatten_to_rgb(image))
    if rgb:
        return SpriteImage(width, height, pixels, None)

    lookup: Dict[Color, int] = {}
    indices: List[int] = []
    for color in pixels:
        index = lookup.get(color)
        if index is None:
            index = lookup[color] = len(lookup)
        indices.append(index)
    return SpriteImage(width, height, indices, list(lookup))


def load_png(path: str | Path, rgb: bool = False) -> SpriteImage:
    path = Path(path)
    try:
        with Image.open(path) as img:
            img.load()
            return load_image(img, rgb=rgb)
    except FileNotFoundError as exc:
        raise ConversionError(f"Input file not found: {path}") from exc
    except OSError as exc:
        raise ConversionError(f"Failed to read PNG: {path}") from exc


def encode_sprite(image: SpriteImage, options: ConvertOptions | None = None) -> EncodedSprite:
    """Pick the mode, bind the palette and pack ``image`` into sprite bytes."""

    options = options or ConvertOptions()
    explicit = bind_explicit_palette(options.palette) if options.palette else ()

    if image.colormap is None and not explicit:
        raise ConversionError("RGB pixel data needs an explicit palette to match against")

    if options.mode is not None:
        mode = options.mode
    elif explicit:
        mode = resolve_mode(len(explicit))
    else:
        mode = resolve_mode(len(image.colormap))  # type: ignore[arg-type]

    width_bytes = width_in_bytes(image.width, mode)

    if explicit:
        palette = explicit
    else:
        palette = derive_palette(image.colormap, options.measured_colors)  # type: ignore[arg-type]
        if len(palette) > mode.max_colors:
            warnings.warn(
                f"Colormap size is {len(palette)}, more than the {mode.max_colors} allowed "
                f"for CPC mode {mode.crtc_mode}. This is okay as long as the image never "
                f"uses palette index {mode.max_colors} or above.",
                ColormapOverflowWarning,
                stacklevel=2,
            )
            # Indices at or above max_colors are rejected when packing.
            palette = palette[: mode.max_colors]

    if image.colormap is None:
        candidates = [
            color.measured_rgb if options.measured_colors else color.rgb for color in palette
        ]
        indices: Sequence[int] = [nearest(rgb, candidates) for rgb in image.pixels]  # type: ignore[arg-type]
    else:
        indices = image.pixels  # type: ignore[assignment]

    data = pack_pixels(indices, image.width, image.height, mode, color_limit=len(palette))

    return EncodedSprite(
        data=data,
        width_bytes=width_bytes,
        width_pixels=width_bytes * mode.pixels_per_byte,
        height=image.height,
        mode=mode,
        palette=palette,
    )


def convert_png(path: str | Path, options: ConvertOptions | None = None) -> EncodedSprite:
    options = options or ConvertOptions()
    # An explicit palette means pixels are matched by color, not by index.
    image = load_png(path, rgb=bool(options.palette))
    return encode_sprite(image, options)


def sprite_to_assembly(
    sprite: EncodedSprite, options: ConvertOptions | None = None, source: str | Path = "sprite"
) -> str:
    options = options or ConvertOptions()
    stem = options.name_stem if options.name_stem is not None else make_name_stem(source)
    return render_assembly(
        sprite,
        symbol=format_name(options.symbol_format, stem),
        module=format_name(options.module_format, stem),
        bottom_to_top=options.bottom_to_top,
        hardware_inks=options.hardware_inks,
    )


def convert_png_to_asm(path: str | Path, options: ConvertOptions | None = None) -> str:
    sprite = convert_png(path, options)
    return sprite_to_assembly(sprite, options, source=path)


def render_preview(sprite: EncodedSprite, measured: bool = False) -> Image.Image:
    """Decode packed sprite bytes back into an RGB image for a visual check."""

    indices = unpack_pixels(sprite.data, sprite.width_bytes, sprite.height, sprite.mode)
    colors = [color.measured_rgb if measured else color.rgb for color in sprite.palette]
    raw = bytearray()
    for index in indices:
        raw.extend(colors[index])
    return Image.frombytes("RGB", (sprite.width_pixels, sprite.height), bytes(raw))


def encode_preview(sprite: EncodedSprite, path: str | Path, measured: bool = False) -> bytes:
    """Encode the preview in the image format named by ``path``'s extension."""

    suffix = Path(path).suffix.lower()
    image_format = Image.registered_extensions().get(suffix)
    if image_format is None:
        raise ConversionError(f"Unknown preview image format: {path}")
    buffer = io.BytesIO()
    try:
        render_preview(sprite, measured).save(buffer, format=image_format)
    except (OSError, ValueError) as exc:
        raise ConversionError(f"Failed to encode preview {path}: {exc}") from exc
    return buffer.getvalue()
