"""Binding image colormaps to CPC hardware colors."""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .colors import Color, HardwareColor, nearest_hardware_color
from .errors import PaletteSyntaxError, TooManyColorsError

Palette = Tuple[HardwareColor, ...]

MAX_PALETTE_ENTRIES = 16
PALETTE_NOTATIONS = ("firmware", "rgb")


def bind_explicit_palette(codes: Iterable[int]) -> Palette:
    """Use caller supplied firmware ink numbers verbatim as the palette."""

    codes = list(codes)
    palette: List[HardwareColor] = []
    for entry, code in enumerate(codes):
        try:
            palette.append(HardwareColor(code))
        except (TypeError, ValueError) as exc:
            raise PaletteSyntaxError(
                f"Ink {code!r} is not a CPC color (0-26)",
                ",".join(str(int(c)) if isinstance(c, int) else str(c) for c in codes),
                entry,
                unit="entry",
            ) from exc
    if len(palette) > MAX_PALETTE_ENTRIES:
        raise TooManyColorsError(len(palette))
    return tuple(palette)


def derive_palette(colormap: Sequence[Color], measured: bool = False) -> Palette:
    """Map each colormap entry to its nearest CPC color, keeping colormap order.

    Pixel index ``i`` keeps referring to entry ``i`` of the result.
    """

    return tuple(nearest_hardware_color(rgb, measured) for rgb in colormap)


def _parse_firmware_item(item: str) -> int:
    if not item.isdigit() or not item.isascii():
        raise ValueError("expected a decimal ink number")
    value = int(item, 10)
    if value > HardwareColor.BRIGHT_WHITE:
        raise ValueError(f"ink {value} is out of range 0-26")
    return value


def _parse_rgb_item(item: str) -> int:
    if len(item) != 3 or any(c not in "012" for c in item):
        raise ValueError("expected three base-3 digits (R, G, B)")
    r, g, b = (int(c) for c in item)
    return HardwareColor.from_levels(r, g, b).value


def parse_palette(text: str, notation: str = "firmware") -> Palette:
    """Parse a comma-separated palette declaration.

    ``notation`` selects the grammar:

    * ``firmware``: decimal ink numbers as used by the firmware and BASIC,
      e.g. ``1,24,20,6``.
    * ``rgb``: three base-3 digits per color in R, G, B order, e.g.
      ``001,220,022,020``.

    An empty string declares no palette.
    """

    if notation == "firmware":
        parse_item = _parse_firmware_item
    elif notation == "rgb":
        parse_item = _parse_rgb_item
    else:
        raise ValueError(f"Unknown palette notation: {notation}")

    if text == "":
        return ()

    values: List[int] = []
    position = 0
    for item in text.split(","):
        if len(values) == MAX_PALETTE_ENTRIES:
            raise PaletteSyntaxError(
                f"Already parsed {MAX_PALETTE_ENTRIES} colors and still something to parse",
                text,
                position,
            )
        stripped = item.strip()
        try:
            values.append(parse_item(stripped))
        except ValueError as exc:
            raise PaletteSyntaxError(
                f"Cannot parse ink '{stripped}' in {notation} notation ({exc})", text, position
            ) from exc
        position += len(item) + 1
    return tuple(HardwareColor(value) for value in values)
