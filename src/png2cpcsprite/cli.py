"""Command line interface for png2cpcsprite."""

from __future__ import annotations

import argparse
import sys
import warnings
from pathlib import Path

from .assembler import MODULE_FORMAT_DEFAULT, SYMBOL_FORMAT_DEFAULT
from .colors import format_palette_text
from .converter import ConvertOptions, convert_png, encode_preview, sprite_to_assembly
from .errors import ConversionError
from .modes import Mode
from .palette import PALETTE_NOTATIONS, parse_palette


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="png2cpcsprite",
        description=(
            "Convert a PNG image into Amstrad CPC sprite data, written as assembly source.\n"
            "The output defines the symbols <name>_bytes, _height, _pixels_per_line,\n"
            "_bytes_per_line, _crtc_mode and the palette, followed by <name>_data::.\n"
            "Without --palette, each colormap entry of the PNG is mapped to the nearest\n"
            "CPC color and pixels keep their colormap index."
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )

    group = parser.add_argument_group("Input/output")
    group.add_argument(
        "-i",
        "--input",
        required=True,
        help="PNG file, preferably with a palette (colormap)",
    )
    group.add_argument(
        "-o",
        "--output",
        required=True,
        help="Destination assembly source file (.s)",
    )
    group.add_argument(
        "--preview",
        help="Optional PNG written back from the packed sprite bytes",
    )
    group.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite existing files without prompting",
    )

    group = parser.add_argument_group("Processing")
    group.add_argument(
        "-p",
        "--palette",
        default="",
        help=(
            "Runtime palette, comma separated (max 16 entries). Pixels are matched to the\n"
            "nearest of these colors. Not meant as general color reduction, but to cope\n"
            "with images using the right colors in the wrong order or with extra unused\n"
            "colormap entries. An empty string declares no palette."
        ),
    )
    group.add_argument(
        "--palette-notation",
        choices=PALETTE_NOTATIONS,
        default="firmware",
        help=(
            "firmware: decimal ink numbers as in BASIC, e.g. 1,24,20,6\n"
            "rgb: base-3 R,G,B digit triplets, e.g. 001,220,022,020"
        ),
    )
    group.add_argument(
        "-m",
        "--mode",
        choices=["0", "1", "2", "-"],
        default="-",
        help=(
            "CPC mode. '-' guesses it from the size of --palette, else from the number\n"
            "of colormap entries in the image (unused entries confuse the guess)."
        ),
    )
    group.add_argument(
        "-d",
        "--direction",
        choices=["t", "b"],
        default="t",
        help="Write scanlines top to bottom (t) or bottom to top (b)",
    )
    group.add_argument(
        "--measured-colors",
        action="store_true",
        help="Match against colors measured on real hardware instead of nominal RGB",
    )

    group = parser.add_argument_group("Assembly-level naming")
    group.add_argument(
        "-n",
        "--name-stem",
        help="Name used in symbols. Defaults to the input file name with invalid characters as '_'",
    )
    group.add_argument(
        "--symbol-format",
        default=SYMBOL_FORMAT_DEFAULT,
        help=f"Symbol name format, must contain %%s (default {SYMBOL_FORMAT_DEFAULT.replace('%', '%%')})",
    )
    group.add_argument(
        "--module-format",
        default=MODULE_FORMAT_DEFAULT,
        help=(
            "Module name format; may omit %%s to put several files in one module "
            f"(default {MODULE_FORMAT_DEFAULT.replace('%', '%%')})"
        ),
    )
    group.add_argument(
        "--hardware-inks",
        action="store_true",
        help="Also emit gate array ink bytes for each palette entry",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Print conversion details")
    return parser


def build_options(args: argparse.Namespace) -> ConvertOptions:
    if "%s" not in args.symbol_format:
        raise ConversionError(f"Symbol format must contain %s: {args.symbol_format}")

    options = ConvertOptions()
    options.palette = tuple(parse_palette(args.palette, args.palette_notation))
    options.mode = None if args.mode == "-" else Mode.from_crtc(int(args.mode))
    options.bottom_to_top = args.direction == "b"
    options.measured_colors = args.measured_colors
    options.name_stem = args.name_stem
    options.symbol_format = args.symbol_format
    options.module_format = args.module_format
    options.hardware_inks = args.hardware_inks
    return options


def check_outputs(targets: list[Path], force: bool) -> None:
    conflicts = [str(target) for target in targets if target.exists() and not force]
    if conflicts:
        raise ConversionError(
            "Output files already exist (use --force to overwrite):\n" + "\n".join(conflicts)
        )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = build_options(args)
        output = Path(args.output)
        preview = Path(args.preview) if args.preview else None
        check_outputs([p for p in (output, preview) if p is not None], args.force)

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            try:
                sprite = convert_png(args.input, options)
            finally:
                for warning in caught:
                    print(f"Warning: {warning.message}", file=sys.stderr)

        if args.verbose:
            print(
                f"CPC mode {sprite.mode.crtc_mode}: {sprite.width_pixels}x{sprite.height} pixels, "
                f"{sprite.width_bytes} bytes per line, {len(sprite.data)} bytes"
            )
            print(f"palette {format_palette_text(sprite.palette)}")

        source = sprite_to_assembly(sprite, options, source=args.input)
        preview_bytes = (
            encode_preview(sprite, preview, options.measured_colors) if preview is not None else None
        )

        written: list[Path] = []
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(source)
            written.append(output)
            if preview is not None and preview_bytes is not None:
                preview.parent.mkdir(parents=True, exist_ok=True)
                preview.write_bytes(preview_bytes)
                written.append(preview)
        except OSError as exc:
            for path in written:
                path.unlink(missing_ok=True)
            raise ConversionError(f"Failed to write output: {exc}") from exc

        for path in written:
            print(f"wrote {path}")
        return 0
    except ConversionError as exc:
        print(exc, file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
