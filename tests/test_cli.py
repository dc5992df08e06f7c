from pathlib import Path

from PIL import Image

from png2cpcsprite.cli import main

FOUR_COLORS = [(0, 0, 0), (255, 255, 0), (0, 255, 255), (255, 0, 0)]


def _write_png(path: Path, width: int, height: int, indices, colormap=FOUR_COLORS) -> Path:
    image = Image.new("P", (width, height))
    image.putpalette([component for rgb in colormap for component in rgb])
    image.putdata(indices)
    image.save(path)
    return path


def test_cli_writes_assembly(tmp_path, capsys):
    src = _write_png(tmp_path / "ball.png", 4, 2, [3, 0, 1, 2, 1, 1, 1, 1])
    out = tmp_path / "out" / "ball.s"

    assert main(["-i", str(src), "-o", str(out)]) == 0

    text = out.read_text()
    assert text.startswith(".module module_ball_png\n")
    assert "sprite_ball_png_palette_ink_1 == 24\n" in text
    assert text.endswith("\t.byte 0xa9\n\t.byte 0xf0\n")
    assert f"wrote {out}" in capsys.readouterr().out


def test_cli_bottom_to_top_and_names(tmp_path):
    src = _write_png(tmp_path / "ball.png", 4, 2, [3, 0, 1, 2, 1, 1, 1, 1])
    out = tmp_path / "ball.s"

    code = main(
        [
            "-i", str(src),
            "-o", str(out),
            "-d", "b",
            "-n", "hero",
            "--symbol-format", "gfx_%s",
            "--module-format", "graphics",
            "--hardware-inks",
        ]
    )

    assert code == 0
    text = out.read_text()
    assert text.startswith(".module graphics\n")
    assert "gfx_hero_palette_hw_0 == 0x54\n" in text
    assert text.endswith("gfx_hero_data::\n\n\t.byte 0xf0\n\t.byte 0xa9\n")


def test_cli_explicit_palette_in_rgb_notation(tmp_path):
    colormap = [(255, 0, 0), (0, 255, 255), (255, 255, 0), (0, 0, 0)]
    src = _write_png(tmp_path / "ball.png", 4, 1, [0, 1, 2, 3], colormap)
    out = tmp_path / "ball.s"

    code = main(
        ["-i", str(src), "-o", str(out), "-p", "000,220,022,200", "--palette-notation", "rgb"]
    )

    assert code == 0
    text = out.read_text()
    assert "sprite_ball_png_palette_ink_3 == 6\n" in text
    assert text.endswith("\t.byte 0xac\n")


def test_cli_unaligned_width_fails(tmp_path, capsys):
    src = _write_png(tmp_path / "wide.png", 10, 1, [0] * 10)
    out = tmp_path / "wide.s"

    assert main(["-i", str(src), "-o", str(out), "-m", "1"]) == 1
    assert not out.exists()
    assert "image width 10 pixels" in capsys.readouterr().err


def test_cli_out_of_range_index_fails(tmp_path, capsys):
    colormap = FOUR_COLORS + [(0, 0, 255)]
    src = _write_png(tmp_path / "five.png", 4, 1, [0, 4, 0, 0], colormap)
    out = tmp_path / "five.s"

    assert main(["-i", str(src), "-o", str(out), "-m", "1"]) == 1
    captured = capsys.readouterr()
    assert "Warning: Colormap size is 5" in captured.err
    assert "palette index 4" in captured.err
    assert not out.exists()


def test_cli_refuses_to_overwrite(tmp_path, capsys):
    src = _write_png(tmp_path / "ball.png", 4, 1, [3, 0, 1, 2])
    out = tmp_path / "ball.s"
    out.write_text("keep")

    assert main(["-i", str(src), "-o", str(out)]) == 1
    assert out.read_text() == "keep"
    assert "--force" in capsys.readouterr().err

    assert main(["-i", str(src), "-o", str(out), "-f"]) == 0
    assert out.read_text().startswith(".module")


def test_cli_rejects_symbol_format_without_placeholder(tmp_path):
    src = _write_png(tmp_path / "ball.png", 4, 1, [3, 0, 1, 2])
    assert main(["-i", str(src), "-o", str(tmp_path / "b.s"), "--symbol-format", "fixed"]) == 1


def test_cli_rejects_bad_palette(tmp_path, capsys):
    src = _write_png(tmp_path / "ball.png", 4, 1, [3, 0, 1, 2])
    assert main(["-i", str(src), "-o", str(tmp_path / "b.s"), "-p", "1,99"]) == 1
    assert "Cannot parse ink '99'" in capsys.readouterr().err


def test_cli_missing_input(tmp_path, capsys):
    assert main(["-i", str(tmp_path / "nope.png"), "-o", str(tmp_path / "b.s")]) == 1
    assert "Input file not found" in capsys.readouterr().err


def test_cli_preview_and_verbose(tmp_path, capsys):
    src = _write_png(tmp_path / "ball.png", 4, 1, [3, 0, 1, 2])
    out = tmp_path / "ball.s"
    preview = tmp_path / "ball_cpc.png"

    assert main(["-i", str(src), "-o", str(out), "--preview", str(preview), "-v"]) == 0

    stdout = capsys.readouterr().out
    assert "CPC mode 1: 4x1 pixels, 1 bytes per line, 1 bytes" in stdout
    assert "3: 6 (Bright Red)" in stdout
    with Image.open(preview) as img:
        assert img.size == (4, 1)
        assert img.convert("RGB").getpixel((0, 0)) == (255, 0, 0)


def test_cli_unknown_preview_format_writes_nothing(tmp_path, capsys):
    src = _write_png(tmp_path / "ball.png", 4, 1, [3, 0, 1, 2])
    out = tmp_path / "ball.s"
    preview = tmp_path / "ball.xyz"

    assert main(["-i", str(src), "-o", str(out), "--preview", str(preview)]) == 1

    captured = capsys.readouterr()
    assert "Unknown preview image format" in captured.err
    assert "wrote" not in captured.out
    assert not out.exists()
    assert not preview.exists()
