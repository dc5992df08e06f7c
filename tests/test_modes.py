import warnings

import pytest

from png2cpcsprite.errors import DegeneratePaletteWarning, TooManyColorsError
from png2cpcsprite.modes import Mode, resolve_mode


@pytest.mark.parametrize(
    "count, expected",
    [
        (2, Mode.MODE2),
        (3, Mode.MODE1),
        (4, Mode.MODE1),
        (5, Mode.MODE0),
        (16, Mode.MODE0),
    ],
)
def test_resolve_mode_bands(count, expected):
    assert resolve_mode(count) is expected


def test_resolve_mode_too_many_colors():
    with pytest.raises(TooManyColorsError) as excinfo:
        resolve_mode(17)
    assert excinfo.value.color_count == 17


@pytest.mark.parametrize("count", [0, 1])
def test_resolve_mode_warns_on_degenerate_count(count):
    with pytest.warns(DegeneratePaletteWarning):
        assert resolve_mode(count) is Mode.MODE1


def test_resolve_mode_does_not_warn_for_normal_counts():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        resolve_mode(4)


def test_mode_constants():
    assert [m.bits_per_pixel for m in Mode] == [4, 2, 1]
    assert [m.pixels_per_byte for m in Mode] == [2, 4, 8]
    assert [m.max_colors for m in Mode] == [16, 4, 2]
    assert [m.crtc_mode for m in Mode] == [0, 1, 2]


def test_from_crtc():
    assert Mode.from_crtc(1) is Mode.MODE1
    with pytest.raises(ValueError):
        Mode.from_crtc(3)
