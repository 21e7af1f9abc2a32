import random
from dataclasses import astuple

import pytest

from terminal_info.color import Color8, Color16, Color88, Color256, TrueColor
from terminal_info.types import RGB, CursorStyle


@pytest.mark.parametrize("cls", [Color8, Color16, Color88, Color256])
def test_palette_round_trips_through_rgb(cls):
    for color in cls.values():
        again = cls.from_rgb(*astuple(color.to_rgb()))
        # Some palettes repeat an RGB value, so only the color is guaranteed.
        assert again.to_rgb() == color.to_rgb()


@pytest.mark.parametrize("cls", [Color8, Color16, Color88, Color256])
def test_from_rgb_stays_in_the_palette(cls):
    for rgb in [(0, 0, 0), (255, 255, 255), (1, 2, 3), (200, 100, 50), (128, 128, 129), (47, 48, 255)]:
        color = cls.from_rgb(*rgb)
        assert isinstance(color, cls)
        assert 0 <= int(color) < cls.SIZE


def _distance2(a, r, g, b):
    return (a.r - r) ** 2 + (a.g - g) ** 2 + (a.b - b) ** 2


@pytest.mark.parametrize("cls", [Color8, Color16, Color88, Color256])
def test_from_rgb_is_the_nearest_palette_entry(cls):
    rng = random.Random(20240501)
    palette = [c.to_rgb() for c in cls.values()]
    samples = [(0, 0, 255), (95, 95, 94), (139, 139, 140)]
    samples += [(rng.randrange(256), rng.randrange(256), rng.randrange(256)) for _ in range(300)]

    for r, g, b in samples:
        chosen = _distance2(cls.from_rgb(r, g, b).to_rgb(), r, g, b)
        best = min(_distance2(c, r, g, b) for c in palette)
        assert chosen == best, (cls.__name__, (r, g, b))


def test_smaller_palettes_are_contained_in_larger_ones():
    for c8 in Color8.values():
        assert c8.to_color16().to_rgb() == c8.to_rgb()
        assert c8.to_color88().to_rgb() == c8.to_rgb()
        assert c8.to_color256().to_rgb() == c8.to_rgb()
    for c16 in Color16.values():
        assert c16.to_color88().to_rgb() == c16.to_rgb()
        assert c16.to_color256().to_rgb() == c16.to_rgb()
        assert c16.to_color256().to_color16() == c16
        assert c16.to_true_color().to_rgb() == c16.to_rgb()


def test_only_ansi_entries_narrow_to_16():
    assert Color256(9).to_color16() == Color16.BRIGHT_RED
    assert Color256(196).to_color16() is None
    assert Color88(20).to_color16() is None


def test_known_palette_entries():
    assert Color256(196).to_rgb() == RGB(255, 0, 0)
    assert Color256(16).to_rgb() == RGB(0, 0, 0)
    assert Color256(231).to_rgb() == RGB(255, 255, 255)
    assert Color256(232).to_rgb() == RGB(8, 8, 8)
    assert Color256(255).to_rgb() == RGB(238, 238, 238)
    assert Color88(20).to_rgb() == RGB(0x00, 0x8B, 0x00)
    assert Color88(79).to_rgb() == RGB(0xFF, 0xFF, 0xFF)
    assert Color88(80).to_rgb() == RGB(0x2E, 0x2E, 0x2E)
    assert len(Color256.grayscales()) == 24


def test_color8_uses_set_foreground_numbering():
    assert Color8.BLUE == Color8(1)
    assert Color8.RED == Color8(4)
    assert Color8.RED.to_color16() == Color16.RED
    assert Color8.WHITE.to_rgb() == RGB(0xC0, 0xC0, 0xC0)
    assert str(Color8.YELLOW) == "yellow"
    assert Color8.from_rgb(255, 0, 0) == Color8.RED


def test_nearest_match():
    assert Color256.from_rgb(250, 5, 5) == Color256(9)
    assert Color256.from_rgb(100, 100, 100) == Color256(241)
    assert Color256.from_rgb(0, 95, 135) == Color256(24)
    assert Color88.from_rgb(0, 0x8B, 0) == Color88(20)
    assert Color16.from_rgb(240, 240, 240) == Color16.BRIGHT_WHITE


def test_ties_resolve_to_the_lowest_number():
    # Equally far from black and dark red.
    assert Color16.from_rgb(0x40, 0, 0) == Color16.BLACK
    # Pure black exists as ANSI 0 and as cube entry 16.
    assert Color256.from_rgb(0, 0, 0) == Color256(0)


def test_validation():
    with pytest.raises(ValueError):
        Color256(256)
    with pytest.raises(ValueError):
        Color16(-1)
    with pytest.raises(TypeError):
        Color88(1.0)
    with pytest.raises(TypeError):
        Color8(True)
    with pytest.raises(ValueError):
        Color256.from_rgb(256, 0, 0)
    with pytest.raises(ValueError):
        TrueColor(0, -1, 0)
    with pytest.raises(ValueError):
        TrueColor.from_int(1 << 24)


def test_true_color():
    c = TrueColor.from_int(0x123456)

    assert c == TrueColor(0x12, 0x34, 0x56)
    assert int(c) == 0x123456
    assert str(c) == "#123456"
    assert TrueColor.from_rgb(*astuple(c.to_rgb())) == c
    assert TrueColor.BRIGHT_RED == TrueColor(255, 0, 0)


def test_palette_types_are_distinct():
    assert Color16(1) != Color256(1)
    assert str(Color16(9)) == "bright_red"
    assert str(Color256(196)) == "#ff0000"
    assert int(Color256(196)) == 196


def test_cursor_style_values():
    assert int(CursorStyle.STEADY_BAR) == 6
