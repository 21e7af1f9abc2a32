from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import ClassVar, Iterable, Iterator, Optional, Tuple

from .types import RGB

# ------------------------- shared tables -------------------------

# xterm's default ANSI colors; 88- and 256-color palettes reuse them for 0..15.
ANSI16: Tuple[RGB, ...] = (
    RGB(0x00, 0x00, 0x00),
    RGB(0x80, 0x00, 0x00),
    RGB(0x00, 0x80, 0x00),
    RGB(0x80, 0x80, 0x00),
    RGB(0x00, 0x00, 0x80),
    RGB(0x80, 0x00, 0x80),
    RGB(0x00, 0x80, 0x80),
    RGB(0xC0, 0xC0, 0xC0),
    RGB(0x80, 0x80, 0x80),
    RGB(0xFF, 0x00, 0x00),
    RGB(0x00, 0xFF, 0x00),
    RGB(0xFF, 0xFF, 0x00),
    RGB(0x00, 0x00, 0xFF),
    RGB(0xFF, 0x00, 0xFF),
    RGB(0x00, 0xFF, 0xFF),
    RGB(0xFF, 0xFF, 0xFF),
)

_ANSI16_NAMES = (
    "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white",
    "bright_black", "bright_red", "bright_green", "bright_yellow",
    "bright_blue", "bright_magenta", "bright_cyan", "bright_white",
)

# setf/setb numbering: bit 2 red, bit 1 green, bit 0 blue.
_COLOR8_NAMES = ("black", "blue", "green", "cyan", "red", "magenta", "yellow", "white")
_COLOR8_TO_16 = (0, 4, 2, 6, 1, 5, 3, 7)


def _distance2(c: RGB, r: int, g: int, b: int) -> int:
    dr, dg, db = c.r - r, c.g - g, c.b - b
    return dr * dr + dg * dg + db * db


def _nearest(candidates: Iterable[Tuple[int, int]]) -> int:
    # min() keeps the first of several equal distances.
    return min(candidates, key=lambda item: item[1])[0]


def _check_rgb(r: int, g: int, b: int) -> None:
    for channel, value in (("r", r), ("g", g), ("b", b)):
        if not 0 <= value <= 255:
            raise ValueError(f"{channel}={value} is outside 0..255")


def _ansi16_candidates(r: int, g: int, b: int) -> Iterator[Tuple[int, int]]:
    for number, c in enumerate(ANSI16):
        yield number, _distance2(c, r, g, b)


class _Cube:
    """
    RGB cube of `len(levels) ** 3` entries starting at palette index `base`.
    Each axis is bucketed by the rounded midpoints between adjacent levels.
    """

    def __init__(self, levels: Tuple[int, ...], base: int):
        self.levels = levels
        self.base = base
        bounds = [0]
        for lo, hi in zip(levels, levels[1:]):
            bounds.append((lo + hi + 1) >> 1)
        bounds.append(256)
        self.boundaries = tuple(bounds)

    @property
    def size(self) -> int:
        return len(self.levels) ** 3

    def axis_index(self, value: int) -> int:
        return bisect_right(self.boundaries, value) - 1

    def to_rgb(self, number: int) -> RGB:
        n = len(self.levels)
        offset = number - self.base
        return RGB(self.levels[offset // (n * n)], self.levels[offset // n % n], self.levels[offset % n])

    def candidate(self, r: int, g: int, b: int) -> Tuple[int, int]:
        n = len(self.levels)
        ri, gi, bi = self.axis_index(r), self.axis_index(g), self.axis_index(b)
        number = self.base + ri * n * n + gi * n + bi
        return number, _distance2(self.to_rgb(number), r, g, b)


class _GrayRamp:
    def __init__(self, levels: Tuple[int, ...], base: int):
        self.levels = levels
        self.base = base

    def to_rgb(self, number: int) -> RGB:
        v = self.levels[number - self.base]
        return RGB(v, v, v)

    def candidates(self, r: int, g: int, b: int) -> Iterator[Tuple[int, int]]:
        for i, v in enumerate(self.levels):
            yield self.base + i, _distance2(RGB(v, v, v), r, g, b)


_CUBE88 = _Cube((0x00, 0x8B, 0xCD, 0xFF), base=16)
_GRAY88 = _GrayRamp((0x2E, 0x5C, 0x73, 0x8B, 0xA2, 0xB9, 0xD0, 0xE7), base=80)
_CUBE256 = _Cube((0x00, 0x5F, 0x87, 0xAF, 0xD7, 0xFF), base=16)
_GRAY256 = _GrayRamp(tuple(0x08 + 10 * i for i in range(24)), base=232)


# ------------------------- palette values -------------------------

@dataclass(frozen=True)
class PaletteColor:
    number: int

    SIZE: ClassVar[int] = 0

    def __post_init__(self) -> None:
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise TypeError(f"{type(self).__name__} needs an int, got {type(self.number).__name__}")
        if not 0 <= self.number < self.SIZE:
            raise ValueError(f"{type(self).__name__} number {self.number} is outside 0..{self.SIZE - 1}")

    def __int__(self) -> int:
        return self.number

    def __str__(self) -> str:
        return self.to_rgb().to_hex()

    def to_rgb(self) -> RGB:
        raise NotImplementedError

    def to_true_color(self) -> "TrueColor":
        c = self.to_rgb()
        return TrueColor(c.r, c.g, c.b)

    @classmethod
    def values(cls) -> Iterator["PaletteColor"]:
        return (cls(n) for n in range(cls.SIZE))


class Color8(PaletteColor):
    """
    The 8 colors addressed by set_foreground/set_background.
    """

    SIZE = 8

    def __str__(self) -> str:
        return _COLOR8_NAMES[self.number]

    def to_rgb(self) -> RGB:
        return ANSI16[_COLOR8_TO_16[self.number]]

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color8":
        _check_rgb(r, g, b)
        return cls(_nearest((n, _distance2(ANSI16[c16], r, g, b)) for n, c16 in enumerate(_COLOR8_TO_16)))

    def to_color16(self) -> "Color16":
        return Color16(_COLOR8_TO_16[self.number])

    def to_color88(self) -> "Color88":
        return Color88(_COLOR8_TO_16[self.number])

    def to_color256(self) -> "Color256":
        return Color256(_COLOR8_TO_16[self.number])


class Color16(PaletteColor):
    """
    The ANSI colors addressed by set_a_foreground/set_a_background on 16-color terminals.
    """

    SIZE = 16

    def __str__(self) -> str:
        return _ANSI16_NAMES[self.number]

    def to_rgb(self) -> RGB:
        return ANSI16[self.number]

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color16":
        _check_rgb(r, g, b)
        return cls(_nearest(_ansi16_candidates(r, g, b)))

    def to_color88(self) -> "Color88":
        return Color88(self.number)

    def to_color256(self) -> "Color256":
        return Color256(self.number)


class Color88(PaletteColor):
    """
    0..15 ANSI, 16..79 a 4x4x4 cube, 80..87 a gray ramp.
    """

    SIZE = 88

    def __str__(self) -> str:
        if self.number < 16:
            return _ANSI16_NAMES[self.number]
        return self.to_rgb().to_hex()

    def to_rgb(self) -> RGB:
        if self.number < 16:
            return ANSI16[self.number]
        if self.number < _GRAY88.base:
            return _CUBE88.to_rgb(self.number)
        return _GRAY88.to_rgb(self.number)

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color88":
        _check_rgb(r, g, b)
        candidates = list(_GRAY88.candidates(r, g, b))
        candidates.extend(_ansi16_candidates(r, g, b))
        candidates.append(_CUBE88.candidate(r, g, b))
        return cls(_nearest(candidates))

    def to_color16(self) -> Optional[Color16]:
        return Color16(self.number) if self.number < 16 else None


class Color256(PaletteColor):
    """
    0..15 ANSI, 16..231 a 6x6x6 cube, 232..255 a gray ramp.
    """

    SIZE = 256

    def __str__(self) -> str:
        if self.number < 16:
            return _ANSI16_NAMES[self.number]
        return self.to_rgb().to_hex()

    def to_rgb(self) -> RGB:
        if self.number < 16:
            return ANSI16[self.number]
        if self.number < _GRAY256.base:
            return _CUBE256.to_rgb(self.number)
        return _GRAY256.to_rgb(self.number)

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color256":
        _check_rgb(r, g, b)
        candidates = list(_GRAY256.candidates(r, g, b))
        candidates.extend(_ansi16_candidates(r, g, b))
        candidates.append(_CUBE256.candidate(r, g, b))
        return cls(_nearest(candidates))

    def to_color16(self) -> Optional[Color16]:
        return Color16(self.number) if self.number < 16 else None

    @classmethod
    def grayscales(cls) -> Tuple["Color256", ...]:
        return tuple(cls(n) for n in range(_GRAY256.base, cls.SIZE))


@dataclass(frozen=True)
class TrueColor:
    r: int
    g: int
    b: int

    SIZE: ClassVar[int] = 1 << 24

    def __post_init__(self) -> None:
        _check_rgb(self.r, self.g, self.b)

    def __int__(self) -> int:
        return self.r << 16 | self.g << 8 | self.b

    def __str__(self) -> str:
        return self.to_rgb().to_hex()

    def to_rgb(self) -> RGB:
        return RGB(self.r, self.g, self.b)

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "TrueColor":
        return cls(r, g, b)

    @classmethod
    def from_int(cls, value: int) -> "TrueColor":
        if not 0 <= value < cls.SIZE:
            raise ValueError(f"TrueColor value {value:#x} is outside 0..0xffffff")
        return cls(value >> 16 & 0xFF, value >> 8 & 0xFF, value & 0xFF)

    @classmethod
    def values(cls) -> Iterator["TrueColor"]:
        return (cls.from_int(v) for v in range(cls.SIZE))


for _number, _name in enumerate(_COLOR8_NAMES):
    setattr(Color8, _name.upper(), Color8(_number))

for _number, _name in enumerate(_ANSI16_NAMES):
    setattr(Color16, _name.upper(), Color16(_number))
    setattr(Color88, _name.upper(), Color88(_number))
    setattr(Color256, _name.upper(), Color256(_number))
    _c = ANSI16[_number]
    setattr(TrueColor, _name.upper(), TrueColor(_c.r, _c.g, _c.b))

del _number, _name, _c
