from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


@dataclass(frozen=True)
class RGB:
    r: int
    g: int
    b: int

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


class CursorStyle(IntEnum):
    # DECSCUSR parameter, passed to the "Ss" extended capability.
    DEFAULT = 0
    BLINKING_BLOCK = 1
    STEADY_BLOCK = 2
    BLINKING_UNDERLINE = 3
    STEADY_UNDERLINE = 4
    BLINKING_BAR = 5
    STEADY_BAR = 6


class UnderlineStyle(IntEnum):
    # SGR 4:n sub-parameter, passed to the "Smulx" extended capability.
    NONE = 0
    NORMAL = 1
    DOUBLE = 2
    CURLY = 3
    DOTTED = 4
    DASHED = 5
