from __future__ import annotations

from typing import Optional, Tuple, Type, Union

from . import pseudo
from .capabilities import BooleanCapability, NumberCapability, StringCapability, lookup
from .color import Color8, Color16, Color88, Color256, PaletteColor, TrueColor
from .errors import UsageError
from .expansion import Value
from .store import CapabilityStore
from .types import CursorStyle, UnderlineStyle

AnsiColor = Union[Color16, Color88, Color256, TrueColor]


def _key(kind, cap):
    # Full standard names ("max_colors") resolve to the enum; anything else is extended.
    if isinstance(cap, str) and cap == cap.lower():
        member = lookup(kind, cap)
        if member is not None:
            return member
    return cap


def _non_negative(**values: int) -> None:
    for name, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise UsageError(f"{name} must be an int, got {type(value).__name__}")
        if value < 0:
            raise UsageError(f"{name} must not be negative, got {value}")


def _member(kind, value):
    try:
        return kind(value)
    except ValueError as e:
        raise UsageError(f"{value!r} is not a {kind.__name__}") from e


def _palette_fits(color: Union[PaletteColor, TrueColor], max_colors: Optional[int]) -> bool:
    if max_colors is None:
        return False
    if isinstance(color, (Color8, Color16)):
        return max_colors >= color.SIZE
    # Indices above 15 mean different colors in 88- and 256-color palettes.
    return max_colors == color.SIZE


def _flag(cap: BooleanCapability) -> property:
    return property(lambda self: self._store.boolean(cap), doc=f"{cap.name.lower()} (boolean)")


def _count(cap: NumberCapability) -> property:
    return property(lambda self: self._store.number(cap), doc=f"{cap.name.lower()} (number)")


def _sequence(cap: Union[StringCapability, str]) -> property:
    label = cap if isinstance(cap, str) else cap.name.lower()
    return property(lambda self: self._store.string(cap), doc=f"{label} (string)")


class TerminalInfo:
    """
    Typed view of one terminal's capabilities.

    Every accessor returns None when the terminal lacks the capability.
    Parameterized accessors return the expanded escape sequence and raise
    UsageError for arguments the capability cannot take.
    """

    def __init__(self, store: CapabilityStore):
        self._store = store

    def __repr__(self) -> str:
        return f"TerminalInfo({self._store.name!r})"

    @property
    def store(self) -> CapabilityStore:
        return self._store

    @property
    def name(self) -> str:
        return self._store.name

    @property
    def terminal_names(self) -> Tuple[str, ...]:
        return self._store.terminal_names

    @property
    def source_path(self) -> str:
        return self._store.source_path

    @property
    def warnings(self) -> Tuple[str, ...]:
        return self._store.warnings

    # ------------------------- generic access -------------------------

    def boolean(self, cap: Union[BooleanCapability, str]) -> Optional[bool]:
        return self._store.boolean(_key(BooleanCapability, cap))

    def number(self, cap: Union[NumberCapability, str]) -> Optional[int]:
        return self._store.number(_key(NumberCapability, cap))

    def string(self, cap: Union[StringCapability, str], *args: Value) -> Optional[str]:
        return self._store.string(_key(StringCapability, cap), *args)

    # ------------------------- flags and sizes -------------------------

    auto_left_margin = _flag(BooleanCapability.AUTO_LEFT_MARGIN)
    auto_right_margin = _flag(BooleanCapability.AUTO_RIGHT_MARGIN)
    back_color_erase = _flag(BooleanCapability.BACK_COLOR_ERASE)
    can_change = _flag(BooleanCapability.CAN_CHANGE)
    eat_newline_glitch = _flag(BooleanCapability.EAT_NEWLINE_GLITCH)
    has_meta_key = _flag(BooleanCapability.HAS_META_KEY)
    has_status_line = _flag(BooleanCapability.HAS_STATUS_LINE)
    move_standout_mode = _flag(BooleanCapability.MOVE_STANDOUT_MODE)
    xon_xoff = _flag(BooleanCapability.XON_XOFF)

    columns = _count(NumberCapability.COLUMNS)
    lines = _count(NumberCapability.LINES)
    init_tabs = _count(NumberCapability.INIT_TABS)
    max_colors = _count(NumberCapability.MAX_COLORS)
    max_pairs = _count(NumberCapability.MAX_PAIRS)
    no_color_video = _count(NumberCapability.NO_COLOR_VIDEO)

    # ------------------------- plain sequences -------------------------

    bell = _sequence(StringCapability.BELL)
    flash_screen = _sequence(StringCapability.FLASH_SCREEN)
    carriage_return = _sequence(StringCapability.CARRIAGE_RETURN)
    clear_screen = _sequence(StringCapability.CLEAR_SCREEN)
    clr_bol = _sequence(StringCapability.CLR_BOL)
    clr_eol = _sequence(StringCapability.CLR_EOL)
    clr_eos = _sequence(StringCapability.CLR_EOS)
    cursor_home = _sequence(StringCapability.CURSOR_HOME)
    cursor_up = _sequence(StringCapability.CURSOR_UP)
    cursor_down = _sequence(StringCapability.CURSOR_DOWN)
    cursor_left = _sequence(StringCapability.CURSOR_LEFT)
    cursor_right = _sequence(StringCapability.CURSOR_RIGHT)
    cursor_invisible = _sequence(StringCapability.CURSOR_INVISIBLE)
    cursor_normal = _sequence(StringCapability.CURSOR_NORMAL)
    cursor_visible = _sequence(StringCapability.CURSOR_VISIBLE)
    save_cursor = _sequence(StringCapability.SAVE_CURSOR)
    restore_cursor = _sequence(StringCapability.RESTORE_CURSOR)
    enter_ca_mode = _sequence(StringCapability.ENTER_CA_MODE)
    exit_ca_mode = _sequence(StringCapability.EXIT_CA_MODE)
    keypad_xmit = _sequence(StringCapability.KEYPAD_XMIT)
    keypad_local = _sequence(StringCapability.KEYPAD_LOCAL)
    enter_alt_charset_mode = _sequence(StringCapability.ENTER_ALT_CHARSET_MODE)
    exit_alt_charset_mode = _sequence(StringCapability.EXIT_ALT_CHARSET_MODE)
    enter_bold_mode = _sequence(StringCapability.ENTER_BOLD_MODE)
    enter_dim_mode = _sequence(StringCapability.ENTER_DIM_MODE)
    enter_italics_mode = _sequence(StringCapability.ENTER_ITALICS_MODE)
    exit_italics_mode = _sequence(StringCapability.EXIT_ITALICS_MODE)
    enter_blink_mode = _sequence(StringCapability.ENTER_BLINK_MODE)
    enter_reverse_mode = _sequence(StringCapability.ENTER_REVERSE_MODE)
    enter_standout_mode = _sequence(StringCapability.ENTER_STANDOUT_MODE)
    exit_standout_mode = _sequence(StringCapability.EXIT_STANDOUT_MODE)
    enter_underline_mode = _sequence(StringCapability.ENTER_UNDERLINE_MODE)
    exit_underline_mode = _sequence(StringCapability.EXIT_UNDERLINE_MODE)
    exit_attribute_mode = _sequence(StringCapability.EXIT_ATTRIBUTE_MODE)
    orig_pair = _sequence(StringCapability.ORIG_PAIR)
    orig_colors = _sequence(StringCapability.ORIG_COLORS)

    # Derived by pseudo.augment; None on stores that were not augmented.
    reset_color = _sequence(pseudo.RESET_COLOR)
    clear_buffer = _sequence(pseudo.CLEAR_BUFFER)
    erase_scroll_buffer = _sequence(pseudo.ERASE_SCROLL_BUFFER)
    cursor_position_report = _sequence(pseudo.CURSOR_POSITION_REPORT)
    erase_in_display_1 = _sequence(pseudo.ERASE_IN_DISPLAY_1)
    erase_in_line_2 = _sequence(pseudo.ERASE_IN_LINE_2)

    reset_cursor_style = _sequence("Se")
    reset_cursor_color = _sequence("Cr")

    # ------------------------- cursor movement -------------------------

    def cursor_address(self, row: int, column: int) -> Optional[str]:
        _non_negative(row=row, column=column)
        return self._store.string(StringCapability.CURSOR_ADDRESS, row, column)

    def column_address(self, column: int) -> Optional[str]:
        _non_negative(column=column)
        return self._store.string(StringCapability.COLUMN_ADDRESS, column)

    def row_address(self, row: int) -> Optional[str]:
        _non_negative(row=row)
        return self._store.string(StringCapability.ROW_ADDRESS, row)

    def parm_up_cursor(self, count: int) -> Optional[str]:
        _non_negative(count=count)
        return self._store.string(StringCapability.PARM_UP_CURSOR, count)

    def parm_down_cursor(self, count: int) -> Optional[str]:
        _non_negative(count=count)
        return self._store.string(StringCapability.PARM_DOWN_CURSOR, count)

    def parm_left_cursor(self, count: int) -> Optional[str]:
        _non_negative(count=count)
        return self._store.string(StringCapability.PARM_LEFT_CURSOR, count)

    def parm_right_cursor(self, count: int) -> Optional[str]:
        _non_negative(count=count)
        return self._store.string(StringCapability.PARM_RIGHT_CURSOR, count)

    def change_scroll_region(self, top: int, bottom: int) -> Optional[str]:
        _non_negative(top=top, bottom=bottom)
        if top > bottom:
            raise UsageError(f"scroll region top {top} is below bottom {bottom}")
        return self._store.string(StringCapability.CHANGE_SCROLL_REGION, top, bottom)

    # ------------------------- editing -------------------------

    def erase_chars(self, count: int) -> Optional[str]:
        _non_negative(count=count)
        return self._store.string(StringCapability.ERASE_CHARS, count)

    def parm_dch(self, count: int) -> Optional[str]:
        _non_negative(count=count)
        return self._store.string(StringCapability.PARM_DCH, count)

    def parm_ich(self, count: int) -> Optional[str]:
        _non_negative(count=count)
        return self._store.string(StringCapability.PARM_ICH, count)

    def parm_insert_line(self, count: int) -> Optional[str]:
        _non_negative(count=count)
        return self._store.string(StringCapability.PARM_INSERT_LINE, count)

    def parm_delete_line(self, count: int) -> Optional[str]:
        _non_negative(count=count)
        return self._store.string(StringCapability.PARM_DELETE_LINE, count)

    # ------------------------- colors -------------------------

    def _check_color(self, color, allowed: Tuple[Type, ...]) -> None:
        if not isinstance(color, allowed):
            names = ", ".join(t.__name__ for t in allowed)
            raise UsageError(f"expected one of {names}, got {type(color).__name__}")
        max_colors = self.max_colors
        if not _palette_fits(color, max_colors):
            raise UsageError(
                f"{type(color).__name__} does not fit this terminal's palette: max_colors={max_colors}"
            )

    def set_a_foreground(self, color: AnsiColor) -> Optional[str]:
        self._check_color(color, (Color16, Color88, Color256, TrueColor))
        return self._store.string(StringCapability.SET_A_FOREGROUND, int(color))

    def set_a_background(self, color: AnsiColor) -> Optional[str]:
        self._check_color(color, (Color16, Color88, Color256, TrueColor))
        return self._store.string(StringCapability.SET_A_BACKGROUND, int(color))

    def set_foreground(self, color: Color8) -> Optional[str]:
        self._check_color(color, (Color8,))
        return self._store.string(StringCapability.SET_FOREGROUND, int(color))

    def set_background(self, color: Color8) -> Optional[str]:
        self._check_color(color, (Color8,))
        return self._store.string(StringCapability.SET_BACKGROUND, int(color))

    # ------------------------- window and cursor style -------------------------

    def set_title(self, title: str) -> Optional[str]:
        if not isinstance(title, str):
            raise UsageError(f"title must be a str, got {type(title).__name__}")
        return self._store.string(pseudo.SET_TITLE, title)

    def set_cursor_style(self, style: CursorStyle) -> Optional[str]:
        return self._store.string("Ss", int(_member(CursorStyle, style)))

    def set_cursor_color(self, color: Union[PaletteColor, TrueColor]) -> Optional[str]:
        if not isinstance(color, (PaletteColor, TrueColor)):
            raise UsageError(f"expected a palette color or TrueColor, got {type(color).__name__}")
        return self._store.string("Cs", color.to_rgb().to_hex())

    def set_underline_style(self, style: UnderlineStyle) -> Optional[str]:
        return self._store.string("Smulx", int(_member(UnderlineStyle, style)))
