"""
Pseudo-capabilities: escape sequences terminfo has no standard slot for,
inferred from the terminal's names and from capabilities it already has.
They are stored as extended strings whose names start with "__".
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from .capabilities import NumberCapability, StringCapability
from .store import CapabilityStore

log = logging.getLogger(__name__)

SET_TITLE = "__set_title"
RESET_COLOR = "__reset_color"
ERASE_SCROLL_BUFFER = "__erase_scroll_buffer"
CLEAR_BUFFER = "__clear_buffer"
CURSOR_POSITION_REPORT = "__cursor_position_report"
ERASE_IN_DISPLAY_1 = "__erase_in_display_1"
ERASE_IN_LINE_2 = "__erase_in_line_2"

WINDOWS_CONSOLE_NAME = "windows-terminal"

OSC0_TITLE = "\x1b]0;%p1%s\x07"
RESET_SGR = "\x1b[39;49m"
ERASE_SAVED_LINES = "\x1b[3J"
XTERM_CLEAR_BUFFER = "\x1b[2J\x1b[H\x1b[3J"
DSR_CURSOR_POSITION = "\x1b[6n"
ERASE_ABOVE = "\x1b[1J"
ERASE_WHOLE_LINE = "\x1b[2K"

# Either separator: "39;49" is what terminfo entries use, "39:49" also appears.
_RESET_COLOR_PATTERN = re.compile(r"\x1b\[(39[;:]49|49[;:]39)m")
_DSR_PATTERN = re.compile(r"^\x1b\[6n$")

# Title templates for terminals without TS or a status line, first match wins.
_TITLE_FAMILIES: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...], str], ...] = (
    (("aixterm", "dtterm", "linux", "rxvt"), ("xterm",), OSC0_TITLE),
    (("cygwin",), (), "\x1b];%p1%s\x07"),
    (("konsole",), (), "\x1b]30;%p1%s\x07"),
    ((), ("screen",), "\x1bk%p1%s\x1b\\"),
)

# Terminals known to answer DSR 6 and to honour ED 1 / EL 2.
_VT_NAMES = ("aixterm", "dtterm", WINDOWS_CONSOLE_NAME)
_VT_PREFIXES = ("screen", "xterm")


def _matches(names: Sequence[str], exact: Sequence[str], prefixes: Sequence[str]) -> bool:
    return any(name in exact or name.startswith(tuple(prefixes)) for name in names)


def _title(store: CapabilityStore, names: Sequence[str]):
    ts = store.extended_strings.get("TS")
    if ts is not None:
        return ts + "%p1%s\x07"
    tsl = store.strings.get(StringCapability.TO_STATUS_LINE)
    fsl = store.strings.get(StringCapability.FROM_STATUS_LINE)
    if tsl is not None and fsl is not None:
        return tsl + "%p1%s" + fsl
    for exact, prefixes, template in _TITLE_FAMILIES:
        if _matches(names, exact, prefixes):
            return template
    return None


def _reset_color(store: CapabilityStore):
    if store.extended_booleans.get("AX"):
        return RESET_SGR
    for cap in (StringCapability.ORIG_PAIR, StringCapability.ORIG_COLORS):
        value = store.strings.get(cap)
        if value is not None and _RESET_COLOR_PATTERN.search(value):
            return value
    return None


def derive(store: CapabilityStore, names: Sequence[str]) -> Dict[str, str]:
    """Pseudo-capability values for `store`, in the order they are derived."""
    out: Dict[str, str] = {}

    title = _title(store, names)
    if title is not None:
        out[SET_TITLE] = title

    reset = _reset_color(store)
    if reset is not None:
        out[RESET_COLOR] = reset

    if _matches(names, (), ("xterm",)):
        out[ERASE_SCROLL_BUFFER] = ERASE_SAVED_LINES
        out[CLEAR_BUFFER] = XTERM_CLEAR_BUFFER
    else:
        e3 = store.extended_strings.get("E3")
        if e3 is not None:
            out[ERASE_SCROLL_BUFFER] = e3
            # clear_screen must come first; E3 alone may leave the visible screen.
            clear = store.strings.get(StringCapability.CLEAR_SCREEN)
            if clear is not None:
                out[CLEAR_BUFFER] = clear + e3

    vt_family = _matches(names, _VT_NAMES, _VT_PREFIXES)
    user7 = store.strings.get(StringCapability.USER7)
    if vt_family or (user7 is not None and _DSR_PATTERN.search(user7)):
        out[CURSOR_POSITION_REPORT] = DSR_CURSOR_POSITION

    if vt_family:
        out[ERASE_IN_DISPLAY_1] = ERASE_ABOVE
        out[ERASE_IN_LINE_2] = ERASE_WHOLE_LINE
    return out


def check(store: CapabilityStore) -> List[str]:
    """Advisory warnings about an (already augmented) store."""
    warnings: List[str] = []
    strings = store.strings
    max_colors = store.numbers.get(NumberCapability.MAX_COLORS)
    ansi_setters = StringCapability.SET_A_FOREGROUND in strings or StringCapability.SET_A_BACKGROUND in strings
    legacy_setters = StringCapability.SET_FOREGROUND in strings or StringCapability.SET_BACKGROUND in strings

    if (ansi_setters or legacy_setters) and RESET_COLOR not in store.extended_strings:
        warnings.append(
            "A capability to set the foreground or background color is defined, "
            "but no capability is defined to reset them."
        )
    if ansi_setters and (max_colors is None or max_colors < 16):
        warnings.append(
            'The "set_a_foreground" or "set_a_background" capability is defined, but '
            f'"max_colors" is not defined or is less than 16: max_colors={max_colors}'
        )
    if legacy_setters and (max_colors is None or max_colors < 8):
        warnings.append(
            'The "set_foreground" or "set_background" capability is defined, but '
            f'"max_colors" is not defined or is less than 8: max_colors={max_colors}'
        )
    if SET_TITLE not in store.extended_strings:
        warnings.append("No capability is defined to set the window title.")
    if CLEAR_BUFFER not in store.extended_strings:
        warnings.append("No capability is defined to clear the console buffer.")
    if CURSOR_POSITION_REPORT not in store.extended_strings:
        warnings.append("No capability is defined to report the cursor position.")
    return warnings


def augment(
    store: CapabilityStore, terminal_names: Optional[Sequence[str]] = None
) -> Tuple[CapabilityStore, List[str]]:
    """
    Return `store` with pseudo-capabilities added, and the warnings recorded
    on it. Family heuristics look at `terminal_names` (default: the store's
    own aliases).

    `store` itself is left untouched, so augmenting the same decoded store
    twice gives equal results. A pseudo-capability whose name the entry
    already defines is not applied; a warning notes it.
    """
    names = store.terminal_names if terminal_names is None else tuple(terminal_names)
    derived = derive(store, names)
    collisions = [name for name in derived if store.has_extended(name)]
    for name in collisions:
        del derived[name]
    augmented = store.derive(extended_strings=derived)
    warnings = [f'The entry already defines "{name}"; the derived value was not applied.' for name in collisions]
    warnings.extend(check(augmented))
    for warning in warnings:
        log.debug("%s: %s", store.name, warning)
    augmented = augmented.derive(warnings=warnings)
    return augmented, list(augmented.warnings)
