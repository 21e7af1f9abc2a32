from pathlib import Path

from terminal_info import pseudo
from terminal_info.builtin import windows_console
from terminal_info.capabilities import NumberCapability, StringCapability
from terminal_info.decoder import decode
from terminal_info.store import CapabilityStore

DATA = Path(__file__).parent / "data"

NO_RESET = (
    "A capability to set the foreground or background color is defined, "
    "but no capability is defined to reset them."
)
NO_TITLE = "No capability is defined to set the window title."
NO_CLEAR = "No capability is defined to clear the console buffer."
NO_CPR = "No capability is defined to report the cursor position."


def _fixture(name):
    return decode((DATA / name).read_bytes())


def test_xterm_gets_every_pseudo_capability():
    store, warnings = pseudo.augment(_fixture("xterm-256color"))

    assert store.string(pseudo.SET_TITLE) == "\x1b]0;%p1%s\x07"
    assert store.string(pseudo.RESET_COLOR) == "\x1b[39;49m"
    assert store.string(pseudo.ERASE_SCROLL_BUFFER) == "\x1b[3J"
    assert store.string(pseudo.CLEAR_BUFFER) == "\x1b[2J\x1b[H\x1b[3J"
    assert store.string(pseudo.CURSOR_POSITION_REPORT) == "\x1b[6n"
    assert store.string(pseudo.ERASE_IN_DISPLAY_1) == "\x1b[1J"
    assert store.string(pseudo.ERASE_IN_LINE_2) == "\x1b[2K"
    assert warnings == []
    assert store.warnings == ()


def test_linux_console():
    store, warnings = pseudo.augment(_fixture("linux"))

    assert store.string(pseudo.SET_TITLE) == "\x1b]0;%p1%s\x07"
    assert store.string(pseudo.RESET_COLOR) == "\x1b[39;49m"
    assert store.string(pseudo.CLEAR_BUFFER) == "\x1b[H\x1b[J\x1b[3J"
    assert store.string(pseudo.CURSOR_POSITION_REPORT) == "\x1b[6n"
    assert store.string(pseudo.ERASE_IN_DISPLAY_1) is None
    assert store.string(pseudo.ERASE_IN_LINE_2) is None
    assert warnings == [
        'The "set_a_foreground" or "set_a_background" capability is defined, but '
        '"max_colors" is not defined or is less than 16: max_colors=8'
    ]


def test_screen_warnings_are_ordered():
    store, warnings = pseudo.augment(_fixture("screen"))

    assert store.string(pseudo.SET_TITLE) == "\x1bk%p1%s\x1b\\"
    assert store.string(pseudo.ERASE_IN_LINE_2) == "\x1b[2K"
    assert len(warnings) == 2
    assert "less than 16: max_colors=8" in warnings[0]
    assert warnings[1] == NO_CLEAR


def test_vt100_lacks_title_and_buffer_clear():
    store, warnings = pseudo.augment(_fixture("vt100"))

    assert store.string(pseudo.CURSOR_POSITION_REPORT) == "\x1b[6n"
    assert warnings == [NO_TITLE, NO_CLEAR]


def test_ts_is_used_for_the_title_and_never_overwritten():
    store, _ = pseudo.augment(windows_console())

    assert store.string("TS") == "\x1b]2;"
    assert store.string(pseudo.SET_TITLE) == "\x1b]2;%p1%s\x07"
    assert store.warnings == ()


def test_status_line_pair_builds_a_title():
    base = CapabilityStore(
        ("sometty",),
        strings={StringCapability.TO_STATUS_LINE: "\x1b]2;", StringCapability.FROM_STATUS_LINE: "\x07"},
    )
    store, _ = pseudo.augment(base)

    assert store.string(pseudo.SET_TITLE) == "\x1b]2;%p1%s\x07"


def test_title_families_follow_terminal_names():
    def title(*names):
        store, _ = pseudo.augment(CapabilityStore(names))
        return store.string(pseudo.SET_TITLE)

    assert title("rxvt") == "\x1b]0;%p1%s\x07"
    assert title("xterm-kitty") == "\x1b]0;%p1%s\x07"
    assert title("cygwin") == "\x1b];%p1%s\x07"
    assert title("konsole") == "\x1b]30;%p1%s\x07"
    assert title("screen.xterm-256color") == "\x1bk%p1%s\x1b\\"
    assert title("vt220") is None
    # Exact names only; "linux-16color" is not a match.
    assert title("linux-16color") is None


def test_names_can_be_overridden():
    base = CapabilityStore(("custom",))
    store, _ = pseudo.augment(base, terminal_names=("xterm",))

    assert store.string(pseudo.CLEAR_BUFFER) == "\x1b[2J\x1b[H\x1b[3J"
    assert store.terminal_names == ("custom",)


def test_reset_color_from_orig_pair_with_either_separator():
    for op in ("\x1b[39;49m", "\x1b[49:39m"):
        base = CapabilityStore(("x",), strings={StringCapability.ORIG_PAIR: op})
        store, _ = pseudo.augment(base)
        assert store.string(pseudo.RESET_COLOR) == op

    base = CapabilityStore(("x",), strings={StringCapability.ORIG_PAIR: "\x1b[0m"})
    store, _ = pseudo.augment(base)
    assert store.string(pseudo.RESET_COLOR) is None


def test_color_warnings():
    base = CapabilityStore(
        ("x",),
        strings={StringCapability.SET_FOREGROUND: "\x1b[3%p1%dm"},
        numbers={NumberCapability.MAX_COLORS: 4},
    )
    _, warnings = pseudo.augment(base)

    assert warnings[0] == NO_RESET
    assert warnings[1] == (
        'The "set_foreground" or "set_background" capability is defined, but '
        '"max_colors" is not defined or is less than 8: max_colors=4'
    )
    assert warnings[2:] == [NO_TITLE, NO_CLEAR, NO_CPR]


def test_existing_name_is_kept_and_reported():
    base = CapabilityStore(("xterm",), extended_strings={pseudo.SET_TITLE: "mine"})
    store, warnings = pseudo.augment(base)

    assert store.string(pseudo.SET_TITLE) == "mine"
    assert warnings[0] == 'The entry already defines "__set_title"; the derived value was not applied.'


def test_augment_leaves_input_alone_and_repeats_identically():
    base = _fixture("screen")
    first, _ = pseudo.augment(base)
    second, _ = pseudo.augment(base)

    assert first == second
    assert not any(name.startswith("__") for name in base.extended_strings)
    assert base.warnings == ()


def test_e3_without_clear_screen_gives_only_scroll_erase():
    base = CapabilityStore(("x",), extended_strings={"E3": "\x1b[3J"})
    store, _ = pseudo.augment(base)

    assert store.string(pseudo.ERASE_SCROLL_BUFFER) == "\x1b[3J"
    assert store.string(pseudo.CLEAR_BUFFER) is None
