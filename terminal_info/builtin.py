"""
Static definition of the native Windows console, which ships no terminfo
database. Values follow what Windows Terminal and conhost accept in virtual
terminal mode, close to xterm-256color.
"""

from __future__ import annotations

from .capabilities import BooleanCapability, NumberCapability, StringCapability
from .pseudo import WINDOWS_CONSOLE_NAME
from .store import CapabilityStore

_BOOLEANS = {
    "auto_left_margin": False,
    "auto_right_margin": True,
    "backspaces_with_bs": True,
    "back_color_erase": True,
    "can_change": True,
    "ceol_standout_glitch": False,
    "col_addr_glitch": False,
    "cpi_changes_res": False,
    "cr_cancels_micro_mode": False,
    "dest_tabs_magic_smso": False,
    "eat_newline_glitch": True,
    "erase_overstrike": False,
    "generic_type": False,
    "hard_copy": False,
    "hard_cursor": False,
    "has_meta_key": True,
    "has_print_wheel": False,
    "has_status_line": False,
    "hue_lightness_saturation": False,
    "insert_null_glitch": False,
    "lpi_changes_res": False,
    "memory_above": False,
    "memory_below": False,
    "move_insert_mode": True,
    "move_standout_mode": True,
    "needs_xon_xoff": False,
    "non_dest_scroll_region": False,
    "non_rev_rmcup": False,
    "no_esc_ctlc": False,
    "no_pad_char": True,
    "over_strike": False,
    "prtr_silent": True,
    "row_addr_glitch": False,
    "semi_auto_right_margin": False,
    "status_line_esc_ok": False,
    "tilde_glitch": False,
    "transparent_underline": False,
    "xon_xoff": False,
}

_NUMBERS = {
    "columns": 80,
    "init_tabs": 8,
    "lines": 24,
    "max_colors": 256,
    "max_pairs": 65536,
}

_STRINGS = {
    "acs_chars": "``aaffggiijjkkllmmnnooppqqrrssttuuvvwwxxyyzz{{||}}~~",
    "back_tab": "\x1b[Z",
    "bell": "\x07",
    "carriage_return": "\r",
    "change_scroll_region": "\x1b[%i%p1%d;%p2%dr",
    "clear_all_tabs": "\x1b[3g",
    "clear_screen": "\x1b[H\x1b[2J",
    "clr_bol": "\x1b[1K",
    "clr_eol": "\x1b[K",
    "clr_eos": "\x1b[J",
    "column_address": "\x1b[%i%p1%dG",
    "cursor_address": "\x1b[%i%p1%d;%p2%dH",
    "cursor_down": "\n",
    "cursor_home": "\x1b[H",
    "cursor_invisible": "\x1b[?25l",
    "cursor_left": "\b",
    "cursor_normal": "\x1b[?12l\x1b[?25h",
    "cursor_right": "\x1b[C",
    "cursor_up": "\x1b[A",
    "cursor_visible": "\x1b[?12;25h",
    "delete_character": "\x1b[P",
    "delete_line": "\x1b[M",
    "enter_alt_charset_mode": "\x1b(0",
    "enter_am_mode": "\x1b[?7h",
    "enter_blink_mode": "\x1b[5m",
    "enter_bold_mode": "\x1b[1m",
    "enter_ca_mode": "\x1b[?1049h\x1b[22;0;0t",
    "enter_dim_mode": "\x1b[2m",
    "enter_insert_mode": "\x1b[4h",
    "enter_italics_mode": "\x1b[3m",
    "enter_reverse_mode": "\x1b[7m",
    "enter_secure_mode": "\x1b[8m",
    "enter_standout_mode": "\x1b[7m",
    "enter_underline_mode": "\x1b[4m",
    "erase_chars": "\x1b[%p1%dX",
    "exit_alt_charset_mode": "\x1b(B",
    "exit_am_mode": "\x1b[?7l",
    "exit_attribute_mode": "\x1b(B\x1b[m",
    "exit_ca_mode": "\x1b[?1049l\x1b[23;0;0t",
    "exit_insert_mode": "\x1b[4l",
    "exit_italics_mode": "\x1b[23m",
    "exit_standout_mode": "\x1b[27m",
    "exit_underline_mode": "\x1b[24m",
    "flash_screen": "\x1b[?5h$<100/>\x1b[?5l",
    "initialize_color": "\x1b]4;%p1%d;rgb:%p2%{255}%*%{1000}%/%2.2X/%p3%{255}%*%{1000}%/%2.2X/%p4%{255}%*%{1000}%/%2.2X\x1b\\",
    "init_2string": "\x1b[!p\x1b[?3;4l\x1b[4l\x1b>",
    "insert_line": "\x1b[L",
    "key_b2": "\x1bOE",
    "key_backspace": "\x7f",
    "key_btab": "\x1b[Z",
    "key_dc": "\x1b[3~",
    "key_down": "\x1bOB",
    "key_end": "\x1bOF",
    "key_enter": "\x1bOM",
    "key_f1": "\x1bOP",
    "key_f2": "\x1bOQ",
    "key_f3": "\x1bOR",
    "key_f4": "\x1bOS",
    "key_f5": "\x1b[15~",
    "key_f6": "\x1b[17~",
    "key_f7": "\x1b[18~",
    "key_f8": "\x1b[19~",
    "key_f9": "\x1b[20~",
    "key_f10": "\x1b[21~",
    "key_f11": "\x1b[23~",
    "key_f12": "\x1b[24~",
    "key_f13": "\x1b[1;2P",
    "key_f14": "\x1b[1;2Q",
    "key_f15": "\x1b[1;2R",
    "key_f16": "\x1b[1;2S",
    "key_f17": "\x1b[15;2~",
    "key_f18": "\x1b[17;2~",
    "key_f19": "\x1b[18;2~",
    "key_f20": "\x1b[19;2~",
    "key_f21": "\x1b[20;2~",
    "key_f22": "\x1b[21;2~",
    "key_f23": "\x1b[23;2~",
    "key_f24": "\x1b[24;2~",
    "key_f25": "\x1b[1;5P",
    "key_f26": "\x1b[1;5Q",
    "key_f27": "\x1b[1;5R",
    "key_f28": "\x1b[1;5S",
    "key_f29": "\x1b[15;5~",
    "key_f30": "\x1b[17;5~",
    "key_f31": "\x1b[18;5~",
    "key_f32": "\x1b[19;5~",
    "key_f33": "\x1b[20;5~",
    "key_f34": "\x1b[21;5~",
    "key_f35": "\x1b[23;5~",
    "key_f36": "\x1b[24;5~",
    "key_f37": "\x1b[1;6P",
    "key_f38": "\x1b[1;6Q",
    "key_f39": "\x1b[1;6R",
    "key_f40": "\x1b[1;6S",
    "key_f41": "\x1b[15;6~",
    "key_f42": "\x1b[17;6~",
    "key_f43": "\x1b[18;6~",
    "key_f44": "\x1b[19;6~",
    "key_f45": "\x1b[20;6~",
    "key_f46": "\x1b[21;6~",
    "key_f47": "\x1b[23;6~",
    "key_f48": "\x1b[24;6~",
    "key_f49": "\x1b[1;3P",
    "key_f50": "\x1b[1;3Q",
    "key_f51": "\x1b[1;3R",
    "key_f52": "\x1b[1;3S",
    "key_f53": "\x1b[15;3~",
    "key_f54": "\x1b[17;3~",
    "key_f55": "\x1b[18;3~",
    "key_f56": "\x1b[19;3~",
    "key_f57": "\x1b[20;3~",
    "key_f58": "\x1b[21;3~",
    "key_f59": "\x1b[23;3~",
    "key_f60": "\x1b[24;3~",
    "key_f61": "\x1b[1;4P",
    "key_f62": "\x1b[1;4Q",
    "key_f63": "\x1b[1;4R",
    "key_home": "\x1bOH",
    "key_ic": "\x1b[2~",
    "key_left": "\x1bOD",
    "key_mouse": "\x1b[M",
    "key_npage": "\x1b[6~",
    "keypad_local": "\x1b[?1l\x1b>",
    "keypad_xmit": "\x1b[?1h\x1b=",
    "key_ppage": "\x1b[5~",
    "key_right": "\x1bOC",
    "key_sdc": "\x1b[3;2~",
    "key_send": "\x1b[1;2F",
    "key_sf": "\x1b[1;2B",
    "key_shome": "\x1b[1;2H",
    "key_sic": "\x1b[2;2~",
    "key_sleft": "\x1b[1;2D",
    "key_snext": "\x1b[6;2~",
    "key_sprevious": "\x1b[5;2~",
    "key_sr": "\x1b[1;2A",
    "key_sright": "\x1b[1;2C",
    "key_up": "\x1bOA",
    "memory_lock": "\x1bl",
    "memory_unlock": "\x1bm",
    "meta_off": "\x1b[?1034l",
    "meta_on": "\x1b[?1034h",
    "orig_colors": "\x1b]104\x07",
    "orig_pair": "\x1b[39;49m",
    "parm_dch": "\x1b[%p1%dP",
    "parm_delete_line": "\x1b[%p1%dM",
    "parm_down_cursor": "\x1b[%p1%dB",
    "parm_ich": "\x1b[%p1%d@",
    "parm_index": "\x1b[%p1%dS",
    "parm_insert_line": "\x1b[%p1%dL",
    "parm_left_cursor": "\x1b[%p1%dD",
    "parm_right_cursor": "\x1b[%p1%dC",
    "parm_rindex": "\x1b[%p1%dT",
    "parm_up_cursor": "\x1b[%p1%dA",
    "print_screen": "\x1b[i",
    "prtr_off": "\x1b[4i",
    "prtr_on": "\x1b[5i",
    "reset_1string": "\x1bc\x1b]104\x07",
    "reset_2string": "\x1b[!p\x1b[?3;4l\x1b[4l\x1b>",
    "restore_cursor": "\x1b8",
    "row_address": "\x1b[%i%p1%dd",
    "save_cursor": "\x1b7",
    "scroll_forward": "\n",
    "scroll_reverse": "\x1bM",
    "set_a_background": "\x1b[%?%p1%{8}%<%t4%p1%d%e%p1%{16}%<%t10%p1%{8}%-%d%e48;5;%p1%d%;m",
    "set_a_foreground": "\x1b[%?%p1%{8}%<%t3%p1%d%e%p1%{16}%<%t9%p1%{8}%-%d%e38;5;%p1%d%;m",
    "set_attributes": "%?%p9%t\x1b(0%e\x1b(B%;\x1b[0%?%p6%t;1%;%?%p5%t;2%;%?%p2%t;4%;%?%p1%p3%|%t;7%;%?%p4%t;5%;%?%p7%t;8%;m",
    "set_tab": "\x1bH",
    "tab": "\t",
    "user6": "\x1b[%i%d;%dR",
    "user7": "\x1b[6n",
    "user8": "\x1b[?%[;0123456789]c",
    "user9": "\x1b[c",
}

_EXTENDED_BOOLEANS = {
    "AX": True,
    "XT": True,
}

_EXTENDED_STRINGS = {
    "Cr": "\x1b]112\x07",
    "Cs": "\x1b]12;%p1%s\x07",
    "E3": "\x1b[3J",
    "kDC3": "\x1b[3;3~",
    "kDC4": "\x1b[3;4~",
    "kDC5": "\x1b[3;5~",
    "kDC6": "\x1b[3;6~",
    "kDC7": "\x1b[3;7~",
    "kDN": "\x1b[1;2B",
    "kDN3": "\x1b[1;3B",
    "kDN4": "\x1b[1;4B",
    "kDN5": "\x1b[1;5B",
    "kDN6": "\x1b[1;6B",
    "kDN7": "\x1b[1;7B",
    "kEND3": "\x1b[1;3F",
    "kEND4": "\x1b[1;4F",
    "kEND5": "\x1b[1;5F",
    "kEND6": "\x1b[1;6F",
    "kEND7": "\x1b[1;7F",
    "kHOM3": "\x1b[1;3H",
    "kHOM4": "\x1b[1;4H",
    "kHOM5": "\x1b[1;5H",
    "kHOM6": "\x1b[1;6H",
    "kHOM7": "\x1b[1;7H",
    "kIC3": "\x1b[2;3~",
    "kIC4": "\x1b[2;4~",
    "kIC5": "\x1b[2;5~",
    "kIC6": "\x1b[2;6~",
    "kIC7": "\x1b[2;7~",
    "kLFT3": "\x1b[1;3D",
    "kLFT4": "\x1b[1;4D",
    "kLFT5": "\x1b[1;5D",
    "kLFT6": "\x1b[1;6D",
    "kLFT7": "\x1b[1;7D",
    "kNXT3": "\x1b[6;3~",
    "kNXT4": "\x1b[6;4~",
    "kNXT5": "\x1b[6;5~",
    "kNXT6": "\x1b[6;6~",
    "kNXT7": "\x1b[6;7~",
    "kPRV3": "\x1b[5;3~",
    "kPRV4": "\x1b[5;4~",
    "kPRV5": "\x1b[5;5~",
    "kPRV6": "\x1b[5;6~",
    "kPRV7": "\x1b[5;7~",
    "kRIT3": "\x1b[1;3C",
    "kRIT4": "\x1b[1;4C",
    "kRIT5": "\x1b[1;5C",
    "kRIT6": "\x1b[1;6C",
    "kRIT7": "\x1b[1;7C",
    "kUP": "\x1b[1;2A",
    "kUP3": "\x1b[1;3A",
    "kUP4": "\x1b[1;4A",
    "kUP5": "\x1b[1;5A",
    "kUP6": "\x1b[1;6A",
    "kUP7": "\x1b[1;7A",
    "Ms": "\x1b]52;%p1%s;%p2%s\x07",
    "rmxx": "\x1b[29m",
    "Se": "\x1b[2 q",
    "smxx": "\x1b[9m",
    "Ss": "\x1b[%p1%d q",
    "TS": "\x1b]2;",
}


def windows_console() -> CapabilityStore:
    """A fresh, un-augmented store describing the Windows console."""
    return CapabilityStore(
        (WINDOWS_CONSOLE_NAME,),
        {BooleanCapability[name.upper()]: value for name, value in _BOOLEANS.items()},
        {NumberCapability[name.upper()]: value for name, value in _NUMBERS.items()},
        {StringCapability[name.upper()]: value for name, value in _STRINGS.items()},
        _EXTENDED_BOOLEANS,
        {},
        _EXTENDED_STRINGS,
    )
