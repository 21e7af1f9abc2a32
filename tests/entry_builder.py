"""Builds compiled terminfo entries for tests."""

from __future__ import annotations

import struct
from typing import Dict, List, Optional, Sequence, Tuple

LEGACY_MAGIC = 0o432
WIDE_MAGIC = 0o1036


def _table(strings: Sequence[Optional[str]]) -> Tuple[bytes, List[int]]:
    table = bytearray()
    offsets = []
    for s in strings:
        if s is None:
            offsets.append(-1)
        else:
            offsets.append(len(table))
            table += s.encode("latin-1") + b"\0"
    return bytes(table), offsets


def _extended(ext: Dict[str, dict], number_format: str) -> bytes:
    bools = list(ext.get("booleans", {}).items())
    nums = list(ext.get("numbers", {}).items())
    strs = list(ext.get("strings", {}).items())
    values, value_offsets = _table([v for _, v in strs])
    names, name_offsets = _table([n for n, _ in bools + nums + strs])
    offsets = value_offsets + name_offsets
    table = values + names
    # ncurses counts the strings stored in the table, not the offset slots.
    stored = sum(1 for v in value_offsets if v != -1) + len(name_offsets)

    out = bytearray(struct.pack("<5h", len(bools), len(nums), len(strs), stored, len(table)))
    out += bytes(int(v) for _, v in bools)
    if len(out) % 2:
        out += b"\0"
    out += struct.pack(f"<{len(nums)}{number_format}", *[v for _, v in nums])
    out += struct.pack(f"<{len(offsets)}h", *offsets)
    out += table
    return bytes(out)


def build_entry(
    names: str = "test|synthetic test terminal",
    booleans: Sequence[int] = (),
    numbers: Sequence[int] = (),
    strings: Sequence[Optional[str]] = (),
    extended: Optional[Dict[str, dict]] = None,
    wide: bool = False,
) -> bytes:
    """
    `extended` holds "booleans", "numbers" and "strings" dicts in file order;
    a None string or a -1 number is written as absent.
    """
    number_format = "i" if wide else "h"
    name_bytes = names.encode("latin-1") + b"\0"
    table, offsets = _table(strings)

    out = bytearray(
        struct.pack(
            "<Hhhhhh",
            WIDE_MAGIC if wide else LEGACY_MAGIC,
            len(name_bytes),
            len(booleans),
            len(numbers),
            len(offsets),
            len(table),
        )
    )
    out += name_bytes
    out += bytes(booleans)
    if len(out) % 2:
        out += b"\0"
    out += struct.pack(f"<{len(numbers)}{number_format}", *numbers)
    out += struct.pack(f"<{len(offsets)}h", *offsets)
    out += table
    if extended is not None:
        if len(out) % 2:
            out += b"\0"
        out += _extended(extended, number_format)
    return bytes(out)


def header_offset(field: int) -> int:
    """Byte offset of header field 0..5 (magic, name size, booleans, numbers, strings, table)."""
    return 2 * field
