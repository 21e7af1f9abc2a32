"""
Decoder for compiled terminfo entries (term(5)).

Layout: a 12-byte header, the alias list, boolean flags, numbers, string
offsets and the string table, optionally followed by the ncurses extended
section (user-defined capabilities identified by name).
"""

from __future__ import annotations

import io
import logging
import struct
from typing import BinaryIO, Dict, List, Optional, Sequence, Tuple, Union

from .capabilities import (
    BOOLEAN_NAMES,
    NUMBER_NAMES,
    STRING_NAMES,
    BooleanCapability,
    NumberCapability,
    StringCapability,
)
from .errors import FormatError
from .store import CapabilityStore

log = logging.getLogger(__name__)

LEGACY_MAGIC = 0o432  # numbers are int16
EXTENDED_NUMBER_MAGIC = 0o1036  # numbers are int32

# Stored strings are 8-bit clean; latin-1 maps each byte to one code point.
ENCODING = "latin-1"

Source = Union[bytes, bytearray, memoryview, BinaryIO]


class _Reader:
    """Forward-only view of a byte stream that fails on any short read."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.offset = 0
        self._pending = b""

    def read_exact(self, size: int, what: str) -> bytes:
        chunks: List[bytes] = [self._pending[:size]]
        self._pending = self._pending[size:]
        remaining = size - len(chunks[0])
        while remaining > 0:
            chunk = self.stream.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        data = b"".join(chunks)
        if len(data) != size:
            raise FormatError(
                f"truncated {what}: wanted {size} bytes at offset {self.offset}, got {len(data)}"
            )
        self.offset += size
        return data

    def exhausted(self) -> bool:
        if not self._pending:
            self._pending = self.stream.read(1)
        return not self._pending

    def int16s(self, count: int, what: str) -> Tuple[int, ...]:
        return struct.unpack(f"<{count}h", self.read_exact(2 * count, what))

    def numbers(self, count: int, wide: bool, what: str) -> Tuple[int, ...]:
        if wide:
            return struct.unpack(f"<{count}i", self.read_exact(4 * count, what))
        return self.int16s(count, what)

    def align(self, what: str) -> None:
        if self.offset & 1:
            self.read_exact(1, what)


# ------------------------- section helpers -------------------------

def _counts(reader: _Reader, labels: Sequence[str], what: str) -> Tuple[int, ...]:
    values = reader.int16s(len(labels), what)
    for label, value in zip(labels, values):
        if value < 0:
            raise FormatError(f"{what}: {label} is negative ({value})")
    return values


def _flags(raw: bytes, what: str, start: int) -> List[bool]:
    out = []
    for i, byte in enumerate(raw):
        if byte not in (0, 1):
            raise FormatError(f"{what} #{i} at offset {start + i} is {byte}, expected 0 or 1")
        out.append(byte == 1)
    return out


def _check_absent(values: Sequence[int], what: str) -> None:
    for i, value in enumerate(values):
        if value < -1:
            raise FormatError(f"{what} #{i} is {value}")


def _cstring(table: bytes, offset: int, what: str) -> str:
    if offset >= len(table):
        raise FormatError(f"{what}: offset {offset} is outside a {len(table)}-byte string table")
    end = table.find(b"\0", offset)
    if end < 0:
        raise FormatError(f"{what}: string at offset {offset} has no NUL terminator")
    return table[offset:end].decode(ENCODING)


def _names(raw: bytes) -> List[str]:
    end = raw.find(b"\0")
    if end < 0:
        raise FormatError("terminal names are not NUL-terminated")
    return raw[:end].decode(ENCODING).split("|")


# ------------------------- extended section -------------------------

def _decode_extended(reader: _Reader, wide: bool):
    # The fourth field counts strings stored in the table (present values and
    # names); absent values still get an offset slot.
    bool_count, num_count, str_count, stored_count, table_size = _counts(
        reader,
        ("boolean count", "number count", "string count", "stored string count", "table size"),
        "extended header",
    )
    name_count = bool_count + num_count + str_count

    start = reader.offset
    flags = _flags(reader.read_exact(bool_count, "extended booleans"), "extended boolean", start)
    reader.align("padding after extended booleans")
    numbers = reader.numbers(num_count, wide, "extended numbers")
    _check_absent(numbers, "extended number")
    offsets = reader.int16s(str_count + name_count, "extended string offsets")
    _check_absent(offsets, "extended string offset")
    table = reader.read_exact(table_size, "extended string table")

    present = sum(1 for offset in offsets[:str_count] if offset != -1)
    if stored_count != present + name_count:
        raise FormatError(
            f"extended header: {stored_count} stored strings, but {present} values "
            f"and {name_count} names are present"
        )

    values: List[Optional[str]] = []
    names_base = 0
    for i, offset in enumerate(offsets[:str_count]):
        if offset == -1:
            values.append(None)
            continue
        value = _cstring(table, offset, f"extended string #{i}")
        values.append(value)
        names_base += len(value) + 1

    name_table = table[names_base:]
    names = []
    for i, offset in enumerate(offsets[str_count:]):
        if offset == -1:
            raise FormatError(f"extended capability name #{i} is missing")
        names.append(_cstring(name_table, offset, f"extended capability name #{i}"))

    if len(set(names)) != len(names):
        raise FormatError("extended capability names are not unique")

    bool_names = names[:bool_count]
    num_names = names[bool_count:bool_count + num_count]
    str_names = names[bool_count + num_count:]
    ext_booleans = dict(zip(bool_names, flags))
    ext_numbers = {name: value for name, value in zip(num_names, numbers) if value != -1}
    ext_strings = {name: value for name, value in zip(str_names, values) if value is not None}
    return ext_booleans, ext_numbers, ext_strings


# ------------------------- entry point -------------------------

def decode(data: Source, source_path: str = "") -> CapabilityStore:
    """
    Decode one compiled terminfo entry.

    `data` is the whole entry as bytes or a binary stream positioned at its
    start. Raises FormatError for a bad magic number, a negative count or
    offset, a boolean byte other than 0/1, an offset outside its string table
    or any short read; nothing is returned for a malformed entry.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        stream: BinaryIO = io.BytesIO(bytes(data))
    else:
        stream = data
    reader = _Reader(stream)

    (magic,) = struct.unpack("<H", reader.read_exact(2, "magic number"))
    if magic == LEGACY_MAGIC:
        wide = False
    elif magic == EXTENDED_NUMBER_MAGIC:
        wide = True
    else:
        raise FormatError(f"bad magic number 0x{magic:04x}")

    name_size, bool_count, num_count, str_count, table_size = _counts(
        reader,
        ("name size", "boolean count", "number count", "string count", "table size"),
        "header",
    )
    for label, count, known in (
        ("boolean", bool_count, len(BOOLEAN_NAMES)),
        ("number", num_count, len(NUMBER_NAMES)),
        ("string", str_count, len(STRING_NAMES)),
    ):
        if count > known:
            raise FormatError(f"header declares {count} {label} capabilities, only {known} exist")
    log.debug(
        "terminfo header: magic=%#o names=%d booleans=%d numbers=%d strings=%d table=%d",
        magic, name_size, bool_count, num_count, str_count, table_size,
    )

    terminal_names = _names(reader.read_exact(name_size, "terminal names"))

    start = reader.offset
    booleans: Dict[BooleanCapability, bool] = {
        BooleanCapability(i): flag
        for i, flag in enumerate(_flags(reader.read_exact(bool_count, "booleans"), "boolean", start))
    }
    reader.align("padding after booleans")

    raw_numbers = reader.numbers(num_count, wide, "numbers")
    _check_absent(raw_numbers, "number")
    numbers: Dict[NumberCapability, int] = {
        NumberCapability(i): value for i, value in enumerate(raw_numbers) if value != -1
    }

    offsets = reader.int16s(str_count, "string offsets")
    _check_absent(offsets, "string offset")
    table = reader.read_exact(table_size, "string table")
    strings: Dict[StringCapability, str] = {}
    for i, offset in enumerate(offsets):
        if offset != -1:
            strings[StringCapability(i)] = _cstring(table, offset, f"string {STRING_NAMES[i]}")

    ext_booleans: Dict[str, bool] = {}
    ext_numbers: Dict[str, int] = {}
    ext_strings: Dict[str, str] = {}
    # Entries without user-defined capabilities end right after the string table.
    if not reader.exhausted():
        reader.align("padding after string table")
        ext_booleans, ext_numbers, ext_strings = _decode_extended(reader, wide)

    return CapabilityStore(
        terminal_names,
        booleans,
        numbers,
        strings,
        ext_booleans,
        ext_numbers,
        ext_strings,
        source_path=source_path,
    )
