from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple, Type, Union

from .capabilities import BooleanCapability, NumberCapability, StringCapability
from .errors import UsageError
from .expansion import Value, expand

BooleanKey = Union[BooleanCapability, str]
NumberKey = Union[NumberCapability, str]
StringKey = Union[StringCapability, str]


def _standard(kind: Type[IntEnum], entries: Optional[Mapping], cast) -> Mapping:
    out = {}
    for key, value in (entries or {}).items():
        if isinstance(key, IntEnum) and not isinstance(key, kind):
            raise TypeError(f"{key!r} is not a {kind.__name__}")
        out[kind(key)] = cast(value)
    return MappingProxyType(dict(sorted(out.items())))


def _extended(entries: Optional[Mapping[str, object]], cast) -> Mapping[str, object]:
    out = {}
    for key, value in (entries or {}).items():
        if not isinstance(key, str):
            raise TypeError(f"extended capability names are strings, got {key!r}")
        out[key] = cast(value)
    return MappingProxyType(out)


class CapabilityStore:
    """
    Capabilities of one terminal.

    Standard capabilities are keyed by their enum member, extended ones by
    their short name ("AX", "Cs", "kUP5"). A capability the terminal does not
    have has no entry at all, so lookups return None for it. The store is
    read-only; `derive` returns a new store with extra extended strings.
    """

    def __init__(
        self,
        terminal_names: Sequence[str],
        booleans: Optional[Mapping[BooleanCapability, bool]] = None,
        numbers: Optional[Mapping[NumberCapability, int]] = None,
        strings: Optional[Mapping[StringCapability, str]] = None,
        extended_booleans: Optional[Mapping[str, bool]] = None,
        extended_numbers: Optional[Mapping[str, int]] = None,
        extended_strings: Optional[Mapping[str, str]] = None,
        *,
        source_path: str = "",
        warnings: Iterable[str] = (),
    ):
        self._terminal_names: Tuple[str, ...] = tuple(terminal_names)
        if not self._terminal_names:
            raise ValueError("a terminal needs at least one name")
        self._booleans = _standard(BooleanCapability, booleans, bool)
        self._numbers = _standard(NumberCapability, numbers, int)
        self._strings = _standard(StringCapability, strings, str)
        self._extended_booleans = _extended(extended_booleans, bool)
        self._extended_numbers = _extended(extended_numbers, int)
        self._extended_strings = _extended(extended_strings, str)
        shared = (
            (self._extended_booleans.keys() & self._extended_numbers.keys())
            | (self._extended_booleans.keys() & self._extended_strings.keys())
            | (self._extended_numbers.keys() & self._extended_strings.keys())
        )
        if shared:
            raise ValueError(f"extended capabilities defined with two kinds: {sorted(shared)}")
        self._source_path = source_path
        self._warnings: Tuple[str, ...] = tuple(warnings)

    # ------------------------- identity -------------------------

    @property
    def terminal_names(self) -> Tuple[str, ...]:
        return self._terminal_names

    @property
    def name(self) -> str:
        return self._terminal_names[0]

    @property
    def source_path(self) -> str:
        return self._source_path

    @property
    def warnings(self) -> Tuple[str, ...]:
        return self._warnings

    # ------------------------- tables -------------------------

    @property
    def booleans(self) -> Mapping[BooleanCapability, bool]:
        return self._booleans

    @property
    def numbers(self) -> Mapping[NumberCapability, int]:
        return self._numbers

    @property
    def strings(self) -> Mapping[StringCapability, str]:
        return self._strings

    @property
    def extended_booleans(self) -> Mapping[str, bool]:
        return self._extended_booleans

    @property
    def extended_numbers(self) -> Mapping[str, int]:
        return self._extended_numbers

    @property
    def extended_strings(self) -> Mapping[str, str]:
        return self._extended_strings

    def has_extended(self, name: str) -> bool:
        return (
            name in self._extended_booleans
            or name in self._extended_numbers
            or name in self._extended_strings
        )

    # ------------------------- lookups -------------------------

    def _table(self, key, kind: Type[IntEnum], standard: Mapping, extended: Mapping) -> Mapping:
        if isinstance(key, str):
            return extended
        if isinstance(key, kind):
            return standard
        raise UsageError(f"{key!r} is not a {kind.__name__} or an extended capability name")

    def boolean(self, key: BooleanKey) -> Optional[bool]:
        return self._table(key, BooleanCapability, self._booleans, self._extended_booleans).get(key)

    def number(self, key: NumberKey) -> Optional[int]:
        return self._table(key, NumberCapability, self._numbers, self._extended_numbers).get(key)

    def string(self, key: StringKey, *args: Value) -> Optional[str]:
        """
        Return the capability string, or None if the terminal lacks it. With
        `args` the template is expanded; a template without `%` codes is
        returned unchanged.
        """
        template = self._table(key, StringCapability, self._strings, self._extended_strings).get(key)
        if template is None or not args or "%" not in template:
            return template
        return expand(template, args)

    # ------------------------- derivation -------------------------

    def derive(
        self,
        *,
        terminal_names: Optional[Sequence[str]] = None,
        extended_strings: Optional[Mapping[str, str]] = None,
        warnings: Iterable[str] = (),
    ) -> "CapabilityStore":
        """
        Return a copy with the given extended strings added and `warnings`
        appended. Names already defined in any extended table keep their
        original value.
        """
        merged: Dict[str, str] = dict(self._extended_strings)
        for name, value in (extended_strings or {}).items():
            if not self.has_extended(name):
                merged[name] = value
        return CapabilityStore(
            self._terminal_names if terminal_names is None else terminal_names,
            self._booleans,
            self._numbers,
            self._strings,
            self._extended_booleans,
            self._extended_numbers,
            merged,
            source_path=self._source_path,
            warnings=self._warnings + tuple(warnings),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CapabilityStore):
            return NotImplemented
        return (
            self._terminal_names == other._terminal_names
            and self._source_path == other._source_path
            and self._warnings == other._warnings
            and dict(self._booleans) == dict(other._booleans)
            and dict(self._numbers) == dict(other._numbers)
            and dict(self._strings) == dict(other._strings)
            and dict(self._extended_booleans) == dict(other._extended_booleans)
            and dict(self._extended_numbers) == dict(other._extended_numbers)
            and dict(self._extended_strings) == dict(other._extended_strings)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"CapabilityStore({self.name!r}, booleans={len(self._booleans)}, numbers={len(self._numbers)}, "
            f"strings={len(self._strings)}, extended={len(self._extended_booleans) + len(self._extended_numbers) + len(self._extended_strings)})"
        )
