from __future__ import annotations


class TerminalInfoError(Exception):
    pass


class FormatError(TerminalInfoError):
    """A compiled terminfo entry is malformed or truncated."""


class UsageError(TerminalInfoError, ValueError):
    """The caller passed an argument the capability cannot accept."""


class ExpansionError(TerminalInfoError, ValueError):
    """A parameterized capability template could not be interpreted."""
