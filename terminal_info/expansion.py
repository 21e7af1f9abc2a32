"""
Interpreter for the terminfo parameterized-string language (terminfo(5),
"Parameterized Strings"): a small stack machine driven by `%` codes.
"""

from __future__ import annotations

import re
from typing import Dict, List, Sequence, Union

from .errors import ExpansionError, UsageError

Value = Union[int, str]

MAX_PARAMS = 9

# %[[:]flags][width[.precision]][doxXsuc]
_FORMAT = re.compile(r"(:[-+# ]*|[# ]*)(\d*)(?:\.(\d*))?([cdosuxX])")
_FORMAT_START = set("cdosuxX0123456789.:# ")


def _c_div(x: int, y: int) -> int:
    if y == 0:
        return 0
    q = abs(x) // abs(y)
    return q if (x < 0) == (y < 0) else -q


def _c_mod(x: int, y: int) -> int:
    if y == 0:
        return 0
    return x - y * _c_div(x, y)


_BINARY_OPS = {
    "+": lambda x, y: x + y,
    "-": lambda x, y: x - y,
    "*": lambda x, y: x * y,
    "/": _c_div,
    "m": _c_mod,
    "&": lambda x, y: x & y,
    "|": lambda x, y: x | y,
    "^": lambda x, y: x ^ y,
    "=": lambda x, y: int(x == y),
    "<": lambda x, y: int(x < y),
    ">": lambda x, y: int(x > y),
    "A": lambda x, y: int(bool(x) and bool(y)),
    "O": lambda x, y: int(bool(x) or bool(y)),
}


def _format(flags: str, width: str, precision: str, conv: str, value: Value) -> str:
    flags = flags.lstrip(":")
    if conv == "s":
        text = value if isinstance(value, str) else str(value)
        spec = "%" + ("-" if "-" in flags else "") + width
        if precision is not None:
            spec += "." + (precision or "0")
        return (spec + "s") % (text,)

    if isinstance(value, str):
        raise UsageError(f"%{conv} needs a number, got string {value!r}")
    if conv == "c":
        spec = "%" + ("-" if "-" in flags else "") + width + "s"
        return spec % (chr(value & 0xFF),)
    if conv in "ouxX":
        value &= 0xFFFFFFFF
    if conv == "u":
        conv = "d"
    prefix = ""
    if conv == "o" and "#" in flags:
        # C prints a single leading zero where Python would print "0o".
        flags = flags.replace("#", "")
        prefix = "0" if value else ""
    spec = "%" + flags + width
    if precision is not None:
        spec += "." + (precision or "0")
    text = (spec + conv) % (value,)
    if prefix:
        stripped = text.lstrip(" ")
        text = text[: len(text) - len(stripped)] + prefix + stripped
    return text


class _Machine:
    def __init__(self, template: str, params: List[Value]):
        self.template = template
        self.params = params
        self.pos = 0
        self.stack: List[Value] = []
        self.variables: Dict[str, Value] = {}
        self.out: List[str] = []
        self.depth = 0

    # ------------------------- stack -------------------------

    def push(self, value: Value) -> None:
        self.stack.append(value)

    def pop(self) -> Value:
        if not self.stack:
            raise ExpansionError(f"stack underflow at offset {self.pos} in {self.template!r}")
        return self.stack.pop()

    def pop_int(self) -> int:
        value = self.pop()
        if isinstance(value, str):
            raise ExpansionError(f"expected a number on the stack at offset {self.pos}, got {value!r}")
        return value

    # ------------------------- scanning -------------------------

    def next_char(self) -> str:
        if self.pos >= len(self.template):
            raise ExpansionError(f"template ends inside a % code: {self.template!r}")
        c = self.template[self.pos]
        self.pos += 1
        return c

    def skip_branch(self, stop_at_else: bool) -> None:
        """
        Advance past the branch that is not taken: up to the matching %e
        (when `stop_at_else`) or %; at the current nesting level.
        """
        level = 0
        t = self.template
        while self.pos < len(t):
            c = t[self.pos]
            self.pos += 1
            if c != "%":
                continue
            code = self.next_char()
            if code == "'":
                self.pos += 2
            elif code == "?":
                level += 1
            elif code == ";":
                if level == 0:
                    self.depth -= 1
                    return
                level -= 1
            elif code == "e" and level == 0 and stop_at_else:
                return
        raise ExpansionError(f"unterminated %? conditional in {self.template!r}")

    # ------------------------- execution -------------------------

    def run(self) -> str:
        t = self.template
        while self.pos < len(t):
            c = t[self.pos]
            self.pos += 1
            if c == "%":
                self.step()
            else:
                self.out.append(c)
        if self.depth:
            raise ExpansionError(f"unterminated %? conditional in {t!r}")
        return "".join(self.out)

    def step(self) -> None:
        code = self.next_char()

        if code == "%":
            self.out.append("%")
        elif code in _FORMAT_START:
            m = _FORMAT.match(self.template, self.pos - 1)
            if m is None:
                raise ExpansionError(f"bad format at offset {self.pos - 1} in {self.template!r}")
            self.pos = m.end()
            flags, width, precision, conv = m.groups()
            self.out.append(_format(flags, width, precision, conv, self.pop()))
        elif code == "p":
            digit = self.next_char()
            if digit not in "123456789":
                raise ExpansionError(f"bad parameter number %p{digit} in {self.template!r}")
            index = int(digit) - 1
            self.push(self.params[index] if index < len(self.params) else 0)
        elif code == "P":
            self.variables[self.variable_name()] = self.pop()
        elif code == "g":
            self.push(self.variables.get(self.variable_name(), 0))
        elif code == "'":
            ch = self.next_char()
            if self.next_char() != "'":
                raise ExpansionError(f"unterminated character constant in {self.template!r}")
            self.push(ord(ch))
        elif code == "{":
            end = self.template.find("}", self.pos)
            literal = self.template[self.pos:end] if end >= 0 else ""
            if not re.fullmatch(r"-?\d+", literal):
                raise ExpansionError(f"bad integer constant at offset {self.pos} in {self.template!r}")
            self.pos = end + 1
            self.push(int(literal))
        elif code == "l":
            value = self.pop()
            self.push(len(value) if isinstance(value, str) else 0)
        elif code in _BINARY_OPS:
            y = self.pop_int()
            x = self.pop_int()
            self.push(_BINARY_OPS[code](x, y))
        elif code == "!":
            self.push(int(not self.pop_int()))
        elif code == "~":
            self.push(~self.pop_int())
        elif code == "i":
            for i in range(min(2, len(self.params))):
                if not isinstance(self.params[i], str):
                    self.params[i] += 1
        elif code == "?":
            self.depth += 1
        elif code == "t":
            if self.depth == 0:
                raise ExpansionError(f"%t outside a conditional in {self.template!r}")
            if not self.pop_int():
                self.skip_branch(stop_at_else=True)
        elif code == "e":
            if self.depth == 0:
                raise ExpansionError(f"%e outside a conditional in {self.template!r}")
            self.skip_branch(stop_at_else=False)
        elif code == ";":
            if self.depth == 0:
                raise ExpansionError(f"%; without %? in {self.template!r}")
            self.depth -= 1
        else:
            raise ExpansionError(f"unknown code %{code} at offset {self.pos - 1} in {self.template!r}")

    def variable_name(self) -> str:
        name = self.next_char()
        if not ("a" <= name <= "z" or "A" <= name <= "Z"):
            raise ExpansionError(f"bad variable name {name!r} in {self.template!r}")
        return name


def _check_args(args: Sequence[Value]) -> List[Value]:
    if len(args) > MAX_PARAMS:
        raise UsageError(f"at most {MAX_PARAMS} parameters are allowed, got {len(args)}")
    params: List[Value] = []
    for i, arg in enumerate(args, 1):
        if isinstance(arg, bool):
            params.append(int(arg))
        elif isinstance(arg, (int, str)):
            params.append(arg)
        else:
            raise UsageError(f"parameter {i} must be int, bool or str, not {type(arg).__name__}")
    return params


def expand(template: str, args: Sequence[Value] = ()) -> str:
    """
    Substitute `args` (%p1..%p9) into `template` and return the resulting
    escape sequence. The same template and arguments always give the same
    result: variables, static ones included, do not outlive the call.
    """
    return _Machine(template, _check_args(args)).run()
