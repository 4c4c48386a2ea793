"""Literal parsers shared by destinations and scan templates.

Integers accept an optional sign (signed targets only) and digits of the
configured radix. Radix.AUTO resolves C-style prefixes: ``0x`` is base 16,
``0b`` base 2, ``0o`` or a bare leading ``0`` base 8, anything else base 10.
Radix.AUTO also accepts single underscores between digits or right after a
prefix (``1_000``, ``0x_40``). Fixed radixes reject prefixes and
underscores. Only ASCII digits of the radix are accepted, no whitespace.

Leading zeros are not significant. A literal with more significant digits
than the target width can hold is an overflow without being converted.
"""

from __future__ import annotations

import math
import struct

import re2

from recap._errors import (
    IntegerOverflowError,
    InvalidBooleanError,
    InvalidFloatError,
    InvalidIntegerError,
)
from recap._types import FloatType, IntType, Radix

# Token syntax, also used to build scan templates.
FLOAT_SYNTAX = (
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|(?i:inf(?:inity)?|nan))"
)
HEX_FLOAT_SYNTAX = (
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
BOOL_SYNTAX = r"(?:TRUE|True|true|FALSE|False|false|[01tTfF])"

_FLOAT_RE = re2.compile(FLOAT_SYNTAX)
_HEX_FLOAT_RE = re2.compile(HEX_FLOAT_SYNTAX)

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_DIGITS = "0123456789abcdef"
_DIGIT_SETS = {
    radix: frozenset(_DIGITS[:radix] + _DIGITS[:radix].upper())
    for radix in (Radix.BINARY, Radix.OCTAL, Radix.DECIMAL, Radix.HEX)
}
_PREFIXES = {
    "0x": Radix.HEX,
    "0X": Radix.HEX,
    "0b": Radix.BINARY,
    "0B": Radix.BINARY,
    "0o": Radix.OCTAL,
    "0O": Radix.OCTAL,
}


def detect_radix(digits: str) -> tuple[Radix, str]:
    """Resolve a C-style prefix. Returns the radix and the digits after it."""
    radix = _PREFIXES.get(digits[:2])
    if radix is not None:
        return radix, digits[2:]
    if len(digits) > 1 and digits[0] == "0":
        return Radix.OCTAL, digits[1:]
    return Radix.DECIMAL, digits


def parse_integer(
    text: str, int_type: IntType = IntType.INT, radix: Radix = Radix.DECIMAL
) -> int:
    """Parse ``text`` as an integer of ``int_type`` in ``radix``.

    >>> parse_integer("0x40", IntType.INT, Radix.AUTO)
    64
    >>> parse_integer("100", IntType.UINT8, Radix.OCTAL)
    64

    Raises:
        InvalidIntegerError: not a well-formed literal for the radix
        IntegerOverflowError: the value does not fit ``int_type``
    """
    body = text
    negative = False
    if int_type.signed and body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]

    base = radix
    if radix is Radix.AUTO:
        unprefixed = body
        base, body = detect_radix(body)
        if "_" in body:
            body = _join_digit_groups(body, prefixed=body != unprefixed)

    allowed = _DIGIT_SETS[base]
    if not body or not all(c in allowed for c in body):
        raise InvalidIntegerError(text, radix)

    digits = body.lstrip("0") or "0"
    if len(digits) > _max_digits(int_type, base):
        raise IntegerOverflowError(text, None, int_type)

    value = int(digits, base)
    if negative:
        value = -value
    if not int_type.min <= value <= int_type.max:
        raise IntegerOverflowError(text, value, int_type)
    return value


def _join_digit_groups(digits: str, *, prefixed: bool) -> str:
    """Drop underscore separators; returns "" when they are misplaced."""
    groups = digits.split("_")
    if prefixed and groups[0] == "":
        groups = groups[1:]
    if "" in groups:
        return ""
    return "".join(groups)


def _max_digits(int_type: IntType, base: int) -> int:
    """Upper bound on significant digits of any in-range value."""
    return math.ceil(int_type.bits / math.log2(base)) + 1


def parse_bool(text: str) -> bool:
    """Parse one of the conventional boolean spellings (1/t/true, 0/f/false)."""
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise InvalidBooleanError(text)


def parse_float(text: str, float_type: FloatType = FloatType.FLOAT64) -> float:
    """Parse a float literal, narrowing to ``float_type``.

    Narrowing to FLOAT32 rounds per IEEE-754 and may lose precision; that is
    not an error. A finite literal whose magnitude overflows the target width
    is rejected with reason "out of range".
    """
    if _HEX_FLOAT_RE.fullmatch(text):
        try:
            value = float.fromhex(text)
        except OverflowError:
            raise InvalidFloatError(text, float_type, "out of range") from None
    elif _FLOAT_RE.fullmatch(text):
        value = float(text)
    else:
        raise InvalidFloatError(text, float_type)

    if math.isinf(value) and not _is_infinity_literal(text):
        raise InvalidFloatError(text, float_type, "out of range")

    if float_type is FloatType.FLOAT32:
        try:
            value = struct.unpack("<f", struct.pack("<f", value))[0]
        except OverflowError:
            raise InvalidFloatError(text, float_type, "out of range") from None
    return value


def _is_infinity_literal(text: str) -> bool:
    return text.lstrip("+-").lower() in ("inf", "infinity")
