"""Scan template compiler: a small scanf-style format language.

A format is translated once into an RE2 pattern with one capture group per
verb. Applying it anchors at the start of the input; each group is then
bound to its slot Ref through the regular destination conversions.

Grammar:
- literal characters match themselves
- a run of whitespace matches zero or more whitespace characters
- ``%%`` matches a literal ``%``
- verbs skip leading blanks, except ``%c``

Verbs by slot kind:

| kind      | verbs                                                |
|-----------|------------------------------------------------------|
| IntType   | %d (10), %b (2), %o (8), %x %X (16), %v (C-style, _) |
| FloatType | %v %f %e %E %g %G                                    |
| bool      | %v %t                                                |
| str       | %v %s (run of non-blanks), %c (exactly one char)     |
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import re2

from recap._errors import ContractViolation, quote
from recap._parse import BOOL_SYNTAX, FLOAT_SYNTAX
from recap._types import FloatType, IntType, Radix, kind_name

if TYPE_CHECKING:
    from collections.abc import Sequence

    from recap._types import Ref

_BLANKS = r"[ \t]*"

_INT_VERBS: dict[str, tuple[str, Radix]] = {
    "d": (r"[+-]?[0-9]+", Radix.DECIMAL),
    "b": (r"[+-]?[01]+", Radix.BINARY),
    "o": (r"[+-]?[0-7]+", Radix.OCTAL),
    "x": (r"[+-]?[0-9a-fA-F]+", Radix.HEX),
    "X": (r"[+-]?[0-9a-fA-F]+", Radix.HEX),
    # A leading 0 with no letter prefix reads octal digits only.
    "v": (
        r"[+-]?(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+|0[0-7_]*|[1-9][0-9_]*)",
        Radix.AUTO,
    ),
}
_FLOAT_VERBS = frozenset("vfeEgG")


@dataclass(frozen=True, slots=True)
class Verb:
    """One conversion in a scan format, bound to its slot."""

    char: str
    ref: Ref[Any]
    radix: Radix = Radix.DECIMAL


def compile_format(format: str, refs: Sequence[Ref[Any]]) -> tuple[str, tuple[Verb, ...]]:
    """Translate a scan format into RE2 syntax and its ordered verbs.

    Raises:
        ContractViolation: unknown verb, verb/kind mismatch, dangling ``%``,
            or a slot count different from the verb count.
    """
    parts: list[str] = []
    verbs: list[Verb] = []
    i = 0
    while i < len(format):
        ch = format[i]
        if ch.isspace():
            while i < len(format) and format[i].isspace():
                i += 1
            parts.append(r"\s*")
            continue
        if ch != "%":
            parts.append(re2.escape(ch))
            i += 1
            continue
        if i + 1 == len(format):
            msg = f"dangling '%' at end of scan format {quote(format)}"
            raise ContractViolation(msg)
        verb = format[i + 1]
        i += 2
        if verb == "%":
            parts.append("%")
            continue
        if len(verbs) == len(refs):
            msg = f"scan format {quote(format)} has more verbs than the {len(refs)} slots given"
            raise ContractViolation(msg)
        ref = refs[len(verbs)]
        token, radix = _token(verb, ref.kind)
        lead = "" if verb == "c" else _BLANKS
        parts.append(f"{lead}({token})")
        verbs.append(Verb(verb, ref, radix))

    if len(verbs) != len(refs):
        msg = f"scan format {quote(format)} has {len(verbs)} verbs, got {len(refs)} slots"
        raise ContractViolation(msg)
    return "".join(parts), tuple(verbs)


def _token(verb: str, kind: Any) -> tuple[str, Radix]:
    """RE2 syntax and radix for a verb applied to a slot kind."""
    if isinstance(kind, IntType) and verb in _INT_VERBS:
        return _INT_VERBS[verb]
    if isinstance(kind, FloatType) and verb in _FLOAT_VERBS:
        return FLOAT_SYNTAX, Radix.DECIMAL
    if kind is bool and verb in ("v", "t"):
        return BOOL_SYNTAX, Radix.DECIMAL
    if kind is str and verb in ("v", "s"):
        return r"\S+", Radix.DECIMAL
    if kind is str and verb == "c":
        return r"(?s:.)", Radix.DECIMAL
    msg = f"bad verb '%{verb}' for {kind_name(kind)} slot"
    raise ContractViolation(msg)
