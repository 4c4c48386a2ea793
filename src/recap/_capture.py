"""Match orchestration: one match, one positional bind pass.

match_string() is the core operation:
1. arity check (len(args) == capture groups), a ContractViolation otherwise
2. resolve every argument to a destination
3. search the input once; no match raises NoMatchError
4. bind groups 1..N in order; the first ConversionError stops the pass and
   is raised as SaveFailedError with the full submatch dump

INV: first failure wins. Destinations before the failing group keep their
values, destinations after it are never called. There is no rollback.

Extractor wraps the same pass for callers that want values back instead of
writing into their own Refs.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import re2

from recap._destinations import Destination, destination_for
from recap._errors import (
    ContractViolation,
    ConversionError,
    NoMatchError,
    PatternError,
    SaveFailedError,
    quote,
)
from recap._types import CompiledPattern, MatchLike, Ref

logger = logging.getLogger(__name__)


def compile_pattern(pattern: str | CompiledPattern) -> CompiledPattern:
    """Compile a pattern source with RE2, or pass a compiled pattern through.

    RE2 guarantees linear-time matching. It does not support backreferences
    or lookaround; such patterns are rejected here.

    Raises:
        PatternError: If the source is not valid RE2 syntax.
    """
    if not isinstance(pattern, str):
        return pattern
    try:
        return re2.compile(pattern)
    except re2.error as e:
        msg = f"invalid regex pattern {quote(pattern)}: {e}"
        raise PatternError(msg) from e


def match_string(pattern: str | CompiledPattern, text: str, *args: Any) -> None:
    """Match ``text`` and bind each capture group into the positional ``args``.

    ``args`` may be destinations, Refs (dispatched by kind), Savers or plain
    callables. Succeeds iff the pattern matched AND every conversion
    succeeded; results live in the caller's Refs.

    Raises:
        ContractViolation: the argument count differs from the number of
            capture groups, or an argument has no destination.
        NoMatchError: the pattern did not match.
        SaveFailedError: a submatch failed conversion.
    """
    compiled = compile_pattern(pattern)
    if compiled.groups != len(args):
        msg = f"expected {compiled.groups} destinations, got {len(args)}"
        raise ContractViolation(msg)
    destinations = tuple(destination_for(arg) for arg in args)

    m = compiled.search(text)
    if m is None:
        logger.debug("pattern %s did not match %s", quote(compiled.pattern), quote(text))
        raise NoMatchError(compiled.pattern, text)

    submatches = _submatches(m)
    _bind(destinations, submatches, compiled.pattern, text)


def _submatches(m: MatchLike) -> tuple[str, ...]:
    """Whole match followed by every group; groups that did not take part are ''."""
    return tuple("" if s is None else s for s in (m.group(0), *m.groups()))


def _bind(
    destinations: tuple[Destination, ...],
    submatches: tuple[str, ...],
    pattern: str,
    text: str,
) -> None:
    for index, destination in enumerate(destinations, start=1):
        try:
            destination.save(submatches[index])
        except ConversionError as e:
            logger.debug("submatch %d save failed: %s", index, e)
            raise SaveFailedError(index, pattern, text, submatches, e) from e


# ═══════════════════════════════════════════════════════════════════════════════
# Value-returning form
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Field:
    """One capture slot: the Ref kind to allocate and how to bind it.

    ``bind`` receives a fresh Ref and returns its destination. The default
    is the kind-based dispatch; pass e.g. ``hexadecimal`` or ``Char`` to
    choose another variant.
    """

    kind: Any
    bind: Callable[[Ref[Any]], Destination] = destination_for


@dataclass(frozen=True, slots=True)
class Extractor:
    """A compiled pattern with one Field per capture group.

    ``extract(text)`` allocates fresh Refs on every call, so a single
    Extractor can be shared across threads.

    >>> Extractor(r"^(\\w+)=(\\d+)$", (Field(str), Field(int))).extract("port=80")
    ('port', 80)

    Raises:
        PatternError: If a pattern source is not valid RE2 syntax.
        ContractViolation: If the field count differs from the group count.
    """

    pattern: str | CompiledPattern
    fields: tuple[Field, ...]
    _compiled: CompiledPattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        compiled = compile_pattern(self.pattern)
        if compiled.groups != len(self.fields):
            msg = f"expected {compiled.groups} fields, got {len(self.fields)}"
            raise ContractViolation(msg)
        object.__setattr__(self, "_compiled", compiled)

    def extract(self, text: str) -> tuple[Any, ...]:
        """Match ``text`` and return the bound value of every group, in order.

        Raises:
            NoMatchError: the pattern did not match.
            SaveFailedError: a submatch failed conversion.
        """
        refs = tuple(Ref(f.kind) for f in self.fields)
        match_string(
            self._compiled,
            text,
            *(f.bind(ref) for f, ref in zip(self.fields, refs, strict=True)),
        )
        return tuple(ref.value for ref in refs)


def capture(pattern: str | CompiledPattern, text: str, *kinds: Any) -> tuple[Any, ...]:
    """One-shot extraction with default dispatch per kind.

    >>> capture(r"^(\\d{4})-(\\d{2})-(\\d{2})$", "2013-09-26", int, int, int)
    (2013, 9, 26)
    """
    return Extractor(pattern, tuple(Field(k) for k in kinds)).extract(text)
