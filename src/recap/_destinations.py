"""Destinations: typed sinks that convert and store one submatch.

Each destination is a frozen dataclass holding the caller's Ref (Custom
holds a saver instead). ``save(submatch)`` writes the converted value into
the Ref, or raises a ConversionError and leaves the Ref untouched.

The Destination union type is pattern-matchable via match/case.
destination_for() is the default dispatch used for positional arguments:
Refs route by kind, savers and callables become Custom.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

import re2

from recap._errors import (
    ContractViolation,
    ConversionError,
    CustomSaveError,
    EmptyInputError,
    ExtraInputError,
    ScanError,
    UnconsumedInputError,
    WrongByteCountError,
    encoded_length,
)
from recap._parse import parse_bool, parse_float, parse_integer
from recap._scan import Verb, compile_format
from recap._types import FloatType, IntType, Radix, Ref, Saver, kind_name


@dataclass(frozen=True, slots=True)
class Text:
    """Stores the submatch verbatim. Never fails."""

    ref: Ref[str]

    def save(self, submatch: str, /) -> None:
        self.ref.value = submatch


@dataclass(frozen=True, slots=True)
class Boolean:
    """Stores 1/t/T/true/TRUE/True as True and 0/f/F/false/FALSE/False as False."""

    ref: Ref[bool]

    def save(self, submatch: str, /) -> None:
        self.ref.value = parse_bool(submatch)


@dataclass(frozen=True, slots=True)
class Integer:
    """Parses an integer in a fixed or auto-detected radix.

    Width and signedness come from ``ref.kind``, which must be an IntType.
    The radix is fixed at construction time.
    """

    ref: Ref[int]
    radix: Radix = Radix.DECIMAL

    def __post_init__(self) -> None:
        if not isinstance(self.ref.kind, IntType):
            msg = f"unknown number type {kind_name(self.ref.kind)}"
            raise ContractViolation(msg)

    def save(self, submatch: str, /) -> None:
        self.ref.value = parse_integer(submatch, self.ref.kind, self.radix)


@dataclass(frozen=True, slots=True)
class Float:
    """Parses a float literal at full precision, narrowing for FLOAT32."""

    ref: Ref[float]

    def __post_init__(self) -> None:
        if not isinstance(self.ref.kind, FloatType):
            msg = f"unknown float type {kind_name(self.ref.kind)}"
            raise ContractViolation(msg)

    def save(self, submatch: str, /) -> None:
        self.ref.value = parse_float(submatch, self.ref.kind)


@dataclass(frozen=True, slots=True)
class Char:
    """Stores exactly one Unicode scalar as a one-character string."""

    ref: Ref[str]

    def save(self, submatch: str, /) -> None:
        if not submatch:
            raise EmptyInputError(submatch)
        if len(submatch) > 1:
            raise ExtraInputError(submatch, encoded_length(submatch[1:]))
        self.ref.value = submatch


@dataclass(frozen=True, slots=True)
class Byte:
    """Stores a submatch that encodes to exactly one byte, as an int."""

    ref: Ref[int]

    def save(self, submatch: str, /) -> None:
        encoded = submatch.encode("utf-8", "surrogatepass")
        if len(encoded) != 1:
            raise WrongByteCountError(submatch, len(encoded))
        self.ref.value = encoded[0]


@dataclass(frozen=True, slots=True)
class Scan:
    """Applies a scan template, binding each verb into its slot Ref.

    The template is compiled at construction time. The whole submatch must
    be consumed; slots converted before trailing input is detected keep
    their values.

    Raises:
        ContractViolation: at construction, if the template is malformed.
    """

    format: str
    refs: tuple[Ref[Any], ...]
    _pattern: Any = field(init=False, repr=False, compare=False)
    _slots: tuple[Destination, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        source, verbs = compile_format(self.format, self.refs)
        object.__setattr__(self, "_pattern", re2.compile(source))
        object.__setattr__(self, "_slots", tuple(_slot_for(v) for v in verbs))

    def save(self, submatch: str, /) -> None:
        m = self._pattern.match(submatch)
        if m is None:
            raise ScanError(submatch, self.format)
        for slot, token in zip(self._slots, m.groups(), strict=True):
            slot.save(token)
        rest = submatch[m.end():]
        if rest:
            raise UnconsumedInputError(submatch, encoded_length(rest))


@dataclass(frozen=True, slots=True)
class Custom:
    """Delegates to a caller-supplied saver.

    ``saver`` is either a Saver (has ``save``) or a plain callable.
    ConversionErrors pass through unchanged; any other exception is wrapped
    in CustomSaveError. Contract violations propagate untouched.
    """

    saver: Saver | Callable[[str], object]

    def save(self, submatch: str, /) -> None:
        save = self.saver.save if isinstance(self.saver, Saver) else self.saver
        try:
            save(submatch)
        except (ConversionError, ContractViolation):
            raise
        except Exception as e:
            raise CustomSaveError(submatch, e) from e


# Closed union over every destination variant.
Destination: TypeAlias = Text | Boolean | Integer | Float | Char | Byte | Scan | Custom


def hexadecimal(ref: Ref[int]) -> Integer:
    """Base-16 integer destination."""
    return Integer(ref, Radix.HEX)


def octal(ref: Ref[int]) -> Integer:
    """Base-8 integer destination."""
    return Integer(ref, Radix.OCTAL)


def binary(ref: Ref[int]) -> Integer:
    """Base-2 integer destination."""
    return Integer(ref, Radix.BINARY)


def c_radix(ref: Ref[int]) -> Integer:
    """Integer destination that reads the base from a C-style prefix.

    Defaults to base 10; ``0x`` means 16, ``0b`` 2, ``0o`` or a leading
    ``0`` means 8.
    """
    return Integer(ref, Radix.AUTO)


def scanf(format: str, *refs: Ref[Any]) -> Scan:
    """Scan-template destination: ``scanf("%d:%d", hours, minutes)``."""
    return Scan(format, refs)


def destination_for(arg: object) -> Destination:
    """Resolve a positional argument to a destination.

    - a destination is used as is
    - a Ref routes by kind: str → Text, bool → Boolean, IntType → decimal
      Integer, FloatType → Float
    - a Saver or any other callable → Custom

    Raises:
        ContractViolation: for anything else, including a Ref of an
            unsupported kind and a bare type such as ``int``.
    """
    match arg:
        case Text() | Boolean() | Integer() | Float() | Char() | Byte() | Scan() | Custom():
            return arg
        case Ref():
            return _default_for_ref(arg)
        case type():
            msg = (
                f"unsupported destination: the type {arg.__name__} itself; "
                f"pass an instance such as Ref({arg.__name__})"
            )
            raise ContractViolation(msg)
        case Saver():
            return Custom(arg)
        case _ if callable(arg):
            return Custom(arg)
    msg = f"unsupported destination {type(arg).__name__}"
    raise ContractViolation(msg)


def _slot_for(verb: Verb) -> Destination:
    """Destination for one scan verb; the verb decides radix and %c."""
    if verb.char == "c":
        return Char(verb.ref)
    if isinstance(verb.ref.kind, IntType):
        return Integer(verb.ref, verb.radix)
    return _default_for_ref(verb.ref)


def _default_for_ref(ref: Ref[Any]) -> Destination:
    kind = ref.kind
    if kind is str:
        return Text(ref)
    if kind is bool:
        return Boolean(ref)
    if isinstance(kind, IntType):
        return Integer(ref)
    if isinstance(kind, FloatType):
        return Float(ref)
    msg = f"unknown argument type {kind_name(kind)}"
    raise ContractViolation(msg)
