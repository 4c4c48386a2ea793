"""Core protocols, target kinds and the caller-owned Ref cell.

- CompiledPattern / MatchLike describe the regex engine port (google-re2 by default)
- Saver is the extension port for caller-supplied conversion
- IntType / FloatType / Radix fix width, signedness and base at construction time
- Ref is the cell a destination writes into; the caller owns it
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable


@runtime_checkable
class MatchLike(Protocol):
    """The slice of a match object the orchestrator reads."""

    def group(self, index: int, /) -> str | None: ...

    def groups(self) -> tuple[str | None, ...]: ...


@runtime_checkable
class CompiledPattern(Protocol):
    """A compiled regular expression.

    ``re2.compile`` and ``re.compile`` results both satisfy this protocol.
    ``groups`` is the number of capture groups, ``pattern`` the source text.
    """

    @property
    def groups(self) -> int: ...

    @property
    def pattern(self) -> str: ...

    def search(self, text: str, /) -> MatchLike | None: ...


@runtime_checkable
class Saver(Protocol):
    """Convert and store one submatch, raising on bad data."""

    def save(self, submatch: str, /) -> None: ...


class IntType(Enum):
    """Fixed-width integer targets. INT and UINT are 64-bit aliases."""

    INT8 = (8, True)
    INT16 = (16, True)
    INT32 = (32, True)
    INT64 = (64, True)
    UINT8 = (8, False)
    UINT16 = (16, False)
    UINT32 = (32, False)
    UINT64 = (64, False)
    INT = (64, True)
    UINT = (64, False)

    @property
    def bits(self) -> int:
        return self.value[0]

    @property
    def signed(self) -> bool:
        return self.value[1]

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    def __str__(self) -> str:
        return self.name.lower()


class FloatType(Enum):
    """IEEE-754 float targets."""

    FLOAT32 = 32
    FLOAT64 = 64

    @property
    def bits(self) -> int:
        return self.value

    def __str__(self) -> str:
        return self.name.lower()


class Radix(IntEnum):
    """Integer base. AUTO resolves C-style prefixes (0x, 0b, 0o, leading 0)."""

    AUTO = 0
    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEX = 16


T = TypeVar("T")


@dataclass(slots=True)
class Ref(Generic[T]):
    """A caller-owned cell that a destination writes into.

    ``kind`` declares what the cell holds. The Python builtins ``int`` and
    ``float`` normalize to ``IntType.INT`` and ``FloatType.FLOAT64``;
    ``str`` and ``bool`` are kept as is. Any other kind is accepted here
    and rejected by the default destination dispatch.

    >>> r = Ref(int)
    >>> r.kind
    <IntType.INT64: (64, True)>
    >>> r.value is None
    True
    """

    kind: Any
    value: T | None = None

    def __post_init__(self) -> None:
        if self.kind is int:
            self.kind = IntType.INT
        elif self.kind is float:
            self.kind = FloatType.FLOAT64


def kind_name(kind: Any) -> str:
    """Human-readable name of a Ref kind, for diagnostics."""
    if isinstance(kind, (IntType, FloatType)):
        return str(kind)
    return getattr(kind, "__name__", None) or repr(kind)
