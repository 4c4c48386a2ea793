"""Error taxonomy.

Two tiers:

- ContractViolation (a TypeError) means the calling code is wrong: arity
  mismatch, unsupported destination kind, malformed scan template. It is
  never a CaptureError, so ``except CaptureError`` cannot swallow it.
- CaptureError and its subclasses mean the input data was bad: no match,
  or a submatch that failed conversion. They carry enough context (pattern
  source, input text, submatch dump) to reproduce the failure offline.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recap._types import FloatType, IntType, Radix


def quote(text: str) -> str:
    """Double-quote ``text`` with escapes for unambiguous display."""
    return json.dumps(text, ensure_ascii=False)


def encoded_length(text: str) -> int:
    """Length of ``text`` in UTF-8 encoded bytes."""
    return len(text.encode("utf-8", "surrogatepass"))


class ContractViolation(TypeError):
    """The caller misused the API. Not recoverable input data."""


class PatternError(ValueError):
    """A pattern source string failed to compile."""


class PatternTooLongError(PatternError):
    """A pattern source exceeds the length limit."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"pattern length {length} exceeds maximum {max_}")


class CaptureError(Exception):
    """Base of every recoverable capture failure."""


# ═══════════════════════════════════════════════════════════════════════════════
# Conversion errors (raised by destinations)
# ═══════════════════════════════════════════════════════════════════════════════


class ConversionError(CaptureError):
    """A destination could not convert its submatch."""

    def __init__(self, submatch: str, msg: str) -> None:
        self.submatch = submatch
        super().__init__(msg)


class InvalidBooleanError(ConversionError):
    def __init__(self, submatch: str) -> None:
        super().__init__(submatch, f"invalid boolean {quote(submatch)}")


class InvalidIntegerError(ConversionError):
    def __init__(self, submatch: str, radix: Radix) -> None:
        self.radix = radix
        # auto and decimal read as plain "integer"
        base = f"base-{int(radix)} " if int(radix) not in (0, 10) else ""
        super().__init__(submatch, f"invalid {base}integer {quote(submatch)}")


class IntegerOverflowError(ConversionError):
    """The parsed value does not fit the destination's width.

    ``value`` is None when the literal was too long to be worth converting.
    """

    def __init__(self, submatch: str, value: int | None, int_type: IntType) -> None:
        self.value = value
        self.int_type = int_type
        shown = quote(submatch) if value is None else value
        super().__init__(
            submatch,
            f"value {shown} out of range for {int_type} "
            f"[{int_type.min}, {int_type.max}]",
        )


class InvalidFloatError(ConversionError):
    def __init__(
        self, submatch: str, float_type: FloatType, reason: str = "invalid syntax"
    ) -> None:
        self.float_type = float_type
        self.reason = reason
        super().__init__(
            submatch, f"cannot parse {quote(submatch)} as {float_type}: {reason}"
        )


class EmptyInputError(ConversionError):
    def __init__(self, submatch: str = "") -> None:
        super().__init__(submatch, "expected 1 character, got empty input")


class ExtraInputError(ConversionError):
    """Input remained after decoding a single character."""

    def __init__(self, submatch: str, leftover: int) -> None:
        self.leftover = leftover
        super().__init__(
            submatch, f"did not consume last {leftover} bytes of {quote(submatch)}"
        )


class WrongByteCountError(ConversionError):
    def __init__(self, submatch: str, length: int) -> None:
        self.length = length
        super().__init__(submatch, f"expected 1 byte, got {length}: {quote(submatch)}")


class ScanError(ConversionError):
    """The scan template did not match the submatch."""

    def __init__(
        self,
        submatch: str,
        format: str,
        reason: str = "input does not match format",
    ) -> None:
        self.format = format
        self.reason = reason
        super().__init__(
            submatch, f"{reason}: format {quote(format)}, input {quote(submatch)}"
        )


class UnconsumedInputError(ConversionError):
    """The scan template matched but left trailing input."""

    def __init__(self, submatch: str, remaining: int) -> None:
        self.remaining = remaining
        super().__init__(
            submatch,
            f"did not consume last {remaining} bytes of input {quote(submatch)}",
        )


class CustomSaveError(ConversionError):
    """A caller-supplied saver raised something other than a ConversionError."""

    def __init__(self, submatch: str, cause: Exception) -> None:
        self.cause = cause
        super().__init__(
            submatch, f"custom saver failed on {quote(submatch)}: {cause}"
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Match errors (raised by the orchestrator)
# ═══════════════════════════════════════════════════════════════════════════════


class NoMatchError(CaptureError):
    """The pattern did not match the input."""

    def __init__(self, pattern: str, text: str) -> None:
        self.pattern = pattern
        self.text = text
        super().__init__(
            "regular expression did not match\n\n"
            f"regex: {quote(pattern)}\n"
            f"input: {quote(text)}"
        )


class SaveFailedError(CaptureError):
    """A submatch failed conversion into its destination.

    ``index`` is the 1-based capture group number. ``submatches`` holds the
    whole match at index 0 followed by every capture group.
    """

    def __init__(
        self,
        index: int,
        pattern: str,
        text: str,
        submatches: tuple[str, ...],
        cause: ConversionError,
    ) -> None:
        self.index = index
        self.pattern = pattern
        self.text = text
        self.submatches = submatches
        self.cause = cause
        lines = [
            f"submatch {index} save failed: {cause}",
            "",
            f"regex: {quote(pattern)}",
            f"input: {quote(text)}",
            "",
        ]
        lines.extend(f"submatch {i}: {quote(s)}" for i, s in enumerate(submatches))
        super().__init__("\n".join(lines))
