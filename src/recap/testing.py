"""Test utilities for recap.

Provides ready-made custom savers and a test destination type for use in
tests and examples. For real conversions, write a Saver for your own type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from recap._capture import Field
from recap._destinations import Custom

if TYPE_CHECKING:
    from recap._registry import RegistryBuilder
    from recap._types import Ref


@dataclass(slots=True)
class RecordingSaver:
    """Custom saver that records every submatch it is handed.

    >>> from recap import match_string
    >>> from recap.testing import RecordingSaver
    >>> saver = RecordingSaver()
    >>> match_string(r"(\\w+) (\\w+)", "hello world", saver, saver)
    >>> saver.seen
    ['hello', 'world']
    """

    seen: list[str] = field(default_factory=list)

    def save(self, submatch: str, /) -> None:
        self.seen.append(submatch)


@dataclass(frozen=True, slots=True)
class FailingSaver:
    """Custom saver that raises ``error`` for every submatch."""

    error: Exception = field(default_factory=lambda: ValueError("rejected"))

    def save(self, submatch: str, /) -> None:
        raise self.error


def register(builder: RegistryBuilder) -> RegistryBuilder:
    """Register the test-domain ``test.upper`` destination type.

    Stores the submatch upper-cased. Config field: { "strip": bool }.
    """
    return builder.destination("test.upper", _upper_factory)


def _upper_factory(config: dict[str, Any]) -> Field:
    strip = config.get("strip", False)
    if not isinstance(strip, bool):
        msg = "test.upper 'strip' must be a bool"
        raise ValueError(msg)

    def bind(ref: Ref[Any]) -> Custom:
        def save(submatch: str) -> None:
            ref.value = (submatch.strip() if strip else submatch).upper()

        return Custom(save)

    return Field(str, bind)
