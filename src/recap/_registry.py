"""Type registry for config-driven capture construction.

- RegistryBuilder → .build() → Registry (immutable)
- Factories are plain callables: (config: dict) → Field
- Registry.load() compiles the pattern, resolves one Field per capture group
  and returns a ready Extractor

Example::

    builder = register_core_destinations(RegistryBuilder())
    registry = builder.build()

    config = parse_capture_config(yaml.safe_load(text))
    extractor = registry.load(config)
    extractor.extract("2013-09-26")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias

from recap._capture import Extractor, Field, compile_pattern
from recap._destinations import Byte, Char, Custom, Float, Integer, Scan
from recap._errors import PatternError, PatternTooLongError
from recap._scan import compile_format
from recap._types import FloatType, IntType, Radix, Ref

if TYPE_CHECKING:
    from collections.abc import Callable

    from recap._config import CaptureConfig, FieldConfig
    from recap._destinations import Destination

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Limits
# ═══════════════════════════════════════════════════════════════════════════════

MAX_FIELDS = 256
MAX_PATTERN_LENGTH = 4096

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class RegistryError(Exception):
    """Errors from loading a capture config."""


class UnknownTypeError(RegistryError):
    """A destination type name was not found in the registry."""

    def __init__(self, type_name: str, available: list[str]) -> None:
        self.type_name = type_name
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown destination type: {type_name!r} (registered: {registered})"
        else:
            msg = f"unknown destination type: {type_name!r} (no types are registered)"
        super().__init__(msg)


class InvalidConfigError(RegistryError):
    """A config payload was malformed or semantically invalid."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"invalid config: {source}")


class TooManyFieldsError(RegistryError):
    """Config has too many fields."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many fields: {count} exceeds maximum {max_}")


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════

FieldFactory: TypeAlias = "Callable[[dict[str, Any]], Field]"


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register Field factories under type names, then call build() to produce
    an immutable Registry. Registering a name twice replaces the factory.
    """

    def __init__(self) -> None:
        self._factories: dict[str, FieldFactory] = {}

    def destination(self, type_name: str, factory: FieldFactory) -> RegistryBuilder:
        """Register a Field factory under a type name."""
        self._factories[type_name] = factory
        return self

    def build(self) -> Registry:
        """Freeze the registry. No further registration is possible."""
        return Registry(_factories=MappingProxyType(dict(self._factories)))


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable registry of Field factories.

    Constructed via RegistryBuilder. Use load() to compile a config into a
    runtime Extractor.
    """

    _factories: MappingProxyType[str, FieldFactory] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def load(self, config: CaptureConfig) -> Extractor:
        """Load an Extractor from configuration.

        Raises:
            PatternTooLongError: pattern exceeds length limit
            TooManyFieldsError: too many fields
            InvalidConfigError: invalid regex, field/group count mismatch,
                or a factory rejected its payload
            UnknownTypeError: field type not registered
        """
        if len(config.pattern) > MAX_PATTERN_LENGTH:
            raise PatternTooLongError(len(config.pattern), MAX_PATTERN_LENGTH)
        if len(config.fields) > MAX_FIELDS:
            raise TooManyFieldsError(len(config.fields), MAX_FIELDS)

        try:
            pattern = compile_pattern(config.pattern)
        except PatternError as e:
            raise InvalidConfigError(str(e)) from e
        if pattern.groups != len(config.fields):
            msg = (
                f"pattern has {pattern.groups} capture groups "
                f"but {len(config.fields)} fields are configured"
            )
            raise InvalidConfigError(msg)

        fields = tuple(self._load_field(fc) for fc in config.fields)
        logger.debug(
            "loaded extractor for %r with fields %s",
            config.pattern,
            [fc.type for fc in config.fields],
        )
        return Extractor(pattern, fields)

    @property
    def destination_count(self) -> int:
        """Number of registered destination types."""
        return len(self._factories)

    def contains(self, type_name: str) -> bool:
        """Check if a destination type name is registered."""
        return type_name in self._factories

    def type_names(self) -> list[str]:
        """Return all registered destination type names (sorted)."""
        return sorted(self._factories.keys())

    def _load_field(self, config: FieldConfig) -> Field:
        factory = self._factories.get(config.type)
        if factory is None:
            raise UnknownTypeError(config.type, list(self._factories.keys()))
        try:
            return factory(config.config)
        except Exception as e:
            raise InvalidConfigError(f"{config.type}: {e}") from e


# ═══════════════════════════════════════════════════════════════════════════════
# Core destination factories
# ═══════════════════════════════════════════════════════════════════════════════

INT_TYPES: dict[str, IntType] = {
    "int": IntType.INT,
    "uint": IntType.UINT,
    **{str(t): t for t in IntType},
}
FLOAT_TYPES: dict[str, FloatType] = {
    "float": FloatType.FLOAT64,
    **{str(t): t for t in FloatType},
}
_SCALAR_KINDS: dict[str, Any] = {"str": str, "bool": bool, **INT_TYPES, **FLOAT_TYPES}

_RADIX_NAMES = {
    "auto": Radix.AUTO,
    "binary": Radix.BINARY,
    "octal": Radix.OCTAL,
    "decimal": Radix.DECIMAL,
    "hex": Radix.HEX,
}


def register_core_destinations(builder: RegistryBuilder) -> RegistryBuilder:
    """Register the built-in destination types.

    str, bool, int, uint, int8..int64, uint8..uint64 (optional ``radix``),
    float, float32, float64, char, byte, and scan (``format`` + ``slots``).
    """
    builder.destination("str", lambda cfg: Field(str))
    builder.destination("bool", lambda cfg: Field(bool))
    for name, int_type in INT_TYPES.items():
        builder.destination(name, partial(_integer_field, int_type))
    for name, float_type in FLOAT_TYPES.items():
        builder.destination(name, lambda cfg, ft=float_type: Field(ft, Float))
    builder.destination("char", lambda cfg: Field(str, Char))
    builder.destination("byte", lambda cfg: Field(IntType.UINT8, Byte))
    builder.destination("scan", _scan_field)
    return builder


def parse_radix(value: str | int) -> Radix:
    """Resolve a radix given by name ("hex") or number (16).

    Raises:
        ValueError: unsupported radix
    """
    if isinstance(value, str) and value in _RADIX_NAMES:
        return _RADIX_NAMES[value]
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Radix(value)
        except ValueError:
            pass
    expected = sorted(_RADIX_NAMES)
    msg = f"unsupported radix {value!r}, expected one of {expected} or 0/2/8/10/16"
    raise ValueError(msg)


def _integer_field(int_type: IntType, config: dict[str, Any]) -> Field:
    radix = parse_radix(config.get("radix", "decimal"))
    return Field(int_type, partial(Integer, radix=radix))


def _scan_field(config: dict[str, Any]) -> Field:
    """A scan field binds a tuple holding every slot value, in verb order."""
    fmt = config.get("format")
    if not isinstance(fmt, str):
        msg = "scan requires a 'format' field (string)"
        raise ValueError(msg)
    slot_names = config.get("slots", [])
    if not isinstance(slot_names, list):
        msg = "scan 'slots' must be a list of type names"
        raise ValueError(msg)
    unknown = [s for s in slot_names if s not in _SCALAR_KINDS]
    if unknown:
        msg = f"unknown scan slot types: {unknown}"
        raise ValueError(msg)
    kinds = tuple(_SCALAR_KINDS[s] for s in slot_names)
    # Malformed templates fail at load time.
    compile_format(fmt, [Ref(k) for k in kinds])

    def bind(ref: Ref[Any]) -> Destination:
        slots = tuple(Ref(k) for k in kinds)
        scan = Scan(fmt, slots)

        def save(submatch: str) -> None:
            scan.save(submatch)
            ref.value = tuple(s.value for s in slots)

        return Custom(save)

    return Field(tuple, bind)
