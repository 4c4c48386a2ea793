"""Config types for config-driven capture construction.

The same dict shape loads from JSON or YAML:

    dict → parse_capture_config() → CaptureConfig → Registry.load() → Extractor

Example::

    pattern: '^(\\d+):([0-9a-f]+)$'
    fields:
      - int
      - {type: uint32, config: {radix: hex}}

A field is either a bare type name or a dict with ``type`` and an optional
``config`` payload handed to that type's factory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class FieldConfig:
    """Reference to a registered destination type with its configuration."""

    type: str
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CaptureConfig:
    """A pattern source and one FieldConfig per capture group."""

    pattern: str
    fields: tuple[FieldConfig, ...]


class ConfigParseError(Exception):
    """Error parsing a config dict into config types."""


def parse_capture_config(data: dict[str, Any]) -> CaptureConfig:
    """Parse a dict into a CaptureConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    pattern = data.get("pattern")
    if pattern is None:
        msg = "missing required field 'pattern'"
        raise ConfigParseError(msg)
    if not isinstance(pattern, str):
        msg = f"'pattern' must be a string, got {type(pattern).__name__}"
        raise ConfigParseError(msg)

    raw_fields = data.get("fields", [])
    if not isinstance(raw_fields, list):
        msg = f"'fields' must be a list, got {type(raw_fields).__name__}"
        raise ConfigParseError(msg)

    return CaptureConfig(
        pattern=pattern,
        fields=tuple(_parse_field(f) for f in raw_fields),
    )


def _parse_field(data: str | dict[str, Any]) -> FieldConfig:
    """Parse a field entry: a type name, or {type, config}."""
    if isinstance(data, str):
        return FieldConfig(type=data)
    if not isinstance(data, dict):
        msg = f"field must be a string or dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    if "type" not in data:
        msg = "field missing required field 'type'"
        raise ConfigParseError(msg)

    type_name = data["type"]
    if not isinstance(type_name, str):
        msg = f"type must be a string, got {type(type_name).__name__}"
        raise ConfigParseError(msg)

    config = data.get("config", {})
    if not isinstance(config, dict):
        msg = f"config must be a dict, got {type(config).__name__}"
        raise ConfigParseError(msg)

    unknown = sorted(set(data) - {"type", "config"})
    if unknown:
        msg = f"field {type_name!r} has unknown keys: {unknown}"
        raise ConfigParseError(msg)

    return FieldConfig(type=type_name, config=config)
