"""recap: bind regular expression capture groups into typed destinations.

All public types are exported from this module for flat imports:

    from recap import Ref, match_string, hexadecimal

    year, rest = Ref(int), Ref(str)
    match_string(r"^(\\d{4}) (.*)$", "2013 lucky", year, rest)
"""

__version__ = "0.1.0"

# Orchestrator
from recap._capture import (
    Extractor,
    Field,
    capture,
    compile_pattern,
    match_string,
)

# Config types: see recap._config for details
from recap._config import (
    CaptureConfig,
    ConfigParseError,
    FieldConfig,
    parse_capture_config,
)

# Destinations
from recap._destinations import (
    Boolean,
    Byte,
    Char,
    Custom,
    Destination,
    Float,
    Integer,
    Scan,
    Text,
    binary,
    c_radix,
    destination_for,
    hexadecimal,
    octal,
    scanf,
)

# Errors
from recap._errors import (
    CaptureError,
    ContractViolation,
    ConversionError,
    CustomSaveError,
    EmptyInputError,
    ExtraInputError,
    IntegerOverflowError,
    InvalidBooleanError,
    InvalidFloatError,
    InvalidIntegerError,
    NoMatchError,
    PatternError,
    PatternTooLongError,
    SaveFailedError,
    ScanError,
    UnconsumedInputError,
    WrongByteCountError,
)

# Registry: see recap._registry for details
from recap._registry import (
    MAX_FIELDS,
    MAX_PATTERN_LENGTH,
    InvalidConfigError,
    Registry,
    RegistryBuilder,
    RegistryError,
    TooManyFieldsError,
    UnknownTypeError,
    register_core_destinations,
)

# Protocols and kinds
from recap._types import (
    CompiledPattern,
    FloatType,
    IntType,
    MatchLike,
    Radix,
    Ref,
    Saver,
)

__all__ = [
    # Protocols and kinds
    "CompiledPattern",
    "MatchLike",
    "Saver",
    "IntType",
    "FloatType",
    "Radix",
    "Ref",
    # Destinations
    "Destination",
    "Text",
    "Boolean",
    "Integer",
    "Float",
    "Char",
    "Byte",
    "Scan",
    "Custom",
    "hexadecimal",
    "octal",
    "binary",
    "c_radix",
    "scanf",
    "destination_for",
    # Orchestrator
    "match_string",
    "compile_pattern",
    "capture",
    "Extractor",
    "Field",
    # Errors
    "ContractViolation",
    "PatternError",
    "PatternTooLongError",
    "CaptureError",
    "NoMatchError",
    "SaveFailedError",
    "ConversionError",
    "InvalidBooleanError",
    "InvalidIntegerError",
    "IntegerOverflowError",
    "InvalidFloatError",
    "EmptyInputError",
    "ExtraInputError",
    "WrongByteCountError",
    "ScanError",
    "UnconsumedInputError",
    "CustomSaveError",
    # Config types
    "FieldConfig",
    "CaptureConfig",
    "ConfigParseError",
    "parse_capture_config",
    # Registry
    "RegistryBuilder",
    "Registry",
    "register_core_destinations",
    "RegistryError",
    "UnknownTypeError",
    "InvalidConfigError",
    "TooManyFieldsError",
    "MAX_FIELDS",
    "MAX_PATTERN_LENGTH",
]
