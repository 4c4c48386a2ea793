"""Tests for literal parsers (recap._parse)."""

import math

import pytest

from recap import (
    FloatType,
    IntegerOverflowError,
    IntType,
    InvalidBooleanError,
    InvalidFloatError,
    InvalidIntegerError,
    Radix,
)
from recap._parse import detect_radix, parse_bool, parse_float, parse_integer


class TestDetectRadix:
    @pytest.mark.parametrize(
        ("digits", "expected"),
        [
            ("0x40", (Radix.HEX, "40")),
            ("0X40", (Radix.HEX, "40")),
            ("0b101", (Radix.BINARY, "101")),
            ("0o17", (Radix.OCTAL, "17")),
            ("0100", (Radix.OCTAL, "100")),
            ("100", (Radix.DECIMAL, "100")),
            ("0", (Radix.DECIMAL, "0")),
        ],
    )
    def test_prefixes(self, digits: str, expected: tuple[Radix, str]) -> None:
        assert detect_radix(digits) == expected


class TestParseInteger:
    def test_decimal_default(self) -> None:
        assert parse_integer("42") == 42

    def test_signs(self) -> None:
        assert parse_integer("-42") == -42
        assert parse_integer("+42") == 42

    def test_mixed_radix_literals_all_resolve_to_64(self) -> None:
        assert parse_integer("100", radix=Radix.OCTAL) == 64
        assert parse_integer("40", radix=Radix.HEX) == 64
        assert parse_integer("0100", radix=Radix.AUTO) == 64
        assert parse_integer("0x40", radix=Radix.AUTO) == 64

    def test_hex_accepts_both_cases(self) -> None:
        assert parse_integer("deadBEEF", IntType.INT64, Radix.HEX) == 0xDEADBEEF

    def test_auto_negative_hex(self) -> None:
        assert parse_integer("-0x10", radix=Radix.AUTO) == -16

    def test_auto_zero(self) -> None:
        assert parse_integer("0", radix=Radix.AUTO) == 0

    def test_fixed_radix_rejects_prefix(self) -> None:
        with pytest.raises(InvalidIntegerError, match="base-16"):
            parse_integer("0x40", radix=Radix.HEX)

    def test_auto_rejects_bad_octal_digit(self) -> None:
        with pytest.raises(InvalidIntegerError):
            parse_integer("09", radix=Radix.AUTO)

    def test_auto_rejects_bare_prefix(self) -> None:
        with pytest.raises(InvalidIntegerError):
            parse_integer("0x", radix=Radix.AUTO)

    @pytest.mark.parametrize("text", ["", "asdf", " 1", "1 ", "1_000", "١٢", "+", "1.0"])
    def test_rejects_non_numeric(self, text: str) -> None:
        with pytest.raises(InvalidIntegerError) as exc_info:
            parse_integer(text)
        assert exc_info.value.submatch == text

    def test_unsigned_rejects_sign(self) -> None:
        with pytest.raises(InvalidIntegerError):
            parse_integer("-1", IntType.UINT8)
        with pytest.raises(InvalidIntegerError):
            parse_integer("+1", IntType.UINT8)

    @pytest.mark.parametrize(
        ("int_type", "low", "high"),
        [
            (IntType.INT8, -128, 127),
            (IntType.UINT8, 0, 255),
            (IntType.INT16, -32768, 32767),
            (IntType.UINT32, 0, 4294967295),
            (IntType.INT64, -(2**63), 2**63 - 1),
            (IntType.UINT64, 0, 2**64 - 1),
        ],
    )
    def test_width_bounds_accepted(self, int_type: IntType, low: int, high: int) -> None:
        assert parse_integer(str(high), int_type) == high
        if int_type.signed:
            assert parse_integer(str(low), int_type) == low

    def test_overflow_carries_value_and_type(self) -> None:
        with pytest.raises(IntegerOverflowError) as exc_info:
            parse_integer("256", IntType.UINT8)
        err = exc_info.value
        assert err.value == 256
        assert err.int_type is IntType.UINT8
        assert "out of range for uint8 [0, 255]" in str(err)

    def test_negative_overflow(self) -> None:
        with pytest.raises(IntegerOverflowError):
            parse_integer("-129", IntType.INT8)

    def test_hex_overflow(self) -> None:
        with pytest.raises(IntegerOverflowError):
            parse_integer("100", IntType.UINT8, Radix.HEX)

    def test_overlong_literal_is_overflow(self) -> None:
        with pytest.raises(IntegerOverflowError) as exc_info:
            parse_integer("9" * 5000)
        assert exc_info.value.value is None
        assert exc_info.value.int_type is IntType.INT

    def test_overlong_negative_literal_is_overflow(self) -> None:
        with pytest.raises(IntegerOverflowError):
            parse_integer("-" + "1" * 5000, IntType.INT8)

    def test_leading_zeros_are_not_significant(self) -> None:
        assert parse_integer("0" * 5000 + "7") == 7
        assert parse_integer("0" * 5000 + "7", radix=Radix.AUTO) == 7
        assert parse_integer("0" * 5000, IntType.UINT8) == 0

    def test_widest_literal_below_digit_bound(self) -> None:
        assert parse_integer("18446744073709551615", IntType.UINT64) == 2**64 - 1
        with pytest.raises(IntegerOverflowError) as exc_info:
            parse_integer("18446744073709551616", IntType.UINT64)
        assert exc_info.value.value == 2**64

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1_000", 1000),
            ("-1_000", -1000),
            ("0x_40", 64),
            ("0xde_ad", 0xDEAD),
            ("0b1_0", 2),
            ("0_17", 15),
            ("0o_17", 15),
        ],
    )
    def test_auto_accepts_digit_separators(self, text: str, expected: int) -> None:
        assert parse_integer(text, radix=Radix.AUTO) == expected

    @pytest.mark.parametrize("text", ["_1", "1_", "1__0", "0x__40", "0x_", "0_", "+_1"])
    def test_auto_rejects_misplaced_separators(self, text: str) -> None:
        with pytest.raises(InvalidIntegerError):
            parse_integer(text, radix=Radix.AUTO)

    def test_fixed_radix_rejects_separators(self) -> None:
        with pytest.raises(InvalidIntegerError):
            parse_integer("de_ad", radix=Radix.HEX)


class TestParseBool:
    @pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
    def test_truthy(self, text: str) -> None:
        assert parse_bool(text) is True

    @pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
    def test_falsy(self, text: str) -> None:
        assert parse_bool(text) is False

    @pytest.mark.parametrize("text", ["", "yes", "no", "tRuE", "2", " true"])
    def test_rejects_other_spellings(self, text: str) -> None:
        with pytest.raises(InvalidBooleanError):
            parse_bool(text)


class TestParseFloat:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1.5", 1.5),
            ("-2", -2.0),
            ("+.5", 0.5),
            ("3.", 3.0),
            ("1e3", 1000.0),
            ("6.02E23", 6.02e23),
            ("-1.5e-3", -0.0015),
            ("0x1p-2", 0.25),
            ("-0X1.8P1", -3.0),
        ],
    )
    def test_literals(self, text: str, expected: float) -> None:
        assert parse_float(text) == expected

    def test_infinity_and_nan(self) -> None:
        assert parse_float("inf") == math.inf
        assert parse_float("-Infinity") == -math.inf
        assert math.isnan(parse_float("NaN"))

    @pytest.mark.parametrize("text", ["", "abc", "1.2.3", "e5", " 1.0", "1_0", "0x10"])
    def test_rejects_bad_syntax(self, text: str) -> None:
        with pytest.raises(InvalidFloatError, match="invalid syntax"):
            parse_float(text)

    def test_float64_overflow(self) -> None:
        with pytest.raises(InvalidFloatError, match="out of range"):
            parse_float("1e400")

    def test_float32_narrows(self) -> None:
        value = parse_float("0.1", FloatType.FLOAT32)
        assert value != 0.1
        assert value == pytest.approx(0.1, rel=1e-7)

    def test_float32_overflow(self) -> None:
        with pytest.raises(InvalidFloatError, match="out of range") as exc_info:
            parse_float("1e39", FloatType.FLOAT32)
        assert exc_info.value.float_type is FloatType.FLOAT32

    def test_float32_keeps_infinity_literal(self) -> None:
        assert parse_float("-inf", FloatType.FLOAT32) == -math.inf
