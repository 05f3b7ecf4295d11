"""Tests for fixed-width field rendering."""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from achbuilder.core.exceptions import FieldWarning, SchemaError, ValidationError
from achbuilder.core.types import FieldKind, Justify
from achbuilder.formatting.formatter import format_field, format_named
from achbuilder.formatting.schema import FieldSpec

LEFT = FieldSpec.text("name", 5)
RIGHT = FieldSpec.text("dest", 5, Justify.RIGHT)
NUMBER = FieldSpec.number("count", 6)
RATE = FieldSpec(
    name="rate", width=8, justify=Justify.RIGHT,
    kind=FieldKind.FIXED_POINT, precision=2, zero_fill=True,
)


class TestText:
    def test_left_justified_pads_right(self):
        assert format_field(LEFT, "ab") == "ab   "

    def test_right_justified_pads_left(self):
        assert format_field(RIGHT, "ab") == "   ab"

    @pytest.mark.parametrize("spec", [LEFT, RIGHT])
    def test_long_value_keeps_first_width_chars(self, spec):
        assert format_field(spec, "abcdefgh") == "abcde"

    def test_exact_width_unchanged(self):
        assert format_field(LEFT, "abcde") == "abcde"

    def test_non_string_coerced(self):
        assert format_field(LEFT, 42) == "42   "


class TestZeroFilledInteger:
    def test_pads_with_zeros_on_left(self):
        assert format_field(NUMBER, 25) == "000025"

    def test_numeric_string_accepted(self):
        assert format_named("routing_number", "010010101") == "010010101"

    def test_oversized_value_keeps_leading_digits(self):
        assert format_field(NUMBER, 12345678) == "123456"

    def test_whole_float_accepted(self):
        assert format_field(NUMBER, 25.0) == "000025"

    @pytest.mark.parametrize("value", ["12a", 2.5, Decimal("1.1"), True, object()])
    def test_non_integer_rejected(self, value):
        with pytest.raises(ValidationError) as info:
            format_field(NUMBER, value)
        assert info.value.field == "count"

    @pytest.mark.parametrize("value", [float("inf"), Decimal("Infinity"), float("-inf")])
    def test_infinity_rejected(self, value):
        with pytest.raises(ValidationError):
            format_field(NUMBER, value)


class TestFixedPoint:
    def test_renders_declared_precision(self):
        assert format_field(RATE, 3.5) == "00003.50"

    def test_decimal_input(self):
        assert format_field(RATE, Decimal("12.00")) == "00012.00"

    @pytest.mark.parametrize("value", [float("inf"), Decimal("Infinity"), float("nan")])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ValidationError, match="finite"):
            format_field(RATE, value)

    def test_non_number_rejected(self):
        with pytest.raises(ValidationError):
            format_field(RATE, "abc")


class TestMissingValue:
    def test_text_renders_blank_with_warning(self):
        with pytest.warns(FieldWarning, match="name"):
            assert format_field(LEFT, None) == "     "

    def test_number_renders_zeros_with_warning(self):
        with pytest.warns(FieldWarning):
            assert format_field(NUMBER, None) == "000000"

    def test_missing_value_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="achbuilder"), pytest.warns(FieldWarning):
            format_field(LEFT, None)
        assert "data for name is not defined" in caplog.text

    def test_empty_string_does_not_warn(self, recwarn):
        assert format_field(NUMBER, "") == "000000"
        assert not [w for w in recwarn if issubclass(w.category, FieldWarning)]


def test_undefined_field_name_is_fatal():
    with pytest.raises(SchemaError):
        format_named("no_such_field", "x")
