"""
Unit tests for canonical encoding of dates and decimals.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from zkp_commitment.canonical import format_date, format_decimal, to_date, to_decimal
from zkp_commitment.exceptions import InvalidArgumentError, MalformedInputError


class TestDates:
    def test_date(self):
        assert format_date(date(2000, 1, 1)) == "2000-01-01"

    def test_datetime_uses_date_part(self):
        value = datetime(2000, 1, 1, 23, 59, tzinfo=timezone.utc)
        assert format_date(value) == "2000-01-01"

    def test_text(self):
        assert format_date("1999-12-31") == "1999-12-31"
        assert to_date("2024-02-29") == date(2024, 2, 29)

    def test_small_year_zero_padded(self):
        assert format_date(date(999, 3, 4)) == "0999-03-04"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "2000-1-1",
            "2000/01/01",
            "20000101",
            "2023-02-29",
            "2000-13-01",
            " 2000-01-01",
            "2000-01-01\n",
        ],
    )
    def test_malformed_text(self, text):
        with pytest.raises(MalformedInputError):
            to_date(text)

    @pytest.mark.parametrize("value", [None, 20000101, 1.5, b"2000-01-01"])
    def test_wrong_type(self, value):
        with pytest.raises(MalformedInputError):
            to_date(value)

    def test_error_names_field(self):
        with pytest.raises(MalformedInputError) as exc_info:
            to_date("nope", "event_date")
        assert exc_info.value.field == "event_date"


class TestDecimals:
    @pytest.mark.parametrize(
        "value",
        [1000, 1000.0, "1000", "1000.00", Decimal("1000.000"), Decimal("1E+3"), "+1000"],
    )
    def test_equal_values_canonicalize_identically(self, value):
        assert format_decimal(value) == "1000"

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.1, "0.1"),
            (1000.5, "1000.5"),
            ("0.50", "0.5"),
            (".5", "0.5"),
            ("1.", "1"),
            (Decimal("-12.340"), "-12.34"),
            ("1e-3", "0.001"),
            (123456789012345678901234567890, "123456789012345678901234567890"),
        ],
    )
    def test_invariant_format(self, value, expected):
        assert format_decimal(value) == expected

    @pytest.mark.parametrize("value", [0, 0.0, -0.0, "-0", "0.000", Decimal("-0.0")])
    def test_zero_forms(self, value):
        assert format_decimal(value) == "0"

    @pytest.mark.parametrize(
        "text", ["-", ".", "", "+", "-.", "1,000", "1 000", "abc", "nan", "inf", "1e", "0x10"]
    )
    def test_malformed_text_rejected(self, text):
        with pytest.raises(MalformedInputError):
            to_decimal(text)

    @pytest.mark.parametrize("text", ["-", ".", ""])
    def test_malformed_text_never_zero(self, text):
        with pytest.raises(MalformedInputError):
            format_decimal(text)

    @pytest.mark.parametrize(
        "value", [float("nan"), float("inf"), Decimal("NaN"), Decimal("-Infinity")]
    )
    def test_non_finite_rejected(self, value):
        with pytest.raises(MalformedInputError):
            to_decimal(value)

    @pytest.mark.parametrize("value", [True, False, None, [1], b"1"])
    def test_wrong_type_rejected(self, value):
        with pytest.raises(MalformedInputError):
            to_decimal(value)

    def test_malformed_is_invalid_argument(self):
        with pytest.raises(InvalidArgumentError):
            to_decimal("-", "balance")
        with pytest.raises(ValueError):
            to_decimal(".", "balance")

    @pytest.mark.parametrize("text", ["100\n", "1.5\n", " 1", "1 "])
    def test_surrounding_whitespace_rejected(self, text):
        with pytest.raises(MalformedInputError):
            to_decimal(text)

    @pytest.mark.parametrize(
        "value",
        [
            "1e999999999999999999",
            "1e50000000",
            "1e401",
            "1e-401",
            "0e-500",
            Decimal("1E+1000"),
            10**401,
        ],
    )
    def test_unbounded_magnitude_rejected(self, value):
        with pytest.raises(MalformedInputError):
            format_decimal(value, "balance")

    @pytest.mark.parametrize("value", [1.7976931348623157e308, 5e-324, "1e400", "1e-400"])
    def test_float_extremes_within_limit(self, value):
        assert format_decimal(value)
