"""
Canonical encoding of predicate inputs.

Every value that enters a commitment goes through this module so that the
prover, the local verifier and any remote verifier contract build the exact
same message bytes:

- dates: YYYY-MM-DD
- decimals: culture-invariant, "." separator, no grouping, no exponent,
  trailing fractional zeros removed, negative zero written as "0"

Parsing is strict. Text such as "-", "." or "" is rejected with
MalformedInputError and never coerced to zero.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Union

from .config import DATE_FORMAT, MAX_DECIMAL_EXPONENT
from .exceptions import MalformedInputError

DateLike = Union[date, datetime, str]
Numeric = Union[int, float, Decimal, str]

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_DECIMAL_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d{1,6})?", re.ASCII)


# ============================================================================
# DATES
# ============================================================================


def to_date(value: DateLike, field: str = "date") -> date:
    """
    Coerce a date-like value to a calendar date.

    datetime values contribute only their date part; text must be exactly
    YYYY-MM-DD.

    Raises:
        MalformedInputError: If value is not a date or parsable date text
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if not _DATE_PATTERN.fullmatch(value):
            raise MalformedInputError(field, value, "expected YYYY-MM-DD")
        try:
            return datetime.strptime(value, DATE_FORMAT).date()
        except ValueError as e:
            raise MalformedInputError(field, value, str(e)) from e
    raise MalformedInputError(
        field, value, f"expected a date, got {type(value).__name__}"
    )


def format_date(value: DateLike, field: str = "date") -> str:
    """Canonical YYYY-MM-DD text (zero-padded for years below 1000)."""
    return to_date(value, field).isoformat()


# ============================================================================
# DECIMALS
# ============================================================================


def to_decimal(value: Numeric, field: str = "value") -> Decimal:
    """
    Coerce a numeric value to an exact finite Decimal.

    Floats go through their shortest round-trip repr, so 0.1 becomes
    Decimal("0.1") rather than its binary expansion.

    Values whose magnitude or fractional precision exceeds
    MAX_DECIMAL_EXPONENT digits are rejected, since the canonical form
    writes every digit out.

    Raises:
        MalformedInputError: For bools, NaN/Infinity, unparsable text,
            out-of-bounds magnitudes or unsupported types
    """
    number = _parse_decimal(value, field)
    exponent = number.as_tuple().exponent
    if (
        abs(number.adjusted()) > MAX_DECIMAL_EXPONENT
        or -exponent > MAX_DECIMAL_EXPONENT
    ):
        raise MalformedInputError(
            field, value, f"exceeds {MAX_DECIMAL_EXPONENT} digits of magnitude"
        )
    return number


def _parse_decimal(value: Numeric, field: str) -> Decimal:
    if isinstance(value, bool):
        raise MalformedInputError(field, value, "booleans are not numeric")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise MalformedInputError(field, value, "must be finite")
        return Decimal(repr(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise MalformedInputError(field, value, "must be finite")
        return value
    if isinstance(value, str):
        if not _DECIMAL_PATTERN.fullmatch(value):
            raise MalformedInputError(field, value)
        try:
            return Decimal(value)
        except InvalidOperation as e:
            raise MalformedInputError(field, value) from e
    raise MalformedInputError(
        field, value, f"expected a number, got {type(value).__name__}"
    )


def format_decimal(value: Numeric, field: str = "value") -> str:
    """
    Canonical invariant decimal text.

    Semantically equal inputs produce the same text:
        >>> format_decimal(1000.0) == format_decimal("1000.00") == "1000"
        True
    """
    number = to_decimal(value, field)
    if number == 0:
        return "0"

    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
