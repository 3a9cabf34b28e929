"""
Precondition guards shared by the prove operations.

Each guard raises InvalidArgumentError naming the offending field and
returns the (coerced) value otherwise.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Collection, Optional

from .canonical import DateLike, Numeric, to_date, to_decimal
from .exceptions import InvalidArgumentError


def ensure_not_empty(value: Optional[str], field: str) -> str:
    if not isinstance(value, str) or value == "":
        raise InvalidArgumentError(field, "cannot be null or empty")
    return value


def ensure_non_negative(value: Numeric, field: str) -> Decimal:
    number = to_decimal(value, field)
    if number < 0:
        raise InvalidArgumentError(field, "cannot be negative")
    return number


def ensure_not_future(value: DateLike, today: date, field: str) -> date:
    day = to_date(value, field)
    if day > today:
        raise InvalidArgumentError(field, "cannot be in the future")
    return day


def ensure_bounded_range(
    min_value: Numeric, max_value: Numeric
) -> tuple[Decimal, Decimal]:
    """Parse both bounds and require min <= max."""
    low = to_decimal(min_value, "min_value")
    high = to_decimal(max_value, "max_value")
    if low > high:
        raise InvalidArgumentError(
            "min_value", f"({low}) must not exceed max_value ({high})"
        )
    return low, high


def ensure_non_empty_collection(
    values: Optional[Collection[str]], field: str
) -> frozenset[str]:
    """Require a non-empty collection of non-empty strings."""
    if values is None or isinstance(values, (str, bytes)):
        raise InvalidArgumentError(field, "must be a collection of strings")
    try:
        members = frozenset(values)
    except TypeError as e:
        raise InvalidArgumentError(field, "members must be strings") from e
    if not members:
        raise InvalidArgumentError(field, "cannot be null or empty")
    for member in members:
        if not isinstance(member, str) or member == "":
            raise InvalidArgumentError(field, "members must be non-empty strings")
    return members
