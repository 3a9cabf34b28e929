"""
Predicate statements for keyed-commitment proofs.

Each statement type supplies only what differs between predicates:
    validate(today)      structural preconditions (InvalidArgumentError)
    canonical_value()    the predicate-specific part of the message
    check(today)         the semantic predicate (PredicateNotSatisfiedError)

The engine owns the shared canonicalize -> commit -> verify path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import ClassVar, Collection, Dict, Type

from .canonical import (
    DateLike,
    Numeric,
    format_date,
    format_decimal,
    to_date,
    to_decimal,
)
from .config import DEFAULT_REQUIRED_AGE
from .exceptions import (
    ConditionNotMetError,
    InsufficientAgeError,
    InsufficientBalanceError,
    InvalidArgumentError,
    PredicateNotSatisfiedError,
    ValueNotInSetError,
    ValueOutOfRangeError,
)
from .validators import (
    ensure_bounded_range,
    ensure_non_empty_collection,
    ensure_non_negative,
    ensure_not_empty,
    ensure_not_future,
)


class PredicateType(Enum):
    """Predicates a commitment proof can attest to"""

    AGE = "age"
    BALANCE = "balance"
    MEMBERSHIP = "membership"
    RANGE = "range"
    TIME_CONDITION = "time_condition"


def calculate_age(date_of_birth: date, today: date) -> int:
    """
    Full years between date_of_birth and today.

    One year is subtracted when this year's birthday has not been reached.
    A Feb 29 birthday is reached on Mar 1 in non-leap years.
    """
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


class Statement(ABC):
    """Base class for predicate statements."""

    predicate_type: ClassVar[PredicateType]

    @abstractmethod
    def validate(self, today: date) -> None:
        """Check structural preconditions."""

    @abstractmethod
    def canonical_value(self) -> str:
        """Canonical text of the committed attribute (salt not included)."""

    @abstractmethod
    def check(self, today: date) -> None:
        """Raise PredicateNotSatisfiedError if the predicate is false."""

    def holds(self, today: date) -> bool:
        try:
            self.check(today)
        except PredicateNotSatisfiedError:
            return False
        return True


@dataclass(frozen=True)
class AgeStatement(Statement):
    """Holder is at least required_age years old."""

    date_of_birth: DateLike
    required_age: int = DEFAULT_REQUIRED_AGE

    predicate_type: ClassVar[PredicateType] = PredicateType.AGE

    def validate(self, today: date) -> None:
        ensure_not_future(self.date_of_birth, today, "date_of_birth")
        if (
            isinstance(self.required_age, bool)
            or not isinstance(self.required_age, int)
            or self.required_age < 0
        ):
            raise InvalidArgumentError(
                "required_age", "must be a non-negative integer"
            )

    def canonical_value(self) -> str:
        return format_date(self.date_of_birth, "date_of_birth")

    def check(self, today: date) -> None:
        actual = calculate_age(to_date(self.date_of_birth, "date_of_birth"), today)
        if actual < self.required_age:
            raise InsufficientAgeError(self.required_age, actual)


@dataclass(frozen=True)
class BalanceStatement(Statement):
    """Balance covers the requested amount."""

    balance: Numeric
    requested: Numeric

    predicate_type: ClassVar[PredicateType] = PredicateType.BALANCE

    def validate(self, today: date) -> None:
        ensure_non_negative(self.balance, "balance")
        ensure_non_negative(self.requested, "requested")

    def canonical_value(self) -> str:
        return format_decimal(self.balance, "balance")

    def check(self, today: date) -> None:
        balance = to_decimal(self.balance, "balance")
        requested = to_decimal(self.requested, "requested")
        if balance < requested:
            raise InsufficientBalanceError(balance, requested)


@dataclass(frozen=True)
class MembershipStatement(Statement):
    """Value belongs to a set of valid values."""

    value: str
    valid_values: Collection[str]

    predicate_type: ClassVar[PredicateType] = PredicateType.MEMBERSHIP

    def __post_init__(self) -> None:
        # Materialize one-shot iterables so validate and check see the same set
        values = self.valid_values
        if isinstance(values, Iterable) and not isinstance(values, (str, bytes)):
            object.__setattr__(self, "valid_values", tuple(values))

    def validate(self, today: date) -> None:
        ensure_not_empty(self.value, "value")
        ensure_non_empty_collection(self.valid_values, "valid_values")

    def canonical_value(self) -> str:
        return self.value

    def check(self, today: date) -> None:
        members = ensure_non_empty_collection(self.valid_values, "valid_values")
        if self.value not in members:
            raise ValueNotInSetError(self.value)


@dataclass(frozen=True)
class RangeStatement(Statement):
    """Value lies in [min_value, max_value], bounds inclusive."""

    value: Numeric
    min_value: Numeric
    max_value: Numeric

    predicate_type: ClassVar[PredicateType] = PredicateType.RANGE

    def validate(self, today: date) -> None:
        to_decimal(self.value, "value")
        ensure_bounded_range(self.min_value, self.max_value)

    def canonical_value(self) -> str:
        return format_decimal(self.value, "value")

    def check(self, today: date) -> None:
        value = to_decimal(self.value, "value")
        low = to_decimal(self.min_value, "min_value")
        high = to_decimal(self.max_value, "max_value")
        if not low <= value <= high:
            raise ValueOutOfRangeError(value, low, high)


@dataclass(frozen=True)
class TimeConditionStatement(Statement):
    """Event happened on or after the condition date."""

    event_date: DateLike
    condition_date: DateLike

    predicate_type: ClassVar[PredicateType] = PredicateType.TIME_CONDITION

    def validate(self, today: date) -> None:
        to_date(self.event_date, "event_date")
        to_date(self.condition_date, "condition_date")

    def canonical_value(self) -> str:
        return format_date(self.event_date, "event_date")

    def check(self, today: date) -> None:
        event = to_date(self.event_date, "event_date")
        condition = to_date(self.condition_date, "condition_date")
        if event < condition:
            raise ConditionNotMetError(event, condition)


# Registry of all supported statements
STATEMENT_REGISTRY: Dict[PredicateType, Type[Statement]] = {
    PredicateType.AGE: AgeStatement,
    PredicateType.BALANCE: BalanceStatement,
    PredicateType.MEMBERSHIP: MembershipStatement,
    PredicateType.RANGE: RangeStatement,
    PredicateType.TIME_CONDITION: TimeConditionStatement,
}


def get_statement_class(predicate: str) -> Type[Statement]:
    """
    Look up the statement class for a predicate name.

    Raises:
        ValueError: If the predicate name is unknown
    """
    try:
        return STATEMENT_REGISTRY[PredicateType(predicate)]
    except ValueError:
        valid = ", ".join(p.value for p in PredicateType)
        raise ValueError(
            f"Unknown predicate: {predicate!r}. Valid options: {valid}"
        ) from None
