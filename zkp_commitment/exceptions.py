"""
Custom exceptions for keyed-commitment proofs.

Errors fall into four kinds:
- CONSTRUCTION: bad key or configuration, fatal and never retried
- VALIDATION: malformed or out-of-domain input to a prove call
- PREDICATE: the attribute does not satisfy the predicate
- VERIFICATION: only for callers that want to raise on a failed check;
  verify operations themselves always return a bool
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Coarse classification carried by every ZkpError."""

    CONSTRUCTION = "construction"
    VALIDATION = "validation"
    PREDICATE = "predicate"
    VERIFICATION = "verification"


class ZkpError(Exception):
    """Base exception for commitment proof errors."""

    kind: ErrorKind = ErrorKind.VALIDATION

    def to_dict(self) -> Dict[str, Any]:
        """Structured payload for callers that report errors."""
        data: Dict[str, Any] = {
            "kind": self.kind.value,
            "error": type(self).__name__,
            "message": str(self),
        }
        data.update(self._payload())
        return data

    def _payload(self) -> Dict[str, Any]:
        return {}


# ============================================================================
# CONSTRUCTION
# ============================================================================


class KeyFormatError(ZkpError):
    """Secret key is not valid Base64 or not exactly 32 bytes."""

    kind = ErrorKind.CONSTRUCTION


class ConfigurationError(ZkpError):
    """Configuration error."""

    kind = ErrorKind.CONSTRUCTION


# ============================================================================
# VALIDATION
# ============================================================================


class InvalidArgumentError(ZkpError, ValueError):
    """A structural precondition on an input field was violated."""

    kind = ErrorKind.VALIDATION

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field

    def _payload(self) -> Dict[str, Any]:
        return {"field": self.field}


class MalformedInputError(InvalidArgumentError):
    """Input could not be parsed (numeric text, date text, encodings)."""

    def __init__(self, field: str, raw: Any, message: Optional[str] = None):
        super().__init__(field, message or f"cannot parse {raw!r}")
        self.raw = raw

    def _payload(self) -> Dict[str, Any]:
        return {"field": self.field, "raw": repr(self.raw)}


# ============================================================================
# PREDICATE NOT SATISFIED
# ============================================================================


class PredicateNotSatisfiedError(ZkpError):
    """The attribute does not satisfy the predicate; no proof is issued."""

    kind = ErrorKind.PREDICATE


class InsufficientAgeError(PredicateNotSatisfiedError):
    def __init__(self, required: int, actual: int):
        super().__init__(
            f"Insufficient age. Required: {required}, Actual: {actual}"
        )
        self.required = required
        self.actual = actual

    def _payload(self) -> Dict[str, Any]:
        return {"required": self.required, "actual": self.actual}


class InsufficientBalanceError(PredicateNotSatisfiedError):
    def __init__(self, balance: Any, requested: Any):
        super().__init__(
            f"Insufficient balance. Balance: {balance}, Requested: {requested}"
        )
        self.balance = balance
        self.requested = requested

    def _payload(self) -> Dict[str, Any]:
        return {"balance": str(self.balance), "requested": str(self.requested)}


class ValueOutOfRangeError(PredicateNotSatisfiedError):
    def __init__(self, value: Any, min_value: Any, max_value: Any):
        super().__init__(
            f"Value {value} is out of range [{min_value}, {max_value}]"
        )
        self.value = value
        self.min_value = min_value
        self.max_value = max_value

    def _payload(self) -> Dict[str, Any]:
        return {
            "value": str(self.value),
            "min": str(self.min_value),
            "max": str(self.max_value),
        }


class ValueNotInSetError(PredicateNotSatisfiedError):
    def __init__(self, value: str):
        super().__init__(
            f"Value {value!r} does not belong to the set of valid values"
        )
        self.value = value

    def _payload(self) -> Dict[str, Any]:
        return {"value": self.value}


class ConditionNotMetError(PredicateNotSatisfiedError):
    """Event date precedes the condition date."""

    def __init__(self, event_date: Any, condition_date: Any):
        super().__init__(
            f"Event date {event_date} is before condition date {condition_date}"
        )
        self.event_date = event_date
        self.condition_date = condition_date

    def _payload(self) -> Dict[str, Any]:
        return {
            "event_date": str(self.event_date),
            "condition_date": str(self.condition_date),
        }


# ============================================================================
# VERIFICATION
# ============================================================================


class ProofVerificationError(ZkpError):
    """Raised by callers that escalate a failed verification."""

    kind = ErrorKind.VERIFICATION
