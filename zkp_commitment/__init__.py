"""Public API for zkp_commitment.

Keyed-commitment (HMAC-SHA256) proofs for age, balance, set membership,
numeric range and time-condition predicates.

NOTE:
Despite the name these are not zero-knowledge proofs. The verifier needs
the revealed attribute to recompute the commitment; the attribute is only
hidden between proof issuance and disclosure.
"""
from __future__ import annotations

from importlib import import_module

from .engine import ProofEngine
from .exceptions import (
    ConditionNotMetError,
    ConfigurationError,
    ErrorKind,
    InsufficientAgeError,
    InsufficientBalanceError,
    InvalidArgumentError,
    KeyFormatError,
    MalformedInputError,
    PredicateNotSatisfiedError,
    ProofVerificationError,
    ValueNotInSetError,
    ValueOutOfRangeError,
    ZkpError,
)
from .provider import CommitmentProvider
from .security import SecretKey, constant_time_equals, generate_secret_key
from .settings import get_required_age, set_required_age
from .statements import (
    AgeStatement,
    BalanceStatement,
    MembershipStatement,
    PredicateType,
    RangeStatement,
    Statement,
    TimeConditionStatement,
)
from .types import ProofBundle

__version__ = "0.1.0"

__all__ = [
    "ProofEngine",
    "CommitmentProvider",
    "ProofBundle",
    "SecretKey",
    "constant_time_equals",
    "generate_secret_key",
    "get_required_age",
    "set_required_age",
    "get_proof_engine",
    "ProofChecker",
    "LocalProofChecker",
    "PredicateType",
    "Statement",
    "AgeStatement",
    "BalanceStatement",
    "MembershipStatement",
    "RangeStatement",
    "TimeConditionStatement",
    "ErrorKind",
    "ZkpError",
    "KeyFormatError",
    "ConfigurationError",
    "InvalidArgumentError",
    "MalformedInputError",
    "PredicateNotSatisfiedError",
    "InsufficientAgeError",
    "InsufficientBalanceError",
    "ValueOutOfRangeError",
    "ValueNotInSetError",
    "ConditionNotMetError",
    "ProofVerificationError",
]

_LAZY_EXPORTS = {
    "get_proof_engine": "factory",
    "ProofChecker": "interfaces",
    "LocalProofChecker": "checker",
}


def __getattr__(name: str):
    if name in _LAZY_EXPORTS:
        module = import_module(f"{__name__}.{_LAZY_EXPORTS[name]}")
        value = getattr(module, name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
