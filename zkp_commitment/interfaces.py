"""
Interfaces for proof checkers.

A checker answers the question a remote verifier contract answers: does
this proof commit to this canonical value under this salt? Network-backed
implementations live outside this package.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

from .exceptions import ProofVerificationError
from .types import ProofBundle


class ProofChecker(ABC):
    """Abstract base class for proof checkers."""

    @abstractmethod
    def verify_proof(self, proof: str, salt: str, value: str) -> bool:
        """
        Verify a commitment over an already-canonical value.

        Must return False rather than raise for malformed input.
        """

    def verify_bundle(self, bundle: ProofBundle, value: str) -> bool:
        return self.verify_proof(bundle.proof, bundle.salt, value)

    def require_bundle(self, bundle: ProofBundle, value: str) -> None:
        """
        Like verify_bundle, for callers that treat a failed check as an error.

        Raises:
            ProofVerificationError: If the bundle does not verify
        """
        if not self.verify_bundle(bundle, value):
            predicate = bundle.predicate or "unknown"
            raise ProofVerificationError(
                f"{predicate} proof does not commit to the revealed value"
            )

    @abstractmethod
    def get_checker_info(self) -> Dict[str, Any]:
        """Return checker metadata (name, algorithm)."""
