"""
In-process proof checker.

Recomputes the commitment the same way a remote verifier contract does, so
it doubles as the reference for byte-for-byte compatibility checks.
"""

from __future__ import annotations

from typing import Any, Dict

from .config import MAC_ALGORITHM, MIN_SALT_SIZE_BYTES
from .engine import ProofEngine
from .interfaces import ProofChecker


class LocalProofChecker(ProofChecker):
    """ProofChecker backed by a local ProofEngine."""

    _CHECKER_NAME = "local"

    def __init__(self, engine: ProofEngine) -> None:
        self._engine = engine

    def verify_proof(self, proof: str, salt: str, value: str) -> bool:
        return self._engine.verify_commitment(proof, salt, value)

    def get_checker_info(self) -> Dict[str, Any]:
        return {
            "name": self._CHECKER_NAME,
            "algorithm": MAC_ALGORITHM,
            "min_salt_bytes": MIN_SALT_SIZE_BYTES,
        }
