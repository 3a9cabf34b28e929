"""
Proof bundle returned by prove operations.

A bundle is the opaque (proof, salt) pair plus the predicate name. It
unpacks like a tuple:

    >>> proof, salt = engine.prove_balance(1000, 500)

Serialization:
- JSON via to_dict()/to_json(), {"proof": ..., "salt": ...}
- CBOR via serialize()/deserialize(), with a version field
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

try:
    import cbor2
except ImportError:
    raise ImportError(
        "cbor2 is required for proof serialization. "
        "Install with: pip install cbor2"
    )

from .config import BUNDLE_VERSION
from .exceptions import MalformedInputError
from .statements import get_statement_class


@dataclass(frozen=True)
class ProofBundle:
    """
    Commitment proof and the salt it was built with.

    Attributes:
        proof: Base64 HMAC-SHA256 over the canonical message
        salt: Base64 salt appended to the canonical value
        predicate: Predicate name (PredicateType value), if known
    """

    proof: str
    salt: str
    predicate: Optional[str] = None

    def __iter__(self) -> Iterator[str]:
        yield self.proof
        yield self.salt

    # ========================================================================
    # JSON
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"proof": self.proof, "salt": self.salt}
        if self.predicate is not None:
            data["predicate"] = self.predicate
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProofBundle":
        """
        Build a bundle from a decoded mapping.

        Raises:
            MalformedInputError: If fields are missing, not strings, or the
                predicate is unknown
        """
        if not isinstance(data, dict):
            raise MalformedInputError("bundle", data, "expected a mapping")

        for name in ("proof", "salt"):
            if not isinstance(data.get(name), str) or not data[name]:
                raise MalformedInputError(
                    name, data.get(name), "missing or not a string"
                )

        predicate = data.get("predicate")
        if predicate is not None:
            try:
                get_statement_class(predicate)
            except ValueError as e:
                raise MalformedInputError("predicate", predicate, str(e)) from e

        return cls(proof=data["proof"], salt=data["salt"], predicate=predicate)

    @classmethod
    def from_json(cls, text: str) -> "ProofBundle":
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise MalformedInputError("bundle", text, f"invalid JSON: {e}") from e
        return cls.from_dict(data)

    # ========================================================================
    # CBOR
    # ========================================================================

    def serialize(self) -> bytes:
        """Serialize bundle to CBOR bytes."""
        data = {
            "v": BUNDLE_VERSION,
            "p": self.proof,
            "s": self.salt,
            "t": self.predicate,
        }
        return cbor2.dumps(data)

    @classmethod
    def deserialize(cls, data: bytes) -> "ProofBundle":
        """
        Deserialize bundle from CBOR bytes.

        Raises:
            MalformedInputError: If data is not CBOR, the version is
                unsupported, or required fields are missing
        """
        try:
            obj = cbor2.loads(data)
        except Exception as e:
            raise MalformedInputError("bundle", data, f"invalid CBOR: {e}") from e

        if not isinstance(obj, dict):
            raise MalformedInputError("bundle", obj, "missing required fields")

        version = obj.get("v")
        if version != BUNDLE_VERSION:
            raise MalformedInputError(
                "v",
                version,
                f"unsupported bundle version (expected {BUNDLE_VERSION})",
            )

        return cls.from_dict(
            {"proof": obj.get("p"), "salt": obj.get("s"), "predicate": obj.get("t")}
        )
