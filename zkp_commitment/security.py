"""
⚠️ DRAFT — requires crypto review before production use

Security utilities for keyed commitments.

Provides:
1. SecretKey - owned, non-copyable HMAC key buffer with scrubbing
2. RandomnessSource - fork-safe CSPRNG wrapper for salts
3. constant_time_equals - length-checked XOR comparator for proof text
"""

import base64
import binascii
import hashlib
import hmac
import os
import secrets
from typing import Optional, Union

from .config import HMAC_KEY_SIZE_BYTES
from .exceptions import KeyFormatError


# ============================================================================
# SECRET KEY
# ============================================================================


class SecretKey:
    """
    HMAC key material held in a private mutable buffer.

    The buffer is zeroed by wipe(). Copying and pickling are refused so the
    material only ever lives in one place, and repr() never shows it.

    Example:
        >>> key = SecretKey.from_base64("V0V3Mv4D1USxZYwWL4eG93m0JKdO9KbXQn0mhg+EXHc=")
        >>> digest = key.hmac_sha256(b"2000-01-01salt")
        >>> key.wipe()
    """

    __slots__ = ("_buffer", "_wiped")

    def __init__(self, material: Union[bytes, bytearray]):
        if not isinstance(material, (bytes, bytearray)):
            raise KeyFormatError(
                f"key material must be bytes, got {type(material).__name__}"
            )
        if len(material) != HMAC_KEY_SIZE_BYTES:
            raise KeyFormatError(
                f"HMAC secret key must be {HMAC_KEY_SIZE_BYTES} bytes "
                f"(256 bits), got {len(material)}"
            )
        self._buffer = bytearray(material)
        self._wiped = False

    @classmethod
    def from_base64(cls, text: str) -> "SecretKey":
        """
        Decode a Base64 key as delivered by an external secret store.

        Raises:
            KeyFormatError: If text is empty, not strict Base64, or does not
                decode to exactly 32 bytes
        """
        if not isinstance(text, str) or not text:
            raise KeyFormatError("HMAC secret key cannot be null or empty")
        try:
            material = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as e:
            raise KeyFormatError(
                "Invalid Base64 format for HMAC secret key"
            ) from e
        return cls(material)

    @property
    def wiped(self) -> bool:
        return self._wiped

    def hmac_sha256(self, message: bytes) -> bytes:
        """Compute HMAC-SHA256 (RFC 2104) of message under this key."""
        if self._wiped:
            raise KeyFormatError("key has been wiped")
        return hmac.new(self._buffer, message, hashlib.sha256).digest()

    def wipe(self) -> None:
        """Overwrite the key material with zeros."""
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        self._wiped = True

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        state = "wiped" if self._wiped else "redacted"
        return f"SecretKey(<{state}>)"

    def __copy__(self):
        raise TypeError("SecretKey cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("SecretKey cannot be copied")

    def __reduce__(self):
        raise TypeError("SecretKey cannot be serialized")


def generate_secret_key() -> str:
    """
    Generate a fresh Base64 key.

    For tests and local development only; production keys are provisioned
    by an external secret store.
    """
    return base64.b64encode(secrets.token_bytes(HMAC_KEY_SIZE_BYTES)).decode(
        "ascii"
    )


# ============================================================================
# RANDOMNESS SOURCE (Fork-Safe)
# ============================================================================


class RandomnessSource:
    """
    Cryptographically secure randomness with fork detection.

    Prevents randomness state reuse if the process forks.

    Example:
        >>> rng = RandomnessSource()
        >>> salt = rng.get_random_bytes(32)
    """

    def __init__(self):
        """Initialize randomness source with fork detection."""
        self._pid = os.getpid()

    def get_random_bytes(self, n: int) -> bytes:
        """
        Get n cryptographically secure random bytes.

        Args:
            n: Number of bytes to generate (must be > 0)

        Returns:
            n random bytes
        """
        if n <= 0:
            raise ValueError(f"n must be > 0, got {n}")
        if os.getpid() != self._pid:
            self.__init__()
        return secrets.token_bytes(n)


# ============================================================================
# CONSTANT-TIME OPERATIONS
# ============================================================================


def constant_time_equals(
    a: Optional[Union[str, bytes]], b: Optional[Union[str, bytes]]
) -> bool:
    """
    Compare two proofs without short-circuiting on content.

    Returns False straight away when lengths differ, which leaks the length
    but not the content. For equal lengths every pair is XORed and the
    differences ORed together, so timing does not depend on where the
    inputs first differ.

    Args:
        a: First value (str or bytes)
        b: Second value (str or bytes)

    Returns:
        True if a == b, False otherwise. Two None values compare equal.
    """
    if a is None or b is None:
        return a is None and b is None
    if isinstance(a, str) != isinstance(b, str):
        return False
    if len(a) != len(b):
        return False

    diff = 0
    if isinstance(a, str):
        for x, y in zip(a, b):
            diff |= ord(x) ^ ord(y)
    else:
        for x, y in zip(a, b):
            diff |= x ^ y
    return diff == 0
