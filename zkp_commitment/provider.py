"""
⚠️ DRAFT — requires crypto review before production use

HMAC-SHA256 commitment provider.

The provider owns the secret key and knows nothing about predicates. It
exposes three operations:
    generate_salt()           32 CSPRNG bytes, Base64
    compute_mac(message)      Base64(HMAC-SHA256(key, UTF-8(message)))
    constant_time_equals(a,b) length-checked XOR comparator
"""

from __future__ import annotations

import base64
import logging
from typing import Optional, Union

from .config import SALT_SIZE_BYTES, TEXT_ENCODING
from .exceptions import KeyFormatError
from .security import RandomnessSource, SecretKey, constant_time_equals

logger = logging.getLogger(__name__)


class CommitmentProvider:
    """
    Keyed commitment primitive.

    Safe to share across threads: the key is never mutated after
    construction (until close()) and salts come from the platform CSPRNG.

    Example:
        >>> with CommitmentProvider(generate_secret_key()) as provider:
        ...     salt = provider.generate_salt()
        ...     proof = provider.compute_mac("2000-01-01" + salt)
    """

    def __init__(self, key: Union[str, bytes, bytearray, SecretKey]):
        """
        Args:
            key: Base64 text, raw 32 bytes, or a SecretKey. Raw bytes are
                copied into a new SecretKey; a SecretKey is taken over.

        Raises:
            KeyFormatError: If the key is empty, not Base64, or not 32 bytes
        """
        if isinstance(key, SecretKey):
            if key.wiped:
                raise KeyFormatError("key has been wiped")
            self._key = key
        elif isinstance(key, str):
            self._key = SecretKey.from_base64(key)
        elif isinstance(key, (bytes, bytearray)):
            self._key = SecretKey(key)
        else:
            raise KeyFormatError(
                f"unsupported key type: {type(key).__name__}"
            )
        self._rng = RandomnessSource()
        logger.debug("CommitmentProvider initialized")

    def generate_salt(self) -> str:
        """Fresh 32-byte salt, Base64 encoded."""
        return base64.b64encode(self._rng.get_random_bytes(SALT_SIZE_BYTES)).decode(
            "ascii"
        )

    def compute_mac(self, message: str) -> str:
        """
        HMAC-SHA256 over the UTF-8 encoding of message.

        Returns:
            Base64 of the 32-byte MAC

        Raises:
            KeyFormatError: If the provider has been closed
        """
        digest = self._key.hmac_sha256(message.encode(TEXT_ENCODING))
        return base64.b64encode(digest).decode("ascii")

    @staticmethod
    def constant_time_equals(a: Optional[str], b: Optional[str]) -> bool:
        return constant_time_equals(a, b)

    @property
    def closed(self) -> bool:
        return self._key.wiped

    def close(self) -> None:
        """Wipe the key. The provider is unusable afterwards."""
        if not self._key.wiped:
            self._key.wipe()
            logger.debug("CommitmentProvider key wiped")

    def __enter__(self) -> "CommitmentProvider":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"CommitmentProvider(key={self._key!r})"
