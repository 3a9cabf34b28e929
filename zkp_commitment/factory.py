"""
Factory for proof engines.

The secret key comes from an external secret store as Base64, either passed
in directly or exported through the ZKP_HMAC_KEY environment variable. This
factory never generates or persists production keys.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from .config import HMAC_KEY_ENV_VAR
from .engine import ProofEngine
from .exceptions import ConfigurationError
from .provider import CommitmentProvider
from .settings import get_hmac_key

logger = logging.getLogger(__name__)


def get_proof_engine(
    *,
    key: Optional[str] = None,
    required_age: Optional[int] = None,
    clock: Optional[Callable[[], date]] = None,
) -> ProofEngine:
    """
    Return a ProofEngine keyed from the resolved HMAC key.

    Args:
        key: Optional Base64 key; defaults to the environment.
        required_age: Optional default age threshold.
        clock: Optional "today" source (testing only).

    Returns:
        ProofEngine: New engine with its own CommitmentProvider.

    Raises:
        ConfigurationError: If no key is configured.
        KeyFormatError: If the key is malformed.
        ValueError: If required_age is invalid.
    """
    resolved_key = get_hmac_key(key)
    if resolved_key is None:
        raise ConfigurationError(
            f"No HMAC key configured. Pass key= or set {HMAC_KEY_ENV_VAR}"
        )

    if key is None:
        logger.debug("Using HMAC key from %s", HMAC_KEY_ENV_VAR)

    provider = CommitmentProvider(resolved_key)
    return ProofEngine(provider, required_age=required_age, clock=clock)
