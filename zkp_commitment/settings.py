"""
Runtime settings for the proof engine.

Values resolve in precedence order: explicit argument, in-memory override,
environment variable, built-in default.
"""

from __future__ import annotations

import os
from typing import Final

from .config import DEFAULT_REQUIRED_AGE, HMAC_KEY_ENV_VAR, REQUIRED_AGE_ENV_VAR

_ENV_VAR_NAME: Final[str] = REQUIRED_AGE_ENV_VAR

_required_age_override: int | None = None


def _normalize_required_age(value: int | str | None) -> int | None:
    if value is None:
        return None

    if isinstance(value, str):
        if value == "":
            return None
        if not value.isdecimal():
            raise ValueError(
                f"Invalid required age: {value!r}. Expected a non-negative integer"
            )
        return int(value)

    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(
            f"Invalid required age: {value!r}. Expected a non-negative integer"
        )

    return value


def get_required_age(prefer: int | str | None = None) -> int:
    """
    Resolve the minimum age for age proofs.

    Args:
        prefer: Optional explicit age.

    Returns:
        Required age in full years.

    Raises:
        ValueError: If a provided value is invalid.
    """
    preferred = _normalize_required_age(prefer)
    if preferred is not None:
        return preferred

    if _required_age_override is not None:
        return _required_age_override

    env_age = _normalize_required_age(os.getenv(_ENV_VAR_NAME))
    if env_age is not None:
        return env_age

    return DEFAULT_REQUIRED_AGE


def set_required_age(value: int | str | None) -> None:
    """
    Set in-memory required age override (testing only).

    Args:
        value: Age to force, or None to clear the override.

    Raises:
        ValueError: If the value is invalid.
    """
    global _required_age_override
    _required_age_override = _normalize_required_age(value)


def get_hmac_key(prefer: str | None = None) -> str | None:
    """
    Resolve the Base64 HMAC key: explicit value first, then environment.

    The key itself is validated by SecretKey; this only locates it.
    """
    if prefer:
        return prefer
    return os.getenv(HMAC_KEY_ENV_VAR) or None
