"""
Unit tests for the proof engine factory.
"""

from __future__ import annotations

from datetime import date

import pytest

from zkp_commitment import factory
from zkp_commitment.engine import ProofEngine
from zkp_commitment.exceptions import ConfigurationError, KeyFormatError
from zkp_commitment.settings import set_required_age

KEY_B64 = "V0V3Mv4D1USxZYwWL4eG93m0JKdO9KbXQn0mhg+EXHc="


@pytest.fixture(autouse=True)
def reset_factory_state(monkeypatch: pytest.MonkeyPatch) -> None:
    set_required_age(None)
    monkeypatch.delenv("ZKP_HMAC_KEY", raising=False)
    monkeypatch.delenv("ZKP_REQUIRED_AGE", raising=False)
    yield
    set_required_age(None)


def test_explicit_key() -> None:
    engine = factory.get_proof_engine(key=KEY_B64)
    assert isinstance(engine, ProofEngine)


def test_env_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZKP_HMAC_KEY", KEY_B64)
    engine = factory.get_proof_engine()
    proof, salt = engine.prove_balance(10, 5)

    # Same key from a different source verifies
    assert factory.get_proof_engine(key=KEY_B64).verify_balance(proof, salt, 10, 5)


def test_missing_key_raises() -> None:
    with pytest.raises(ConfigurationError, match="ZKP_HMAC_KEY"):
        factory.get_proof_engine()


def test_malformed_env_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZKP_HMAC_KEY", "short")
    with pytest.raises(KeyFormatError):
        factory.get_proof_engine()


def test_required_age_and_clock_forwarded() -> None:
    engine = factory.get_proof_engine(
        key=KEY_B64, required_age=21, clock=lambda: date(2025, 6, 15)
    )
    assert engine.required_age == 21
    assert engine.today() == date(2025, 6, 15)


def test_engines_do_not_share_providers() -> None:
    first = factory.get_proof_engine(key=KEY_B64)
    second = factory.get_proof_engine(key=KEY_B64)
    first.provider.close()
    assert not second.provider.closed
