"""
End-to-end proof workflow: issue a proof, hand it over as JSON or CBOR,
and verify it on the other side once the attribute is revealed.

The holder and the verifier each build their own engine from the same
externally provisioned key.
"""
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from zkp_commitment import (
    InsufficientBalanceError,
    LocalProofChecker,
    ProofBundle,
    generate_secret_key,
    get_proof_engine,
    set_required_age,
)

TODAY = date(2025, 6, 15)


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    set_required_age(None)
    monkeypatch.delenv("ZKP_REQUIRED_AGE", raising=False)
    yield
    set_required_age(None)


@pytest.fixture
def shared_key(monkeypatch: pytest.MonkeyPatch) -> str:
    key = generate_secret_key()
    monkeypatch.setenv("ZKP_HMAC_KEY", key)
    return key


def _engine():
    return get_proof_engine(clock=lambda: TODAY)


def test_age_proof_over_json(shared_key):
    holder = _engine()
    payload = holder.prove_age(date(1990, 4, 2)).to_json()

    verifier = _engine()
    bundle = ProofBundle.from_json(payload)
    assert bundle.predicate == "age"
    assert verifier.verify_age(bundle.proof, bundle.salt, "1990-04-02")


def test_balance_proof_over_cbor(shared_key):
    holder = _engine()
    wire = holder.prove_balance("2500.00", 1000).serialize()

    verifier = _engine()
    bundle = ProofBundle.deserialize(wire)
    assert verifier.verify_balance(bundle.proof, bundle.salt, 2500, 1000)
    assert not verifier.verify_balance(bundle.proof, bundle.salt, 900, 1000)


def test_holder_cannot_prove_false_balance(shared_key):
    with pytest.raises(InsufficientBalanceError):
        _engine().prove_balance(100, 1000)


def test_required_age_policy_from_environment(shared_key, monkeypatch):
    monkeypatch.setenv("ZKP_REQUIRED_AGE", "21")
    engine = _engine()
    born = date(2005, 1, 1)  # 20 on TODAY

    assert not _engine().verify_age(
        *engine.prove_age(born, required_age=18), born
    )


def test_remote_style_checker_agrees_with_engine(shared_key):
    engine = _engine()
    checker = LocalProofChecker(_engine())

    cases = [
        (engine.prove_age(date(2000, 2, 29)), "2000-02-29"),
        (engine.prove_balance(0.1, 0), "0.1"),
        (engine.prove_membership("tier-gold", {"tier-gold"}), "tier-gold"),
        (engine.prove_range(-7.50, -10, 0), "-7.5"),
        (engine.prove_time_condition(date(2024, 12, 1), date(2024, 1, 1)), "2024-12-01"),
    ]
    for bundle, data in cases:
        assert checker.verify_bundle(bundle, data)

    bundles = [bundle for bundle, _ in cases]
    assert engine.verify_batch(
        [b.proof for b in bundles], [d for _, d in cases], [b.salt for b in bundles]
    )


def test_different_keys_are_isolated(shared_key, monkeypatch):
    proof, salt = _engine().prove_membership("eu", ["eu", "us"])

    monkeypatch.setenv("ZKP_HMAC_KEY", generate_secret_key())
    assert not _engine().verify_membership(proof, salt, "eu", ["eu", "us"])


def test_concurrent_prove_and_verify(shared_key):
    engine = _engine()

    def round_trip(amount):
        proof, salt = engine.prove_balance(amount, amount // 2)
        return engine.verify_balance(proof, salt, amount, amount // 2)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(round_trip, range(1, 201)))

    assert all(results)
