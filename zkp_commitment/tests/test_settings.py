"""
Unit tests for runtime settings resolution.
"""

import pytest

from zkp_commitment import settings


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    settings.set_required_age(None)
    monkeypatch.delenv("ZKP_REQUIRED_AGE", raising=False)
    monkeypatch.delenv("ZKP_HMAC_KEY", raising=False)
    yield
    settings.set_required_age(None)


def test_default_required_age_is_18() -> None:
    assert settings.get_required_age() == 18


def test_env_var_controls_required_age(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZKP_REQUIRED_AGE", "21")
    assert settings.get_required_age() == 21


def test_prefer_overrides_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZKP_REQUIRED_AGE", "21")
    assert settings.get_required_age(prefer=16) == 16


def test_prefer_zero_is_respected() -> None:
    assert settings.get_required_age(prefer=0) == 0


def test_set_required_age_overrides_and_clears(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZKP_REQUIRED_AGE", "21")
    settings.set_required_age(25)
    assert settings.get_required_age() == 25
    settings.set_required_age(None)
    assert settings.get_required_age() == 21


def test_empty_env_var_treated_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZKP_REQUIRED_AGE", "")
    assert settings.get_required_age() == 18


@pytest.mark.parametrize("value", ["-1", "eighteen", "18.5", " 18"])
def test_invalid_env_raises_value_error(monkeypatch: pytest.MonkeyPatch, value) -> None:
    monkeypatch.setenv("ZKP_REQUIRED_AGE", value)
    with pytest.raises(ValueError, match="Invalid required age"):
        settings.get_required_age()


@pytest.mark.parametrize("value", [-1, True, 18.0])
def test_invalid_override_raises_value_error(value) -> None:
    with pytest.raises(ValueError, match="Invalid required age"):
        settings.set_required_age(value)


def test_hmac_key_prefers_explicit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZKP_HMAC_KEY", "from-env")
    assert settings.get_hmac_key("explicit") == "explicit"
    assert settings.get_hmac_key() == "from-env"


def test_hmac_key_missing() -> None:
    assert settings.get_hmac_key() is None
