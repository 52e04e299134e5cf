import pytest

from app.core.config import DEFAULT_SECRET_KEY, settings, validate_config

def test_test_settings_are_valid():
    validate_config()

def test_unsupported_algorithm_is_rejected(monkeypatch):
    monkeypatch.setattr(settings, "ALGORITHM", "RS256")

    with pytest.raises(ValueError, match="ALGORITHM"):
        validate_config()

def test_production_rejects_default_secret(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    monkeypatch.setattr(settings, "SECRET_KEY", DEFAULT_SECRET_KEY)

    with pytest.raises(ValueError, match="SECRET_KEY must be set"):
        validate_config()

def test_production_rejects_short_secret_and_debug(monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    monkeypatch.setattr(settings, "SECRET_KEY", "short")
    monkeypatch.setattr(settings, "DEBUG", True)

    with pytest.raises(ValueError) as exc_info:
        validate_config()

    assert "at least 32 characters" in str(exc_info.value)
    assert "DEBUG" in str(exc_info.value)
