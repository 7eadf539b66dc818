"""
Unit tests for configuration: pydantic-settings loading and validation.

Environment variables are set with monkeypatch; the .env file is disabled
with _env_file=None so a developer's local file cannot leak into results.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from keypair_spec.config import AppSettings, RequestDefaults


class TestRequestDefaults:
    """Verify RequestDefaults defaults and constraints."""

    def test_defaults(self) -> None:
        defaults = RequestDefaults()
        assert defaults.validity_days == 365
        assert defaults.encryption_required is False
        assert defaults.random_serial is True

    @pytest.mark.parametrize("days", [0, -30])
    def test_non_positive_validity_rejected(self, days: int) -> None:
        with pytest.raises(ValidationError):
            RequestDefaults(validity_days=days)


class TestAppSettings:
    """
    GIVEN environment variables
    WHEN AppSettings is loaded
    THEN nested values map through the "__" delimiter.
    """

    def test_loads_without_any_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        settings = AppSettings(_env_file=None)  # type: ignore[call-arg]
        assert settings.log_level == "INFO"
        assert settings.defaults == RequestDefaults()

    def test_nested_environment_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULTS__VALIDITY_DAYS", "30")
        monkeypatch.setenv("DEFAULTS__ENCRYPTION_REQUIRED", "true")
        monkeypatch.setenv("DEFAULTS__RANDOM_SERIAL", "false")

        settings = AppSettings(_env_file=None)  # type: ignore[call-arg]

        assert settings.defaults.validity_days == 30
        assert settings.defaults.encryption_required is True
        assert settings.defaults.random_serial is False

    def test_invalid_validity_in_environment_rejected(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DEFAULTS__VALIDITY_DAYS", "0")
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None)  # type: ignore[call-arg]

    def test_log_level_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", " debug ")
        settings = AppSettings(_env_file=None)  # type: ignore[call-arg]
        assert settings.log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "VERBOSE")
        with pytest.raises(ValidationError, match="log_level"):
            AppSettings(_env_file=None)  # type: ignore[call-arg]
