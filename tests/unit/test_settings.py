"""Unit tests for environment-driven settings."""

import pytest

from event_tags.config.loader import ConfigValidationError
from event_tags.config.settings import (
    DEFAULT_UNTITLED_LABEL,
    ParserSettings,
    get_configuration_summary,
    get_settings,
    validate_configuration,
)


class TestGetSettings:
    def test_defaults(self) -> None:
        settings = get_settings()
        assert settings == ParserSettings()
        assert settings.home_currency == "EUR"
        assert settings.timezone == "Europe/Paris"
        assert settings.untitled_label == DEFAULT_UNTITLED_LABEL
        assert settings.field_budget_seconds == 0.25

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVENT_TAGS_HOME_CURRENCY", " chf ")
        monkeypatch.setenv("EVENT_TAGS_TIMEZONE", "Europe/Zurich")
        monkeypatch.setenv("EVENT_TAGS_MAX_INPUT_LENGTH", "500")
        monkeypatch.setenv("EVENT_TAGS_FIELD_BUDGET_MS", "50")
        monkeypatch.setenv("EVENT_TAGS_UNTITLED_LABEL", "Sans titre")

        settings = get_settings()
        assert settings.home_currency == "CHF"
        assert settings.timezone == "Europe/Zurich"
        assert settings.max_input_length == 500
        assert settings.field_budget_ms == 50
        assert settings.untitled_label == "Sans titre"

    def test_blank_integer_uses_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVENT_TAGS_MAX_INPUT_LENGTH", "  ")
        assert get_settings().max_input_length == 20000

    def test_non_integer(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVENT_TAGS_FIELD_BUDGET_MS", "fast")
        with pytest.raises(ConfigValidationError, match="must be an integer"):
            get_settings()

    def test_bad_currency(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVENT_TAGS_HOME_CURRENCY", "euro")
        with pytest.raises(ConfigValidationError, match="ISO 4217"):
            get_settings()

    def test_currency_that_cannot_be_read_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVENT_TAGS_HOME_CURRENCY", "cad")
        with pytest.raises(ConfigValidationError, match="one of CHF, EUR, GBP, USD"):
            get_settings()


class TestValidateConfiguration:
    def test_default_settings_are_valid(self) -> None:
        validate_configuration()

    @pytest.mark.parametrize("currency", ["CAD", "JPY", "XYZ"])
    def test_unsupported_currency(self, currency: str) -> None:
        with pytest.raises(ConfigValidationError, match=f"got '{currency}'"):
            validate_configuration(ParserSettings(home_currency=currency))

    @pytest.mark.parametrize("currency", ["EUR", "USD", "GBP", "CHF"])
    def test_supported_currency(self, currency: str) -> None:
        validate_configuration(ParserSettings(home_currency=currency))

    def test_unknown_timezone(self) -> None:
        with pytest.raises(ConfigValidationError, match="Unknown timezone"):
            validate_configuration(ParserSettings(timezone="Mars/Olympus_Mons"))

    def test_non_positive_limits(self) -> None:
        with pytest.raises(ConfigValidationError, match="Max input length"):
            validate_configuration(ParserSettings(max_input_length=0))
        with pytest.raises(ConfigValidationError, match="time budget"):
            validate_configuration(ParserSettings(field_budget_ms=-1))

    def test_summary(self) -> None:
        summary = get_configuration_summary(ParserSettings(home_currency="USD"))
        assert summary["home_currency"] == "USD"
        assert set(summary) == {
            "home_currency",
            "timezone",
            "max_input_length",
            "field_budget_ms",
            "untitled_label",
        }
