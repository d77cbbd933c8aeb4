"""Runtime settings for the tag parser.

Values come from the environment (optionally seeded from a .env file):

- EVENT_TAGS_HOME_CURRENCY: currency assumed when a price has no symbol
- EVENT_TAGS_TIMEZONE: site timezone used for native feed times
- EVENT_TAGS_MAX_INPUT_LENGTH: characters of a description that are scanned
- EVENT_TAGS_FIELD_BUDGET_MS: time allowed to a single field extractor
- EVENT_TAGS_UNTITLED_LABEL: title used when an event has none
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

try:
    from dotenv import load_dotenv

    load_dotenv(override=False)
except ImportError:
    # dotenv is optional, fall back to os.environ
    pass

from ..models.tags import SUPPORTED_CURRENCIES
from ..utils.timezone_utils import DEFAULT_SITE_TIMEZONE
from .loader import ConfigValidationError

logger = logging.getLogger(__name__)

DEFAULT_HOME_CURRENCY = "EUR"
DEFAULT_MAX_INPUT_LENGTH = 20000
DEFAULT_FIELD_BUDGET_MS = 250
DEFAULT_UNTITLED_LABEL = "Événement sans titre"


@dataclass(frozen=True)
class ParserSettings:
    home_currency: str = DEFAULT_HOME_CURRENCY
    timezone: str = DEFAULT_SITE_TIMEZONE
    max_input_length: int = DEFAULT_MAX_INPUT_LENGTH
    field_budget_ms: int = DEFAULT_FIELD_BUDGET_MS
    untitled_label: str = DEFAULT_UNTITLED_LABEL

    @property
    def field_budget_seconds(self) -> float:
        return self.field_budget_ms / 1000.0


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigValidationError(f"{name} must be an integer, got {raw!r}")


def get_settings() -> ParserSettings:
    """
    Build settings from the current environment.

    Returns:
        ParserSettings: validated settings

    Raises:
        ConfigValidationError: If a value is malformed
    """
    settings = ParserSettings(
        home_currency=os.getenv("EVENT_TAGS_HOME_CURRENCY", DEFAULT_HOME_CURRENCY)
        .strip()
        .upper(),
        timezone=os.getenv("EVENT_TAGS_TIMEZONE", DEFAULT_SITE_TIMEZONE).strip(),
        max_input_length=_int_from_env(
            "EVENT_TAGS_MAX_INPUT_LENGTH", DEFAULT_MAX_INPUT_LENGTH
        ),
        field_budget_ms=_int_from_env("EVENT_TAGS_FIELD_BUDGET_MS", DEFAULT_FIELD_BUDGET_MS),
        untitled_label=os.getenv("EVENT_TAGS_UNTITLED_LABEL", DEFAULT_UNTITLED_LABEL),
    )
    validate_configuration(settings)
    return settings


def validate_configuration(settings: Optional[ParserSettings] = None) -> None:
    """
    Validates settings for common issues.

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    settings = settings or ParserSettings()

    if len(settings.home_currency) != 3 or not settings.home_currency.isalpha():
        raise ConfigValidationError(
            f"Home currency must be a 3-letter ISO 4217 code, got {settings.home_currency!r}"
        )

    if settings.home_currency not in SUPPORTED_CURRENCIES:
        raise ConfigValidationError(
            f"Home currency must be one of {', '.join(sorted(SUPPORTED_CURRENCIES))}, "
            f"got {settings.home_currency!r}"
        )

    try:
        ZoneInfo(settings.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigValidationError(f"Unknown timezone: {settings.timezone!r}")

    if settings.max_input_length <= 0:
        raise ConfigValidationError(
            f"Max input length must be positive, got {settings.max_input_length}"
        )

    if settings.field_budget_ms <= 0:
        raise ConfigValidationError(
            f"Field time budget must be positive, got {settings.field_budget_ms}ms"
        )

    logger.debug("Configuration validation passed")


def get_configuration_summary(settings: Optional[ParserSettings] = None) -> dict:
    """
    Returns a summary of the current configuration for debugging.

    Returns:
        dict: Configuration summary
    """
    settings = settings or get_settings()
    return {
        "home_currency": settings.home_currency,
        "timezone": settings.timezone,
        "max_input_length": settings.max_input_length,
        "field_budget_ms": settings.field_budget_ms,
        "untitled_label": settings.untitled_label,
    }
