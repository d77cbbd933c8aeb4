"""Shared fixtures."""

import os
from typing import Any, Dict

import pytest

from event_tags.config.loader import TagCatalog, default_catalog
from event_tags.config.settings import ParserSettings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep EVENT_TAGS_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("EVENT_TAGS_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> ParserSettings:
    return ParserSettings()


@pytest.fixture
def catalog() -> TagCatalog:
    return default_catalog()


@pytest.fixture
def sample_feed_event() -> Dict[str, Any]:
    """A feed event as delivered by the platform, with tags in title and body."""
    return {
        "id": "123456789",
        "name": "[STAGE] Stage d'été [CUBLIZE]",
        "description": (
            "Venez nombreux !\n"
            "[SESSION: 2025-06-01 18:00-20:00 | 2025-06-02 09:00-11:00]\n"
            "[TARIF: Adulte: 25€, Enfant: 15€]\n"
            "[CAPACITE: 40]"
        ),
        "start_time": "2025-06-01T18:00:00+0200",
        "end_time": "2025-06-02T11:00:00+0200",
        "place": {
            "name": "Dojo",
            "location": {"street": "Rue du Stade", "city": "Cublize", "zip": "69550"},
        },
        "cover": {"source": "https://example.com/cover.jpg"},
    }
