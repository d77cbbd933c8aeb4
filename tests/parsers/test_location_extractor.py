"""Tests for [LIEU] and [ADRESSE] extraction."""

import pytest

from event_tags.models import ParsedLocation, WarningKind
from event_tags.parsers.locations import LocationExtractor


class TestLocationExtractor:
    @pytest.fixture
    def extractor(self, settings, catalog) -> LocationExtractor:
        return LocationExtractor(settings, catalog)

    def test_venue_only(self, extractor: LocationExtractor) -> None:
        result = extractor.extract("[LIEU: Dojo   Municipal]")
        assert result.items == (ParsedLocation(name="Dojo Municipal"),)

    def test_address_only(self, extractor: LocationExtractor) -> None:
        result = extractor.extract("[ADRESSE: 12 rue de la Paix, 75002 Paris]")
        assert result.items == (
            ParsedLocation(street="12 rue de la Paix", postal_code="75002", city="Paris"),
        )

    def test_address_without_postal_code(self, extractor: LocationExtractor) -> None:
        result = extractor.extract("[ADDRESS: Salle des fêtes]")
        assert result.items == (ParsedLocation(street="Salle des fêtes"),)

    def test_venue_and_address_merge(self, extractor: LocationExtractor) -> None:
        result = extractor.extract("[LIEU: Gymnase] [ADRESSE: 1 place X, 69001 Lyon]")
        assert result.items == (
            ParsedLocation(name="Gymnase", street="1 place X", postal_code="69001", city="Lyon"),
        )
        assert len(result.spans) == 2

    def test_address_then_venue_merge(self, extractor: LocationExtractor) -> None:
        result = extractor.extract("[ADRESSE: 1 rue X, 75001 Paris]\n[SALLE: Dojo]")
        assert len(result.items) == 1
        assert result.items[0].name == "Dojo"
        assert result.items[0].city == "Paris"

    def test_two_venues(self, extractor: LocationExtractor) -> None:
        result = extractor.extract("[LIEU: Dojo A] [LIEU: Dojo B]")
        assert [loc.name for loc in result.items] == ["Dojo A", "Dojo B"]

    def test_empty_tag(self, extractor: LocationExtractor) -> None:
        result = extractor.extract("[LIEU:   ]")
        assert result.items == ()
        assert result.warnings[0].kind is WarningKind.UNPARSABLE_FIELD
        assert len(result.spans) == 1
