"""Tests for how bad input degrades: warnings instead of exceptions."""

import logging

import pytest

from event_tags.config.loader import FeedValidationError
from event_tags.models import ParsedTags, WarningKind
from event_tags.normalizer import TagAssembler


@pytest.fixture
def assembler(settings, catalog) -> TagAssembler:
    return TagAssembler(settings=settings, catalog=catalog)


class TestTotalParsing:
    """Parsing never raises on text input."""

    @pytest.mark.parametrize(
        "content",
        [
            "[[[[]]]]",
            "[",
            "]",
            "[]",
            "[:]",
            "[DATE:]",
            "[SESSION: |||]",
            "[TARIF: :::]",
            "[PRIX: 999999999999999999999999]",
            "[HORAIRE: 99h99-00h00]",
            "[CLUBS: , , ;]",
            "[ADRESSE: 00000]",
            "\n\n\n",
            "🎉 [STAGE] 🎉",
            "[STAGE\n]",
        ],
    )
    def test_odd_input_does_not_raise(self, assembler: TagAssembler, content: str) -> None:
        tags = assembler.parse_event_tags(content)
        assert isinstance(tags, ParsedTags)
        again = assembler.parse_event_tags(tags.cleaned_content)
        assert again.cleaned_content == tags.cleaned_content

    @pytest.mark.parametrize(
        "field", ["[TARIF: a{blank}b]", "[TARIF: Adulte{blank}: 25€]", "[ADRESSE: 1{blank}rue]"]
    )
    def test_long_blank_runs_stay_within_budget(
        self, assembler: TagAssembler, field: str
    ) -> None:
        content = "[STAGE] " + field.format(blank=" " * 19000) + " [PRIX: 10€]"
        assert len(content) < assembler.settings.max_input_length

        tags = assembler.parse_event_tags(content)
        kinds = [w.kind for w in tags.warnings]
        assert WarningKind.BUDGET_EXCEEDED not in kinds
        assert WarningKind.INPUT_TRUNCATED not in kinds
        assert tags.event_type is not None
        assert tags.found_tags[-1] == "[PRIX: 10€]"

    def test_huge_price_is_kept_exact(self, assembler: TagAssembler) -> None:
        tags = assembler.parse_event_tags("[PRIX: 123456789,99]")
        assert tags.prices[0].amount_cents == 12345678999


class TestWarningKinds:
    def test_malformed_tag_is_left_in_place(self, assembler: TagAssembler) -> None:
        tags = assembler.parse_event_tags("Texte [INCONNU] [STAGE]")
        assert tags.cleaned_content == "Texte [INCONNU]"
        assert [w.kind for w in tags.warnings] == [WarningKind.MALFORMED_TAG]
        assert tags.warnings[0].tag == "[INCONNU]"

    def test_unparsable_field_is_removed(self, assembler: TagAssembler) -> None:
        tags = assembler.parse_event_tags("Texte [PLACES: beaucoup] [PRIX: 5€]")
        assert tags.cleaned_content == "Texte"
        assert tags.max_capacity is None
        assert tags.prices[0].amount_cents == 500
        unparsable = [w for w in tags.warnings if w.kind is WarningKind.UNPARSABLE_FIELD]
        assert len(unparsable) == 1
        assert unparsable[0].field == "capacity"

    def test_one_bad_field_does_not_affect_others(self, assembler: TagAssembler) -> None:
        tags = assembler.parse_event_tags(
            "[SESSION: 2025-13-45 10h] [LIEU: Dojo] [CUBLIZE] [CAPACITE: 12]"
        )
        assert tags.sessions == ()
        assert tags.locations[0].name == "Dojo"
        assert tags.club_slugs == ("cublize",)
        assert tags.max_capacity == 12
        assert len(tags.warnings) == 1

    def test_warning_str_names_field(self, assembler: TagAssembler) -> None:
        tags = assembler.parse_event_tags("[PRIX: ?]")
        assert str(tags.warnings[0]).startswith("unparsable_field (prices):")


class TestLogging:
    def test_unparsable_field_logs_warning(
        self, assembler: TagAssembler, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            assembler.parse_event_tags("[PRIX: ?]")
        assert any("Invalid amount" in record.message for record in caplog.records)

    def test_malformed_tag_logs_at_debug_only(
        self, assembler: TagAssembler, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            assembler.parse_event_tags("[INCONNU]")
        assert caplog.records == []


class TestFeedValidation:
    def test_invalid_feed_event_raises(self, assembler: TagAssembler) -> None:
        with pytest.raises(FeedValidationError):
            assembler.extract_event_data({"name": "no id"})
