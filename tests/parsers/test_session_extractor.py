"""Tests for session extraction from [SESSION], [DATE] and [HORAIRE] tags."""

from datetime import date, time
from typing import Optional

import pytest

from event_tags.models import ParsedSession, WarningKind
from event_tags.parsers.sessions import SessionExtractor


def _session(day: date, start: time, end: Optional[time] = None) -> ParsedSession:
    return ParsedSession(date=day, start_time=start, end_time=end)


class TestSessionExtractor:
    @pytest.fixture
    def extractor(self, settings, catalog) -> SessionExtractor:
        return SessionExtractor(settings, catalog)

    def test_multiple_entries_in_one_tag(self, extractor: SessionExtractor) -> None:
        result = extractor.extract(
            "[SESSION: 2025-06-01 18:00-20:00 | 2025-06-02 09:00-11:00]"
        )
        assert result.items == (
            _session(date(2025, 6, 1), time(18, 0), time(20, 0)),
            _session(date(2025, 6, 2), time(9, 0), time(11, 0)),
        )
        assert result.warnings == ()
        assert len(result.spans) == 1
        assert result.spans[0].field == "sessions"

    def test_pipe_separated_legacy_form(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[SESSION:2025-12-15|14:00-17:00]")
        assert result.items == (_session(date(2025, 12, 15), time(14, 0), time(17, 0)),)

    def test_french_date_and_hours(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[DATE: dimanche 1er juin 2025 18h-20h]")
        assert result.items == (_session(date(2025, 6, 1), time(18, 0), time(20, 0)),)

    @pytest.mark.parametrize(
        "value", ["samedi 01/06/2025 18h-20h", "Dimanche 2025-06-01 18:00-20:00"]
    )
    def test_weekday_before_numeric_date(self, extractor: SessionExtractor, value: str) -> None:
        result = extractor.extract(f"[DATE: {value}]")
        assert result.items == (_session(date(2025, 6, 1), time(18, 0), time(20, 0)),)
        assert result.warnings == ()

    def test_weekday_on_each_entry(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[SESSION: samedi 31/05/2025 10h | dimanche 01/06/2025 14h]")
        assert [s.date for s in result.items] == [date(2025, 5, 31), date(2025, 6, 1)]
        assert result.warnings == ()

    def test_twelve_hour_clock(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[SESSION: 2025-06-01 6pm-8pm]")
        assert result.items == (_session(date(2025, 6, 1), time(18, 0), time(20, 0)),)

    def test_start_time_only(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[SESSION: 01/06/2025 10h30]")
        assert result.items == (_session(date(2025, 6, 1), time(10, 30)),)

    def test_sessions_are_sorted(self, extractor: SessionExtractor) -> None:
        result = extractor.extract(
            "[SESSION: 2025-06-02 09:00-11:00 | 2025-06-01 18:00-20:00]"
        )
        assert [s.date for s in result.items] == [date(2025, 6, 1), date(2025, 6, 2)]

    def test_duplicate_start_keeps_first(self, extractor: SessionExtractor) -> None:
        result = extractor.extract(
            "[SESSION: 2025-06-01 18:00-20:00]\n[DATE: 2025-06-01 18:00-21:00]"
        )
        assert result.items == (_session(date(2025, 6, 1), time(18, 0), time(20, 0)),)
        assert len(result.spans) == 2


class TestDateAndTimePairing:
    @pytest.fixture
    def extractor(self, settings, catalog) -> SessionExtractor:
        return SessionExtractor(settings, catalog)

    def test_one_date_one_time(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[DATE:15/12/2025] [HORAIRE:14h00-17h00]")
        assert result.items == (_session(date(2025, 12, 15), time(14, 0), time(17, 0)),)

    def test_pairs_in_order(self, extractor: SessionExtractor) -> None:
        result = extractor.extract(
            "[DATE: 2025-06-01] [HORAIRE: 10h-12h]\n[DATE: 2025-06-08] [HORAIRE: 14h-16h]"
        )
        assert result.items == (
            _session(date(2025, 6, 1), time(10, 0), time(12, 0)),
            _session(date(2025, 6, 8), time(14, 0), time(16, 0)),
        )

    def test_single_time_applies_to_every_date(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[DATE: 2025-06-01] [DATE: 2025-06-08] [HORAIRE: 10h-12h]")
        assert [s.date for s in result.items] == [date(2025, 6, 1), date(2025, 6, 8)]
        assert all(s.start_time == time(10, 0) for s in result.items)

    def test_unpairable_counts(self, extractor: SessionExtractor) -> None:
        result = extractor.extract(
            "[DATE: 2025-06-01] [DATE: 2025-06-08] [DATE: 2025-06-15] "
            "[HORAIRE: 10h-12h] [HORAIRE: 14h-16h]"
        )
        assert result.items == ()
        assert result.warnings[0].kind is WarningKind.UNPARSABLE_FIELD
        assert len(result.spans) == 5

    def test_time_without_date(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[HORAIRE: 14:00-16:00]")
        assert result.items == ()
        assert len(result.warnings) == 1
        assert len(result.spans) == 1


class TestInvalidSessions:
    @pytest.fixture
    def extractor(self, settings, catalog) -> SessionExtractor:
        return SessionExtractor(settings, catalog)

    def test_impossible_date(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[DATE: 2025-02-30 10:00-12:00]")
        assert result.items == ()
        assert result.warnings[0].kind is WarningKind.UNPARSABLE_FIELD
        assert "Invalid date" in result.warnings[0].message
        # the tag is still consumed
        assert len(result.spans) == 1

    def test_end_before_start(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[SESSION: 2025-06-01 20:00-18:00]")
        assert result.items == ()
        assert len(result.warnings) == 1

    def test_invalid_time(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[SESSION: 2025-06-01 25:00-26:00]")
        assert result.items == ()
        assert "Invalid time" in result.warnings[0].message

    def test_no_date_at_all(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[SESSION: bientôt]")
        assert result.items == ()
        assert "No date" in result.warnings[0].message

    def test_bad_entry_does_not_hide_good_one(self, extractor: SessionExtractor) -> None:
        result = extractor.extract(
            "[SESSION: 2025-06-01 20:00-18:00 | 2025-06-02 09:00-11:00]"
        )
        assert result.items == (_session(date(2025, 6, 2), time(9, 0), time(11, 0)),)
        assert len(result.warnings) == 1

    def test_other_tags_ignored(self, extractor: SessionExtractor) -> None:
        result = extractor.extract("[PRIX: 10€] [STAGE] texte libre 2025-06-01 18:00")
        assert result.items == ()
        assert result.spans == ()
        assert result.warnings == ()
