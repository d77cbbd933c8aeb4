"""Session extraction: [SESSION: ...], [DATE: ...] and [HORAIRE: ...] tags.

Inside a session or date tag every date token starts a new occurrence and
owns the text up to the next date token, so all of these read the same way:

    [SESSION: 2025-06-01 18:00-20:00 | 2025-06-02 09:00-11:00]
    [SESSION: 2025-06-01|18:00-20:00]
    [DATE: dimanche 1er juin 2025 18h-20h]

Dates written without a time ([DATE: 2025-06-01]) are paired with the
[HORAIRE: ...] tags: one to one when the counts match, otherwise a single
time range is applied to every date.
"""

from datetime import date, time
from typing import Dict, List, Optional, Tuple

from ..models import ParsedSession, ParseWarning, Span, WarningKind
from .base import BaseExtractor
from .normalize import date_from_match, fold_value, normalize_time
from .patterns import DATE_TOKEN, TIME_RANGE

TimeRange = Tuple[time, Optional[time]]


class SessionExtractor(BaseExtractor):
    field_name = "sessions"
    families = frozenset({"session", "date", "time"})

    def scan(self, content: str, deadline: float):
        sessions: List[ParsedSession] = []
        spans: List[Span] = []
        warnings: List[ParseWarning] = []
        pending_dates: List[date] = []
        pending_times: List[TimeRange] = []

        for family, value, span in self.iter_keyed_tags(content, self.families, deadline):
            spans.append(span)
            if family == "time":
                found, time_range = self._parse_time_range(fold_value(value), span, warnings)
                if time_range:
                    pending_times.append(time_range)
                elif not found:
                    warnings.append(
                        self.warn(
                            WarningKind.UNPARSABLE_FIELD,
                            f"No time range in '{value}'",
                            span.text,
                        )
                    )
                continue

            for day, time_range in self._parse_dated_entries(value, span, warnings):
                if time_range is None:
                    pending_dates.append(day)
                else:
                    self._add_session(day, time_range, span, sessions, warnings)

        for day, time_range in self._pair_pending(pending_dates, pending_times, warnings):
            self._add_session(day, time_range, None, sessions, warnings)

        return self.result(self._dedupe_and_sort(sessions), spans, warnings)

    def _parse_dated_entries(
        self, value: str, span: Span, warnings: List[ParseWarning]
    ) -> List[Tuple[date, Optional[TimeRange]]]:
        text = fold_value(value)
        matches = list(DATE_TOKEN.finditer(text))
        if not matches:
            warnings.append(
                self.warn(WarningKind.UNPARSABLE_FIELD, f"No date in '{value}'", span.text)
            )
            return []

        leading = text[: matches[0].start()].strip(" |;,")
        if leading:
            warnings.append(
                self.warn(
                    WarningKind.UNPARSABLE_FIELD,
                    f"Ignoring '{leading}' before the first date",
                    span.text,
                )
            )

        entries: List[Tuple[date, Optional[TimeRange]]] = []
        for index, match in enumerate(matches):
            end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
            day = date_from_match(match)
            if day is None:
                warnings.append(
                    self.warn(
                        WarningKind.UNPARSABLE_FIELD,
                        f"Invalid date '{match.group(0)}'",
                        span.text,
                    )
                )
                continue
            found, time_range = self._parse_time_range(text[match.end() : end], span, warnings)
            if found and time_range is None:
                continue
            entries.append((day, time_range))
        return entries

    def _parse_time_range(
        self, text: str, span: Span, warnings: List[ParseWarning]
    ) -> Tuple[bool, Optional[TimeRange]]:
        """Return (found, range); found with a None range means an invalid time."""
        match = TIME_RANGE.search(text)
        if not match:
            return False, None
        start = normalize_time(match.group("start"))
        end = normalize_time(match.group("end")) if match.group("end") else None
        if start is None or (match.group("end") and end is None):
            warnings.append(
                self.warn(
                    WarningKind.UNPARSABLE_FIELD,
                    f"Invalid time '{match.group(0)}'",
                    span.text,
                )
            )
            return True, None
        return True, (start, end)

    def _pair_pending(
        self,
        dates: List[date],
        times: List[TimeRange],
        warnings: List[ParseWarning],
    ) -> List[Tuple[date, TimeRange]]:
        if not dates:
            if times:
                warnings.append(
                    self.warn(
                        WarningKind.UNPARSABLE_FIELD,
                        f"{len(times)} time tag(s) without any date",
                    )
                )
            return []
        if len(times) == len(dates):
            return list(zip(dates, times))
        if len(times) == 1:
            return [(day, times[0]) for day in dates]

        warnings.append(
            self.warn(
                WarningKind.UNPARSABLE_FIELD,
                f"Cannot pair {len(dates)} date(s) with {len(times)} time tag(s); "
                "dates without a start time are dropped",
            )
        )
        return []

    def _add_session(
        self,
        day: date,
        time_range: TimeRange,
        span: Optional[Span],
        sessions: List[ParsedSession],
        warnings: List[ParseWarning],
    ) -> None:
        start, end = time_range
        try:
            sessions.append(ParsedSession(date=day, start_time=start, end_time=end))
        except ValueError as e:
            warnings.append(
                self.warn(WarningKind.UNPARSABLE_FIELD, str(e), span.text if span else None)
            )

    def _dedupe_and_sort(self, sessions: List[ParsedSession]) -> List[ParsedSession]:
        unique: Dict[Tuple[date, time], ParsedSession] = {}
        for session in sessions:
            if session.key in unique:
                self.logger.debug(f"Dropping duplicate session {session}")
                continue
            unique[session.key] = session
        return sorted(unique.values(), key=lambda s: s.key)
