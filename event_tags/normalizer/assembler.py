import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..config.loader import TagCatalog, default_catalog, parse_feed_event
from ..config.settings import ParserSettings, get_settings
from ..models import (
    ExtractedEventData,
    ExtractionResult,
    FeedEvent,
    ParsedLocation,
    ParsedSession,
    ParsedTags,
    ParseWarning,
    Span,
    WarningKind,
)
from ..parsers.flags import DeclaredFlags
from ..parsers.patterns import BRACKETED
from ..parsers.registry import ExtractorRegistry
from ..utils.text import collapse_whitespace
from ..utils.timezone_utils import split_feed_datetime


def clean_content(content: str, spans: Iterable[Span]) -> str:
    """
    Delete consumed tag spans from the original text and tidy whitespace.

    Offsets all refer to the untouched text; overlapping or repeated spans
    are merged before anything is cut.
    """
    merged: List[List[int]] = []
    for start, end in sorted((s.start, s.end) for s in spans):
        if merged and start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])

    pieces: List[str] = []
    pos = 0
    for start, end in merged:
        pieces.append(content[pos:start])
        pos = max(pos, end)
    pieces.append(content[pos:])
    return collapse_whitespace("".join(pieces))


@dataclass(frozen=True)
class _Scan:
    content: str
    results: Mapping[str, ExtractionResult]
    warnings: Tuple[ParseWarning, ...]

    @property
    def spans(self) -> List[Span]:
        return [span for result in self.results.values() for span in result.spans]


class TagAssembler:
    """Runs every field extractor once and assembles their results."""

    def __init__(
        self,
        settings: Optional[ParserSettings] = None,
        catalog: Optional[TagCatalog] = None,
    ):
        self.settings = settings or get_settings()
        self.catalog = catalog if catalog is not None else default_catalog()
        self.extractors = ExtractorRegistry.create_all(self.settings, self.catalog)
        self.logger = logging.getLogger(__name__)

    def parse_event_tags(self, content: str) -> ParsedTags:
        scan = self._scan(content or "")
        cleaned, late_warnings = self._settle(clean_content(scan.content, scan.spans))
        return self._build_tags(scan, cleaned, late_warnings)

    def extract_event_data(
        self, feed_event: Union[FeedEvent, Dict[str, Any]]
    ) -> ExtractedEventData:
        if not isinstance(feed_event, FeedEvent):
            feed_event = parse_feed_event(feed_event)

        raw_title = feed_event.name or ""
        raw_description = feed_event.description or ""
        scan = self._scan(f"{raw_title}\n{raw_description}")

        title_end = len(raw_title)
        title_spans = [s for s in scan.spans if s.end <= title_end]
        body_offset = title_end + 1
        body_spans = [
            Span(s.start - body_offset, s.end - body_offset, s.field, s.text)
            for s in scan.spans
            if s.start >= body_offset
        ]

        title = self._settle(clean_content(scan.content[:title_end], title_spans))[0]
        if not title:
            title = collapse_whitespace(BRACKETED.sub("", raw_title))
        if not title:
            title = self.settings.untitled_label
        description = (
            self._settle(clean_content(scan.content[body_offset:], body_spans))[0] or None
        )

        cleaned, late_warnings = self._settle(clean_content(scan.content, scan.spans))
        tags = self._build_tags(scan, cleaned, late_warnings)
        if not tags.sessions:
            tags = self._with_native_sessions(tags, feed_event)

        location_details: Optional[ParsedLocation] = None
        if tags.locations:
            location_details = tags.locations[0]
        elif feed_event.place is not None:
            native = feed_event.place.to_location()
            location_details = None if native.is_empty else native

        self.logger.info(
            f"Extracted event {feed_event.id}: {len(tags.sessions)} session(s), "
            f"{len(tags.prices)} price(s), {len(tags.warnings)} warning(s)"
        )

        return ExtractedEventData(
            title=title,
            description=description,
            start_date=feed_event.start_time,
            end_date=feed_event.end_time or None,
            location=location_details.format() if location_details else None,
            location_details=location_details,
            cover_image_url=feed_event.cover_source or None,
            source_url=feed_event.url,
            parsed_tags=tags,
        )

    def _scan(self, content: str) -> _Scan:
        warnings: List[ParseWarning] = []
        limit = self.settings.max_input_length
        if len(content) > limit:
            message = f"Description truncated from {len(content)} to {limit} characters"
            self.logger.warning(message)
            warnings.append(ParseWarning(WarningKind.INPUT_TRUNCATED, "content", message))
            content = content[:limit]

        results = {name: extractor.extract(content) for name, extractor in self.extractors.items()}
        for result in results.values():
            warnings.extend(result.warnings)
        return _Scan(content=content, results=results, warnings=tuple(warnings))

    def _settle(self, cleaned: str) -> Tuple[str, List[ParseWarning]]:
        """Strip tags that only formed once other tags or spaces were removed.

        "[PRIX: [GRATUIT]]" cleans to "[PRIX: ]", which is a tag again. Each
        round removes at least one character, so the loop terminates. Every
        tag dropped this way is reported as malformed, never interpreted.
        """
        warnings: List[ParseWarning] = []
        while True:
            spans = self._scan(cleaned).spans
            if not spans:
                return cleaned, warnings
            distinct = {(s.start, s.end): s for s in spans}
            for span in sorted(distinct.values(), key=lambda s: s.start):
                warning = ParseWarning(
                    WarningKind.MALFORMED_TAG,
                    span.field,
                    f"Tag {span.text} only appeared once other tags were removed; dropped",
                    tag=span.text,
                )
                self.logger.debug(str(warning))
                warnings.append(warning)
            cleaned = clean_content(cleaned, spans)

    def _build_tags(
        self, scan: _Scan, cleaned: str, late_warnings: Iterable[ParseWarning] = ()
    ) -> ParsedTags:
        warnings = list(scan.warnings)
        warnings.extend(late_warnings)
        flags_items = scan.results["flags"].items
        flags = flags_items[0] if flags_items else DeclaredFlags()

        prices = scan.results["prices"].items
        if flags.is_free and prices:
            warnings.append(
                self._contradiction(
                    "prices", "Free tag and price tags both present; the event is free"
                )
            )
            prices = ()

        is_all_clubs = flags.is_all_clubs
        if is_all_clubs and flags.club_slugs:
            warnings.append(
                self._contradiction(
                    "flags", "All-clubs tag and named clubs both present; keeping named clubs"
                )
            )
            is_all_clubs = False

        capacity_items = scan.results["capacity"].items
        found_tags = tuple(span.text for span in sorted(scan.spans, key=lambda s: s.start))

        return ParsedTags(
            should_publish=flags.should_publish,
            event_type=flags.event_type,
            club_slugs=flags.club_slugs,
            is_all_clubs=is_all_clubs,
            is_free=flags.is_free,
            max_capacity=capacity_items[0] if capacity_items else None,
            sessions=scan.results["sessions"].items,
            prices=prices,
            locations=scan.results["locations"].items,
            cleaned_content=cleaned,
            found_tags=found_tags,
            warnings=tuple(warnings),
        )

    def _contradiction(self, field: str, message: str) -> ParseWarning:
        self.logger.warning(message)
        return ParseWarning(WarningKind.CONTRADICTORY_DECLARATION, field, message)

    def _with_native_sessions(self, tags: ParsedTags, feed_event: FeedEvent) -> ParsedTags:
        """Fall back to the feed's own occurrence times when no session tag was found."""
        if feed_event.event_times:
            occurrences = [(t.start_time, t.end_time) for t in feed_event.event_times]
        else:
            occurrences = [(feed_event.start_time, feed_event.end_time)]

        sessions: Dict[Tuple, ParsedSession] = {}
        warnings = list(tags.warnings)
        for start_text, end_text in occurrences:
            session = self._native_session(start_text, end_text)
            if session is None:
                message = f"Unreadable native start time {start_text!r}"
                self.logger.warning(message)
                warnings.append(ParseWarning(WarningKind.UNPARSABLE_FIELD, "sessions", message))
                continue
            sessions.setdefault(session.key, session)

        ordered = tuple(sorted(sessions.values(), key=lambda s: s.key))
        return replace(tags, sessions=ordered, warnings=tuple(warnings))

    def _native_session(
        self, start_text: Optional[str], end_text: Optional[str]
    ) -> Optional[ParsedSession]:
        start = split_feed_datetime(start_text, self.settings.timezone)
        if start is None:
            return None
        day, start_time = start
        end = split_feed_datetime(end_text, self.settings.timezone)
        end_time = None
        # Multi-day or inverted native ranges keep only the start
        if end is not None and end[0] == day and end[1] > start_time:
            end_time = end[1]
        return ParsedSession(date=day, start_time=start_time, end_time=end_time)


def parse_event_tags(content: str, catalog: Optional[TagCatalog] = None) -> ParsedTags:
    """Parse every tag in a description into a ParsedTags aggregate."""
    return TagAssembler(catalog=catalog).parse_event_tags(content)


def extract_event_data(
    feed_event: Union[FeedEvent, Dict[str, Any]], catalog: Optional[TagCatalog] = None
) -> ExtractedEventData:
    """Build the ExtractedEventData for one raw feed event."""
    return TagAssembler(catalog=catalog).extract_event_data(feed_event)
