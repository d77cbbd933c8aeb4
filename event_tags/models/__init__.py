from .extraction import ExtractionResult, ParseWarning, Span, WarningKind
from .feed import ExtractedEventData, FeedEvent, FeedEventTime, FeedPlace
from .tags import (
    ClubTarget,
    EventType,
    ParsedLocation,
    ParsedPrice,
    ParsedSession,
    ParsedTags,
)

__all__ = [
    "ClubTarget",
    "EventType",
    "ExtractedEventData",
    "ExtractionResult",
    "FeedEvent",
    "FeedEventTime",
    "FeedPlace",
    "ParsedLocation",
    "ParsedPrice",
    "ParsedSession",
    "ParsedTags",
    "ParseWarning",
    "Span",
    "WarningKind",
]
