"""Recover scheduling, pricing, location and routing metadata from tagged event descriptions."""

from .config.loader import TagCatalog, load_tag_catalog
from .config.settings import ParserSettings, get_settings
from .models import (
    ClubTarget,
    EventType,
    ExtractedEventData,
    FeedEvent,
    ParsedLocation,
    ParsedPrice,
    ParsedSession,
    ParsedTags,
    ParseWarning,
    WarningKind,
)
from .normalizer import TagAssembler, clean_content, extract_event_data, parse_event_tags

__version__ = "0.1.0"

__all__ = [
    "ClubTarget",
    "EventType",
    "ExtractedEventData",
    "FeedEvent",
    "ParsedLocation",
    "ParsedPrice",
    "ParsedSession",
    "ParsedTags",
    "ParseWarning",
    "ParserSettings",
    "TagAssembler",
    "TagCatalog",
    "WarningKind",
    "clean_content",
    "extract_event_data",
    "get_settings",
    "load_tag_catalog",
    "parse_event_tags",
]
