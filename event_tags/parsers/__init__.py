from .base import BaseExtractor
from .capacity import CapacityExtractor, extract_max_capacity
from .flags import DeclaredFlags, FlagExtractor
from .grammar import (
    get_club_slug_from_tag,
    get_club_slugs_from_tag,
    get_event_type_from_tag,
    is_all_clubs_tag,
    is_free_event,
    is_unlimited_capacity,
    should_publish_to_site,
)
from .locations import LocationExtractor
from .normalize import (
    normalize_date,
    normalize_time,
    parse_capacity,
    parse_location,
    parse_price_to_cents,
)
from .prices import PriceExtractor
from .registry import ExtractorRegistry
from .sessions import SessionExtractor

__all__ = [
    "BaseExtractor",
    "CapacityExtractor",
    "DeclaredFlags",
    "ExtractorRegistry",
    "FlagExtractor",
    "LocationExtractor",
    "PriceExtractor",
    "SessionExtractor",
    "extract_max_capacity",
    "get_club_slug_from_tag",
    "get_club_slugs_from_tag",
    "get_event_type_from_tag",
    "is_all_clubs_tag",
    "is_free_event",
    "is_unlimited_capacity",
    "normalize_date",
    "normalize_time",
    "parse_capacity",
    "parse_location",
    "parse_price_to_cents",
    "should_publish_to_site",
]
