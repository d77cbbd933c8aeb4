from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .tags import ParsedLocation, ParsedTags

FACEBOOK_EVENT_URL = "https://www.facebook.com/events/{event_id}"


@dataclass(frozen=True)
class FeedPlace:
    name: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeedPlace":
        loc = data.get("location") or {}
        return cls(
            name=data.get("name"),
            street=loc.get("street"),
            city=loc.get("city"),
            zip=loc.get("zip"),
            country=loc.get("country"),
            latitude=loc.get("latitude"),
            longitude=loc.get("longitude"),
        )

    def to_location(self) -> ParsedLocation:
        return ParsedLocation(
            name=self.name or None,
            street=self.street or None,
            city=self.city or None,
            postal_code=self.zip or None,
        )


@dataclass(frozen=True)
class FeedEventTime:
    start_time: str
    end_time: Optional[str] = None


@dataclass(frozen=True)
class FeedEvent:
    """One raw event as delivered by the social-platform feed."""

    id: str
    name: str
    start_time: str
    description: Optional[str] = None
    end_time: Optional[str] = None
    place: Optional[FeedPlace] = None
    cover_source: Optional[str] = None
    event_times: List[FeedEventTime] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeedEvent":
        place = data.get("place")
        cover = data.get("cover") or {}
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            start_time=data["start_time"],
            description=data.get("description"),
            end_time=data.get("end_time"),
            place=FeedPlace.from_dict(place) if place else None,
            cover_source=cover.get("source"),
            event_times=[
                FeedEventTime(start_time=t["start_time"], end_time=t.get("end_time"))
                for t in data.get("event_times") or []
            ],
        )

    @property
    def url(self) -> str:
        return FACEBOOK_EVENT_URL.format(event_id=self.id)


@dataclass(frozen=True)
class ExtractedEventData:
    title: str
    description: Optional[str]
    start_date: str
    end_date: Optional[str]
    location: Optional[str]
    location_details: Optional[ParsedLocation]
    cover_image_url: Optional[str]
    source_url: str
    parsed_tags: ParsedTags

    @property
    def primary_price_cents(self) -> int:
        """First listed price, or 0 for free/unpriced events."""
        if self.parsed_tags.prices:
            return self.parsed_tags.prices[0].amount_cents
        return 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "location": self.location,
            "location_details": (
                self.location_details.to_dict() if self.location_details else None
            ),
            "cover_image_url": self.cover_image_url,
            "source_url": self.source_url,
            "primary_price_cents": self.primary_price_cents,
            "parsed_tags": self.parsed_tags.to_dict(),
        }
