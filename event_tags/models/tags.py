from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .extraction import ParseWarning

# ISO 4217 code -> symbol used when rendering a price back into a tag
CURRENCY_SYMBOLS: Dict[str, str] = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
}

# Currencies a rendered price tag can be read back in
SUPPORTED_CURRENCIES = frozenset({"EUR", "USD", "GBP", "CHF"})


class EventType(str, Enum):
    STAGE = "stage"
    SEMINAR = "seminar"
    COMPETITION = "competition"
    DEMONSTRATION = "demonstration"


@dataclass(frozen=True)
class ParsedSession:
    date: date
    start_time: time
    end_time: Optional[time] = None

    def __post_init__(self):
        if self.end_time is not None and self.end_time <= self.start_time:
            raise ValueError(
                f"Session on {self.date.isoformat()} ends at {self.end_time:%H:%M}, "
                f"not after its start {self.start_time:%H:%M}"
            )

    @property
    def key(self) -> Tuple[date, time]:
        return (self.date, self.start_time)

    def to_tag(self) -> str:
        return f"[SESSION: {self._entry()}]"

    def _entry(self) -> str:
        text = f"{self.date.isoformat()} {self.start_time:%H:%M}"
        if self.end_time is not None:
            text += f"-{self.end_time:%H:%M}"
        return text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M") if self.end_time else None,
        }

    def __str__(self) -> str:
        return self._entry()


@dataclass(frozen=True)
class ParsedPrice:
    amount_cents: int
    currency: str
    label: Optional[str] = None

    def __post_init__(self):
        if self.amount_cents < 0:
            raise ValueError(f"Price amount must be >= 0, got {self.amount_cents}")

    def format_amount(self) -> str:
        """French rendering: 2550 EUR -> "25,50 €"."""
        euros, cents = divmod(self.amount_cents, 100)
        symbol = CURRENCY_SYMBOLS.get(self.currency, self.currency)
        return f"{euros},{cents:02d} {symbol}"

    def to_tag(self) -> str:
        if self.label:
            return f"[TARIF: {self.label}: {self.format_amount()}]"
        return f"[PRIX: {self.format_amount()}]"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "amount_cents": self.amount_cents,
            "currency": self.currency,
        }


@dataclass(frozen=True)
class ParsedLocation:
    name: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not any(
            (value or "").strip()
            for value in (self.name, self.street, self.city, self.postal_code)
        )

    @property
    def has_address(self) -> bool:
        return bool(self.street or self.city or self.postal_code)

    def address_text(self) -> str:
        locality = " ".join(p for p in (self.postal_code, self.city) if p)
        return ", ".join(p for p in (self.street, locality) if p)

    def format(self) -> str:
        return ", ".join(p for p in (self.name, self.address_text()) if p)

    def to_tag(self) -> str:
        tags: List[str] = []
        if self.name:
            tags.append(f"[LIEU: {self.name}]")
        if self.has_address:
            tags.append(f"[ADRESSE: {self.address_text()}]")
        return " ".join(tags)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "street": self.street,
            "city": self.city,
            "postal_code": self.postal_code,
        }


@dataclass(frozen=True)
class ClubTarget:
    """Where an event is routed: nowhere specific, every club, or named clubs."""

    kind: str = "none"  # "none" | "all" | "specific"
    slugs: Tuple[str, ...] = ()

    @classmethod
    def none(cls) -> "ClubTarget":
        return cls()

    @classmethod
    def all_clubs(cls) -> "ClubTarget":
        return cls(kind="all")

    @classmethod
    def specific(cls, slugs: Tuple[str, ...]) -> "ClubTarget":
        if not slugs:
            raise ValueError("ClubTarget.specific needs at least one club slug")
        return cls(kind="specific", slugs=tuple(slugs))

    @property
    def is_all_clubs(self) -> bool:
        return self.kind == "all"


@dataclass(frozen=True)
class ParsedTags:
    should_publish: bool = True
    event_type: Optional[EventType] = None
    club_slugs: Tuple[str, ...] = ()
    is_all_clubs: bool = False
    is_free: bool = False
    max_capacity: Optional[int] = None        # None = unlimited, never 0
    sessions: Tuple[ParsedSession, ...] = ()
    prices: Tuple[ParsedPrice, ...] = ()
    locations: Tuple[ParsedLocation, ...] = ()
    cleaned_content: str = ""
    found_tags: Tuple[str, ...] = field(default=(), compare=False)
    warnings: Tuple[ParseWarning, ...] = field(default=(), compare=False)

    def __post_init__(self):
        if self.is_all_clubs and self.club_slugs:
            raise ValueError("ParsedTags cannot target all clubs and specific clubs at once")
        if self.max_capacity is not None and self.max_capacity <= 0:
            raise ValueError(f"max_capacity must be positive or None, got {self.max_capacity}")

    @property
    def club_target(self) -> ClubTarget:
        if self.club_slugs:
            return ClubTarget.specific(self.club_slugs)
        if self.is_all_clubs:
            return ClubTarget.all_clubs()
        return ClubTarget.none()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "should_publish": self.should_publish,
            "event_type": self.event_type.value if self.event_type else None,
            "club_slugs": list(self.club_slugs),
            "is_all_clubs": self.is_all_clubs,
            "is_free": self.is_free,
            "max_capacity": self.max_capacity,
            "sessions": [s.to_dict() for s in self.sessions],
            "prices": [p.to_dict() for p in self.prices],
            "locations": [loc.to_dict() for loc in self.locations],
            "cleaned_content": self.cleaned_content,
            "warnings": [str(w) for w in self.warnings],
        }
