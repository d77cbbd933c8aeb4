"""Normalization of tag values into canonical machine types.

All functions are total: malformed input gives None, never an exception.
"""

from datetime import date, time
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Optional

from ..models import ParsedLocation
from ..utils.text import strip_accents
from .patterns import (
    AMOUNT,
    CURRENCY_CODES,
    DATE_TOKEN,
    FRENCH_MONTHS,
    INTEGER,
    POSTAL_LOCALITY,
    TIME_VALUE,
)


def fold_value(text: str) -> str:
    """Lower-case, accent-free, single-spaced form that value patterns expect."""
    return " ".join(strip_accents(text).lower().split())


def normalize_date(text: str) -> Optional[date]:
    """Parse "2025-06-01", "01/06/2025", "01.06.2025" or "1er juin 2025"."""
    if not isinstance(text, str):
        return None
    match = DATE_TOKEN.fullmatch(fold_value(text))
    if not match:
        return None
    return date_from_match(match)


def date_from_match(match) -> Optional[date]:
    """Build a date from a DATE_TOKEN match; None if it is not a real day."""
    groups = match.groupdict()
    try:
        if groups["iso_y"]:
            return date(int(groups["iso_y"]), int(groups["iso_m"]), int(groups["iso_d"]))
        if groups["dmy_y"]:
            return date(int(groups["dmy_y"]), int(groups["dmy_m"]), int(groups["dmy_d"]))
        return date(
            int(groups["fr_y"]), FRENCH_MONTHS[groups["fr_m"]], int(groups["fr_d"])
        )
    except (ValueError, KeyError):
        return None


def normalize_time(text: str) -> Optional[time]:
    """Parse 24h ("18:00", "18h00", "18h", "9h30") or 12h ("6pm", "6:30 pm")."""
    if not isinstance(text, str):
        return None
    folded = fold_value(text)
    match = TIME_VALUE.fullmatch(folded)
    if not match:
        return None

    hour = int(match.group("hour"))
    minute = int(match.group("minute") or 0)
    period = match.group("period")

    if period is None and not any(sep in folded for sep in ("h", ":")):
        return None  # a bare number is not a time
    if period:
        if not 1 <= hour <= 12:
            return None
        if period == "p" and hour != 12:
            hour += 12
        elif period == "a" and hour == 12:
            hour = 0

    if hour > 23 or minute > 59:
        return None
    return time(hour, minute)


def parse_price_to_cents(text: str) -> Optional[int]:
    """
    Convert an amount such as "25", "25,50 €", "€12.5" or "7.125" to cents.

    Rounds half-to-even on the cent, so "0.125" -> 12 and "0.135" -> 14.
    """
    if not isinstance(text, str):
        return None
    match = AMOUNT.fullmatch(text.strip())
    if not match:
        return None
    try:
        amount = Decimal(match.group("number").replace(",", "."))
    except InvalidOperation:
        return None
    cents = (amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_EVEN)
    return int(cents)


def detect_currency(text: str, default: str) -> str:
    """ISO code of the symbol or code written around an amount, else default."""
    match = AMOUNT.fullmatch(text.strip()) if isinstance(text, str) else None
    if match:
        written = match.group("prefix") or match.group("suffix")
        if written:
            return CURRENCY_CODES.get(written.lower(), default)
    return default


def parse_location(text: str) -> ParsedLocation:
    """
    Split a free-text address into street / postal code / city.

    "12 rue de la Paix, 75002 Paris" -> street="12 rue de la Paix",
    postal_code="75002", city="Paris". Without a trailing postal code the
    whole text is kept as the street.
    """
    text = " ".join((text or "").split()).strip(" ,")
    if not text:
        return ParsedLocation()

    match = POSTAL_LOCALITY.search(text)
    if not match:
        return ParsedLocation(street=text)

    street = text[: match.start("postal")].strip(" ,") or None
    return ParsedLocation(
        street=street,
        postal_code=match.group("postal"),
        city=match.group("city").strip() or None,
    )


def parse_capacity(text: str) -> Optional[int]:
    """Positive integer capacity, or None (zero and negatives are not capacities)."""
    if not isinstance(text, str):
        return None
    match = INTEGER.fullmatch(text.strip())
    if not match:
        return None
    value = int(match.group(0))
    return value if value > 0 else None
