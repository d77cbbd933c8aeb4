from dataclasses import replace
from typing import List

from ..models import ParsedLocation, ParseWarning, Span, WarningKind
from .base import BaseExtractor
from .normalize import parse_location


class LocationExtractor(BaseExtractor):
    """[LIEU: venue name] and [ADRESSE: full address] tags.

    A venue tag and an address tag written one after the other describe the
    same place and are merged; any further tag of an already-filled kind
    starts a new location.
    """

    field_name = "locations"
    families = frozenset({"venue", "address"})

    def scan(self, content: str, deadline: float):
        locations: List[ParsedLocation] = []
        spans: List[Span] = []
        warnings: List[ParseWarning] = []

        for family, value, span in self.iter_keyed_tags(content, self.families, deadline):
            spans.append(span)
            if family == "venue":
                parsed = ParsedLocation(name=" ".join(value.split()) or None)
            else:
                parsed = parse_location(value)

            if parsed.is_empty:
                warnings.append(
                    self.warn(WarningKind.UNPARSABLE_FIELD, "Empty location tag", span.text)
                )
                continue

            last = locations[-1] if locations else None
            if last is not None and family == "venue" and not last.name:
                locations[-1] = replace(last, name=parsed.name)
            elif last is not None and family == "address" and not last.has_address:
                locations[-1] = replace(
                    last,
                    street=parsed.street,
                    city=parsed.city,
                    postal_code=parsed.postal_code,
                )
            else:
                locations.append(parsed)

        return self.result(locations, spans, warnings)
