from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..models import EventType, ParseWarning, Span, WarningKind
from ..utils.text import fold_token
from .base import BaseExtractor
from .grammar import get_club_slugs_from_tag, get_event_type_from_tag, is_all_clubs_tag
from .patterns import ANY_TAG, KEY_FAMILIES


@dataclass(frozen=True)
class DeclaredFlags:
    """Routing and status markers as written, before contradictions are resolved."""

    should_publish: bool = True
    event_type: Optional[EventType] = None
    club_slugs: Tuple[str, ...] = ()
    is_all_clubs: bool = False
    is_free: bool = False


class FlagExtractor(BaseExtractor):
    """Bare marker tags ([STAGE], [TOUS], [GRATUIT], ...) plus [TYPE: ...] and [CLUB: ...].

    Bare tokens the catalog does not know are left in the text and reported
    as malformed tags, as are keyed tags with an unknown key.
    """

    field_name = "flags"

    def scan(self, content: str, deadline: float):
        spans: List[Span] = []
        warnings: List[ParseWarning] = []
        event_type: Optional[EventType] = None
        club_slugs: List[str] = []
        all_clubs = opt_in = opt_out = free = False

        for match in ANY_TAG.finditer(content):
            self.check_budget(deadline)
            tag = match.group(0)

            if match.group("key") is not None:
                family = KEY_FAMILIES.get(fold_token(match.group("key")))
                if family is None:
                    warnings.append(
                        self.warn(WarningKind.MALFORMED_TAG, f"Unknown tag key in {tag}", tag)
                    )
                    continue
                if family not in ("event_type", "club"):
                    continue  # owned by a field extractor
                spans.append(self.span(match))
                if family == "event_type":
                    found = get_event_type_from_tag(tag, self.catalog)
                    if found is None:
                        warnings.append(
                            self.warn(WarningKind.UNPARSABLE_FIELD, f"Unknown event type {tag}", tag)
                        )
                    elif event_type is None:
                        event_type = found
                    continue
                if is_all_clubs_tag(tag, self.catalog):
                    all_clubs = True
                    continue
                slugs = get_club_slugs_from_tag(tag, self.catalog)
                if not slugs:
                    warnings.append(
                        self.warn(WarningKind.UNPARSABLE_FIELD, f"No club named in {tag}", tag)
                    )
                for slug in slugs:
                    if slug not in club_slugs:
                        club_slugs.append(slug)
                continue

            token = fold_token(match.group("token"))
            if token in self.catalog.unlimited:
                continue  # owned by the capacity extractor
            if not self.catalog.knows(token):
                warnings.append(
                    self.warn(WarningKind.MALFORMED_TAG, f"Unrecognized tag {tag}", tag)
                )
                continue

            spans.append(self.span(match))
            if token in self.catalog.no_publish:
                opt_out = True
            elif token in self.catalog.publish:
                opt_in = True
            elif token in self.catalog.free:
                free = True
            elif token in self.catalog.all_clubs:
                all_clubs = True
            elif token in self.catalog.event_types:
                if event_type is None:
                    event_type = self.catalog.event_types[token]
            else:
                slug = self.catalog.clubs[token]
                if slug not in club_slugs:
                    club_slugs.append(slug)

        if opt_in and opt_out:
            warnings.append(
                self.warn(
                    WarningKind.CONTRADICTORY_DECLARATION,
                    "Both publish and do-not-publish tags present; not publishing",
                )
            )

        flags = DeclaredFlags(
            should_publish=not opt_out,
            event_type=event_type,
            club_slugs=tuple(club_slugs),
            is_all_clubs=all_clubs,
            is_free=free,
        )
        return self.result([flags], spans, warnings)
