from typing import List, Optional

from ..config.loader import TagCatalog
from ..models import ParseWarning, Span, WarningKind
from .base import BaseExtractor
from .normalize import parse_capacity


class CapacityExtractor(BaseExtractor):
    """[CAPACITE: 50] limits attendance; [ILLIMITE] declares it unlimited.

    Yields at most one item. The unlimited marker wins over a numeric tag.
    """

    field_name = "capacity"
    families = frozenset({"capacity"})

    def scan(self, content: str, deadline: float):
        spans: List[Span] = []
        warnings: List[ParseWarning] = []
        capacity: Optional[int] = None

        for _, value, span in self.iter_keyed_tags(content, self.families, deadline):
            spans.append(span)
            parsed = parse_capacity(value)
            if parsed is None:
                warnings.append(
                    self.warn(
                        WarningKind.UNPARSABLE_FIELD,
                        f"Capacity must be a positive integer, got '{value}'",
                        span.text,
                    )
                )
            elif capacity is None:
                capacity = parsed
            elif parsed != capacity:
                self.logger.debug(f"Ignoring later capacity {parsed}, keeping {capacity}")

        unlimited = False
        for _, span in self.iter_bare_tags(content, self.catalog.unlimited, deadline):
            spans.append(span)
            unlimited = True

        if unlimited and capacity is not None:
            warnings.append(
                self.warn(
                    WarningKind.CONTRADICTORY_DECLARATION,
                    f"Capacity {capacity} and an unlimited tag both present; treating as unlimited",
                )
            )
            capacity = None

        spans.sort(key=lambda s: s.start)
        items = [capacity] if capacity is not None else []
        return self.result(items, spans, warnings)


def extract_max_capacity(content: str, catalog: Optional[TagCatalog] = None) -> Optional[int]:
    """Maximum attendance declared in a description; None means unlimited."""
    result = CapacityExtractor(catalog=catalog).extract(content or "")
    return result.items[0] if result.items else None
