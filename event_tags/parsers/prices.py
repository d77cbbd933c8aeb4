from typing import List, Optional

from ..models import ParsedPrice, ParseWarning, Span, WarningKind
from .base import BaseExtractor
from .normalize import detect_currency, parse_price_to_cents
from .patterns import TARIFF_ENTRY


class PriceExtractor(BaseExtractor):
    """[PRIX: 25€] flat prices and [TARIF: Adulte: 25€, Enfant: 15€] tiers."""

    field_name = "prices"
    families = frozenset({"price", "tariff"})

    def scan(self, content: str, deadline: float):
        prices: List[ParsedPrice] = []
        spans: List[Span] = []
        warnings: List[ParseWarning] = []

        for family, value, span in self.iter_keyed_tags(content, self.families, deadline):
            spans.append(span)
            if family == "tariff" and not self._is_bare_amount(value):
                prices.extend(self._parse_tariffs(value, span, warnings, deadline))
                continue
            price = self._build_price(value, None, span, warnings)
            if price:
                prices.append(price)

        return self.result(prices, spans, warnings)

    def _is_bare_amount(self, value: str) -> bool:
        return parse_price_to_cents(value) is not None

    def _parse_tariffs(
        self, value: str, span: Span, warnings: List[ParseWarning], deadline: float
    ) -> List[ParsedPrice]:
        tiers: List[ParsedPrice] = []
        pos = 0
        end = len(value.rstrip(" \t,;|"))
        while pos < end:
            match = TARIFF_ENTRY.match(value, pos)
            self.check_budget(deadline)
            if not match or match.end() == pos:
                warnings.append(
                    self.warn(
                        WarningKind.UNPARSABLE_FIELD,
                        f"Unreadable tariff entry '{value[pos:].strip()}'",
                        span.text,
                    )
                )
                break
            label = match.group("label").strip(" \t,;|") or None
            price = self._build_price(match.group("amount"), label, span, warnings)
            if price:
                tiers.append(price)
            pos = match.end()
        return tiers

    def _build_price(
        self,
        amount_text: str,
        label: Optional[str],
        span: Span,
        warnings: List[ParseWarning],
    ) -> Optional[ParsedPrice]:
        cents = parse_price_to_cents(amount_text)
        if cents is None:
            warnings.append(
                self.warn(
                    WarningKind.UNPARSABLE_FIELD,
                    f"Invalid amount '{amount_text}'",
                    span.text,
                )
            )
            return None
        currency = detect_currency(amount_text, self.settings.home_currency)
        return ParsedPrice(amount_cents=cents, currency=currency, label=label)
