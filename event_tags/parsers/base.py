import logging
import time
from abc import ABC, abstractmethod
from typing import FrozenSet, Iterator, List, Optional, Tuple

from ..config.loader import TagCatalog, default_catalog
from ..config.settings import ParserSettings
from ..models import ExtractionResult, ParseWarning, Span, WarningKind
from ..utils.text import fold_token
from .patterns import ANY_TAG, KEY_FAMILIES


class BudgetExceeded(Exception):
    """Raised inside an extractor when its time budget runs out."""


class BaseExtractor(ABC):
    # Name of the ParsedTags field family this extractor fills
    field_name: str = ""

    def __init__(
        self,
        settings: Optional[ParserSettings] = None,
        catalog: Optional[TagCatalog] = None,
    ):
        self.settings = settings or ParserSettings()
        self.catalog = catalog if catalog is not None else default_catalog()
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def scan(self, content: str, deadline: float) -> ExtractionResult:
        pass

    def extract(self, content: str) -> ExtractionResult:
        """
        Run the extractor over an untouched description.

        A run that outlives the field time budget is abandoned: the field
        reports nothing and a warning, other fields are unaffected.
        """
        deadline = time.perf_counter() + self.settings.field_budget_seconds
        try:
            return self.scan(content, deadline)
        except BudgetExceeded:
            warning = self.warn(
                WarningKind.BUDGET_EXCEEDED,
                f"Extraction abandoned after {self.settings.field_budget_ms}ms",
            )
            return ExtractionResult(warnings=(warning,))

    def check_budget(self, deadline: float) -> None:
        if time.perf_counter() > deadline:
            raise BudgetExceeded(self.field_name)

    def iter_keyed_tags(
        self, content: str, families: FrozenSet[str], deadline: float
    ) -> Iterator[Tuple[str, str, Span]]:
        """Yield (family, value, span) for each [KEY: value] tag of the given families."""
        for match in ANY_TAG.finditer(content):
            self.check_budget(deadline)
            key = match.group("key")
            if key is None:
                continue
            family = KEY_FAMILIES.get(fold_token(key))
            if family in families:
                yield family, match.group("value").strip(), self.span(match)

    def iter_bare_tags(
        self, content: str, tokens: FrozenSet[str], deadline: float
    ) -> Iterator[Tuple[str, Span]]:
        """Yield (folded token, span) for each bare tag listed in tokens."""
        for match in ANY_TAG.finditer(content):
            self.check_budget(deadline)
            token = match.group("token")
            if token is None:
                continue
            folded = fold_token(token)
            if folded in tokens:
                yield folded, self.span(match)

    def span(self, match) -> Span:
        return Span(
            start=match.start(), end=match.end(), field=self.field_name, text=match.group(0)
        )

    def warn(
        self, kind: WarningKind, message: str, tag: Optional[str] = None
    ) -> ParseWarning:
        """Build a warning and log it; malformed tags only log at debug level."""
        warning = ParseWarning(kind=kind, field=self.field_name, message=message, tag=tag)
        if kind is WarningKind.MALFORMED_TAG:
            self.logger.debug(str(warning))
        else:
            self.logger.warning(str(warning))
        return warning

    @staticmethod
    def result(items: List, spans: List[Span], warnings: List[ParseWarning]) -> ExtractionResult:
        return ExtractionResult(items=tuple(items), spans=tuple(spans), warnings=tuple(warnings))
