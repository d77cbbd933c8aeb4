from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class WarningKind(str, Enum):
    MALFORMED_TAG = "malformed_tag"
    CONTRADICTORY_DECLARATION = "contradictory_declaration"
    UNPARSABLE_FIELD = "unparsable_field"
    INPUT_TRUNCATED = "input_truncated"
    BUDGET_EXCEEDED = "budget_exceeded"


@dataclass(frozen=True)
class Span:
    """Half-open [start, end) slice of the scanned text consumed by a tag."""

    start: int
    end: int
    field: str
    text: str

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end}) for '{self.text}'")


@dataclass(frozen=True)
class ParseWarning:
    """Non-fatal problem found while reading a description."""

    kind: WarningKind
    field: str
    message: str
    tag: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.kind.value} ({self.field}): {self.message}"


@dataclass(frozen=True)
class ExtractionResult(Generic[T]):
    items: Tuple[T, ...] = ()
    spans: Tuple[Span, ...] = ()
    warnings: Tuple[ParseWarning, ...] = ()
