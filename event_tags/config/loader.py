from __future__ import annotations
import json
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Union

import jsonschema

from ..models import EventType, FeedEvent
from ..utils.text import fold_token

_CONFIG_DIR = Path(__file__).parent
_DEFAULT_CATALOG_PATH = _CONFIG_DIR / "catalog.json"
_CATALOG_SCHEMA_PATH = _CONFIG_DIR / "schemas" / "tag-catalog.schema.json"
_FEED_EVENT_SCHEMA_PATH = _CONFIG_DIR / "schemas" / "feed-event.schema.json"


class ConfigValidationError(Exception):
    pass


class FeedValidationError(Exception):
    pass


def _folded(tokens: Iterable[str]) -> FrozenSet[str]:
    return frozenset(fold_token(t) for t in tokens)


@dataclass(frozen=True)
class TagCatalog:
    """Bare tag tokens and what they mean, keyed by folded token text."""

    event_types: Mapping[str, EventType] = field(default_factory=dict)
    clubs: Mapping[str, str] = field(default_factory=dict)
    all_clubs: FrozenSet[str] = frozenset()
    publish: FrozenSet[str] = frozenset()
    no_publish: FrozenSet[str] = frozenset()
    free: FrozenSet[str] = frozenset()
    unlimited: FrozenSet[str] = frozenset()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TagCatalog":
        return cls(
            event_types=MappingProxyType(
                {fold_token(k): EventType(v) for k, v in data["event_types"].items()}
            ),
            clubs=MappingProxyType({fold_token(k): v for k, v in data["clubs"].items()}),
            all_clubs=_folded(data["all_clubs"]),
            publish=_folded(data.get("publish", [])),
            no_publish=_folded(data["no_publish"]),
            free=_folded(data["free"]),
            unlimited=_folded(data.get("unlimited", [])),
        )

    def knows(self, token: str) -> bool:
        folded = fold_token(token)
        return (
            folded in self.event_types
            or folded in self.clubs
            or folded in self.all_clubs
            or folded in self.publish
            or folded in self.no_publish
            or folded in self.free
            or folded in self.unlimited
        )


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def _validate_schema(data: Any, schema_path: Path, source: str, error_cls: type) -> None:
    with schema_path.open(encoding="utf-8") as f:
        schema = json.load(f)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as exc:
        raise error_cls(f"{source} failed schema validation: {exc.message}") from exc


def load_tag_catalog(config_path: Union[str, Path]) -> TagCatalog:
    path = Path(config_path)
    data = _read_json(path)
    _validate_schema(data, _CATALOG_SCHEMA_PATH, f"Tag catalog '{path}'", ConfigValidationError)
    return TagCatalog.from_dict(data)


@lru_cache(maxsize=1)
def default_catalog() -> TagCatalog:
    """The built-in catalog, read once per process."""
    return load_tag_catalog(_DEFAULT_CATALOG_PATH)


def parse_feed_event(data: Any) -> FeedEvent:
    _validate_schema(data, _FEED_EVENT_SCHEMA_PATH, "Feed event", FeedValidationError)
    return FeedEvent.from_dict(data)


def load_feed_event(path: Union[str, Path]) -> FeedEvent:
    path = Path(path)
    data = _read_json(path)
    _validate_schema(
        data, _FEED_EVENT_SCHEMA_PATH, f"Feed event file '{path}'", FeedValidationError
    )
    return FeedEvent.from_dict(data)
