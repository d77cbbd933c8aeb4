from typing import Dict, List, Optional, Type

from ..config.loader import TagCatalog
from ..config.settings import ParserSettings
from .base import BaseExtractor
from .capacity import CapacityExtractor
from .flags import FlagExtractor
from .locations import LocationExtractor
from .prices import PriceExtractor
from .sessions import SessionExtractor


class ExtractorRegistry:
    # One extractor per ParsedTags field family; fixed at import time
    _extractors: Dict[str, Type[BaseExtractor]] = {
        SessionExtractor.field_name: SessionExtractor,
        PriceExtractor.field_name: PriceExtractor,
        LocationExtractor.field_name: LocationExtractor,
        CapacityExtractor.field_name: CapacityExtractor,
        FlagExtractor.field_name: FlagExtractor,
    }

    @classmethod
    def get_extractor(cls, field_name: str) -> Type[BaseExtractor]:
        """Return the extractor class for a field family."""
        if field_name in cls._extractors:
            return cls._extractors[field_name]
        raise ValueError(f"No extractor for field '{field_name}'")

    @classmethod
    def get_supported_fields(cls) -> List[str]:
        return list(cls._extractors.keys())

    @classmethod
    def create_all(
        cls,
        settings: Optional[ParserSettings] = None,
        catalog: Optional[TagCatalog] = None,
    ) -> Dict[str, BaseExtractor]:
        return {
            name: extractor_class(settings, catalog)
            for name, extractor_class in cls._extractors.items()
        }
