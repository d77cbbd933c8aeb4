from .assembler import TagAssembler, clean_content, extract_event_data, parse_event_tags

__all__ = ["TagAssembler", "clean_content", "extract_event_data", "parse_event_tags"]
