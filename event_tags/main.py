"""Main entry point for the event-tags CLI."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config.loader import (
    ConfigValidationError,
    FeedValidationError,
    load_feed_event,
    load_tag_catalog,
    parse_feed_event,
)
from .config.settings import get_configuration_summary, get_settings
from .models import ExtractedEventData
from .normalizer import TagAssembler


def format_extracted_output(data: ExtractedEventData) -> str:
    """Format an extracted event for display."""
    tags = data.parsed_tags
    output = [f"📌 {data.title}"]

    if not tags.should_publish:
        output.append("🚫 Not published on the site")
    if tags.event_type:
        output.append(f"🏷️  Type: {tags.event_type.value}")
    if tags.is_all_clubs:
        output.append("🏠 Clubs: all")
    elif tags.club_slugs:
        output.append(f"🏠 Clubs: {', '.join(tags.club_slugs)}")

    output.append("")
    output.append(f"📅 {len(tags.sessions)} session(s):")
    for session in tags.sessions:
        time_str = session.start_time.strftime("%H:%M")
        if session.end_time:
            time_str += f" - {session.end_time.strftime('%H:%M')}"
        output.append(f"  • {session.date.strftime('%A %d/%m/%Y')} {time_str}")

    if tags.is_free:
        output.append("💶 Free")
    for price in tags.prices:
        label = f"{price.label}: " if price.label else ""
        output.append(f"💶 {label}{price.format_amount()}")

    if data.location:
        output.append(f"📍 {data.location}")
    output.append(
        f"👥 Capacity: {tags.max_capacity if tags.max_capacity is not None else 'unlimited'}"
    )

    if data.description:
        output.append("")
        output.append(data.description)

    if tags.warnings:
        output.append("")
        output.append("⚠️  Warnings:")
        for warning in tags.warnings:
            output.append(f"  • {warning}")

    return "\n".join(output)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Extract structured metadata from a tagged feed event"
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument(
        "event", help='Path to a feed event JSON file, or "-" to read stdin'
    )
    parser.add_argument(
        "--catalog", "-c", help="Path to a tag catalog JSON file (default: built-in)"
    )
    parser.add_argument(
        "--json", "-j", action="store_true", help="Print the result as JSON"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        settings = get_settings()
        if args.verbose:
            logging.getLogger(__name__).debug(
                f"Configuration: {get_configuration_summary(settings)}"
            )
        catalog = load_tag_catalog(args.catalog) if args.catalog else None
        if args.event == "-":
            feed_event = parse_feed_event(json.load(sys.stdin))
        else:
            feed_event = load_feed_event(args.event)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        print(f"❌ Cannot read input: {e}", file=sys.stderr)
        return 1
    except (ConfigValidationError, FeedValidationError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    data = TagAssembler(settings=settings, catalog=catalog).extract_event_data(feed_event)

    if args.json:
        print(json.dumps(data.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(format_extracted_output(data))

    return 2 if data.parsed_tags.warnings else 0


if __name__ == "__main__":
    sys.exit(main())
