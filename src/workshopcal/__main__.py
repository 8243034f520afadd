"""Entry point for running workshopcal as a module.

Usage: python -m workshopcal [list|export] ...
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

import pytz
from dateutil import parser as dateutil_parser

from workshopcal.config.settings import load_config
from workshopcal.core.timezone_utils import ensure_utc
from workshopcal.exceptions.errors import WorkshopCalendarError
from workshopcal.ui.catalog import EventCatalog
from workshopcal.ui.display import format_event_meta
from workshopcal.ui.error_messages import get_user_friendly_error

logger = logging.getLogger("workshopcal")


def parse_now(value: str) -> datetime:
    """Parse the --now option (ISO 8601; naive values are UTC)."""
    try:
        return ensure_utc(dateutil_parser.isoparse(value))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid timestamp: '{value}'. Expected ISO 8601, e.g. 2026-10-21T09:00:00Z."
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workshopcal",
        description="Generate the recurring workshop programme and export it as iCalendar files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m workshopcal list
  python -m workshopcal export --output-dir dist/ics
  python -m workshopcal --now 2026-10-21T09:00:00Z export --combined workshops.ics
        """
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Optional .env file with WORKSHOPS_* settings"
    )
    parser.add_argument(
        "--now",
        type=parse_now,
        default=None,
        help="Reference time for generation (ISO 8601). Default: current UTC time"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="Print the generated programme")

    export = subparsers.add_parser("export", help="Write .ics files")
    export.add_argument(
        "--id",
        dest="event_id",
        default=None,
        help="Export only this workshop (e.g. ws-1)"
    )
    export.add_argument(
        "-o", "--output-dir",
        default=".",
        help="Directory for per-workshop .ics files (default: current directory)"
    )
    export.add_argument(
        "--combined",
        default=None,
        help="Write every workshop into this single .ics file instead"
    )
    return parser


def run_list(catalog: EventCatalog) -> None:
    for event in catalog.values():
        meta = format_event_meta(event, catalog.tz, include_location=True)
        print(f"{event.id:>6}  {event.title}")
        print(f"        {meta} • {event.price_label} • {event.capacity} places")


def run_export(catalog: EventCatalog, args: argparse.Namespace, stamp: datetime) -> None:
    if args.combined:
        output_path = Path(args.combined)
        if output_path.suffix.lower() != ".ics":
            output_path = output_path.with_name(output_path.name + ".ics")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(catalog.export_all(stamp=stamp).encode("utf-8"))
        print(f"Saved {len(catalog)} workshop(s) to: {output_path}")
        return

    ids = [args.event_id] if args.event_id else list(catalog)
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    for event_id in ids:
        download = catalog.download(event_id, stamp=stamp)
        path = output_dir / download.filename
        path.write_bytes(download.content)
        logger.debug("Wrote %s", path)
        print(f"Saved {event_id} to: {path}")


def main(argv=None) -> int:
    """Main entry point for the command-line interface."""
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    now = args.now or datetime.now(pytz.utc)

    try:
        config = load_config(env_file=args.env_file)
        catalog = EventCatalog.from_config(config, now)
        if catalog.timezone_warning:
            print(f"Warning: {catalog.timezone_warning}", file=sys.stderr)

        if args.command == "list":
            run_list(catalog)
        else:
            run_export(catalog, args, stamp=now)
    except WorkshopCalendarError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {get_user_friendly_error(e)}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Could not write calendar file: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
