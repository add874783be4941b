#!/usr/bin/env python3
"""Show recent earthquakes from the USGS in the terminal.

Loads settings, fetches the list in the background and prints one row per
earthquake. A row's detail page can be opened in the browser.

Usage:
    # Show the list with saved settings
    python scripts/quake_report.py

    # Override settings for this run
    python scripts/quake_report.py --min-magnitude 4.5 --order-by time

    # Persist the overrides as the new defaults
    python scripts/quake_report.py --min-magnitude 4.5 --save

    # Open the detail page of the 2nd earthquake
    python scripts/quake_report.py --open 2

Environment:
    CONFIG_PATH: Path to settings file (default: config/settings.yaml)
    LOG_LEVEL: Logging level (default: WARNING)
"""

import argparse
import logging
import os
import sys
import webbrowser
from dataclasses import replace

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.core.config import ORDER_BY_CHOICES
from src.core.errors import SettingsError
from src.core.formatter import format_report_lines
from src.orchestrator import Orchestrator, ReportResult
from src.shell.settings_store import load_settings, save_settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser.

    Returns:
        Parser for the quake_report options
    """
    parser = argparse.ArgumentParser(
        description="Show recent earthquakes from the USGS",
    )
    parser.add_argument(
        "--config",
        help="Path to settings YAML file",
    )
    parser.add_argument(
        "--min-magnitude",
        help="Minimum magnitude to show",
    )
    parser.add_argument(
        "--order-by",
        choices=ORDER_BY_CHOICES,
        help="Sort order",
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Maximum number of earthquakes",
    )
    parser.add_argument(
        "--open",
        type=int,
        metavar="N",
        help="Open the detail page of row N in a browser",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save the given settings as the new defaults",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def print_report(result: ReportResult) -> None:
    """Print one row per earthquake, or the empty-state message."""
    if result.empty_state:
        print(result.empty_state)
        return
    for line in format_report_lines(result.earthquakes):
        print(line)


def main(argv: list[str] | None = None) -> int:
    """Load settings, fetch the list in the background and print it.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    log_level = "DEBUG" if args.verbose else os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(levelname)s: %(message)s",
    )

    try:
        settings = load_settings(args.config)
    except SettingsError as e:
        logger.error("%s", e)
        return 2

    overrides = {
        "min_magnitude": args.min_magnitude,
        "order_by": args.order_by,
        "limit": args.limit,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    try:
        orchestrator = Orchestrator(settings)
    except SettingsError as e:
        logger.error("%s", e)
        return 2

    if args.save:
        save_settings(settings, args.config)

    try:
        future = orchestrator.process_async(print_report)
        records = future.result()
    except KeyboardInterrupt:
        logger.warning("Interrupted, cancelling load")
        return 130
    finally:
        orchestrator.close()

    if args.open is not None:
        if not 1 <= args.open <= len(records):
            logger.error("No earthquake at row %d", args.open)
            return 1
        url = records[args.open - 1].detail_url
        logger.info("Opening %s", url)
        webbrowser.open(url)

    return 0


if __name__ == "__main__":
    sys.exit(main())
