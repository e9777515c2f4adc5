"""
Command-line interface for keli.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from keli import __version__
from keli.config import get_settings
from keli.places import load_places
from keli.renderers import render_json, render_text
from keli.server import serve
from keli.service import CityNotFoundError, get_default_service


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="keli",
        description="Weather for Finnish cities, aggregated from several sources",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'weather' command - one lookup, printed to stdout
    weather_parser = subparsers.add_parser("weather", help="Show weather for a city")
    weather_parser.add_argument("city", type=str, help="City name, e.g. Hyvinkää")
    weather_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    subparsers.add_parser("places", help="List known place names")
    subparsers.add_parser("info", help="Show application info")

    # 'serve' command - HTTP API and pages
    serve_parser = subparsers.add_parser("serve", help="Serve the weather API and pages")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def cmd_weather(args: argparse.Namespace) -> int:
    """Handle the 'weather' command."""
    try:
        record = get_default_service().get_weather_data(args.city)
    except CityNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(render_json(record))
    else:
        print(render_text(record), end="")
    return 0


def cmd_places(_args: argparse.Namespace) -> int:
    """Handle the 'places' command."""
    settings = get_settings()
    try:
        places = load_places(settings.places_file)
    except OSError as exc:
        print(f"Error: cannot read {settings.places_file}: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(places, ensure_ascii=False, indent=2))
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Cache TTL: {settings.cache_ttl_seconds:g}s")
    print(f"Request timeout: {settings.request_timeout:g}s")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command."""
    settings = get_settings()
    serve(get_default_service(), settings, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    debug = args.debug or get_settings().debug
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "weather": cmd_weather,
        "places": cmd_places,
        "info": cmd_info,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
