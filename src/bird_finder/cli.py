"""
Command-line entry point ``bird-finder``.

Commands:
  - birds:    rank the species most likely to be seen near a point
  - hotspots: rank nearby eBird hotspots by quality, distance or name
  - info:     show settings and whether an eBird token is configured

Search choices (radius, sorts, limits, minimum species) are saved between
runs; flags given on the command line override the saved values.
"""

from __future__ import annotations

import argparse
import logging
import sys

import requests

from bird_finder import __version__
from bird_finder.analysis.ranking import (
    BirdSort,
    BirdSortField,
    HotspotSort,
    HotspotSortField,
    SortDirection,
)
from bird_finder.config import get_settings
from bird_finder.flows.search import load_session, save_session, search_birds, search_hotspots
from bird_finder.reference.search import QUALITY_FILTERS, RADIUS_OPTIONS_MILES


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        msg = f"must be a positive integer, got {value}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _add_location_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lat", type=float, default=None, help="Latitude (default: settings)")
    parser.add_argument("--lon", type=float, default=None, help="Longitude (default: settings)")
    parser.add_argument(
        "--radius",
        type=int,
        choices=RADIUS_OPTIONS_MILES,
        default=None,
        help="Search radius in miles (default: last used, else 5)",
    )
    parser.add_argument(
        "--direction",
        choices=[d.value for d in SortDirection],
        default=None,
        help="Sort direction",
    )
    parser.add_argument(
        "--limit",
        type=_positive_int,
        default=None,
        help="Show at most N results (default: last used, else all)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="bird-finder",
        description="Likely birds and the best birding hotspots near you, from eBird",
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

    birds_parser = subparsers.add_parser("birds", help="Rank birds likely to be seen nearby")
    _add_location_args(birds_parser)
    birds_parser.add_argument(
        "--sort",
        choices=[f.value for f in BirdSortField],
        default=None,
        help="Sort field (default: likelihood)",
    )

    hotspots_parser = subparsers.add_parser("hotspots", help="Rank nearby birding hotspots")
    _add_location_args(hotspots_parser)
    hotspots_parser.add_argument(
        "--sort",
        choices=[f.value for f in HotspotSortField],
        default=None,
        help="Sort field (default: quality)",
    )
    hotspots_parser.add_argument(
        "--min-species",
        type=int,
        choices=sorted(QUALITY_FILTERS.values()),
        default=None,
        help=(
            "Minimum all-time species count: "
            + ", ".join(f"{n} ({label})" for label, n in QUALITY_FILTERS.items())
            + " (default: last used, else 0)"
        ),
    )

    subparsers.add_parser("info", help="Show application info")

    return parser


def _origin(args: argparse.Namespace) -> tuple[float, float]:
    settings = get_settings()
    lat = args.lat if args.lat is not None else settings.lat
    lon = args.lon if args.lon is not None else settings.lon
    return lat, lon


def cmd_birds(args: argparse.Namespace) -> int:
    """Handle the 'birds' command."""
    session = load_session()
    if args.radius is not None and args.radius != session.radius_miles:
        session.change_radius(args.radius)
    if args.sort is not None or args.direction is not None:
        session.bird_sort = BirdSort(
            field=args.sort or session.bird_sort.field,
            direction=args.direction or session.bird_sort.direction,
        )
    if args.limit is not None:
        session.bird_limit = args.limit

    lat, lon = _origin(args)
    try:
        result = search_birds(lat, lon, session)
    except requests.RequestException as e:
        print(f"Error: failed to fetch birds: {e}", file=sys.stderr)
        return 1
    # Keep the expanded radius as the user's current radius
    session.radius_miles = result.radius_miles
    save_session(session)

    if not result.birds:
        print(f"No birds found within {result.radius_miles} mi. Try increasing your search radius.")
        return 0

    if result.expanded:
        print(f"Nothing nearby, expanded search to {result.radius_miles} mi.")
    for bird in result.birds:
        record = bird.record
        print(
            f"{bird.likelihood:>3}%  {record.common_name} ({record.scientific_name})"
            f"  last seen {record.observed_at:%Y-%m-%d %H:%M} at {record.location_name}"
        )
    return 0


def cmd_hotspots(args: argparse.Namespace) -> int:
    """Handle the 'hotspots' command."""
    session = load_session()
    if args.radius is not None and args.radius != session.radius_miles:
        session.change_radius(args.radius)
    if args.sort is not None or args.direction is not None:
        field = HotspotSortField(args.sort) if args.sort else session.hotspot_sort.field
        default_direction = (
            SortDirection.ASC
            if field in (HotspotSortField.DISTANCE, HotspotSortField.NAME)
            else SortDirection.DESC
        )
        session.hotspot_sort = HotspotSort(
            field=field,
            direction=args.direction or default_direction,
        )
    if args.min_species is not None:
        session.min_species = args.min_species
    if args.limit is not None:
        session.hotspot_limit = args.limit

    lat, lon = _origin(args)
    try:
        result = search_hotspots(lat, lon, session)
    except requests.RequestException as e:
        print(f"Error: failed to fetch hotspots: {e}", file=sys.stderr)
        return 1
    save_session(session)

    print(f"Top {len(result.hotspots)} hotspots within {result.radius_miles} miles")
    for ranked in result.hotspots:
        tier = ranked.tier.label if ranked.tier else "Unrated"
        species = ranked.hotspot.all_time_species_count
        distance = f"{ranked.distance_display} mi" if ranked.distance_display else "? mi"
        print(f"{distance:>9}  {tier:<11}  {ranked.hotspot.name}  ({species or 0} species)")
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Default location: ({settings.lat}, {settings.lon})")
    print(f"eBird token: {'set' if settings.ebird_api_token else 'missing'}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    settings = get_settings()
    level = logging.DEBUG if args.debug or settings.debug else settings.log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "birds": cmd_birds,
        "hotspots": cmd_hotspots,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
