"""Great-circle distance between two coordinates, in miles."""

from __future__ import annotations

import math

from bird_finder.reference.geography import EARTH_RADIUS_MILES


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in miles between two points given in degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def _missing(value: float | None) -> bool:
    # A literal 0 counts as missing, so points on the equator or the prime
    # meridian have no distance. Hotspot ordering depends on this.
    return not value or not math.isfinite(value)


def distance_miles(
    lat1: float | None,
    lon1: float | None,
    lat2: float | None,
    lon2: float | None,
) -> float | None:
    """
    Unrounded distance in miles, or None when any coordinate is missing.

    Use this value for comparisons; round only for display with
    ``format_distance``.
    """
    if _missing(lat1) or _missing(lon1) or _missing(lat2) or _missing(lon2):
        return None
    return haversine_miles(lat1, lon1, lat2, lon2)  # type: ignore[arg-type]


def format_distance(miles: float | None) -> str | None:
    """One-decimal display string (``"3.2"``), or None for unknown."""
    if miles is None:
        return None
    return f"{miles:.1f}"
