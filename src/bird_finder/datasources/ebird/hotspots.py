"""Birding hotspots near a point, from eBird."""

from __future__ import annotations

import logging
from typing import Any

from bird_finder.datasources.ebird import client
from bird_finder.schemas import Hotspot

logger = logging.getLogger(__name__)


def parse_hotspots(raw: list[dict[str, Any]]) -> list[Hotspot]:
    hotspots: list[Hotspot] = []
    for item in raw:
        try:
            hotspots.append(Hotspot.from_api(item))
        except ValueError as e:
            logger.debug("Skipping unparseable hotspot: %s", e)
    return hotspots


def fetch_hotspots(lat: float, lon: float, radius_miles: float) -> list[Hotspot]:
    """
    Fetch hotspots within a radius of a point.

    Args:
        lat: Search latitude.
        lon: Search longitude.
        radius_miles: Search radius (clamped to 50 km).

    Returns:
        Parsed ``Hotspot`` list, unranked.
    """
    params: dict[str, Any] = {
        "lat": lat,
        "lng": lon,
        "dist": client.miles_to_km(radius_miles),
        "fmt": "json",
    }
    raw = client.get_json(client.HOTSPOTS_GEO, params)
    return parse_hotspots(raw or [])
