"""Recent nearby bird observations from eBird."""

from __future__ import annotations

import logging
from typing import Any

from bird_finder.datasources.ebird import client
from bird_finder.reference.search import MAX_OBSERVATION_RESULTS, OBS_DAYS_BACK
from bird_finder.schemas import ObservationRecord

logger = logging.getLogger(__name__)

# =============================================================================
# Parsing
# =============================================================================


def parse_observations(raw: list[dict[str, Any]]) -> list[ObservationRecord]:
    """Parse an eBird observation list, skipping unusable rows."""
    records: list[ObservationRecord] = []
    for obs in raw:
        try:
            records.append(ObservationRecord.from_api(obs))
        except ValueError as e:
            logger.debug("Skipping unparseable observation: %s", e)
    return records


# =============================================================================
# API Fetching
# =============================================================================


def fetch_recent_observations(
    lat: float,
    lon: float,
    radius_miles: float,
    *,
    back_days: int = OBS_DAYS_BACK,
    max_results: int = MAX_OBSERVATION_RESULTS,
) -> list[ObservationRecord]:
    """
    Fetch recent bird observations around a point.

    Args:
        lat: Search latitude.
        lon: Search longitude.
        radius_miles: Search radius (clamped to 50 km).
        back_days: How many days back to look (eBird max 30).
        max_results: Maximum observations returned by eBird.

    Returns:
        Parsed ``ObservationRecord`` list, in API order.
    """
    params: dict[str, Any] = {
        "lat": lat,
        "lng": lon,
        "dist": client.miles_to_km(radius_miles),
        "back": back_days,
        "hotspot": "false",
        "maxResults": max_results,
    }
    raw = client.get_json(client.RECENT_OBSERVATIONS_GEO, params)
    return parse_observations(raw or [])
