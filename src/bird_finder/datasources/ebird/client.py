"""eBird API 2.0 client constants and request helper.

API docs: https://documenter.getpostman.com/view/664302/S1ENwy59

Every request needs an API token (``BIRD_FINDER_EBIRD_API_TOKEN``), sent
in the ``X-eBirdApiToken`` header. Distances are kilometres, capped at 50
for the recent-observation endpoints.
"""

from __future__ import annotations

import logging
from typing import Any

from bird_finder.config import get_settings
from bird_finder.reference.geography import KM_PER_MILE
from bird_finder.reference.search import MAX_RADIUS_KM
from bird_finder.services.http import session

logger = logging.getLogger(__name__)

EBIRD_API = "https://api.ebird.org/v2"
RECENT_OBSERVATIONS_GEO = f"{EBIRD_API}/data/obs/geo/recent"
HOTSPOTS_GEO = f"{EBIRD_API}/ref/hotspot/geo"

TOKEN_HEADER = "X-eBirdApiToken"


def miles_to_km(miles: float) -> float:
    """Convert a search radius to kilometres, clamped to the API's 50 km limit."""
    return min(miles * KM_PER_MILE, MAX_RADIUS_KM)


def get_json(url: str, params: dict[str, Any]) -> Any:
    """GET an eBird endpoint and return the decoded JSON body.

    Raises:
        requests.HTTPError: On a non-2xx response after retries.
    """
    headers = {TOKEN_HEADER: get_settings().ebird_api_token}
    logger.debug("GET %s %s", url, params)
    resp = session.get(url, params=params, headers=headers)
    resp.raise_for_status()
    return resp.json()
