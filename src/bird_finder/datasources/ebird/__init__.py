"""eBird observation and hotspot data source.

Public API:
  - client: API URLs, token header, radius conversion, request helper
  - observations: fetch_recent_observations, parse_observations
  - hotspots: fetch_hotspots, parse_hotspots

Row-level parsing lives on the models (``ObservationRecord.from_api``,
``Hotspot.from_api``).
"""

from bird_finder.datasources.ebird.client import EBIRD_API, miles_to_km
from bird_finder.datasources.ebird.hotspots import fetch_hotspots, parse_hotspots
from bird_finder.datasources.ebird.observations import (
    fetch_recent_observations,
    parse_observations,
)

__all__ = [
    "EBIRD_API",
    "fetch_hotspots",
    "fetch_recent_observations",
    "miles_to_km",
    "parse_hotspots",
    "parse_observations",
]
