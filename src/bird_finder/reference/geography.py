"""Geographic constants."""

from __future__ import annotations

# Mean Earth radius used by the haversine distance.
EARTH_RADIUS_MILES: float = 3958.8

# eBird API distances are kilometres.
KM_PER_MILE: float = 1.60934
