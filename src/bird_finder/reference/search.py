"""Search radius presets, eBird query limits and hotspot quality presets."""

from __future__ import annotations

# Radius presets offered to the user, in miles. 30 mi is roughly eBird's 50 km cap.
RADIUS_OPTIONS_MILES: tuple[int, ...] = (5, 10, 25, 30)
DEFAULT_RADIUS_MILES: int = 5

# One-time fallback radius when the default search comes back empty.
EXPANDED_RADIUS_MILES: int = 10

# eBird recent-observation query limits.
MAX_RADIUS_KM: float = 50.0
OBS_DAYS_BACK: int = 30
MAX_OBSERVATION_RESULTS: int = 25

# Hotspot minimum-species presets (label -> all-time species threshold).
QUALITY_FILTERS: dict[str, int] = {
    "All": 0,
    "Moderate": 25,
    "Good": 50,
    "Very Good": 100,
    "Excellent": 200,
}