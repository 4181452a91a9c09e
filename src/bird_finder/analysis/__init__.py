"""Observation scoring and result ranking.

Pure, synchronous functions over the schema models. This is the domain
logic layer: every search recomputes these from a fresh input batch.

Dependency rule: analysis/ imports from ``schemas`` and ``reference`` only.
It never fetches data or touches the store.

Modules:
  - distance: haversine miles between coordinates (None when unknown)
  - aggregate: observation records -> records per species
  - likelihood: records per species -> ScoredSpecies (0-99)
  - hotspot_quality: all-time species count -> QualityTier
  - ranking: filter -> sort -> limit for birds and hotspots
  - expansion: SearchSession + one-shot RadiusExpansionPolicy

Adding an analysis module
-------------------------
1. Create ``analysis/{name}.py`` with pure functions taking schema models.
2. No I/O, no HTTP, no Prefect decorators.
3. Wire it into ``flows/search.py`` and add ``tests/test_{name}.py``.
"""

from bird_finder.analysis.distance import distance_miles, format_distance, haversine_miles
from bird_finder.analysis.expansion import ExpansionState, RadiusExpansionPolicy, SearchSession
from bird_finder.analysis.hotspot_quality import QualityTier, classify_hotspot
from bird_finder.analysis.likelihood import ScoredSpecies, score_observations, score_species
from bird_finder.analysis.ranking import (
    BirdSort,
    BirdSortField,
    HotspotSort,
    HotspotSortField,
    RankedHotspot,
    SortDirection,
    rank_birds,
    rank_hotspots,
)

__all__ = [
    "BirdSort",
    "BirdSortField",
    "ExpansionState",
    "HotspotSort",
    "HotspotSortField",
    "QualityTier",
    "RadiusExpansionPolicy",
    "RankedHotspot",
    "ScoredSpecies",
    "SearchSession",
    "SortDirection",
    "classify_hotspot",
    "distance_miles",
    "format_distance",
    "haversine_miles",
    "rank_birds",
    "rank_hotspots",
    "score_observations",
    "score_species",
]
