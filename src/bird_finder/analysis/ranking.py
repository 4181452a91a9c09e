"""Filter -> sort -> limit for scored birds and for hotspots.

Both pipelines are full recomputations: call them again whenever the input
batch or any sort/filter/limit parameter changes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from bird_finder.analysis.distance import distance_miles, format_distance
from bird_finder.analysis.hotspot_quality import QualityTier, classify_hotspot, tier_rank

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from bird_finder.analysis.likelihood import ScoredSpecies
    from bird_finder.schemas import Hotspot

# =============================================================================
# Sort criteria
# =============================================================================


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class BirdSortField(StrEnum):
    LIKELIHOOD = "likelihood"
    NAME = "name"
    DATE = "date"


class HotspotSortField(StrEnum):
    QUALITY = "quality"
    DISTANCE = "distance"
    NAME = "name"


class BirdSort(BaseModel):
    """Active sort for bird results. Default: most likely first."""

    model_config = {"frozen": True}

    field: BirdSortField = BirdSortField.LIKELIHOOD
    direction: SortDirection = SortDirection.DESC


class HotspotSort(BaseModel):
    """Active sort for hotspot results. Default: best quality first."""

    model_config = {"frozen": True}

    field: HotspotSortField = HotspotSortField.QUALITY
    direction: SortDirection = SortDirection.DESC


# =============================================================================
# Hotspot result model
# =============================================================================


@dataclass(frozen=True)
class RankedHotspot:
    """A hotspot with its quality tier and distance from the search origin."""

    hotspot: Hotspot
    tier: QualityTier | None
    distance: float | None  # miles, unrounded; None when unknown

    @property
    def distance_display(self) -> str | None:
        return format_distance(self.distance)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.hotspot.model_dump(mode="json"),
            "tier": self.tier.label if self.tier else None,
            "distance_miles": self.distance_display,
        }


# =============================================================================
# Pipelines
# =============================================================================


def _apply_limit(items: list[Any], limit: int | None) -> list[Any]:
    if limit is None:
        return items
    if limit < 1:
        msg = f"limit must be a positive integer or None, got {limit}"
        raise ValueError(msg)
    return items[:limit]


_BIRD_KEYS: dict[BirdSortField, Callable[[ScoredSpecies], Any]] = {
    BirdSortField.LIKELIHOOD: lambda s: s.likelihood,
    BirdSortField.NAME: lambda s: s.record.common_name,
    BirdSortField.DATE: lambda s: s.record.observed_at,
}


def rank_birds(
    scored: Iterable[ScoredSpecies],
    sort: BirdSort | None = None,
    limit: int | None = None,
) -> list[ScoredSpecies]:
    """
    Sort scored species by one criterion and truncate.

    Args:
        scored: Output of ``score_observations``.
        sort: Field and direction (default likelihood, descending).
        limit: Keep the first N after sorting; None keeps all.

    Returns:
        New list; equal keys keep their input order.
    """
    sort = sort or BirdSort()
    ranked = sorted(
        scored,
        key=_BIRD_KEYS[sort.field],
        reverse=sort.direction is SortDirection.DESC,
    )
    return _apply_limit(ranked, limit)


def _hotspot_key(field: HotspotSortField) -> Callable[[RankedHotspot], Any]:
    if field is HotspotSortField.QUALITY:
        return lambda r: tier_rank(r.tier)
    if field is HotspotSortField.DISTANCE:
        # Unknown distance always lands at the far end
        return lambda r: r.distance if r.distance is not None else math.inf
    return lambda r: r.hotspot.name


def rank_hotspots(
    hotspots: Iterable[Hotspot],
    origin: tuple[float, float],
    sort: HotspotSort | None = None,
    limit: int | None = None,
    min_species: int = 0,
) -> list[RankedHotspot]:
    """
    Filter hotspots by all-time species count, sort, and truncate.

    Args:
        hotspots: Raw hotspots for the search area.
        origin: (latitude, longitude) of the search, for distances.
        sort: Field and direction (default quality, best first).
        limit: Keep the first N after sorting; None keeps all.
        min_species: Minimum all-time species (absent counts as 0). 0 keeps all.

    Returns:
        ``RankedHotspot`` list in display order.
    """
    sort = sort or HotspotSort()
    origin_lat, origin_lon = origin

    candidates = [
        RankedHotspot(
            hotspot=h,
            tier=classify_hotspot(h.all_time_species_count),
            distance=distance_miles(origin_lat, origin_lon, h.latitude, h.longitude),
        )
        for h in hotspots
        if (h.all_time_species_count or 0) >= min_species
    ]
    ranked = sorted(
        candidates,
        key=_hotspot_key(sort.field),
        reverse=sort.direction is SortDirection.DESC,
    )
    return _apply_limit(ranked, limit)
