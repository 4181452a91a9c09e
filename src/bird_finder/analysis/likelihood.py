"""Score how likely each species in a batch is to be seen.

Turns a batch of raw eBird observations into one ``ScoredSpecies`` per
species. The likelihood (0-99) is a weighted sum of four bounded
subscores, so no single noisy signal dominates:

  - frequency   (0-50): records for this species vs the most-reported species
  - recency     (0-30): exponentially decayed age, most recent sightings weighted most
  - volume      (0-20): total birds counted, saturating at 70% of the batch max
  - consistency (0-10): sightings spread over several days rather than one

Normalization constants (``max_sighting_count``, ``max_volume``) are computed
once across the whole batch. Pass ``now`` explicitly to make scores
reproducible; it may be naive (local) or timezone-aware.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from bird_finder.analysis.aggregate import group_by_species
from bird_finder.schemas import Exact, Uncounted, to_naive_local

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from bird_finder.schemas import BirdCount, ObservationRecord

logger = logging.getLogger(__name__)

FREQUENCY_POINTS = 50.0
RECENCY_POINTS = 30.0
VOLUME_POINTS = 20.0
CONSISTENCY_POINTS = 10.0

# exp(-0.1 * days): ~1.0 today, ~0.05 at 30 days
RECENCY_DECAY_PER_DAY = 0.1
# Weight of the i-th most recent sighting is 0.8 ** i
RECENCY_WEIGHT_RATIO = 0.8
# Volume saturates at this fraction of the batch maximum
VOLUME_SATURATION = 0.7
CONSISTENCY_POINTS_PER_DAILY_SIGHTING = 5.0

# Birds assumed for an "X" (present, not counted) report, and for a missing count
UNCOUNTED_VOLUME = 25
UNKNOWN_VOLUME = 1

MAX_LIKELIHOOD = 99

SECONDS_PER_DAY = 86_400


# =============================================================================
# Data Model
# =============================================================================


@dataclass(frozen=True)
class ScoredSpecies:
    """A species' representative record with its computed likelihood."""

    record: ObservationRecord
    likelihood: int

    @property
    def species_id(self) -> str:
        return self.record.species_id

    @property
    def common_name(self) -> str:
        return self.record.common_name

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict of the representative record plus likelihood."""
        return {**self.record.model_dump(mode="json"), "likelihood": self.likelihood}


@dataclass(frozen=True)
class BatchNorms:
    """Normalization constants shared by every species in one batch."""

    max_sighting_count: int
    max_volume: int


# =============================================================================
# Subscores
# =============================================================================


def record_volume(count: BirdCount) -> int:
    """Number of birds a single record contributes to the volume subscore."""
    if isinstance(count, Exact):
        return count.n
    if isinstance(count, Uncounted):
        return UNCOUNTED_VOLUME
    return UNKNOWN_VOLUME


def species_volume(records: Iterable[ObservationRecord]) -> int:
    """Total birds across a species' records."""
    return sum(record_volume(r.count) for r in records)


def batch_norms(groups: dict[str, list[ObservationRecord]]) -> BatchNorms:
    """Largest record count and largest total volume of any species."""
    max_sightings = 0
    max_volume = 0
    for records in groups.values():
        max_sightings = max(max_sightings, len(records))
        max_volume = max(max_volume, species_volume(records))
    return BatchNorms(max_sighting_count=max_sightings, max_volume=max_volume)


def frequency_score(sighting_count: int, max_sighting_count: int) -> float:
    if max_sighting_count <= 0:
        return 0.0
    return (sighting_count / max_sighting_count) * FREQUENCY_POINTS


def _days_between(later: datetime, earlier: datetime) -> float:
    # Aware and naive stamps are compared as naive local time
    return (to_naive_local(later) - to_naive_local(earlier)).total_seconds() / SECONDS_PER_DAY


def recency_score(records: Sequence[ObservationRecord], now: datetime) -> float:
    """Weighted average of per-record decay values, times 30.

    Future-dated records (clock skew) count as observed ``now``.
    """
    if not records:
        return 0.0

    decays = sorted(
        (min(1.0, math.exp(-RECENCY_DECAY_PER_DAY * _days_between(now, r.observed_at)))
         for r in records),
        reverse=True,
    )
    weighted_sum = 0.0
    weight_sum = 0.0
    for index, decay in enumerate(decays):
        weight = RECENCY_WEIGHT_RATIO**index
        weighted_sum += decay * weight
        weight_sum += weight

    return (weighted_sum / weight_sum) * RECENCY_POINTS


def volume_score(total_volume: int, max_volume: int) -> float:
    if max_volume <= 0:
        return 0.0
    return min(1.0, total_volume / (max_volume * VOLUME_SATURATION)) * VOLUME_POINTS


def consistency_score(records: Sequence[ObservationRecord]) -> float:
    """Reward sightings spread over time; zero for a single record or a single instant."""
    if len(records) <= 1:
        return 0.0

    timestamps = sorted(r.observed_at for r in records)
    date_range_days = _days_between(timestamps[-1], timestamps[0])
    if date_range_days <= 0:
        return 0.0

    sightings_per_day = len(records) / date_range_days
    return min(CONSISTENCY_POINTS, sightings_per_day * CONSISTENCY_POINTS_PER_DAILY_SIGHTING)


# =============================================================================
# Scoring
# =============================================================================


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def score_species(
    records: Sequence[ObservationRecord],
    max_sighting_count: int,
    max_volume: int,
    now: datetime,
) -> int:
    """
    Likelihood (0-99) for one species' records.

    Args:
        records: All records for one species.
        max_sighting_count: Most records belonging to any species in the batch.
        max_volume: Largest total bird count of any species in the batch.
        now: Reference time for the recency subscore.

    Returns:
        Rounded sum of the four subscores, capped at 99.
    """
    total = (
        frequency_score(len(records), max_sighting_count)
        + recency_score(records, now)
        + volume_score(species_volume(records), max_volume)
        + consistency_score(records)
    )
    return max(0, min(MAX_LIKELIHOOD, _round_half_up(total)))


def score_observations(
    records: Iterable[ObservationRecord],
    now: datetime | None = None,
) -> list[ScoredSpecies]:
    """
    Score every species in a batch.

    The first record seen for each species is kept as its representative.
    Returns one ``ScoredSpecies`` per species, most likely first, or an
    empty list for an empty batch.
    """
    now = now or datetime.now()
    groups = group_by_species(records)
    norms = batch_norms(groups)
    if norms.max_sighting_count == 0 or norms.max_volume == 0:
        return []

    scored = [
        ScoredSpecies(
            record=species_records[0],
            likelihood=score_species(
                species_records, norms.max_sighting_count, norms.max_volume, now
            ),
        )
        for species_records in groups.values()
    ]
    logger.debug(
        "Scored %d species (max sightings=%d, max volume=%d)",
        len(scored),
        norms.max_sighting_count,
        norms.max_volume,
    )
    return sorted(scored, key=lambda s: s.likelihood, reverse=True)
