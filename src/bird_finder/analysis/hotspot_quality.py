"""Classify hotspots into quality tiers by all-time species count."""

from __future__ import annotations

from enum import StrEnum


class QualityTier(StrEnum):
    """Hotspot quality, ordered Exceptional > Excellent > Very Good > Good > Moderate."""

    MODERATE = "Moderate"
    GOOD = "Good"
    VERY_GOOD = "Very Good"
    EXCELLENT = "Excellent"
    EXCEPTIONAL = "Exceptional"

    @property
    def label(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        """Sort rank, 5 for Exceptional down to 1 for Moderate."""
        return _TIER_RANKS[self]


_TIER_RANKS: dict[QualityTier, int] = {tier: i + 1 for i, tier in enumerate(QualityTier)}

# (exclusive lower bound, tier), checked best-first
TIER_BREAKPOINTS: tuple[tuple[int, QualityTier], ...] = (
    (200, QualityTier.EXCEPTIONAL),
    (100, QualityTier.EXCELLENT),
    (50, QualityTier.VERY_GOOD),
    (25, QualityTier.GOOD),
)

# Sort rank for hotspots with no species count
NO_TIER_RANK = 0


def classify_hotspot(all_time_species_count: int | None) -> QualityTier | None:
    """Quality tier for a species count, or None when the count is absent."""
    if all_time_species_count is None:
        return None
    for threshold, tier in TIER_BREAKPOINTS:
        if all_time_species_count > threshold:
            return tier
    return QualityTier.MODERATE


def tier_rank(tier: QualityTier | None) -> int:
    return tier.rank if tier is not None else NO_TIER_RANK
