"""
Prefect flows for bird and hotspot searches.

Each search fetches a fresh batch from eBird, runs it through the pure
analysis pipeline and writes the ranked result to the store.

Run locally:
    python -m bird_finder.flows.search

Run with Prefect dashboard:
    prefect server start &
    python -m bird_finder.flows.search
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from prefect import flow, get_run_logger, task
from pydantic import ValidationError

from bird_finder.analysis.expansion import RadiusExpansionPolicy, SearchSession
from bird_finder.analysis.likelihood import ScoredSpecies, score_observations
from bird_finder.analysis.ranking import RankedHotspot, rank_birds, rank_hotspots
from bird_finder.config import get_settings
from bird_finder.datasources import ebird
from bird_finder.schemas import Hotspot, ObservationRecord  # noqa: TC001
from bird_finder.store import BIRDS_PATH, HOTSPOTS_PATH, SESSION_PATH, DataStore

store = DataStore(get_settings().data_dir)


# =============================================================================
# Results
# =============================================================================


@dataclass
class BirdSearchResult:
    """Ranked birds for one search, plus the radius actually used."""

    radius_miles: float
    expanded: bool
    birds: list[ScoredSpecies] = field(default_factory=list)


@dataclass
class HotspotSearchResult:
    """Ranked hotspots for one search."""

    radius_miles: float
    hotspots: list[RankedHotspot] = field(default_factory=list)


# =============================================================================
# Session persistence
# =============================================================================


def load_session(data_store: DataStore | None = None) -> SearchSession:
    """Restore saved search preferences, or defaults if none/unreadable."""
    data = (data_store or store).read(SESSION_PATH)
    if not data:
        return SearchSession()
    try:
        return SearchSession.model_validate(data)
    except ValidationError:
        return SearchSession()


def save_session(session: SearchSession, data_store: DataStore | None = None) -> Path:
    """Persist the session's preferences (not its expansion flag)."""
    return (data_store or store).write(SESSION_PATH, session.preferences(), source="bird-finder")


# =============================================================================
# Tasks
# =============================================================================


@task(name="fetch-observations", retries=2, retry_delay_seconds=5)
def fetch_observations(lat: float, lon: float, radius_miles: float) -> list[ObservationRecord]:
    """Fetch recent eBird observations around a point."""
    return ebird.fetch_recent_observations(lat, lon, radius_miles)


@task(name="fetch-hotspots", retries=2, retry_delay_seconds=5)
def fetch_hotspots(lat: float, lon: float, radius_miles: float) -> list[Hotspot]:
    """Fetch eBird hotspots around a point."""
    return ebird.fetch_hotspots(lat, lon, radius_miles)


@task(name="save-birds")
def save_birds(
    birds: list[ScoredSpecies], lat: float, lon: float, radius_miles: float, expanded: bool
) -> Path:
    """Save ranked birds via store."""
    return store.write(
        BIRDS_PATH,
        [b.to_dict() for b in birds],
        source="ebird.org",
        origin={"lat": lat, "lon": lon},
        radius_miles=radius_miles,
        expanded=expanded,
    )


@task(name="save-hotspots")
def save_hotspots(
    hotspots: list[RankedHotspot], lat: float, lon: float, radius_miles: float
) -> Path:
    """Save ranked hotspots via store."""
    return store.write(
        HOTSPOTS_PATH,
        [h.to_dict() for h in hotspots],
        source="ebird.org",
        origin={"lat": lat, "lon": lon},
        radius_miles=radius_miles,
    )


# =============================================================================
# Flows
# =============================================================================


@flow(name="search-birds", log_prints=True, validate_parameters=False)
def search_birds(
    lat: float,
    lon: float,
    session: SearchSession | None = None,
    now: datetime | None = None,
    policy: RadiusExpansionPolicy | None = None,
) -> BirdSearchResult:
    """
    Find and rank the birds most likely to be seen near a point.

    An empty search at the default radius is retried once at the expanded
    radius; ``session.expanded`` records that the retry was used.

    Args:
        lat: Search latitude.
        lon: Search longitude.
        session: Caller-owned search choices. Mutated on expansion.
        now: Reference time for recency scoring (default: now).
        policy: Expansion rule (default: 5 mi widened once to 10 mi).
    """
    logger = get_run_logger()
    session = session if session is not None else SearchSession()
    now = now or datetime.now()
    policy = policy or RadiusExpansionPolicy()

    radius = session.radius_miles
    print(f"Fetching eBird observations within {radius} mi of ({lat}, {lon})...")
    scored = score_observations(fetch_observations(lat, lon, radius), now=now)

    if policy.should_expand(session, radius, len(scored)):
        radius = policy.expand(session)
        print(f"No birds found, expanding search to {radius} mi...")
        scored = score_observations(fetch_observations(lat, lon, radius), now=now)

    ranked = rank_birds(scored, session.bird_sort, session.bird_limit)
    output_path = save_birds(ranked, lat, lon, radius, session.expanded)
    logger.info("Saved %d ranked species to %s", len(ranked), output_path)

    return BirdSearchResult(radius_miles=radius, expanded=session.expanded, birds=ranked)


@flow(name="search-hotspots", log_prints=True, validate_parameters=False)
def search_hotspots(
    lat: float,
    lon: float,
    session: SearchSession | None = None,
) -> HotspotSearchResult:
    """
    Find and rank birding hotspots near a point.

    Applies the session's minimum-species filter, hotspot sort and limit.
    Never expands the radius.
    """
    logger = get_run_logger()
    session = session if session is not None else SearchSession()
    radius = session.radius_miles

    print(f"Fetching eBird hotspots within {radius} mi of ({lat}, {lon})...")
    hotspots = fetch_hotspots(lat, lon, radius)
    ranked = rank_hotspots(
        hotspots,
        origin=(lat, lon),
        sort=session.hotspot_sort,
        limit=session.hotspot_limit,
        min_species=session.min_species,
    )
    output_path = save_hotspots(ranked, lat, lon, radius)
    logger.info("Saved %d of %d hotspots to %s", len(ranked), len(hotspots), output_path)

    return HotspotSearchResult(radius_miles=radius, hotspots=ranked)


def summarize(result: BirdSearchResult) -> dict[str, Any]:
    """Small dict summary for logs and ``__main__``."""
    return {
        "radius_miles": result.radius_miles,
        "expanded": result.expanded,
        "species": len(result.birds),
        "top": [(b.common_name, b.likelihood) for b in result.birds[:5]],
    }


if __name__ == "__main__":
    settings = get_settings()
    outcome = search_birds(settings.lat, settings.lon, load_session())
    print(f"Flow complete: {summarize(outcome)}")
