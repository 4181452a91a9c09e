"""
Domain models for bird finder.

Pydantic models for the records that arrive from eBird. These define the
canonical schema - ``from_api`` turns raw eBird rows into these, and the
analysis layer only ever sees these types.

All timestamps are naive local time, which is how eBird reports ``obsDt``.
Timezone-aware values are converted on the way in.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator

# eBird's howMany for "present, not counted"
UNCOUNTED_MARKER = "X"

# =============================================================================
# Bird counts
# =============================================================================


class Exact(BaseModel):
    """An observer-estimated number of individuals."""

    model_config = {"frozen": True}

    kind: Literal["exact"] = "exact"
    n: int = Field(..., gt=0)


class Uncounted(BaseModel):
    """Species present, count not estimated (eBird's ``"X"``)."""

    model_config = {"frozen": True}

    kind: Literal["uncounted"] = "uncounted"


class Unknown(BaseModel):
    """Count missing or unreadable."""

    model_config = {"frozen": True}

    kind: Literal["unknown"] = "unknown"


BirdCount = Annotated[Exact | Uncounted | Unknown, Field(discriminator="kind")]


# =============================================================================
# Field parsing
# =============================================================================


def to_naive_local(value: datetime) -> datetime:
    """Drop tzinfo after converting an aware datetime to local time."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_count(raw: Any) -> BirdCount:
    """Map eBird's ``howMany`` to ``Exact``, ``Uncounted`` or ``Unknown``."""
    if raw is None or isinstance(raw, bool):
        return Unknown()
    if isinstance(raw, str):
        text = raw.strip()
        if text.upper() == UNCOUNTED_MARKER:
            return Uncounted()
        try:
            raw = int(text)
        except ValueError:
            return Unknown()
    if isinstance(raw, float):
        if not raw.is_integer():
            return Unknown()
        raw = int(raw)
    if isinstance(raw, int) and raw > 0:
        return Exact(n=raw)
    return Unknown()


def parse_coordinate(raw: Any) -> float | None:
    """Float coordinate, or None when missing or non-numeric."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def parse_species_count(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def parse_timestamp(raw: Any) -> datetime | None:
    """Parse eBird's ``"YYYY-MM-DD HH:MM"`` or ``"YYYY-MM-DD"``."""
    if not raw:
        return None
    try:
        return to_naive_local(datetime.fromisoformat(str(raw).strip()))
    except ValueError:
        return None


# =============================================================================
# Observations
# =============================================================================


class ObservationRecord(BaseModel):
    """One reported sighting of a species at a place and time."""

    model_config = {"frozen": True, "str_strip_whitespace": True}

    species_id: str = Field(..., description="eBird species code, shared by many records")
    common_name: str
    scientific_name: str
    location_id: str
    location_name: str
    observed_at: datetime
    count: BirdCount = Field(default_factory=Unknown)
    latitude: float | None = None
    longitude: float | None = None

    # Pass-through flags, never used for scoring
    valid: bool = True
    reviewed: bool = False
    location_private: bool = False

    @field_validator("observed_at")
    @classmethod
    def _naive_observed_at(cls, value: datetime) -> datetime:
        return to_naive_local(value)

    @classmethod
    def from_api(cls, obs: dict[str, Any]) -> ObservationRecord:
        """
        Build a record from one eBird observation row.

        Raises:
            ValueError: If the row has no species code or no readable date.
        """
        species_id = obs.get("speciesCode")
        observed_at = parse_timestamp(obs.get("obsDt"))
        if not species_id or observed_at is None:
            msg = f"observation needs speciesCode and obsDt: {obs!r}"
            raise ValueError(msg)

        return cls(
            species_id=species_id,
            common_name=obs.get("comName") or species_id,
            scientific_name=obs.get("sciName") or "",
            location_id=obs.get("locId") or "",
            location_name=obs.get("locName") or "",
            observed_at=observed_at,
            count=parse_count(obs.get("howMany")),
            latitude=parse_coordinate(obs.get("lat")),
            longitude=parse_coordinate(obs.get("lng")),
            valid=bool(obs.get("obsValid", True)),
            reviewed=bool(obs.get("obsReviewed", False)),
            location_private=bool(obs.get("locationPrivate", False)),
        )


# =============================================================================
# Hotspots
# =============================================================================


class Hotspot(BaseModel):
    """A named location with a history of birder-submitted observations."""

    model_config = {"frozen": True, "str_strip_whitespace": True}

    location_id: str
    name: str
    latitude: float | None = None
    longitude: float | None = None
    country_code: str | None = None
    subnational1_code: str | None = None
    all_time_species_count: int | None = None
    latest_observation_date: datetime | None = None

    @field_validator("latest_observation_date")
    @classmethod
    def _naive_latest_observation(cls, value: datetime | None) -> datetime | None:
        return to_naive_local(value) if value is not None else None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Hotspot:
        """
        Build a hotspot from one eBird hotspot row.

        Raises:
            ValueError: If the row has no location id.
        """
        location_id = raw.get("locId")
        if not location_id:
            msg = f"hotspot needs locId: {raw!r}"
            raise ValueError(msg)

        return cls(
            location_id=location_id,
            name=raw.get("locName") or location_id,
            latitude=parse_coordinate(raw.get("lat")),
            longitude=parse_coordinate(raw.get("lng")),
            country_code=raw.get("countryCode"),
            subnational1_code=raw.get("subnational1Code"),
            all_time_species_count=parse_species_count(raw.get("numSpeciesAllTime")),
            latest_observation_date=parse_timestamp(raw.get("latestObsDt")),
        )
