"""Search session state and the one-shot radius expansion rule.

``SearchSession`` is owned by the caller (CLI, flow) and carries the user's
current radius, sort and limit choices plus the expansion flag. Nothing in
the scoring/ranking functions reads it implicitly; callers pass its fields in.

Expansion state machine::

    NOT_EXPANDED --(zero birds at the default radius)--> EXPANDED
    EXPANDED     --(manual radius change)--------------> NOT_EXPANDED

Hotspot searches never expand.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from bird_finder.analysis.ranking import BirdSort, HotspotSort
from bird_finder.reference.search import DEFAULT_RADIUS_MILES, EXPANDED_RADIUS_MILES

logger = logging.getLogger(__name__)


class ExpansionState(StrEnum):
    NOT_EXPANDED = "not_expanded"
    EXPANDED = "expanded"


class SearchSession(BaseModel):
    """The user's current search choices for one location."""

    model_config = {"validate_assignment": True}

    radius_miles: float = Field(default=DEFAULT_RADIUS_MILES, gt=0)
    bird_sort: BirdSort = Field(default_factory=BirdSort)
    bird_limit: int | None = Field(default=None, ge=1)
    hotspot_sort: HotspotSort = Field(default_factory=HotspotSort)
    hotspot_limit: int | None = Field(default=None, ge=1)
    min_species: int = Field(default=0, ge=0)
    expanded: bool = False

    @property
    def expansion_state(self) -> ExpansionState:
        return ExpansionState.EXPANDED if self.expanded else ExpansionState.NOT_EXPANDED

    def change_radius(self, radius_miles: float) -> None:
        """Manual radius change by the user; re-arms expansion."""
        self.radius_miles = radius_miles
        self.expanded = False

    def preferences(self) -> dict[str, Any]:
        """Persistable choices (everything except the per-search expansion flag)."""
        return self.model_dump(mode="json", exclude={"expanded"})


class RadiusExpansionPolicy:
    """Widen an empty default-radius bird search exactly once.

    Args:
        default_radius: Radius at which an empty result may trigger expansion.
        expanded_radius: Radius for the single re-search.
    """

    def __init__(
        self,
        default_radius: float = DEFAULT_RADIUS_MILES,
        expanded_radius: float = EXPANDED_RADIUS_MILES,
    ) -> None:
        self.default_radius = default_radius
        self.expanded_radius = expanded_radius

    def should_expand(self, session: SearchSession, radius_used: float, result_count: int) -> bool:
        """True when a search at ``radius_used`` returned nothing and expansion is unused."""
        return (
            result_count == 0
            and radius_used == self.default_radius
            and session.expansion_state is ExpansionState.NOT_EXPANDED
        )

    def expand(self, session: SearchSession) -> float:
        """Consume the expansion and return the radius for the re-search."""
        if session.expanded:
            msg = "radius already expanded for this search session"
            raise RuntimeError(msg)
        logger.info(
            "No birds within %s mi, expanding search to %s mi",
            self.default_radius,
            self.expanded_radius,
        )
        session.expanded = True
        session.radius_miles = self.expanded_radius
        return self.expanded_radius
