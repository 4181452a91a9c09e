"""Group a flat batch of observation records by species."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bird_finder.schemas import ObservationRecord


def group_by_species(
    records: Iterable[ObservationRecord],
) -> dict[str, list[ObservationRecord]]:
    """Map species_id -> that species' records, in input order.

    Nothing is dropped or validated here. Records flagged invalid are kept;
    filtering on the pass-through flags is up to the caller.
    """
    groups: dict[str, list[ObservationRecord]] = {}
    for record in records:
        groups.setdefault(record.species_id, []).append(record)
    return groups
