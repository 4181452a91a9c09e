"""JSON data store for saved preferences and ranked search results.

Two tiers:
  - preferences/: The user's saved search choices (radius, sorts, limits)
  - derived/: Ranked output of the latest bird and hotspot searches

Every JSON file is wrapped in a metadata envelope (``source``,
``written_at`` and any search parameters) so results can be traced back to
the query that produced them. Search results are never read back as a
cache; each search is a full recomputation.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003
from typing import Any

SESSION_PATH = Path("preferences/session.json")
BIRDS_PATH = Path("derived/birds.json")
HOTSPOTS_PATH = Path("derived/hotspots.json")


class DataStore:
    """Reads and writes metadata-enveloped JSON files under one base directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.preferences = base_dir / "preferences"
        self.derived = base_dir / "derived"

    def read(self, path: Path) -> Any | None:
        """Return the ``data`` payload of a stored file, or None if it doesn't exist."""
        envelope = self.read_envelope(path)
        if envelope is None:
            return None
        return envelope.get("data")

    def read_envelope(self, path: Path) -> dict[str, Any] | None:
        """Return the full ``{"meta": ..., "data": ...}`` envelope."""
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            result: dict[str, Any] = json.load(f)
        return result

    def write(self, path: Path, data: Any, source: str, **params: Any) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``derived/birds.json``).
            data: JSON-serializable payload stored under ``data``.
            source: Producer identifier (e.g. ``"ebird.org"``).
            **params: Extra metadata (origin, radius, sort ...).

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        meta: dict[str, Any] = {
            "source": source,
            "written_at": datetime.now(UTC).isoformat(),
            **params,
        }
        with full.open("w") as f:
            json.dump({"meta": meta, "data": data}, f, indent=2)
        return full

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full
