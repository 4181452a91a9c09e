"""
Tests for the search flow module.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

from bird_finder.analysis.expansion import RadiusExpansionPolicy, SearchSession
from bird_finder.analysis.hotspot_quality import QualityTier
from bird_finder.analysis.ranking import HotspotSort, HotspotSortField, SortDirection
from bird_finder.flows import search
from bird_finder.schemas import Exact, Hotspot, ObservationRecord
from bird_finder.store import DataStore

if TYPE_CHECKING:
    from pathlib import Path

    import pytest

NOW = datetime(2026, 5, 10, 12, 0)


def _obs(species_id: str, days_ago: int = 0, n: int = 1) -> ObservationRecord:
    return ObservationRecord(
        species_id=species_id,
        common_name=species_id.title(),
        scientific_name=species_id,
        location_id="L1",
        location_name="Laurelhurst Park",
        observed_at=NOW - timedelta(days=days_ago),
        count=Exact(n=n),
        latitude=45.52,
        longitude=-122.62,
    )


HOTSPOTS = [
    Hotspot(location_id="L1", name="Backyard", latitude=45.51, longitude=-122.6,
            all_time_species_count=20),
    Hotspot(location_id="L2", name="Oaks Bottom", latitude=45.6, longitude=-122.6,
            all_time_species_count=187),
    Hotspot(location_id="L3", name="Sauvie Island", latitude=45.8, longitude=-122.6,
            all_time_species_count=260),
]


class TestSessionPersistence:
    """Saved search preferences."""

    def test_load_defaults_when_missing(self, tmp_path: Path) -> None:
        session = search.load_session(DataStore(tmp_path))
        assert session == SearchSession()

    def test_save_and_load(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        search.save_session(SearchSession(radius_miles=25, min_species=50, expanded=True), store)

        restored = search.load_session(store)

        assert restored.radius_miles == 25
        assert restored.min_species == 50
        assert restored.expanded is False

    def test_load_ignores_invalid_preferences(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write(search.SESSION_PATH, {"radius_miles": -3}, source="test")
        assert search.load_session(store) == SearchSession()


class TestSearchBirds:
    """Bird search flow with the one-shot radius expansion."""

    @patch("bird_finder.flows.search.ebird.fetch_recent_observations")
    def test_ranked_results(
        self, mock_fetch: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(search, "store", DataStore(tmp_path))
        mock_fetch.return_value = [_obs("amerob", 0), _obs("amerob", 1), _obs("sonspa", 5)]

        result = search.search_birds(45.5, -122.6, SearchSession(), now=NOW)

        assert result.radius_miles == 5
        assert result.expanded is False
        assert [b.species_id for b in result.birds] == ["amerob", "sonspa"]
        mock_fetch.assert_called_once_with(45.5, -122.6, 5)

    @patch("bird_finder.flows.search.ebird.fetch_recent_observations")
    def test_expands_once_when_empty(
        self, mock_fetch: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(search, "store", DataStore(tmp_path))
        mock_fetch.side_effect = [[], [_obs("baleag")]]

        result = search.search_birds(45.5, -122.6, SearchSession(), now=NOW)

        assert result.expanded is True
        assert result.radius_miles == 10
        assert [b.species_id for b in result.birds] == ["baleag"]
        assert [c.args[2] for c in mock_fetch.call_args_list] == [5, 10]

    @patch("bird_finder.flows.search.ebird.fetch_recent_observations")
    def test_no_second_expansion(
        self, mock_fetch: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(search, "store", DataStore(tmp_path))
        mock_fetch.return_value = []

        result = search.search_birds(45.5, -122.6, SearchSession(), now=NOW)

        assert result.birds == []
        assert result.expanded is True
        assert mock_fetch.call_count == 2

    @patch("bird_finder.flows.search.ebird.fetch_recent_observations")
    def test_no_expansion_at_other_radius(
        self, mock_fetch: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(search, "store", DataStore(tmp_path))
        mock_fetch.return_value = []

        result = search.search_birds(45.5, -122.6, SearchSession(radius_miles=25), now=NOW)

        assert result.expanded is False
        assert mock_fetch.call_count == 1

    @patch("bird_finder.flows.search.ebird.fetch_recent_observations")
    def test_limit_and_saved_output(
        self, mock_fetch: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(search, "store", DataStore(tmp_path))
        mock_fetch.return_value = [_obs("amerob"), _obs("sonspa", 3), _obs("cedwax", 9)]

        result = search.search_birds(45.5, -122.6, SearchSession(bird_limit=2), now=NOW)

        assert len(result.birds) == 2
        saved = json.loads((tmp_path / "derived" / "birds.json").read_text())
        assert saved["meta"]["source"] == "ebird.org"
        assert saved["meta"]["radius_miles"] == 5
        assert [b["species_id"] for b in saved["data"]] == [b.species_id for b in result.birds]
        assert all(0 <= b["likelihood"] <= 99 for b in saved["data"])

    @patch("bird_finder.flows.search.ebird.fetch_recent_observations")
    def test_custom_policy(
        self, mock_fetch: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(search, "store", DataStore(tmp_path))
        mock_fetch.side_effect = [[], [_obs("baleag")]]
        policy = RadiusExpansionPolicy(default_radius=25, expanded_radius=30)

        result = search.search_birds(
            45.5, -122.6, SearchSession(radius_miles=25), now=NOW, policy=policy
        )

        assert result.expanded is True
        assert result.radius_miles == 30
        assert [c.args[2] for c in mock_fetch.call_args_list] == [25, 30]


class TestSearchHotspots:
    """Hotspot search flow."""

    @patch("bird_finder.flows.search.ebird.fetch_hotspots")
    def test_default_quality_order(
        self, mock_fetch: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(search, "store", DataStore(tmp_path))
        mock_fetch.return_value = HOTSPOTS

        result = search.search_hotspots(45.5, -122.6, SearchSession())

        assert [r.tier for r in result.hotspots] == [
            QualityTier.EXCEPTIONAL,
            QualityTier.EXCELLENT,
            QualityTier.MODERATE,
        ]
        mock_fetch.assert_called_once_with(45.5, -122.6, 5)

    @patch("bird_finder.flows.search.ebird.fetch_hotspots")
    def test_session_filter_sort_limit(
        self, mock_fetch: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(search, "store", DataStore(tmp_path))
        mock_fetch.return_value = HOTSPOTS
        session = SearchSession(
            hotspot_sort=HotspotSort(field=HotspotSortField.DISTANCE, direction=SortDirection.ASC),
            hotspot_limit=1,
            min_species=50,
        )

        result = search.search_hotspots(45.5, -122.6, session)

        assert [r.hotspot.name for r in result.hotspots] == ["Oaks Bottom"]
        saved = json.loads((tmp_path / "derived" / "hotspots.json").read_text())
        assert saved["data"][0]["tier"] == "Excellent"
        assert saved["data"][0]["distance_miles"] == "6.9"

    @patch("bird_finder.flows.search.ebird.fetch_hotspots")
    def test_empty_never_expands(
        self, mock_fetch: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(search, "store", DataStore(tmp_path))
        mock_fetch.return_value = []

        result = search.search_hotspots(45.5, -122.6, SearchSession())

        assert result.hotspots == []
        assert result.radius_miles == 5
        mock_fetch.assert_called_once()
