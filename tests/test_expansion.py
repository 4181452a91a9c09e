"""Tests for the search session and one-shot radius expansion."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from bird_finder.analysis.expansion import ExpansionState, RadiusExpansionPolicy, SearchSession
from bird_finder.analysis.ranking import BirdSortField, HotspotSortField, SortDirection


class TestSearchSession:
    """Caller-owned search choices."""

    def test_defaults(self) -> None:
        session = SearchSession()
        assert session.radius_miles == 5
        assert session.bird_sort.field is BirdSortField.LIKELIHOOD
        assert session.bird_sort.direction is SortDirection.DESC
        assert session.hotspot_sort.field is HotspotSortField.QUALITY
        assert session.bird_limit is None
        assert session.hotspot_limit is None
        assert session.min_species == 0
        assert session.expansion_state is ExpansionState.NOT_EXPANDED

    def test_rejects_non_positive_radius(self) -> None:
        with pytest.raises(ValidationError):
            SearchSession(radius_miles=0)

    def test_rejects_non_positive_limit(self) -> None:
        session = SearchSession()
        with pytest.raises(ValidationError):
            session.bird_limit = 0

    def test_change_radius_resets_expansion(self) -> None:
        session = SearchSession(expanded=True, radius_miles=10)
        session.change_radius(25)
        assert session.radius_miles == 25
        assert session.expansion_state is ExpansionState.NOT_EXPANDED

    def test_preferences_exclude_expansion_flag(self) -> None:
        prefs = SearchSession(expanded=True, min_species=50).preferences()
        assert "expanded" not in prefs
        assert prefs["min_species"] == 50
        assert prefs["bird_sort"] == {"field": "likelihood", "direction": "desc"}

    def test_preferences_round_trip(self) -> None:
        session = SearchSession(radius_miles=25, hotspot_limit=10)
        restored = SearchSession.model_validate(session.preferences())
        assert restored.radius_miles == 25
        assert restored.hotspot_limit == 10
        assert restored.expanded is False


class TestRadiusExpansionPolicy:
    """NOT_EXPANDED -> EXPANDED once, until a manual radius change."""

    def test_expands_on_empty_default_search(self) -> None:
        policy = RadiusExpansionPolicy()
        session = SearchSession()
        assert policy.should_expand(session, radius_used=5, result_count=0) is True

        radius = policy.expand(session)

        assert radius == 10
        assert session.radius_miles == 10
        assert session.expansion_state is ExpansionState.EXPANDED

    def test_no_second_expansion(self) -> None:
        policy = RadiusExpansionPolicy()
        session = SearchSession()
        policy.expand(session)
        assert policy.should_expand(session, radius_used=10, result_count=0) is False
        assert policy.should_expand(session, radius_used=5, result_count=0) is False

    def test_expand_twice_raises(self) -> None:
        policy = RadiusExpansionPolicy()
        session = SearchSession()
        policy.expand(session)
        with pytest.raises(RuntimeError):
            policy.expand(session)

    def test_no_expansion_with_results(self) -> None:
        policy = RadiusExpansionPolicy()
        assert policy.should_expand(SearchSession(), radius_used=5, result_count=3) is False

    def test_no_expansion_at_non_default_radius(self) -> None:
        policy = RadiusExpansionPolicy()
        session = SearchSession(radius_miles=25)
        assert policy.should_expand(session, radius_used=25, result_count=0) is False

    def test_manual_radius_change_rearms(self) -> None:
        policy = RadiusExpansionPolicy()
        session = SearchSession()
        policy.expand(session)

        session.change_radius(5)

        assert policy.should_expand(session, radius_used=5, result_count=0) is True

    def test_custom_radii(self) -> None:
        policy = RadiusExpansionPolicy(default_radius=10, expanded_radius=25)
        session = SearchSession(radius_miles=10)
        assert policy.should_expand(session, radius_used=10, result_count=0) is True
        assert policy.expand(session) == 25
