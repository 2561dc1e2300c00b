"""Unit tests for the rank index."""

import pytest

from src.data_model.errors import EmptyScopeError, ScopeMembershipError
from src.ranker.composite import build_ordering
from src.ranker.index import RankIndex
from src.ranker.models import RankScope
from src.signals.models import EntitySignals


def _make_index(count: int, scope: RankScope = RankScope.GLOBAL) -> RankIndex:
    """Create an index of ``count`` entities, e0 best and e{count-1} worst."""
    signals = [
        EntitySignals(
            entity_id=f"e{i}",
            jobs=count - i,
            users=count - i,
            facts=count - i,
            inbound_links=count - i,
        )
        for i in range(count)
    ]
    return RankIndex(build_ordering(scope, signals))


class TestForwardLookup:
    """Tests for entity -> position lookups."""

    def test_index_of(self) -> None:
        """index_of returns the dense position."""
        index = _make_index(5)

        assert [index.index_of(f"e{i}") for i in range(5)] == [0, 1, 2, 3, 4]

    def test_index_of_outside_scope(self) -> None:
        """Entities outside the scope raise ScopeMembershipError."""
        index = _make_index(3, RankScope.LANGUAGE)

        with pytest.raises(ScopeMembershipError) as exc_info:
            index.index_of("missing")

        assert exc_info.value.entity_id == "missing"
        assert exc_info.value.scope == "language"

    def test_contains_and_len(self) -> None:
        """Membership and size reflect the ordering."""
        index = _make_index(4)

        assert len(index) == 4
        assert "e2" in index
        assert "e9" not in index


class TestInverseLookup:
    """Tests for position -> entity lookups."""

    def test_entity_at(self) -> None:
        """entity_at inverts index_of."""
        index = _make_index(5)

        for position in range(5):
            assert index.index_of(index.entity_at(position)) == position

    def test_wraps_below_zero(self) -> None:
        """A negative position wraps to the last entity."""
        index = _make_index(5)

        assert index.entity_at(-1) == "e4"

    def test_wraps_past_end(self) -> None:
        """A position past the end wraps to the first entity."""
        index = _make_index(5)

        assert index.entity_at(5) == "e0"

    def test_far_out_of_range_positions_clamp_to_ends(self) -> None:
        """Any out-of-range position maps to the corresponding end."""
        index = _make_index(5)

        assert index.entity_at(-100) == "e4"
        assert index.entity_at(100) == "e0"

    def test_empty_scope_raises(self) -> None:
        """Inverse lookup on an empty scope raises EmptyScopeError."""
        index = _make_index(0, RankScope.LANGUAGE)

        with pytest.raises(EmptyScopeError, match="language"):
            index.entity_at(0)


class TestNeighbors:
    """Tests for previous/next navigation."""

    def test_middle_entity(self) -> None:
        """Neighbors of a middle entity are adjacent positions."""
        index = _make_index(5)

        assert index.neighbors("e2") == ("e1", "e3")

    def test_first_and_last_wrap(self) -> None:
        """Navigation wraps around at both ends."""
        index = _make_index(5)

        assert index.neighbors("e0") == ("e4", "e1")
        assert index.neighbors("e4") == ("e3", "e0")

    def test_single_entity_is_its_own_neighbor(self) -> None:
        """A one-entity scope wraps onto itself."""
        index = _make_index(1)

        assert index.neighbors("e0") == ("e0", "e0")


class TestExplainAndListing:
    """Tests for explanations and ordered listing."""

    def test_explain(self) -> None:
        """explain reports ranks and position for the index's scope."""
        index = _make_index(3, RankScope.LANGUAGE)

        explanation = index.explain("e1")

        assert explanation.scope == RankScope.LANGUAGE
        assert explanation.index == 1
        assert explanation.jobs_rank == 1
        assert explanation.total_rank == 3
        assert explanation.to_debug_string() == (
            "TotalRank: 3 Jobs: 1 Users: 1 Facts: 1 Links: 1"
        )

    def test_ordered_ids(self) -> None:
        """ordered_ids lists entities best first."""
        index = _make_index(4)

        assert index.ordered_ids() == ["e0", "e1", "e2", "e3"]
        assert index.ordered_ids(limit=2) == ["e0", "e1"]
        assert index.ordered_ids(limit=0) == []
