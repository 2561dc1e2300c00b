"""Unit tests for per-dimension competition ranking."""

from src.ranker.dimension import competition_rank


class TestCompetitionRank:
    """Tests for competition_rank."""

    def test_ties_share_rank_and_leave_gap(self) -> None:
        """Tied values share the better rank; the next value skips ahead."""
        ranks = competition_rank([("a", 10), ("b", 10), ("c", 8), ("d", 5)])

        assert ranks == {"a": 0, "b": 0, "c": 2, "d": 3}

    def test_input_order_does_not_matter(self) -> None:
        """Ranks depend only on values, not on input order."""
        ranks = competition_rank([("d", 5), ("c", 8), ("b", 10), ("a", 10)])

        assert ranks == {"a": 0, "b": 0, "c": 2, "d": 3}

    def test_empty_input(self) -> None:
        """Empty input gives an empty mapping."""
        assert competition_rank([]) == {}

    def test_single_entity_ranks_first(self) -> None:
        """A single entity gets rank 0."""
        assert competition_rank([("only", 42)]) == {"only": 0}

    def test_all_equal_values(self) -> None:
        """All-equal values all rank 0."""
        ranks = competition_rank([("a", 0), ("b", 0), ("c", 0)])

        assert set(ranks.values()) == {0}

    def test_distinct_values_rank_by_position(self) -> None:
        """Distinct values get consecutive ranks, highest first."""
        ranks = competition_rank([("low", 1), ("high", 3), ("mid", 2)])

        assert ranks == {"high": 0, "mid": 1, "low": 2}

    def test_multiple_tie_groups(self) -> None:
        """Each tie group starts at its first sorted position."""
        ranks = competition_rank(
            [("a", 9), ("b", 7), ("c", 7), ("d", 7), ("e", 3), ("f", 3)]
        )

        assert ranks == {"a": 0, "b": 1, "c": 1, "d": 1, "e": 4, "f": 4}

    def test_ranks_bounded_by_count(self) -> None:
        """Every rank lies within 0..N-1."""
        values = [(f"e{i}", i % 4) for i in range(20)]

        ranks = competition_rank(values)

        assert all(0 <= rank <= len(values) - 1 for rank in ranks.values())

    def test_accepts_generator(self) -> None:
        """Any iterable of pairs is accepted."""
        ranks = competition_rank((name, len(name)) for name in ["ab", "abc", "a"])

        assert ranks == {"abc": 0, "ab": 1, "a": 2}
