"""Unit tests for ranker metrics."""

from collections.abc import Generator
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.ranker.metrics import RankerMetrics


@pytest.fixture(autouse=True)
def reset_metrics() -> Generator[None]:
    """Reset singleton before and after each test."""
    RankerMetrics.reset()
    yield
    RankerMetrics.reset()


class TestRankerMetrics:
    """Tests for RankerMetrics."""

    def test_singleton(self) -> None:
        """get_instance returns the same object until reset."""
        first = RankerMetrics.get_instance()

        assert RankerMetrics.get_instance() is first
        RankerMetrics.reset()
        assert RankerMetrics.get_instance() is not first

    def test_record_build(self) -> None:
        """Builds update counters and the last build's sizes."""
        metrics = RankerMetrics()

        metrics.record_build(12.5, {"global": 10, "language": 7})
        metrics.record_build(3.0, {"global": 11, "language": 7})

        assert metrics.builds_total == 2
        assert metrics.build_duration_ms == 3.0
        assert metrics.entities_by_scope == {"global": 11, "language": 7}

    def test_to_dict(self) -> None:
        """to_dict exposes every counter."""
        metrics = RankerMetrics()
        metrics.record_cache_hit()
        metrics.record_invalidation()
        metrics.record_build_failure()

        data = metrics.to_dict()

        assert data["cache_hits"] == 1
        assert data["invalidations_total"] == 1
        assert data["build_failures_total"] == 1
        assert data["builds_total"] == 0

    def test_concurrent_cache_hits_are_all_counted(self) -> None:
        """Counters stay exact under concurrent updates."""
        metrics = RankerMetrics()

        def hit_many() -> None:
            for _ in range(2000):
                metrics.record_cache_hit()

        with ThreadPoolExecutor(max_workers=8) as pool:
            for future in [pool.submit(hit_many) for _ in range(8)]:
                future.result()

        assert metrics.cache_hits == 16000
