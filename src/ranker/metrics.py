"""Metrics collection for the ranker module."""

import threading
from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class RankerMetrics:
    """Metrics for ranking builds and cache usage.

    Attributes:
        builds_total: Number of completed snapshot builds.
        build_failures_total: Number of builds aborted by an error.
        cache_hits: Number of reads served from a cached snapshot.
        invalidations_total: Number of times a cached snapshot was discarded.
        entities_by_scope: Entities ranked per scope in the last build.
        build_duration_ms: Duration of the last build.
    """

    builds_total: int = 0
    build_failures_total: int = 0
    cache_hits: int = 0
    invalidations_total: int = 0
    entities_by_scope: dict[str, int] = field(default_factory=dict)
    build_duration_ms: float = 0.0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    _instance: ClassVar["RankerMetrics | None"] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def get_instance(cls) -> "RankerMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        with cls._instance_lock:
            cls._instance = None

    def record_build(
        self, duration_ms: float, entities_by_scope: dict[str, int]
    ) -> None:
        """Record a completed build.

        Args:
            duration_ms: Build duration in milliseconds.
            entities_by_scope: Number of ranked entities per scope.
        """
        with self._lock:
            self.builds_total += 1
            self.build_duration_ms = duration_ms
            self.entities_by_scope = dict(entities_by_scope)

    def record_build_failure(self) -> None:
        """Record a build aborted by an error."""
        with self._lock:
            self.build_failures_total += 1

    def record_cache_hit(self) -> None:
        """Record a read served from the cache."""
        with self._lock:
            self.cache_hits += 1

    def record_invalidation(self) -> None:
        """Record a discarded snapshot."""
        with self._lock:
            self.invalidations_total += 1

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        with self._lock:
            return {
                "builds_total": self.builds_total,
                "build_failures_total": self.build_failures_total,
                "cache_hits": self.cache_hits,
                "invalidations_total": self.invalidations_total,
                "entities_by_scope": dict(self.entities_by_scope),
                "build_duration_ms": self.build_duration_ms,
            }
