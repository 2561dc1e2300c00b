"""Process-lifetime cache of ranking snapshots."""

import threading
from collections.abc import Callable

import structlog

from src.ranker.constants import COMPONENT_RANKER
from src.ranker.metrics import RankerMetrics
from src.ranker.models import RankingSnapshot
from src.ranker.state_machine import CacheState, CacheStateMachine
from src.records.protocols import RecordAccessor


logger = structlog.get_logger()

SnapshotBuilder = Callable[[RecordAccessor], RankingSnapshot]


class RankingCache:
    """Owns the single ranking snapshot of one loaded record set.

    The snapshot is computed lazily on first access and served unchanged
    until ``invalidate`` or ``reload`` discards it. There is no partial
    update: the composite score couples every entity to every other entity
    in its scope, so any change to the record set means a full rebuild.

    First population runs under a lock; once READY the snapshot is
    immutable and readers do not take the lock.
    """

    def __init__(
        self,
        accessor: RecordAccessor,
        builder: SnapshotBuilder,
        metrics: RankerMetrics | None = None,
        name: str = "rankings",
    ) -> None:
        """Initialize the cache.

        Args:
            accessor: Record set to rank.
            builder: Computes a snapshot from a record set.
            metrics: Optional metrics instance.
            name: Cache name, for logging.
        """
        self._accessor = accessor
        self._builder = builder
        self._metrics = metrics or RankerMetrics.get_instance()
        self._lock = threading.Lock()
        self._snapshot: RankingSnapshot | None = None
        self._state_machine = CacheStateMachine(name)
        self._log = logger.bind(component=COMPONENT_RANKER, cache_name=name)

    @property
    def accessor(self) -> RecordAccessor:
        """Get the record set being ranked."""
        return self._accessor

    @property
    def state(self) -> CacheState:
        """Get current cache state."""
        return self._state_machine.state

    @property
    def is_populated(self) -> bool:
        """Check if a snapshot is cached."""
        return self._snapshot is not None

    def get(self) -> RankingSnapshot:
        """Get the cached snapshot, computing it on first access.

        Returns:
            The ranking snapshot.

        Raises:
            DanglingReferenceError: If the record set has a broken
                cross-reference. The cache stays empty.
        """
        snapshot = self._snapshot
        if snapshot is not None:
            self._metrics.record_cache_hit()
            return snapshot

        with self._lock:
            if self._snapshot is None:
                self._snapshot = self._build()
            else:
                self._metrics.record_cache_hit()
            return self._snapshot

    def _build(self) -> RankingSnapshot:
        """Build a snapshot; must be called with the lock held."""
        self._state_machine.to_building()
        try:
            snapshot = self._builder(self._accessor)
        except Exception as e:
            self._state_machine.to_empty()
            self._metrics.record_build_failure()
            self._log.error("ranking_build_failed", error=str(e))
            raise

        self._state_machine.to_ready()
        self._metrics.record_build(
            snapshot.build_duration_ms,
            {scope.value: len(index) for scope, index in snapshot.indices.items()},
        )
        return snapshot

    def invalidate(self) -> None:
        """Discard the cached snapshot; the next read rebuilds it."""
        with self._lock:
            self._discard()

    def reload(self, accessor: RecordAccessor) -> None:
        """Replace the record set and discard the cached snapshot.

        Args:
            accessor: New record set to rank.
        """
        with self._lock:
            self._accessor = accessor
            self._discard()
            self._log.info("ranking_cache_reloaded")

    def _discard(self) -> None:
        if self._snapshot is None:
            return
        self._snapshot = None
        self._state_machine.to_empty()
        self._metrics.record_invalidation()
        self._log.info("ranking_cache_invalidated")
