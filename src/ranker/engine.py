"""Main ranking engine orchestrator."""

import time

import structlog

from src.data_model.errors import EmptyScopeError, EntityNotFoundError
from src.ranker.cache import RankingCache
from src.ranker.composite import build_ordering
from src.ranker.constants import COMPONENT_RANKER
from src.ranker.index import RankIndex
from src.ranker.metrics import RankerMetrics
from src.ranker.models import RankExplanation, RankingSnapshot, RankScope
from src.records.protocols import RecordAccessor
from src.signals.extractor import SignalExtractor
from src.signals.models import EntitySignals
from src.signals.references import build_inbound_links
from src.signals.weights import SignalWeights


logger = structlog.get_logger()


def build_snapshot(
    accessor: RecordAccessor,
    extractor: SignalExtractor | None = None,
) -> RankingSnapshot:
    """Compute signals, orderings and indices for a record set.

    Both scopes are ranked independently and from scratch over the same
    per-entity signals.

    Args:
        accessor: Record set to rank.
        extractor: Signal extractor (default: built-in weights).

    Returns:
        The complete ranking snapshot.

    Raises:
        DanglingReferenceError: If a record references a missing entity.
    """
    extractor = extractor or SignalExtractor()
    log = logger.bind(component=COMPONENT_RANKER)
    start = time.perf_counter()

    entity_ids = accessor.list_entities()
    log.info("ranking_build_started", entities=len(entity_ids))

    inbound = build_inbound_links(accessor)
    signals = extractor.extract_all(accessor, inbound)

    all_signals = [signals[entity_id] for entity_id in entity_ids]
    language_signals = [
        s
        for s in all_signals
        if accessor.is_in_scope(s.entity_id, RankScope.LANGUAGE.value)
    ]

    indices = {
        RankScope.GLOBAL: RankIndex(build_ordering(RankScope.GLOBAL, all_signals)),
        RankScope.LANGUAGE: RankIndex(
            build_ordering(RankScope.LANGUAGE, language_signals)
        ),
    }
    duration_ms = (time.perf_counter() - start) * 1000

    log.info(
        "ranking_build_complete",
        entities=len(all_signals),
        languages=len(language_signals),
        duration_ms=round(duration_ms, 3),
        global_checksum=indices[RankScope.GLOBAL].checksum,
    )

    return RankingSnapshot(
        signals=signals,
        inbound_links=inbound,
        indices=indices,
        build_duration_ms=duration_ms,
    )


class RankingEngine:
    """Answers rank queries over a record set.

    Computes the global and language-only orderings lazily on first query
    and caches them until ``invalidate`` or ``reload``.

    Exposed queries:
        - rank: entity -> dense position in a scope
        - entity_at_rank: position -> entity, wrapping around
        - percentile: global position / total entity count
        - rank_explanation: per-dimension ranks and composite rank
    """

    def __init__(
        self,
        accessor: RecordAccessor,
        weights: SignalWeights | None = None,
        metrics: RankerMetrics | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            accessor: Record set to rank.
            weights: Heuristic signal weights (default: built-in table).
            metrics: Optional metrics instance.
        """
        self._extractor = SignalExtractor(weights)
        self._cache = RankingCache(
            accessor,
            builder=lambda records: build_snapshot(records, self._extractor),
            metrics=metrics,
        )

    @property
    def cache(self) -> RankingCache:
        """Get the underlying ranking cache."""
        return self._cache

    @property
    def snapshot(self) -> RankingSnapshot:
        """Get the current snapshot, computing it if needed."""
        return self._cache.get()

    def _require_entity(self, entity_id: str) -> None:
        if not self._cache.accessor.has_entity(entity_id):
            raise EntityNotFoundError(entity_id)

    def _index(self, scope: RankScope | str) -> RankIndex:
        return self.snapshot.index(RankScope.parse(scope))

    def rank(self, entity_id: str, scope: RankScope | str = RankScope.GLOBAL) -> int:
        """Get an entity's dense position in a scope.

        Args:
            entity_id: Entity identifier.
            scope: Scope to rank within.

        Returns:
            Position in 0..N-1 (0 = best).

        Raises:
            EntityNotFoundError: If the entity does not exist.
            ScopeMembershipError: If the entity is not part of the scope.
        """
        index = self._index(scope)
        self._require_entity(entity_id)
        return index.index_of(entity_id)

    def entity_at_rank(
        self, position: int, scope: RankScope | str = RankScope.GLOBAL
    ) -> str:
        """Get the entity at a position, wrapping around at both ends.

        Args:
            position: Requested position.
            scope: Scope to look up.

        Returns:
            Entity id.

        Raises:
            EmptyScopeError: If the scope has no entities.
        """
        return self._index(scope).entity_at(position)

    def percentile(self, entity_id: str) -> float:
        """Get an entity's global position as a fraction of all entities.

        Args:
            entity_id: Entity identifier.

        Returns:
            Value in [0, 1); 0 is the best-ranked entity.

        Raises:
            EmptyScopeError: If the record set is empty.
            EntityNotFoundError: If the entity does not exist.
        """
        snapshot = self.snapshot
        total = snapshot.entity_count
        if total == 0:
            raise EmptyScopeError(RankScope.GLOBAL.value)
        self._require_entity(entity_id)
        return snapshot.index(RankScope.GLOBAL).index_of(entity_id) / total

    def rank_explanation(
        self, entity_id: str, scope: RankScope | str = RankScope.GLOBAL
    ) -> RankExplanation:
        """Explain an entity's rank within a scope.

        Args:
            entity_id: Entity identifier.
            scope: Scope the caller is interested in.

        Returns:
            Dimension ranks, composite rank and position.

        Raises:
            EntityNotFoundError: If the entity does not exist.
            ScopeMembershipError: If the entity is not part of the scope.
        """
        index = self._index(scope)
        self._require_entity(entity_id)
        return index.explain(entity_id)

    def is_language(self, entity_id: str) -> bool:
        """Check whether an entity belongs to the language scope.

        Raises:
            EntityNotFoundError: If the entity does not exist.
        """
        self._require_entity(entity_id)
        return entity_id in self._index(RankScope.LANGUAGE)

    def language_rank(self, entity_id: str) -> int | None:
        """Get an entity's language rank, or None if it is not a language.

        Raises:
            EntityNotFoundError: If the entity does not exist.
        """
        if not self.is_language(entity_id):
            return None
        return self._index(RankScope.LANGUAGE).index_of(entity_id)

    def navigation_scope(self, entity_id: str) -> RankScope:
        """Get the scope used to browse from an entity.

        Languages are browsed among languages, everything else globally.
        """
        return RankScope.LANGUAGE if self.is_language(entity_id) else RankScope.GLOBAL

    def previous_ranked(self, entity_id: str) -> str:
        """Get the entity ranked just above, wrapping to the last one.

        Args:
            entity_id: Entity identifier.

        Returns:
            Entity id of the previous ranked entity.
        """
        index = self._index(self.navigation_scope(entity_id))
        previous_id, _next_id = index.neighbors(entity_id)
        return previous_id

    def next_ranked(self, entity_id: str) -> str:
        """Get the entity ranked just below, wrapping to the first one.

        Args:
            entity_id: Entity identifier.

        Returns:
            Entity id of the next ranked entity.
        """
        index = self._index(self.navigation_scope(entity_id))
        _previous_id, next_id = index.neighbors(entity_id)
        return next_id

    def top(
        self, scope: RankScope | str = RankScope.GLOBAL, limit: int | None = None
    ) -> list[str]:
        """Get entity ids of a scope in rank order.

        Args:
            scope: Scope to list.
            limit: Maximum number of ids (default: all).

        Returns:
            Entity ids, best first.
        """
        return self._index(scope).ordered_ids(limit)

    def signals(self, entity_id: str) -> EntitySignals:
        """Get the signals an entity was ranked on.

        Raises:
            EntityNotFoundError: If the entity does not exist.
        """
        self._require_entity(entity_id)
        return self.snapshot.signals[entity_id]

    def inbound_links(self, entity_id: str) -> list[str]:
        """Get the ids of entities referencing an entity.

        Raises:
            EntityNotFoundError: If the entity does not exist.
        """
        self._require_entity(entity_id)
        return list(self.snapshot.inbound_links[entity_id])

    def invalidate(self) -> None:
        """Discard cached rankings after the record set changed."""
        self._cache.invalidate()

    def reload(self, accessor: RecordAccessor) -> None:
        """Rank a different record set from the next query on.

        Args:
            accessor: New record set.
        """
        self._cache.reload(accessor)


def rank_entities_pure(
    accessor: RecordAccessor,
    weights: SignalWeights | None = None,
) -> RankingSnapshot:
    """Pure function API for ranking a record set.

    Args:
        accessor: Record set to rank.
        weights: Heuristic signal weights.

    Returns:
        RankingSnapshot with both scopes indexed.
    """
    return build_snapshot(accessor, SignalExtractor(weights))
