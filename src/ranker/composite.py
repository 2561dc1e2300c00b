"""Composite ranking across signal dimensions."""

import hashlib
import json
from collections.abc import Sequence

import structlog

from src.ranker.constants import COMPONENT_RANKER, DROPPED_WORST_DIMENSIONS
from src.ranker.dimension import competition_rank
from src.ranker.models import Ordering, RankEntry, RankScope
from src.signals.models import EntitySignals, Signal


logger = structlog.get_logger()


def composite_rank(dimension_ranks: Sequence[int]) -> int:
    """Combine per-dimension ranks into one total rank.

    The worst (largest) dimension rank is dropped and the rest are summed.

    Args:
        dimension_ranks: One rank per dimension.

    Returns:
        Total rank; lower is better.

    Example:
        >>> composite_rank([50, 1, 2, 3])
        6
    """
    kept = len(dimension_ranks) - DROPPED_WORST_DIMENSIONS
    return sum(sorted(dimension_ranks)[: max(kept, 0)])


def compute_checksum(entries: Sequence[RankEntry]) -> str:
    """Compute SHA-256 checksum of an ordering.

    Args:
        entries: Rank entries in index order.

    Returns:
        SHA-256 hex digest.
    """
    data = [entry.to_dict() for entry in entries]
    json_str = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(json_str.encode("utf-8")).hexdigest()


def build_ordering(scope: RankScope, signals: Sequence[EntitySignals]) -> Ordering:
    """Compute the dense ordering of one scope.

    Each dimension is competition-ranked within the scope, entities are
    given their composite rank, and a stable sort by composite rank assigns
    indices 0..N-1. Entities with equal composite rank keep their order in
    ``signals``.

    Args:
        scope: Scope being ordered.
        signals: Signals of the scope's entities, in enumeration order.

    Returns:
        The scope's ordering.
    """
    dimension_ranks = {
        signal: competition_rank((s.entity_id, s.value(signal)) for s in signals)
        for signal in Signal
    }

    totals = [
        composite_rank([dimension_ranks[signal][s.entity_id] for signal in Signal])
        for s in signals
    ]
    order = sorted(range(len(signals)), key=lambda position: totals[position])

    entries: list[RankEntry] = []
    for index, position in enumerate(order):
        entity_id = signals[position].entity_id
        entries.append(
            RankEntry(
                entity_id=entity_id,
                index=index,
                jobs_rank=dimension_ranks[Signal.JOBS][entity_id],
                users_rank=dimension_ranks[Signal.USERS][entity_id],
                facts_rank=dimension_ranks[Signal.FACTS][entity_id],
                inbound_links_rank=dimension_ranks[Signal.INBOUND_LINKS][entity_id],
                total_rank=totals[position],
            )
        )

    ordering = Ordering(
        scope=scope,
        entries=tuple(entries),
        checksum=compute_checksum(entries),
    )
    logger.debug(
        "ordering_built",
        component=COMPONENT_RANKER,
        scope=scope.value,
        entities=len(entries),
        checksum=ordering.checksum,
    )
    return ordering
