"""Multi-signal ranking and index engine.

Ranks entities along four signal dimensions with competition ranking,
combines them into a composite rank that drops each entity's worst
dimension, and indexes the resulting global and language-only orderings
for lookups in both directions.
"""

from src.ranker.cache import RankingCache
from src.ranker.composite import build_ordering, composite_rank
from src.ranker.dimension import competition_rank
from src.ranker.engine import RankingEngine, build_snapshot, rank_entities_pure
from src.ranker.index import RankIndex
from src.ranker.metrics import RankerMetrics
from src.ranker.models import (
    Ordering,
    RankEntry,
    RankExplanation,
    RankingSnapshot,
    RankScope,
)
from src.ranker.state_machine import CacheState, CacheStateMachine


__all__ = [
    "CacheState",
    "CacheStateMachine",
    "Ordering",
    "RankEntry",
    "RankExplanation",
    "RankIndex",
    "RankScope",
    "RankerMetrics",
    "RankingCache",
    "RankingEngine",
    "RankingSnapshot",
    "build_ordering",
    "build_snapshot",
    "competition_rank",
    "composite_rank",
    "rank_entities_pure",
]
