"""Data models for the multi-signal ranker."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Annotated

from pydantic import Field

from src.data_model import StrictBaseModel
from src.data_model.errors import UnknownScopeError
from src.ranker.constants import RANK_DEBUG_TEMPLATE
from src.signals.models import EntitySignals, Signal


if TYPE_CHECKING:
    from src.ranker.index import RankIndex


class RankScope(str, Enum):
    """Entity subsets over which independent orderings are computed.

    - GLOBAL: every entity in the record set
    - LANGUAGE: only entities classified as languages
    """

    GLOBAL = "global"
    LANGUAGE = "language"

    @classmethod
    def parse(cls, value: "RankScope | str") -> "RankScope":
        """Convert a scope name to a RankScope.

        Args:
            value: Scope or scope name.

        Returns:
            The matching scope.

        Raises:
            UnknownScopeError: If the name is not a known scope.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownScopeError(str(value)) from None


@dataclass(frozen=True)
class RankEntry:
    """An entity's position and per-dimension ranks within one scope.

    Attributes:
        entity_id: Entity identifier.
        index: Dense position in the scope's ordering (0 = best).
        jobs_rank: Competition rank by estimated jobs.
        users_rank: Competition rank by estimated users.
        facts_rank: Competition rank by fact count.
        inbound_links_rank: Competition rank by inbound references.
        total_rank: Sum of the dimension ranks minus the worst one.
    """

    entity_id: str
    index: int
    jobs_rank: int
    users_rank: int
    facts_rank: int
    inbound_links_rank: int
    total_rank: int

    def dimension_rank(self, signal: Signal) -> int:
        """Get the rank for one dimension.

        Args:
            signal: Dimension to read.

        Returns:
            The competition rank in that dimension.
        """
        return int(getattr(self, f"{signal.value}_rank"))

    def to_dict(self) -> dict[str, int | str]:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary of field name to value.
        """
        return {
            "entity_id": self.entity_id,
            "index": self.index,
            "jobs_rank": self.jobs_rank,
            "users_rank": self.users_rank,
            "facts_rank": self.facts_rank,
            "inbound_links_rank": self.inbound_links_rank,
            "total_rank": self.total_rank,
        }


@dataclass(frozen=True)
class Ordering:
    """Dense ordering of the entities of one scope.

    Attributes:
        scope: Scope the ordering was computed over.
        entries: Rank entries in index order.
        checksum: SHA-256 of the ordered entries, for reproducibility checks.
    """

    scope: RankScope
    entries: tuple[RankEntry, ...] = ()
    checksum: str = ""

    def __len__(self) -> int:
        return len(self.entries)


class RankExplanation(StrictBaseModel):
    """Breakdown of an entity's rank within one scope.

    Attributes:
        entity_id: Entity identifier.
        scope: Scope the ranks belong to.
        index: Dense position in the scope's ordering.
        jobs_rank: Competition rank by estimated jobs.
        users_rank: Competition rank by estimated users.
        facts_rank: Competition rank by fact count.
        inbound_links_rank: Competition rank by inbound references.
        total_rank: Composite rank (worst dimension dropped).
    """

    entity_id: Annotated[str, Field(min_length=1)]
    scope: RankScope
    index: Annotated[int, Field(ge=0)]
    jobs_rank: Annotated[int, Field(ge=0)]
    users_rank: Annotated[int, Field(ge=0)]
    facts_rank: Annotated[int, Field(ge=0)]
    inbound_links_rank: Annotated[int, Field(ge=0)]
    total_rank: Annotated[int, Field(ge=0)]

    @classmethod
    def from_entry(cls, entry: RankEntry, scope: RankScope) -> "RankExplanation":
        """Build an explanation from a rank entry.

        Args:
            entry: Rank entry.
            scope: Scope of the entry.

        Returns:
            The explanation.
        """
        return cls(scope=scope, **entry.to_dict())

    def to_debug_string(self) -> str:
        """Render the explanation as a one-line debug string."""
        return RANK_DEBUG_TEMPLATE.format(
            total_rank=self.total_rank,
            jobs_rank=self.jobs_rank,
            users_rank=self.users_rank,
            facts_rank=self.facts_rank,
            inbound_links_rank=self.inbound_links_rank,
        )


@dataclass(frozen=True)
class RankingSnapshot:
    """Everything derived from one loaded record set.

    Attributes:
        signals: Entity id -> signals, in enumeration order.
        inbound_links: Entity id -> ids of referring entities.
        indices: Scope -> rank index.
        build_duration_ms: Time taken to compute the snapshot.
    """

    signals: dict[str, EntitySignals]
    inbound_links: dict[str, list[str]]
    indices: dict[RankScope, "RankIndex"] = field(default_factory=dict)
    build_duration_ms: float = 0.0

    @property
    def entity_count(self) -> int:
        """Get the number of entities in the record set."""
        return len(self.signals)

    def index(self, scope: RankScope) -> "RankIndex":
        """Get the rank index of a scope.

        Args:
            scope: Scope to look up.

        Returns:
            The scope's rank index.
        """
        return self.indices[scope]
