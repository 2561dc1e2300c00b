"""Bidirectional position index over one scope's ordering."""

from src.data_model.errors import EmptyScopeError, ScopeMembershipError
from src.ranker.models import Ordering, RankEntry, RankExplanation, RankScope


class RankIndex:
    """Forward (entity -> position) and inverse (position -> entity) lookup.

    Built once per ordering and read-only afterwards, so it can be shared
    between concurrent readers.
    """

    def __init__(self, ordering: Ordering) -> None:
        """Initialize the index.

        Args:
            ordering: Ordering to index.
        """
        self._ordering = ordering
        self._by_id: dict[str, RankEntry] = {
            entry.entity_id: entry for entry in ordering.entries
        }

    @property
    def scope(self) -> RankScope:
        """Get the indexed scope."""
        return self._ordering.scope

    @property
    def ordering(self) -> Ordering:
        """Get the underlying ordering."""
        return self._ordering

    @property
    def checksum(self) -> str:
        """Get the ordering checksum."""
        return self._ordering.checksum

    def __len__(self) -> int:
        return len(self._ordering.entries)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._by_id

    def entry(self, entity_id: str) -> RankEntry:
        """Get the rank entry of an entity.

        Args:
            entity_id: Entity identifier.

        Returns:
            The entity's rank entry.

        Raises:
            ScopeMembershipError: If the entity is not part of this scope.
        """
        try:
            return self._by_id[entity_id]
        except KeyError:
            raise ScopeMembershipError(entity_id, self.scope.value) from None

    def index_of(self, entity_id: str) -> int:
        """Get the dense position of an entity.

        Args:
            entity_id: Entity identifier.

        Returns:
            Position in 0..N-1 (0 = best).

        Raises:
            ScopeMembershipError: If the entity is not part of this scope.
        """
        return self.entry(entity_id).index

    def entity_at(self, position: int) -> str:
        """Get the entity at a position, wrapping around at both ends.

        A negative position maps to the last entity and a position past the
        end maps to the first, so previous/next navigation never runs out.

        Args:
            position: Requested position.

        Returns:
            Entity id at that position.

        Raises:
            EmptyScopeError: If the scope has no entities.
        """
        count = len(self)
        if count == 0:
            raise EmptyScopeError(self.scope.value)
        if position < 0:
            position = count - 1
        elif position >= count:
            position = 0
        return self._ordering.entries[position].entity_id

    def neighbors(self, entity_id: str) -> tuple[str, str]:
        """Get the previous and next ranked entities.

        Args:
            entity_id: Entity identifier.

        Returns:
            Tuple of (previous entity id, next entity id), wrapping around.

        Raises:
            ScopeMembershipError: If the entity is not part of this scope.
        """
        index = self.index_of(entity_id)
        return self.entity_at(index - 1), self.entity_at(index + 1)

    def explain(self, entity_id: str) -> RankExplanation:
        """Explain an entity's rank in this scope.

        Args:
            entity_id: Entity identifier.

        Returns:
            Per-dimension ranks, composite rank and position.

        Raises:
            ScopeMembershipError: If the entity is not part of this scope.
        """
        return RankExplanation.from_entry(self.entry(entity_id), self.scope)

    def ordered_ids(self, limit: int | None = None) -> list[str]:
        """Get entity ids in rank order.

        Args:
            limit: Maximum number of ids to return (default: all).

        Returns:
            Entity ids, best first.
        """
        entries = self._ordering.entries
        if limit is not None:
            entries = entries[: max(limit, 0)]
        return [entry.entity_id for entry in entries]
