"""Protocol interface for record back-ends consumed by the ranking engine."""

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable


Scalar = str | int | float | bool


@runtime_checkable
class RecordAccessor(Protocol):
    """Read-only capability interface over a loaded record set.

    Any record back-end implementing these queries can be ranked,
    regardless of how its records are stored or parsed. Field paths are
    space-delimited (``"githubRepo stars"``).
    """

    def list_entities(self) -> Sequence[str]:
        """Return all entity ids in stable enumeration order."""
        ...

    def has_entity(self, entity_id: str) -> bool:
        """Return True if the entity id exists in the record set."""
        ...

    def is_in_scope(self, entity_id: str, scope_name: str) -> bool:
        """Return True if the entity belongs to the named scope.

        Raises:
            UnknownScopeError: If the scope name is not recognised.
        """
        ...

    def get_field(self, entity_id: str, path: str) -> Scalar | None:
        """Return the scalar value at ``path``, or None if absent."""
        ...

    def get_time_series(self, entity_id: str, path: str) -> Mapping[str | int, Scalar]:
        """Return the year -> value mapping at ``path`` (empty if absent)."""
        ...

    def get_fact_count(self, entity_id: str) -> int:
        """Return the number of serializable facts recorded for the entity."""
        ...

    def get_outbound_references(self, entity_id: str) -> Sequence[str]:
        """Return ids of other entities this entity's record references."""
        ...
