"""In-memory record store implementing the RecordAccessor protocol."""

from collections.abc import Iterable, Mapping, Sequence

import structlog

from src.data_model.errors import EntityNotFoundError, UnknownScopeError
from src.records.models import EntityRecord, Scalar
from src.records.types import is_language


logger = structlog.get_logger()

SCOPE_GLOBAL = "global"
SCOPE_LANGUAGE = "language"

# Fields whose value is a space-separated list of other entity ids
DEFAULT_REFERENCE_FIELDS: tuple[str, ...] = (
    "influencedBy",
    "supersetOf",
    "subsetOf",
    "writtenIn",
    "compilesTo",
    "successorOf",
    "related",
)


class InMemoryRecordStore:
    """Record set held in memory, keyed by entity id.

    Enumeration order is the order in which records were supplied; the
    ranker uses it as the final tie-break, so it must be stable.
    """

    def __init__(
        self,
        records: Iterable[EntityRecord],
        reference_fields: Sequence[str] = DEFAULT_REFERENCE_FIELDS,
        non_serialized_fields: Iterable[str] = (),
    ) -> None:
        """Initialize the store.

        Args:
            records: Entity records in enumeration order.
            reference_fields: Fields holding cross-references to other ids.
            non_serialized_fields: Computed fields excluded from fact counts.

        Raises:
            ValueError: If two records share the same id.
        """
        self._records: dict[str, EntityRecord] = {}
        for record in records:
            if record.id in self._records:
                msg = f"Duplicate entity id: {record.id}"
                raise ValueError(msg)
            self._records[record.id] = record
        self._reference_fields = tuple(reference_fields)
        self._non_serialized = frozenset(non_serialized_fields)
        self._log = logger.bind(component="records")
        self._log.debug("record_store_loaded", entities=len(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._records

    def record(self, entity_id: str) -> EntityRecord:
        """Get the record for an entity.

        Args:
            entity_id: Entity identifier.

        Returns:
            The entity record.

        Raises:
            EntityNotFoundError: If the id is not in the store.
        """
        try:
            return self._records[entity_id]
        except KeyError:
            raise EntityNotFoundError(entity_id) from None

    def list_entities(self) -> Sequence[str]:
        return list(self._records)

    def has_entity(self, entity_id: str) -> bool:
        return entity_id in self._records

    def is_in_scope(self, entity_id: str, scope_name: str) -> bool:
        record = self.record(entity_id)
        if scope_name == SCOPE_GLOBAL:
            return True
        if scope_name == SCOPE_LANGUAGE:
            return is_language(record.entity_type)
        raise UnknownScopeError(scope_name)

    def get_field(self, entity_id: str, path: str) -> Scalar | None:
        return self.record(entity_id).get(path)

    def get_time_series(self, entity_id: str, path: str) -> Mapping[str | int, Scalar]:
        return self.record(entity_id).time_series(path)

    def get_fact_count(self, entity_id: str) -> int:
        """Count serializable facts in a record.

        Each field counts once; each point of a time series counts once more.
        Null fields and null time-series points are not facts.

        Args:
            entity_id: Entity identifier.

        Returns:
            Number of facts.
        """
        count = 0
        for path, value in self.record(entity_id).fields.items():
            if value is None or path in self._non_serialized:
                continue
            count += 1
            if isinstance(value, dict):
                count += sum(1 for point in value.values() if point is not None)
        return count

    def get_outbound_references(self, entity_id: str) -> Sequence[str]:
        record = self.record(entity_id)
        references: list[str] = []
        for path in self._reference_fields:
            for value in record.values(path):
                if isinstance(value, str):
                    references.extend(value.split())
        return references
