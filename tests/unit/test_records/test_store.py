"""Unit tests for the in-memory record store."""

import pytest
from pydantic import ValidationError

from src.data_model.errors import EntityNotFoundError, UnknownScopeError
from src.records.models import EntityRecord
from src.records.protocols import RecordAccessor
from src.records.store import InMemoryRecordStore
from tests.helpers.records import make_record, make_store


class TestEntityRecord:
    """Tests for the EntityRecord model."""

    def test_scalar_and_series_access(self) -> None:
        """get returns scalars only; time_series returns mappings only."""
        record = make_record("x", website="https://x.org", indeedJobs={2020: 5})

        assert record.get("website") == "https://x.org"
        assert record.get("indeedJobs") is None
        assert record.time_series("indeedJobs") == {2020: 5}
        assert record.time_series("website") == {}
        assert record.get("missing") is None

    def test_entity_type(self) -> None:
        """entity_type reads the type field."""
        assert make_record("x", type="pl").entity_type == "pl"
        assert make_record("x").entity_type is None

    def test_empty_id_rejected(self) -> None:
        """Ids must be non-empty."""
        with pytest.raises(ValidationError):
            EntityRecord(id="")

    def test_unnormalised_path_rejected(self) -> None:
        """Paths with stray whitespace are rejected."""
        with pytest.raises(ValidationError, match="Invalid field path"):
            EntityRecord(id="x", fields={"githubRepo  stars": 1})


class TestInMemoryRecordStore:
    """Tests for InMemoryRecordStore."""

    def test_satisfies_accessor_protocol(self) -> None:
        """The store is a RecordAccessor."""
        assert isinstance(make_store(), RecordAccessor)

    def test_enumeration_order(self) -> None:
        """Entities enumerate in the order they were supplied."""
        store = make_store(make_record("b"), make_record("a"), make_record("c"))

        assert list(store.list_entities()) == ["b", "a", "c"]
        assert len(store) == 3
        assert "a" in store
        assert store.has_entity("c")
        assert not store.has_entity("d")

    def test_duplicate_ids_rejected(self) -> None:
        """Two records with the same id are rejected."""
        with pytest.raises(ValueError, match="Duplicate entity id: a"):
            make_store(make_record("a"), make_record("a"))

    def test_unknown_entity(self) -> None:
        """Field access on an unknown id raises EntityNotFoundError."""
        with pytest.raises(EntityNotFoundError):
            make_store().get_field("ghost", "type")

    def test_scope_membership(self) -> None:
        """Global holds everything; language excludes non-language types."""
        store = make_store(
            make_record("py", type="pl"),
            make_record("npm", type="packageManager"),
            make_record("untyped"),
        )

        assert store.is_in_scope("npm", "global")
        assert store.is_in_scope("py", "language")
        assert store.is_in_scope("untyped", "language")
        assert not store.is_in_scope("npm", "language")

    def test_unknown_scope(self) -> None:
        """Unknown scope names raise UnknownScopeError."""
        store = make_store(make_record("py"))

        with pytest.raises(UnknownScopeError):
            store.is_in_scope("py", "databases")

    def test_fact_count(self) -> None:
        """Each field counts once and each time-series point once more."""
        store = make_store(
            make_record("x", type="pl", website="w", linkedInSkill={2019: 1, 2020: 2})
        )

        assert store.get_fact_count("x") == 5

    def test_fact_count_skips_non_serialized_fields(self) -> None:
        """Computed fields are excluded from the fact count."""
        store = InMemoryRecordStore(
            [make_record("x", type="pl", rank=3, users={2020: 1})],
            non_serialized_fields=["rank", "users"],
        )

        assert store.get_fact_count("x") == 1

    def test_outbound_references(self) -> None:
        """Reference fields are split on whitespace, in field order."""
        store = make_store(
            make_record("x", writtenIn="c", influencedBy="lisp  ml", website="c")
        )

        assert list(store.get_outbound_references("x")) == ["lisp", "ml", "c"]

    def test_custom_reference_fields(self) -> None:
        """Reference fields are configurable."""
        store = InMemoryRecordStore(
            [make_record("x", writtenIn="c", dependsOn="y")],
            reference_fields=["dependsOn"],
        )

        assert list(store.get_outbound_references("x")) == ["y"]

    def test_non_string_reference_ignored(self) -> None:
        """Non-string values in reference fields are ignored."""
        store = make_store(make_record("x", related=3))

        assert list(store.get_outbound_references("x")) == []
