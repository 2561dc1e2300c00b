"""Unit tests for loading record files."""

import json
from pathlib import Path

import pytest

from src.data_model.errors import RecordLoadError
from src.records.loader import load_records, load_store, parse_records


class TestParseRecords:
    """Tests for parse_records."""

    def test_list_form(self) -> None:
        """A list of id/fields objects keeps its order."""
        records = parse_records(
            [{"id": "b", "fields": {"type": "pl"}}, {"id": "a"}],
        )

        assert [r.id for r in records] == ["b", "a"]
        assert records[0].entity_type == "pl"
        assert records[1].fields == {}

    def test_mapping_form(self) -> None:
        """A mapping of id to fields keeps its order."""
        records = parse_records({"z": {"type": "pl"}, "y": None})

        assert [r.id for r in records] == ["z", "y"]

    def test_empty_document(self) -> None:
        """An empty document has no records."""
        assert parse_records(None) == []

    def test_wrong_shape(self) -> None:
        """Scalars are not a record document."""
        with pytest.raises(RecordLoadError, match="expected a list or mapping"):
            parse_records("python", source="inline")

    def test_invalid_record_names_position(self) -> None:
        """Invalid records are reported by position."""
        with pytest.raises(RecordLoadError, match="record #1 is invalid"):
            parse_records([{"id": "ok"}, {"id": ""}])


class TestLoadFiles:
    """Tests for loading YAML and JSON files."""

    def test_yaml_file(self, tmp_path: Path) -> None:
        """YAML time series keep integer years."""
        path = tmp_path / "records.yaml"
        path.write_text(
            "python:\n"
            "  type: pl\n"
            "  linkedInSkill:\n"
            "    2020: 100\n"
            "    2021: 150\n"
            "  writtenIn: c\n"
            "c:\n"
            "  type: pl\n"
        )

        records = load_records(path)

        assert [r.id for r in records] == ["python", "c"]
        assert records[0].time_series("linkedInSkill") == {2020: 100, 2021: 150}

    def test_json_file(self, tmp_path: Path) -> None:
        """JSON files are accepted."""
        path = tmp_path / "records.json"
        path.write_text(
            json.dumps([{"id": "go", "fields": {"indeedJobs": {"2021": 7}}}])
        )

        records = load_records(path)

        assert records[0].time_series("indeedJobs") == {"2021": 7}

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises RecordLoadError."""
        with pytest.raises(RecordLoadError):
            load_records(tmp_path / "missing.yaml")

    def test_malformed_file(self, tmp_path: Path) -> None:
        """Unparseable content raises RecordLoadError."""
        path = tmp_path / "records.json"
        path.write_text("{not json")

        with pytest.raises(RecordLoadError, match="parse error"):
            load_records(path)

    def test_load_store_duplicate_ids(self, tmp_path: Path) -> None:
        """Duplicate ids surface as RecordLoadError."""
        path = tmp_path / "records.yaml"
        path.write_text("- id: a\n- id: a\n")

        with pytest.raises(RecordLoadError, match="Duplicate entity id"):
            load_store(path)

    def test_load_store(self, tmp_path: Path) -> None:
        """load_store builds a queryable store."""
        path = tmp_path / "records.yaml"
        path.write_text("a:\n  type: library\nb:\n  related: a\n")

        store = load_store(path)

        assert list(store.list_entities()) == ["a", "b"]
        assert list(store.get_outbound_references("b")) == ["a"]
        assert not store.is_in_scope("a", "language")


class TestSparseValues:
    """Tests for null and list field values in record files."""

    def test_null_fields_are_absent(self) -> None:
        """Null fields load and behave like missing ones."""
        records = parse_records(
            {"python": {"type": "pl", "wikipedia": None, "linkedInSkill": {2021: 10}}}
        )

        record = records[0]
        assert record.get("wikipedia") is None
        assert record.values("wikipedia") == []
        assert record.time_series("linkedInSkill") == {2021: 10}

    def test_empty_yaml_value(self, tmp_path: Path) -> None:
        """A YAML key without a value does not reject the file."""
        path = tmp_path / "records.yaml"
        path.write_text(
            "python:\n"
            "  type: pl\n"
            "  wikipedia:\n"
            "  indeedJobs:\n"
            "    2020: 5\n"
            "    2021:\n"
        )

        store = load_store(path)

        assert store.get_field("python", "wikipedia") is None
        assert store.get_time_series("python", "indeedJobs") == {2020: 5}
        assert store.get_fact_count("python") == 3

    def test_json_null(self, tmp_path: Path) -> None:
        """JSON nulls are accepted."""
        path = tmp_path / "records.json"
        path.write_text(json.dumps({"go": {"type": "pl", "website": None}}))

        store = load_store(path)

        assert store.get_fact_count("go") == 1

    def test_list_fields(self, tmp_path: Path) -> None:
        """Lists of scalars load and count as one fact."""
        path = tmp_path / "records.yaml"
        path.write_text(
            "c:\n  type: pl\n"
            "python:\n"
            "  fileExtensions: [py, pyw]\n"
            "  writtenIn: [c]\n"
        )

        store = load_store(path)

        assert store.record("python").values("fileExtensions") == ["py", "pyw"]
        assert store.get_field("python", "fileExtensions") is None
        assert store.get_fact_count("python") == 2
        assert list(store.get_outbound_references("python")) == ["c"]

    def test_nested_mapping_in_list_rejected(self) -> None:
        """Lists may only hold scalars."""
        with pytest.raises(RecordLoadError, match="record #0 is invalid"):
            parse_records({"x": {"authors": [{"name": "someone"}]}})
