"""Loader for entity record files (YAML or JSON)."""

import json
import time
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from src.data_model.errors import RecordLoadError
from src.records.models import EntityRecord
from src.records.store import DEFAULT_REFERENCE_FIELDS, InMemoryRecordStore


logger = structlog.get_logger()


def _parse_file(file_path: Path) -> object:
    """Parse a record file by suffix.

    Args:
        file_path: Path to a ``.json``, ``.yaml`` or ``.yml`` file.

    Returns:
        Parsed document.

    Raises:
        RecordLoadError: If the file cannot be read or parsed.
    """
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise RecordLoadError(str(file_path), str(e)) from e

    try:
        if file_path.suffix.lower() == ".json":
            return json.loads(content)
        return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RecordLoadError(str(file_path), f"parse error: {e}") from e


def parse_records(data: object, source: str = "<memory>") -> list[EntityRecord]:
    """Validate parsed data into entity records.

    Accepts either a list of ``{"id": ..., "fields": {...}}`` objects or a
    mapping of entity id to its fields. Document order is preserved.

    Args:
        data: Parsed YAML/JSON document.
        source: Description of where the data came from, for errors.

    Returns:
        Records in document order.

    Raises:
        RecordLoadError: If the document shape or a record is invalid.
    """
    if data is None:
        return []

    if isinstance(data, dict):
        raw_records = [
            {"id": str(entity_id), "fields": fields or {}}
            for entity_id, fields in data.items()
        ]
    elif isinstance(data, list):
        raw_records = data
    else:
        msg = f"expected a list or mapping of records, got {type(data).__name__}"
        raise RecordLoadError(source, msg)

    records: list[EntityRecord] = []
    for position, raw in enumerate(raw_records):
        try:
            records.append(EntityRecord.model_validate(raw))
        except ValidationError as e:
            msg = f"record #{position} is invalid: {e.error_count()} errors"
            raise RecordLoadError(source, msg) from e
    return records


def load_records(file_path: Path) -> list[EntityRecord]:
    """Load entity records from a YAML or JSON file.

    Args:
        file_path: Path to the record file.

    Returns:
        Records in file order.

    Raises:
        RecordLoadError: If the file is missing or malformed.
    """
    log = logger.bind(component="records", path=str(file_path))
    start = time.perf_counter()

    records = parse_records(_parse_file(file_path), source=str(file_path))

    log.info(
        "records_loaded",
        entities=len(records),
        duration_ms=round((time.perf_counter() - start) * 1000, 3),
    )
    return records


def load_store(
    file_path: Path,
    reference_fields: tuple[str, ...] = DEFAULT_REFERENCE_FIELDS,
    non_serialized_fields: tuple[str, ...] = (),
) -> InMemoryRecordStore:
    """Load a record file into an in-memory store.

    Args:
        file_path: Path to the record file.
        reference_fields: Fields holding cross-references to other ids.
        non_serialized_fields: Computed fields excluded from fact counts.

    Returns:
        Populated record store.

    Raises:
        RecordLoadError: If the file is malformed or ids are duplicated.
    """
    records = load_records(file_path)
    try:
        return InMemoryRecordStore(
            records,
            reference_fields=reference_fields,
            non_serialized_fields=non_serialized_fields,
        )
    except ValueError as e:
        raise RecordLoadError(str(file_path), str(e)) from e
