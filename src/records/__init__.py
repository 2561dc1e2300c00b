"""Entity record access.

Defines the capability interface the ranking engine consumes from a record
back-end, plus an in-memory implementation and a YAML/JSON loader for it.
"""

from src.records.loader import load_records, load_store, parse_records
from src.records.models import EntityRecord
from src.records.protocols import RecordAccessor
from src.records.store import (
    DEFAULT_REFERENCE_FIELDS,
    SCOPE_GLOBAL,
    SCOPE_LANGUAGE,
    InMemoryRecordStore,
)
from src.records.types import NON_LANGUAGE_TYPES, is_language


__all__ = [
    "DEFAULT_REFERENCE_FIELDS",
    "NON_LANGUAGE_TYPES",
    "SCOPE_GLOBAL",
    "SCOPE_LANGUAGE",
    "EntityRecord",
    "InMemoryRecordStore",
    "RecordAccessor",
    "is_language",
    "load_records",
    "load_store",
    "parse_records",
]
