"""Data models for entity records."""

from typing import Annotated

from pydantic import Field, model_validator

from src.data_model import StrictBaseModel


Scalar = str | int | float | bool
TimeSeries = dict[str | int, Scalar | None]
# None is an explicitly empty field (`key:` in YAML, `null` in JSON)
FieldValue = Scalar | list[Scalar] | TimeSeries | None


class EntityRecord(StrictBaseModel):
    """A single entity record with a sparse set of named fields.

    Field names are space-delimited paths (``"githubRepo stars"``). A field
    holds a scalar, a list of scalars, a year -> value mapping (time series)
    or null. A null field is treated exactly like an absent one.

    Attributes:
        id: Unique, immutable entity identifier.
        fields: Mapping of field path to value.
    """

    id: Annotated[str, Field(min_length=1)]
    fields: dict[str, FieldValue] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_field_paths(self) -> "EntityRecord":
        """Ensure field paths are non-empty and normalised."""
        for path in self.fields:
            if not path.strip() or path != " ".join(path.split()):
                msg = f"Invalid field path {path!r} in record '{self.id}'"
                raise ValueError(msg)
        return self

    @property
    def entity_type(self) -> str | None:
        """Get the record's ``type`` field, if present."""
        value = self.fields.get("type")
        return value if isinstance(value, str) else None

    def get(self, path: str) -> Scalar | None:
        """Get the scalar value at a field path.

        Args:
            path: Space-delimited field path.

        Returns:
            The scalar value, or None if absent, null, a list or a time
            series.
        """
        value = self.fields.get(path)
        if isinstance(value, dict | list):
            return None
        return value

    def values(self, path: str) -> list[Scalar]:
        """Get the value at a field path as a list of scalars.

        Args:
            path: Space-delimited field path.

        Returns:
            The list itself, a one-element list for a scalar, or an empty
            list if absent, null or a time series.
        """
        value = self.fields.get(path)
        if value is None or isinstance(value, dict):
            return []
        if isinstance(value, list):
            return list(value)
        return [value]

    def time_series(self, path: str) -> TimeSeries:
        """Get the time series at a field path.

        Args:
            path: Space-delimited field path.

        Returns:
            The year -> value mapping without null points, or an empty
            mapping if absent.
        """
        value = self.fields.get(path)
        if not isinstance(value, dict):
            return {}
        return {year: point for year, point in value.items() if point is not None}
