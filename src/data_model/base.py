"""Shared Pydantic base models for records and ranking configuration."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Base model with strict, immutable defaults.

    Records and weight tables are read once per loaded record set and must
    not change while a ranking is being computed from them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
