"""Shared data model primitives and domain exceptions."""

from src.data_model.base import StrictBaseModel
from src.data_model.errors import (
    DanglingReferenceError,
    EmptyScopeError,
    EntityNotFoundError,
    RankerError,
    RecordLoadError,
    ScopeMembershipError,
    UnknownScopeError,
)


__all__ = [
    "DanglingReferenceError",
    "EmptyScopeError",
    "EntityNotFoundError",
    "RankerError",
    "RecordLoadError",
    "ScopeMembershipError",
    "StrictBaseModel",
    "UnknownScopeError",
]
