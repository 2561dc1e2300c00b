"""Domain exceptions for record access and ranking.

This module defines a hierarchy of exceptions shared by the record store,
the signal extractor and the ranker. Data-integrity errors abort a ranking
build; caller errors (unknown entity, wrong scope) are raised per query and
leave any cached ranking untouched.
"""


class RankerError(Exception):
    """Base exception for all ranking engine errors.

    All exceptions raised by the ranking engine inherit from this class
    to enable consistent error handling by callers.
    """

    def to_dict(self) -> dict[str, str | None]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {"error": type(self).__name__, "message": str(self)}


class DanglingReferenceError(RankerError):
    """Raised when a record references an entity id that does not exist.

    This is a data-integrity error: the whole ranking build is aborted
    rather than counting the reference as zero.
    """

    def __init__(self, source_id: str, target_id: str) -> None:
        """Initialize the error with the offending reference.

        Args:
            source_id: Entity whose record declares the reference.
            target_id: Referenced entity id that was not found.
        """
        self.source_id = source_id
        self.target_id = target_id
        super().__init__(
            f"Broken reference in '{source_id}': no entity '{target_id}' found"
        )

    def to_dict(self) -> dict[str, str | None]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error": type(self).__name__,
            "message": str(self),
            "source_id": self.source_id,
            "target_id": self.target_id,
        }


class EntityNotFoundError(RankerError):
    """Raised when a requested entity id is not in the record set."""

    def __init__(self, entity_id: str) -> None:
        """Initialize the error with the missing entity id.

        Args:
            entity_id: The entity id that was not found.
        """
        self.entity_id = entity_id
        super().__init__(f"Entity not found: {entity_id}")


class ScopeMembershipError(RankerError):
    """Raised when an existing entity is queried in a scope it is not part of.

    Distinct from EntityNotFoundError: the entity exists, but it has no
    position in the requested ordering (e.g. a library in the language scope).
    """

    def __init__(self, entity_id: str, scope: str) -> None:
        """Initialize the error.

        Args:
            entity_id: The entity that was queried.
            scope: Name of the scope it does not belong to.
        """
        self.entity_id = entity_id
        self.scope = scope
        super().__init__(f"Entity '{entity_id}' is not in scope '{scope}'")


class EmptyScopeError(RankerError):
    """Raised when a positional query is made against a scope with no entities."""

    def __init__(self, scope: str) -> None:
        """Initialize the error.

        Args:
            scope: Name of the empty scope.
        """
        self.scope = scope
        super().__init__(f"No entities in scope '{scope}'")


class UnknownScopeError(RankerError):
    """Raised when a scope name is not recognised."""

    def __init__(self, scope: str) -> None:
        """Initialize the error.

        Args:
            scope: The unrecognised scope name.
        """
        self.scope = scope
        super().__init__(f"Unknown scope: {scope}")


class RecordLoadError(RankerError):
    """Raised when a record file cannot be parsed into entity records."""

    def __init__(self, path: str, message: str) -> None:
        """Initialize the error.

        Args:
            path: Path of the record file.
            message: Human-readable description of the problem.
        """
        self.path = path
        super().__init__(f"Failed to load records from {path}: {message}")
