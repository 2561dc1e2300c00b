"""Data models for ranking signals."""

from dataclasses import dataclass
from enum import Enum


class Signal(str, Enum):
    """Ranking dimensions, one per extracted signal."""

    JOBS = "jobs"
    USERS = "users"
    FACTS = "facts"
    INBOUND_LINKS = "inbound_links"


@dataclass(frozen=True)
class EntitySignals:
    """The four ranking signals of one entity.

    Attributes:
        entity_id: Entity identifier.
        jobs: Estimated job openings.
        users: Estimated users.
        facts: Number of recorded facts.
        inbound_links: Number of references from other entities.
    """

    entity_id: str
    jobs: int
    users: int
    facts: int
    inbound_links: int

    def value(self, signal: Signal) -> int:
        """Get the value of one signal.

        Args:
            signal: Signal to read.

        Returns:
            The signal value.
        """
        return int(getattr(self, signal.value))

    def to_dict(self) -> dict[str, int | str]:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary of signal name to value.
        """
        return {
            "entity_id": self.entity_id,
            "jobs": self.jobs,
            "users": self.users,
            "facts": self.facts,
            "inbound_links": self.inbound_links,
        }
