"""State machine for the ranking cache lifecycle."""

from enum import Enum

import structlog

from src.data_model.errors import RankerError


logger = structlog.get_logger()


class CacheState(str, Enum):
    """State of a ranking cache.

    States represent the lifecycle of one cached snapshot:
    - EMPTY: Nothing computed, or the last snapshot was discarded
    - BUILDING: A snapshot is being computed
    - READY: A snapshot is cached and served to readers
    """

    EMPTY = "EMPTY"
    BUILDING = "BUILDING"
    READY = "READY"


# Valid state transitions
_VALID_TRANSITIONS: dict[CacheState, set[CacheState]] = {
    CacheState.EMPTY: {CacheState.BUILDING},
    CacheState.BUILDING: {CacheState.READY, CacheState.EMPTY},
    CacheState.READY: {CacheState.EMPTY},
}


class CacheStateTransitionError(RankerError):
    """Raised when an illegal state transition is attempted."""

    def __init__(
        self,
        cache_name: str,
        from_state: CacheState,
        to_state: CacheState,
    ) -> None:
        """Initialize the transition error.

        Args:
            cache_name: Name of the cache.
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.cache_name = cache_name
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            f"Illegal ranking cache state transition for '{cache_name}': "
            f"{from_state.value} -> {to_state.value}"
        )


class CacheStateMachine:
    """Manages state transitions for a ranking cache.

    Enforces valid transitions and logs all state changes.
    """

    def __init__(
        self,
        cache_name: str,
        initial_state: CacheState = CacheState.EMPTY,
    ) -> None:
        """Initialize the state machine.

        Args:
            cache_name: Name of the cache, for logging.
            initial_state: Starting state.
        """
        self._cache_name = cache_name
        self._state = initial_state
        self._log = logger.bind(
            component="ranker",
            subcomponent="cache",
            cache_name=cache_name,
        )

    @property
    def state(self) -> CacheState:
        """Get the current state."""
        return self._state

    def can_transition_to(self, target: CacheState) -> bool:
        """Check if a transition to the target state is valid.

        Args:
            target: The target state.

        Returns:
            True if the transition is valid.
        """
        return target in _VALID_TRANSITIONS.get(self._state, set())

    def transition_to(self, target: CacheState) -> None:
        """Transition to a new state.

        Args:
            target: The target state.

        Raises:
            CacheStateTransitionError: If the transition is invalid.
        """
        if not self.can_transition_to(target):
            self._log.error(
                "illegal_cache_state_transition",
                from_state=self._state.value,
                to_state=target.value,
            )
            raise CacheStateTransitionError(
                cache_name=self._cache_name,
                from_state=self._state,
                to_state=target,
            )

        old_state = self._state
        self._state = target

        self._log.debug(
            "cache_state_transition",
            from_state=old_state.value,
            to_state=target.value,
        )

    def to_building(self) -> None:
        """Transition to BUILDING state."""
        self.transition_to(CacheState.BUILDING)

    def to_ready(self) -> None:
        """Transition to READY state."""
        self.transition_to(CacheState.READY)

    def to_empty(self) -> None:
        """Transition to EMPTY state."""
        self.transition_to(CacheState.EMPTY)
