"""Signal extraction from sparse entity records.

Turns an entity's optional fields into the four numeric ranking signals.
Missing or malformed fields never raise; they contribute zero.
"""

import math
import re
from collections.abc import Mapping

import structlog

from src.records.protocols import RecordAccessor
from src.signals.models import EntitySignals
from src.signals.references import build_inbound_links
from src.signals.weights import SignalWeights


logger = structlog.get_logger()

_LEADING_INT = re.compile(r"^\s*(-?\d+)")
_LEADING_NUMBER = re.compile(r"^\s*(-?(?:\d+\.?\d*|\.\d+))")


def parse_int(value: object) -> int:
    """Parse the leading integer of a field value.

    Numeric strings such as ``"12"`` or ``"1200 members"`` parse to their
    leading integer; anything unparseable (including booleans) yields 0.

    Args:
        value: Raw field value.

    Returns:
        Parsed integer, or 0.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def parse_number(value: object) -> float:
    """Parse the leading number of a field value, keeping fractions.

    Args:
        value: Raw field value.

    Returns:
        Parsed number, or 0.0.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, int | float):
        return float(value) if math.isfinite(value) else 0.0
    match = _LEADING_NUMBER.match(str(value))
    return float(match.group(1)) if match else 0.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded up.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``); the
    estimates round halves up (``2.5 -> 3``).

    Args:
        value: Value to round.

    Returns:
        Rounded integer.
    """
    return math.floor(value + 0.5)


def _parse_year(key: object) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    match = _LEADING_INT.match(str(key))
    return int(match.group(1)) if match else None


def latest_time_series_value(series: Mapping[str | int, object] | None) -> int:
    """Get the value recorded for the most recent year of a time series.

    Keys that do not parse as years are ignored.

    Args:
        series: Year -> value mapping, or None if the field is absent.

    Returns:
        Value at the numerically largest key, or 0 if there is none.

    Example:
        >>> latest_time_series_value({2019: 5, 2021: 12, 2020: 9})
        12
    """
    if not series:
        return 0

    latest_year: int | None = None
    latest_value: object = None
    for key, value in series.items():
        year = _parse_year(key)
        if year is None:
            continue
        if latest_year is None or year > latest_year:
            latest_year = year
            latest_value = value

    if latest_year is None:
        return 0
    return parse_int(latest_value)


class SignalExtractor:
    """Computes ranking signals for entities of a record set.

    Signal formulas:
        users = sum(latest(f) for f in most_recent_fields)
              + sum(value(f) for f in direct_fields)
              + sum(constant + factor * value(f) for present custom fields)
        jobs  = round(latest(skill_field) * skill_ratio) + latest(board_field)
        facts = accessor fact count
        inbound_links = number of references from other entities
    """

    def __init__(self, weights: SignalWeights | None = None) -> None:
        """Initialize the extractor.

        Args:
            weights: Heuristic weight table (default: built-in table).
        """
        self._weights = weights or SignalWeights()
        self._log = logger.bind(component="signals")

    @property
    def weights(self) -> SignalWeights:
        """Get the weight table in use."""
        return self._weights

    def latest(self, accessor: RecordAccessor, entity_id: str, path: str) -> int:
        """Get the latest time-series value of an entity field.

        Args:
            accessor: Record accessor.
            entity_id: Entity identifier.
            path: Time-series field path.

        Returns:
            Latest value, or 0 if absent.
        """
        return latest_time_series_value(accessor.get_time_series(entity_id, path))

    def user_breakdown(
        self, accessor: RecordAccessor, entity_id: str
    ) -> dict[str, float]:
        """Compute the per-field contributions to estimated users.

        Fields that are absent are omitted from the result.

        Args:
            accessor: Record accessor.
            entity_id: Entity identifier.

        Returns:
            Mapping of field path to its (unrounded) contribution.
        """
        contributions: dict[str, float] = {}

        for path in self._weights.most_recent_fields:
            value = self.latest(accessor, entity_id, path)
            if value:
                contributions[path] = float(value)

        for path in self._weights.direct_fields:
            value = parse_int(accessor.get_field(entity_id, path))
            if value:
                contributions[path] = contributions.get(path, 0.0) + value

        for weight in self._weights.custom:
            raw = accessor.get_field(entity_id, weight.path)
            if not raw:
                continue
            amount = weight.constant
            if weight.factor:
                parse = parse_int if weight.truncate else parse_number
                amount += weight.factor * parse(raw)
            contributions[weight.path] = contributions.get(weight.path, 0.0) + amount

        return contributions

    def estimate_users(self, accessor: RecordAccessor, entity_id: str) -> int:
        """Estimate the number of users of an entity.

        Args:
            accessor: Record accessor.
            entity_id: Entity identifier.

        Returns:
            Estimated users, rounded to the nearest integer.
        """
        total = sum(self.user_breakdown(accessor, entity_id).values())
        return max(0, round_half_up(total))

    def estimate_jobs(self, accessor: RecordAccessor, entity_id: str) -> int:
        """Estimate the number of job openings for an entity.

        Args:
            accessor: Record accessor.
            entity_id: Entity identifier.

        Returns:
            Estimated jobs.
        """
        jobs = self._weights.jobs
        skill = self.latest(accessor, entity_id, jobs.skill_field)
        board = self.latest(accessor, entity_id, jobs.board_field)
        return max(0, round_half_up(skill * jobs.skill_ratio) + board)

    def extract(
        self, accessor: RecordAccessor, entity_id: str, inbound_links: int
    ) -> EntitySignals:
        """Compute all four signals for one entity.

        Args:
            accessor: Record accessor.
            entity_id: Entity identifier.
            inbound_links: Precomputed inbound reference count.

        Returns:
            The entity's signals.
        """
        return EntitySignals(
            entity_id=entity_id,
            jobs=self.estimate_jobs(accessor, entity_id),
            users=self.estimate_users(accessor, entity_id),
            facts=accessor.get_fact_count(entity_id),
            inbound_links=inbound_links,
        )

    def extract_all(
        self,
        accessor: RecordAccessor,
        inbound: dict[str, list[str]] | None = None,
    ) -> dict[str, EntitySignals]:
        """Compute signals for every entity of a record set.

        Args:
            accessor: Record accessor.
            inbound: Precomputed referrer lists (built from the accessor
                if not given).

        Returns:
            Entity id -> signals, in record enumeration order.

        Raises:
            DanglingReferenceError: If any record references a missing entity.
        """
        if inbound is None:
            inbound = build_inbound_links(accessor)
        signals = {
            entity_id: self.extract(accessor, entity_id, len(inbound[entity_id]))
            for entity_id in accessor.list_entities()
        }
        self._log.info("signals_extracted", entities=len(signals))
        return signals
