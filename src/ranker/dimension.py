"""Per-dimension competition ranking."""

from collections.abc import Iterable


def competition_rank(values: Iterable[tuple[str, float]]) -> dict[str, int]:
    """Rank entities by one signal using competition ranking.

    Higher values rank better (rank 0). Equal values share the better rank
    of their group, and the next distinct value takes its own sorted
    position, leaving a gap after each tie.

    Args:
        values: (entity_id, signal value) pairs for one scope.

    Returns:
        Entity id -> rank. Empty input gives an empty mapping.

    Example:
        >>> competition_rank([("a", 10), ("b", 10), ("c", 8), ("d", 5)])
        {'a': 0, 'b': 0, 'c': 2, 'd': 3}
    """
    ordered = sorted(values, key=lambda pair: pair[1], reverse=True)
    if not ordered:
        return {}

    ranks: dict[str, int] = {}
    last_value = ordered[0][1]
    last_rank = 0
    for position, (entity_id, value) in enumerate(ordered):
        if value != last_value:
            last_rank = position
            last_value = value
        ranks[entity_id] = last_rank

    return ranks
