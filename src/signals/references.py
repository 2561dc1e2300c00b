"""Inbound cross-reference counting."""

import structlog

from src.data_model.errors import DanglingReferenceError
from src.records.protocols import RecordAccessor


logger = structlog.get_logger()


def build_inbound_links(accessor: RecordAccessor) -> dict[str, list[str]]:
    """Invert outbound references into per-entity referrer lists.

    Every entity gets an entry, possibly empty. A source that references
    the same target twice is listed twice.

    Args:
        accessor: Record accessor.

    Returns:
        Entity id -> ids of entities referencing it, in enumeration order.

    Raises:
        DanglingReferenceError: If a reference targets an id that is not in
            the record set.
    """
    entity_ids = accessor.list_entities()
    inbound: dict[str, list[str]] = {entity_id: [] for entity_id in entity_ids}

    for source_id in entity_ids:
        for target_id in accessor.get_outbound_references(source_id):
            referrers = inbound.get(target_id)
            if referrers is None:
                logger.error(
                    "dangling_reference",
                    component="signals",
                    source_id=source_id,
                    target_id=target_id,
                )
                raise DanglingReferenceError(source_id, target_id)
            referrers.append(source_id)

    return inbound
