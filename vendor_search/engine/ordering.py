"""
Ordering resolver.

Turns a filtered sequence into its final order. Attribute sorts rely on
Python's stable ``sorted`` (also stable with ``reverse=True``) so equal keys
keep their input order. The manual strategy merges a partial, user-curated
id list with the input order.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from .errors import InvalidMoveError, UnsupportedStrategyError
from .models import Entity, ManualOrder, SortStrategy

logger = logging.getLogger(__name__)


def _coerce_strategy(strategy: SortStrategy | str) -> SortStrategy:
    try:
        return SortStrategy(strategy)
    except ValueError:
        logger.warning("Rejected unsupported sort strategy %r", strategy)
        raise UnsupportedStrategyError(strategy) from None


def _ids(manual_order: ManualOrder | Sequence[str] | None) -> list[str]:
    if manual_order is None:
        return []
    if isinstance(manual_order, ManualOrder):
        return list(manual_order.ids)
    return list(manual_order)


def _activity_key(entity: Entity) -> tuple[bool, date]:
    last = entity.activity.last_activity
    # Entities without activity compare lowest, so they land last.
    return (last is not None, last or date.min)


def resolve_manual_order(
    entities: Sequence[Entity],
    manual_order: ManualOrder | Sequence[str] | None,
) -> list[Entity]:
    """Manually placed entities first (in recorded order), then the rest."""
    by_id = {e.id: e for e in entities}
    ordered_ids = _ids(manual_order)

    present: list[Entity] = []
    seen: set[str] = set()
    for entity_id in ordered_ids:
        if entity_id in by_id and entity_id not in seen:
            present.append(by_id[entity_id])
            seen.add(entity_id)

    placed = set(ordered_ids)
    unordered = [e for e in entities if e.id not in placed]
    return present + unordered


def sort_entities(
    entities: Sequence[Entity],
    strategy: SortStrategy | str = SortStrategy.default,
    manual_order: ManualOrder | Sequence[str] | None = None,
) -> list[Entity]:
    """Return ``entities`` ordered by ``strategy``. The input is never modified."""
    strategy = _coerce_strategy(strategy)

    if strategy is SortStrategy.default:
        return list(entities)
    if strategy is SortStrategy.rating_desc:
        return sorted(entities, key=lambda e: e.rating, reverse=True)
    if strategy is SortStrategy.activity_desc:
        return sorted(entities, key=_activity_key, reverse=True)
    if strategy is SortStrategy.txn_count_desc:
        return sorted(entities, key=lambda e: e.activity.transaction_count, reverse=True)
    return resolve_manual_order(entities, manual_order)


def move_entity(
    manual_order: ManualOrder | Sequence[str] | None,
    entities: Sequence[Entity],
    source_id: str,
    target_id: str,
) -> ManualOrder:
    """Move ``source_id`` to ``target_id``'s position and return the new order.

    The full order is materialized first: the recorded ids (hidden ones
    included) followed by every visible entity not yet recorded, in its
    effective position. The source is then taken out and reinserted at the
    index the target occupied.

    Raises :class:`InvalidMoveError` if either id is not in ``entities``.
    """
    visible = {e.id for e in entities}
    if source_id not in visible or target_id not in visible:
        raise InvalidMoveError(source_id, target_id)

    current = _ids(manual_order)
    if source_id == target_id:
        return ManualOrder(ids=current)

    order = list(dict.fromkeys(current))
    recorded = set(order)
    for entity in resolve_manual_order(entities, order):
        if entity.id not in recorded:
            order.append(entity.id)

    from_index = order.index(source_id)
    to_index = order.index(target_id)
    moved = order.pop(from_index)
    order.insert(to_index, moved)

    logger.debug("Moved %s from %d to %d", source_id, from_index, to_index)
    return ManualOrder(ids=order)
