"""
Predicate combinator.

Every active criterion becomes an independent ``Entity -> bool`` predicate and
an entity survives only when all of them hold. Unset criteria contribute no
predicate at all, which is what makes each filter optional.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from .models import ALL_AREAS, Entity, QueryCriteria, SpecialFilter
from .text import contains, normalize_text

logger = logging.getLogger(__name__)

Predicate = Callable[[Entity], bool]


def _search_fields(entity: Entity) -> Iterable[str]:
    yield entity.display_name
    yield entity.id
    yield from entity.categories
    yield from entity.tags
    yield from entity.search_keys
    if entity.tax_id:
        yield entity.tax_id


def matches_search(term: str) -> Predicate:
    needle = normalize_text(term)

    def predicate(entity: Entity) -> bool:
        return any(needle in normalize_text(field) for field in _search_fields(entity))

    return predicate


def matches_category(category: str) -> Predicate:
    return lambda entity: category in entity.categories


def matches_region(region: str) -> Predicate:
    return lambda entity: entity.region == region


def matches_entity_type(entity_type: str) -> Predicate:
    return lambda entity: entity.kind == entity_type


def matches_service_area(area: str) -> Predicate:
    if area == ALL_AREAS:
        return lambda entity: True
    return lambda entity: (
        contains(entity.service_area, area) or ALL_AREAS in entity.service_area
    )


def matches_min_rating(min_rating: float) -> Predicate:
    return lambda entity: entity.rating >= min_rating


def matches_blacklist(show_blacklisted: bool) -> Predicate:
    # Exclusive toggle: the blacklist view shows nothing else.
    return lambda entity: entity.is_blacklisted == show_blacklisted


def matches_favorite() -> Predicate:
    return lambda entity: entity.is_favorite


_SPECIAL_PREDICATES: dict[SpecialFilter, Predicate] = {
    SpecialFilter.missed: lambda e: e.activity.missed_contact_log_count > 0,
    SpecialFilter.contacting: lambda e: e.activity.contact_log_count > 0,
}


def build_predicates(criteria: QueryCriteria) -> list[Predicate]:
    """Return the predicates for every non-empty criterion."""
    predicates: list[Predicate] = []

    if normalize_text(criteria.search):
        predicates.append(matches_search(criteria.search))
    if criteria.category:
        predicates.append(matches_category(criteria.category))
    if criteria.region:
        predicates.append(matches_region(criteria.region))
    if criteria.entity_type:
        predicates.append(matches_entity_type(criteria.entity_type))
    if criteria.service_area:
        predicates.append(matches_service_area(criteria.service_area))
    if criteria.min_rating > 0:
        predicates.append(matches_min_rating(criteria.min_rating))

    # Always active: the default view hides blacklisted entities.
    predicates.append(matches_blacklist(criteria.show_blacklisted))

    if criteria.favorites_only:
        predicates.append(matches_favorite())
    for special in criteria.special_filters:
        predicates.append(_SPECIAL_PREDICATES[special])

    return predicates


def apply_predicates(
    catalog: Sequence[Entity],
    predicates: Sequence[Predicate],
) -> list[Entity]:
    """AND-combine ``predicates`` over ``catalog``, preserving its order."""
    return [e for e in catalog if all(p(e) for p in predicates)]


def filter_entities(
    catalog: Sequence[Entity],
    criteria: QueryCriteria,
) -> list[Entity]:
    """Return the entities satisfying every active criterion, in catalog order."""
    predicates = build_predicates(criteria)
    result = apply_predicates(catalog, predicates)
    logger.debug(
        "Filtered %d of %d entities with %d predicates",
        len(result), len(catalog), len(predicates),
    )
    return result
