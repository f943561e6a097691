"""
Faceted filter, ordering and relevance-ranking engine.

Responsibilities:
- Filter a read-only entity catalog by AND-combined predicates.
- Order the result by attribute or by a partial, user-curated manual order.
- Rank entities against a free-text query with explainable heuristics.
- Slice any ordered sequence into pages.

Every function is pure over its inputs; callers own the catalog snapshot and
the manual order.
"""
from __future__ import annotations

from .errors import EngineError, InvalidMoveError, UnsupportedStrategyError
from .filters import filter_entities
from .models import Entity, ManualOrder, QueryCriteria, RankedResult, SortStrategy
from .ordering import move_entity, sort_entities
from .pagination import paginate
from .ranking import HeuristicScorer, Scorer, rank_by_query

__all__ = [
    "EngineError",
    "Entity",
    "HeuristicScorer",
    "InvalidMoveError",
    "ManualOrder",
    "QueryCriteria",
    "RankedResult",
    "Scorer",
    "SortStrategy",
    "UnsupportedStrategyError",
    "filter_entities",
    "move_entity",
    "paginate",
    "rank_by_query",
    "sort_entities",
]
