"""
Heuristic relevance ranker.

Responsibilities:
- Score each entity against a free-text query with fixed, weighted signals.
- Record one human-readable reason per contributing signal.
- Return the top-K entities with a positive score, highest first.

Scoring is deterministic rule matching on case-folded substrings; there is no
model inference involved. Any object implementing :class:`Scorer` can replace
the default heuristic without touching filtering, sorting or pagination.
"""
from __future__ import annotations

import logging
from typing import Protocol, Sequence

from .config import DEFAULT_RANKING_CONFIG, KeywordRule, RankingConfig
from .models import Entity, RankedResult
from .text import normalize_text

logger = logging.getLogger(__name__)


class Scorer(Protocol):
    def score(self, entity: Entity, query: str) -> tuple[float, list[str]]:
        """Return ``(score, reasons)`` for ``entity`` against a normalized query."""
        ...


def _rule_applies(rule: KeywordRule, query: str, entity: Entity) -> bool:
    if not any(normalize_text(k) in query for k in rule.query_keywords):
        return False
    return any(
        normalize_text(wanted) in normalize_text(tag)
        for tag in entity.tags
        for wanted in rule.entity_tags
    )


class HeuristicScorer:
    """Weighted substring signals, configured by :class:`RankingConfig`."""

    def __init__(self, config: RankingConfig = DEFAULT_RANKING_CONFIG) -> None:
        self.config = config

    def _matches_region(self, entity: Entity, query: str) -> bool:
        region = normalize_text(entity.region)
        if region and region in query:
            return True
        prefix = query[: self.config.region_prefix_length]
        return bool(prefix) and prefix in normalize_text(entity.service_area)

    def _query_terms(self, query: str) -> list[str]:
        """Whitespace tokens of the query plus any rule keyword it mentions."""
        terms = query.split()
        for rule in self.config.keyword_rules:
            terms.extend(
                normalize_text(k) for k in rule.query_keywords if normalize_text(k) in query
            )
        return [t for t in terms if len(t) >= self.config.notes_min_term_length]

    def _mentioned_in_notes(self, entity: Entity, query: str) -> bool:
        notes = normalize_text(entity.notes_text)
        if not notes:
            return False
        return any(term in notes for term in self._query_terms(query))

    def score(self, entity: Entity, query: str) -> tuple[float, list[str]]:
        cfg = self.config
        score = 0.0
        reasons: list[str] = []

        for category in entity.categories:
            if normalize_text(category) and normalize_text(category) in query:
                score += cfg.category_weight
                reasons.append(f"matches category: {category}")

        if self._matches_region(entity, query):
            score += cfg.region_weight
            reasons.append("matches region")

        for tag in entity.tags:
            if normalize_text(tag) and normalize_text(tag) in query:
                score += cfg.tag_weight
                reasons.append(f"matches tag: {tag}")

        if entity.rating >= cfg.high_rating_threshold:
            score += cfg.rating_weight
            reasons.append("highly rated")

        for rule in cfg.keyword_rules:
            if _rule_applies(rule, query, entity):
                score += rule.weight
                reasons.append(rule.reason)

        if self._mentioned_in_notes(entity, query):
            score += cfg.notes_weight
            reasons.append("mentioned in notes")

        return score, reasons


def rank_by_query(
    catalog: Sequence[Entity],
    query_text: str,
    top_k: int | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
    scorer: Scorer | None = None,
) -> list[RankedResult]:
    """Rank ``catalog`` against ``query_text`` and keep the best ``top_k``."""
    query = normalize_text(query_text)
    limit = config.default_top_k if top_k is None else top_k
    if not query or limit <= 0:
        return []

    scorer = scorer or HeuristicScorer(config)

    scored: list[RankedResult] = []
    for entity in catalog:
        score, reasons = scorer.score(entity, query)
        if score > 0:
            scored.append(RankedResult(entity=entity, score=score, reasons=reasons))

    # sorted() is stable, so equal scores keep catalog order
    ranked = sorted(scored, key=lambda r: r.score, reverse=True)[:limit]
    logger.debug(
        "Ranked %d of %d entities for query %r, returning %d",
        len(scored), len(catalog), query_text, len(ranked),
    )
    return ranked
