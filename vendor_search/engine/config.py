from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class KeywordRule:
    """Bonus awarded when the query mentions a keyword AND the entity carries a tag.

    Both sides are substring checks: any of ``query_keywords`` inside the
    query, and any of ``entity_tags`` inside one of the entity's tags.
    """

    name: str
    query_keywords: tuple[str, ...]
    entity_tags: tuple[str, ...]
    weight: float
    reason: str


DEFAULT_KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        name="urgent",
        query_keywords=("急件", "急", "urgent"),
        entity_tags=("急件",),
        weight=20.0,
        reason="accepts urgent jobs",
    ),
    KeywordRule(
        name="night_work",
        query_keywords=("夜間", "晚上", "night"),
        entity_tags=("夜間施工",),
        weight=15.0,
        reason="available for night work",
    ),
    KeywordRule(
        name="excellent_vendor",
        query_keywords=("優良", "推薦", "recommend"),
        entity_tags=("優良廠商",),
        weight=10.0,
        reason="certified excellent vendor",
    ),
    KeywordRule(
        name="waste_removal",
        query_keywords=("清運", "廢棄物"),
        entity_tags=("含廢棄物清運",),
        weight=10.0,
        reason="includes waste removal",
    ),
)


@dataclass(frozen=True)
class RankingConfig:
    category_weight: float = float(os.getenv("RANK_WEIGHT_CATEGORY", "30"))
    region_weight: float = float(os.getenv("RANK_WEIGHT_REGION", "15"))
    tag_weight: float = float(os.getenv("RANK_WEIGHT_TAG", "10"))
    rating_weight: float = float(os.getenv("RANK_WEIGHT_RATING", "5"))
    high_rating_threshold: float = float(os.getenv("RANK_HIGH_RATING", "4.8"))
    region_prefix_length: int = 2
    notes_weight: float = float(os.getenv("RANK_WEIGHT_NOTES", "10"))
    notes_min_term_length: int = 2
    default_top_k: int = int(os.getenv("RANK_DEFAULT_TOP_K", "3"))
    keyword_rules: tuple[KeywordRule, ...] = field(default=DEFAULT_KEYWORD_RULES)


DEFAULT_RANKING_CONFIG = RankingConfig()
