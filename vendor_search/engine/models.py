from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

ALL_AREAS = "全部"


class Region(str, Enum):
    taiwan = "台灣"
    china = "大陸"


class EntityKind(str, Enum):
    company = "公司"
    individual = "個人"
    group = "群組"
    contact = "聯絡人"


class SortStrategy(str, Enum):
    default = "default"
    rating_desc = "rating-desc"
    activity_desc = "activity-desc"
    txn_count_desc = "txn-count-desc"
    manual = "manual"


class SpecialFilter(str, Enum):
    missed = "missed"
    contacting = "contacting"


class ActivityCounters(BaseModel):
    model_config = ConfigDict(frozen=True)

    transaction_count: int = Field(default=0, ge=0)
    last_activity: date | None = None
    contact_log_count: int = Field(default=0, ge=0)
    missed_contact_log_count: int = Field(default=0, ge=0)


class Entity(BaseModel):
    """A read-only catalog snapshot of a vendor or one of its projections."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    display_name: str
    kind: str = EntityKind.company.value
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    region: str = Region.taiwan.value
    service_area: str = ""
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    notes_text: str = ""
    is_favorite: bool = False
    is_blacklisted: bool = False
    activity: ActivityCounters = Field(default_factory=ActivityCounters)
    search_keys: list[str] = Field(
        default_factory=list,
        description="Extra identifiers matched by free-text search only",
    )
    tax_id: str | None = None
    phone: str | None = None

    # Set on group / contact projections only
    vendor_id: str | None = None
    vendor_name: str | None = None
    platform: str | None = None
    role: str | None = None


class QueryCriteria(BaseModel):
    search: str = ""
    category: str | None = None
    region: str | None = None
    service_area: str | None = None
    entity_type: str | None = None
    min_rating: float = Field(default=0.0, ge=0.0, le=5.0)
    show_blacklisted: bool = False
    favorites_only: bool = False
    special_filters: list[SpecialFilter] = Field(default_factory=list)
    sort: SortStrategy = SortStrategy.default


class ManualOrder(BaseModel):
    """User-curated, partial sequence of entity ids. Replaced, never mutated."""

    model_config = ConfigDict(frozen=True)

    ids: list[str] = Field(default_factory=list)


class RankedResult(BaseModel):
    entity: Entity
    score: float
    reasons: list[str] = Field(default_factory=list)


class Page(BaseModel):
    items: list = Field(default_factory=list)
    total_pages: int
    page: int
    page_size: int
    total_items: int


# ── HTTP request / response bodies ─────────────────────────────────────


class SearchRequest(QueryCriteria):
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=100)


class SearchResponse(BaseModel):
    items: list[Entity]
    total_items: int
    total_pages: int
    page: int
    page_size: int
    page_window: list[int | str]
    sort: SortStrategy


class RecommendRequest(BaseModel):
    query: str = Field(..., max_length=500)
    limit: int = Field(default=3, ge=1, le=20)
    criteria: QueryCriteria | None = Field(
        default=None,
        description="Optional filters applied to the catalog before ranking",
    )


class RecommendResponse(BaseModel):
    results: list[RankedResult]
    total_candidates: int


class MoveRequest(BaseModel):
    source_id: str = Field(..., min_length=1)
    target_id: str = Field(..., min_length=1)
    criteria: QueryCriteria = Field(default_factory=QueryCriteria)


class MoveResponse(BaseModel):
    status: str
    order: list[str]


class CommunicationSearchRequest(BaseModel):
    view: str = Field(default="groups", pattern="^(groups|contacts)$")
    platform: str = Field(default="LINE", pattern="^(LINE|WeChat)$")
    search: str = ""
    vendor_name: str | None = None
    role: str | None = None
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=100)


class DuplicateCheckRequest(BaseModel):
    name: str | None = None
    tax_id: str | None = None
    phone: str | None = None


class DuplicateMatch(BaseModel):
    entity_id: str
    display_name: str
    fields: list[str]
