from __future__ import annotations

import logging
import os
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .catalog.data_store import get_catalog
from .catalog.duplicates import find_duplicates
from .catalog.projections import (
    PLATFORMS,
    flatten_contacts,
    flatten_groups,
    matches_hub_search,
)
from .engine.errors import InvalidMoveError, UnsupportedStrategyError
from .engine.filters import apply_predicates, filter_entities
from .engine.models import (
    CommunicationSearchRequest,
    DuplicateCheckRequest,
    DuplicateMatch,
    EntityKind,
    ManualOrder,
    MoveRequest,
    MoveResponse,
    RecommendRequest,
    RecommendResponse,
    Region,
    SearchRequest,
    SearchResponse,
    SortStrategy,
)
from .engine.ordering import move_entity, sort_entities
from .engine.pagination import page_window, paginate
from .engine.ranking import rank_by_query
from .engine.text import normalize_text

logger = logging.getLogger(__name__)

_MANUAL_ORDER_KEY = "manual_order"

app = FastAPI(title="Vendor Directory Search API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "vendor-search-secret-change-in-production"),
)


def _session_order(request: Request) -> ManualOrder:
    return ManualOrder(ids=request.session.get(_MANUAL_ORDER_KEY, []))


def _elapsed_ms(start_time: float) -> float:
    return round((time.time() - start_time) * 1000, 1)


@app.exception_handler(UnsupportedStrategyError)
def unsupported_strategy_handler(request: Request, exc: UnsupportedStrategyError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    catalog = get_catalog()
    categories: set[str] = set()
    tags: set[str] = set()
    for entity in catalog:
        categories.update(entity.categories)
        tags.update(entity.tags)
    return {
        "regions": [r.value for r in Region],
        "entity_types": [k.value for k in (EntityKind.company, EntityKind.individual)],
        "categories": sorted(categories),
        "tags": sorted(tags),
        "sort_strategies": [s.value for s in SortStrategy],
        "platforms": list(PLATFORMS),
    }


# ── Vendor directory ─────────────────────────────────────────────────────


@app.post("/vendors/search", response_model=SearchResponse)
def search_vendors(body: SearchRequest, request: Request) -> SearchResponse:
    start_time = time.time()

    filtered = filter_entities(get_catalog(), body)
    ordered = sort_entities(filtered, body.sort, _session_order(request))
    page = paginate(ordered, body.page_size, body.page)

    record_event("search", {
        **body.model_dump(mode="json", exclude={"page", "page_size"}),
        "total_candidates": len(filtered),
        "results_returned": len(page.items),
        "response_time_ms": _elapsed_ms(start_time),
    })

    return SearchResponse(
        items=page.items,
        total_items=page.total_items,
        total_pages=page.total_pages,
        page=page.page,
        page_size=page.page_size,
        page_window=page_window(page.page, page.total_pages),
        sort=body.sort,
    )


@app.post("/vendors/recommend", response_model=RecommendResponse)
def recommend_vendors(body: RecommendRequest) -> RecommendResponse:
    start_time = time.time()

    catalog = get_catalog()
    candidates = filter_entities(catalog, body.criteria) if body.criteria else list(catalog)
    results = rank_by_query(candidates, body.query, body.limit)

    record_event("recommend", {
        "query": body.query,
        "limit": body.limit,
        "total_candidates": len(candidates),
        "results_returned": len(results),
        "response_time_ms": _elapsed_ms(start_time),
    })

    return RecommendResponse(results=results, total_candidates=len(candidates))


@app.get("/vendors/order")
def get_manual_order(request: Request) -> dict:
    return {"order": _session_order(request).ids}


@app.post("/vendors/order/move", response_model=MoveResponse)
def move_vendor(body: MoveRequest, request: Request) -> MoveResponse:
    current = _session_order(request)
    visible = filter_entities(get_catalog(), body.criteria)

    try:
        updated = move_entity(current, visible, body.source_id, body.target_id)
    except InvalidMoveError as exc:
        logger.warning("Rejected manual move: %s", exc)
        record_event("move", {"status": "rejected", "source_id": body.source_id})
        return MoveResponse(status="rejected", order=current.ids)

    request.session[_MANUAL_ORDER_KEY] = updated.ids
    record_event("move", {"status": "moved", "source_id": body.source_id})
    return MoveResponse(status="moved", order=updated.ids)


@app.delete("/vendors/order")
def reset_manual_order(request: Request) -> dict:
    request.session.pop(_MANUAL_ORDER_KEY, None)
    return {"order": []}


@app.post("/vendors/duplicates", response_model=list[DuplicateMatch])
def check_duplicates(body: DuplicateCheckRequest) -> list[DuplicateMatch]:
    return find_duplicates(
        get_catalog(), name=body.name, tax_id=body.tax_id, phone=body.phone,
    )


# ── Communication hub ────────────────────────────────────────────────────


@app.post("/communication/search")
def search_communication(body: CommunicationSearchRequest) -> dict:
    if body.view == "groups":
        entities = flatten_groups(body.platform)
    else:
        entities = flatten_contacts(body.platform)

    predicates = []
    if normalize_text(body.search):
        predicates.append(matches_hub_search(body.search))
    if body.vendor_name:
        predicates.append(lambda e: e.vendor_name == body.vendor_name)
    if body.role:
        predicates.append(lambda e: e.role == body.role)

    page = paginate(apply_predicates(entities, predicates), body.page_size, body.page)
    return {
        "items": [e.model_dump(mode="json") for e in page.items],
        "total_items": page.total_items,
        "total_pages": page.total_pages,
        "page": page.page,
        "page_window": page_window(page.page, page.total_pages),
        "vendor_options": sorted({e.vendor_name for e in entities if e.vendor_name}),
        "role_options": sorted({e.role for e in entities if e.role}),
    }


# ── Telemetry ────────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
