from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from vendor_search.analytics.aggregator import compute_analytics
from vendor_search.analytics.store import clear_events, get_events, record_event
from vendor_search.app import app

client = TestClient(app)


def test_analytics_returns_empty_initially():
    clear_events()
    resp = client.get("/analytics")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_searches"] == 0
    assert body["avg_response_time_ms"] == 0.0


def test_analytics_tracks_search_filters():
    clear_events()
    client.post("/vendors/search", json={"category": "水電", "region": "台灣"})
    client.post("/vendors/search", json={"sort": "rating-desc"})
    body = client.get("/analytics").json()
    assert body["total_searches"] == 2
    assert body["filter_usage"]["category"] == 50.0
    assert body["top_categories"] == [{"name": "水電", "count": 1}]
    assert body["sort_usage"] == {"default": 1, "rating-desc": 1}


def test_analytics_tracks_recommendations_and_moves():
    clear_events()
    client.post("/vendors/recommend", json={"query": ""})
    client.post("/vendors/order/move", json={"source_id": "nope", "target_id": "C2024001"})
    body = client.get("/analytics").json()
    assert body["recommendations"] == {"total": 1, "empty": 1, "empty_rate": 100.0}
    assert body["moves"] == {"total": 1, "rejected": 1}


def test_get_events_by_type():
    clear_events()
    record_event("search", {"sort": "default"})
    record_event("move", {"status": "moved"})
    assert len(get_events("move")) == 1
    assert len(get_events()) == 2


def test_compute_analytics_without_events():
    summary = compute_analytics([])
    assert summary["filter_usage"]["search"] == 0.0
    assert summary["moves"] == {"total": 0, "rejected": 0}


def test_unknown_event_type_is_rejected():
    clear_events()
    with pytest.raises(ValueError):
        record_event("chat", {})
    with pytest.raises(ValueError):
        get_events("chat")
    assert get_events() == []
