from __future__ import annotations

from collections import Counter
from typing import Any


def _rate(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": count} for name, count in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    recommends = [e for e in events if e["type"] == "recommend"]
    moves = [e for e in events if e["type"] == "move"]
    total = len(searches)

    timed = [e["response_time_ms"] for e in searches + recommends if "response_time_ms" in e]
    avg_time = round(sum(timed) / len(timed), 1) if timed else 0.0

    category_counter: Counter[str] = Counter()
    region_counter: Counter[str] = Counter()
    sort_counter: Counter[str] = Counter()
    for s in searches:
        if s.get("category"):
            category_counter[s["category"]] += 1
        if s.get("region"):
            region_counter[s["region"]] += 1
        sort_counter[s.get("sort", "default")] += 1

    filter_counts = {
        "search": 0,
        "category": 0,
        "region": 0,
        "rating": 0,
        "favorites": 0,
        "blacklist": 0,
        "special": 0,
    }
    for s in searches:
        if s.get("search"):
            filter_counts["search"] += 1
        if s.get("category"):
            filter_counts["category"] += 1
        if s.get("region"):
            filter_counts["region"] += 1
        if s.get("min_rating", 0) > 0:
            filter_counts["rating"] += 1
        if s.get("favorites_only"):
            filter_counts["favorites"] += 1
        if s.get("show_blacklisted"):
            filter_counts["blacklist"] += 1
        if s.get("special_filters"):
            filter_counts["special"] += 1

    empty_recommendations = sum(1 for r in recommends if r.get("results_returned", 0) == 0)
    rejected_moves = sum(1 for m in moves if m.get("status") == "rejected")

    return {
        "total_searches": total,
        "total_recommendations": len(recommends),
        "avg_response_time_ms": avg_time,
        "top_categories": _top(category_counter),
        "top_regions": _top(region_counter),
        "sort_usage": dict(sort_counter),
        "filter_usage": {k: _rate(v, total) for k, v in filter_counts.items()},
        "recommendations": {
            "total": len(recommends),
            "empty": empty_recommendations,
            "empty_rate": _rate(empty_recommendations, len(recommends)),
        },
        "moves": {
            "total": len(moves),
            "rejected": rejected_moves,
        },
    }
