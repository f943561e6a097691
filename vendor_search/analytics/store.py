from __future__ import annotations

import time
from typing import Any

EVENT_TYPES = ("search", "recommend", "move")

_events: list[dict[str, Any]] = []


def _check_event_type(event_type: str) -> None:
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Unknown event type {event_type!r}, expected one of {EVENT_TYPES}")


def record_event(event_type: str, data: dict[str, Any]) -> None:
    """Append one directory telemetry event (a search, recommendation or manual move)."""
    _check_event_type(event_type)
    _events.append({
        "type": event_type,
        "timestamp": time.time(),
        **data,
    })


def get_events(event_type: str | None = None) -> list[dict[str, Any]]:
    if event_type is None:
        return _events
    _check_event_type(event_type)
    return [e for e in _events if e["type"] == event_type]


def clear_events() -> None:
    _events.clear()
