from __future__ import annotations

import math
from typing import Sequence, TypeVar

from .models import Page

T = TypeVar("T")

ELLIPSIS = "..."


def paginate(items: Sequence[T], page_size: int, page: int) -> Page:
    """Return the 1-based ``page`` of ``items``.

    Pages outside ``1..total_pages`` come back empty rather than raising.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    total_items = len(items)
    total_pages = math.ceil(total_items / page_size)

    if page < 1:
        window: list[T] = []
    else:
        start = (page - 1) * page_size
        window = list(items[start:start + page_size])

    return Page(
        items=window,
        total_pages=total_pages,
        page=page,
        page_size=page_size,
        total_items=total_items,
    )


def page_window(current: int, total_pages: int, max_visible: int = 5) -> list[int | str]:
    """Page buttons to render, with gaps collapsed to ``"..."``.

    Up to ``max_visible`` pages are listed in full. Beyond that the first and
    last pages are always shown, plus the run of pages around ``current``.
    """
    if max_visible < 5:
        raise ValueError(f"max_visible must be >= 5, got {max_visible}")
    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    # Edge runs hold max_visible - 1 pages; the middle run spans current +- siblings
    edge = max_visible - 1
    siblings = (max_visible - 3) // 2
    if current <= edge - 1:
        return [*range(1, edge + 1), ELLIPSIS, total_pages]
    if current >= total_pages - edge + 2:
        return [1, ELLIPSIS, *range(total_pages - edge + 1, total_pages + 1)]
    return [
        1, ELLIPSIS,
        *range(current - siblings, current + siblings + 1),
        ELLIPSIS, total_pages,
    ]
