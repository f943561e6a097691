from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(value: str | None) -> str:
    """Case-fold and collapse whitespace so substring checks ignore both."""
    if not value:
        return ""
    return _WHITESPACE_RE.sub(" ", value).strip().casefold()


def contains(haystack: str | None, needle: str | None) -> bool:
    """Case-insensitive substring test. An empty needle never matches."""
    n = normalize_text(needle)
    if not n:
        return False
    return n in normalize_text(haystack)


def split_labels(raw: str | None) -> list[str]:
    """Split a comma separated label cell, dropping blanks but keeping order."""
    if not raw:
        return []
    return [part.strip() for part in re.split(r"[,，、]", raw) if part.strip()]
