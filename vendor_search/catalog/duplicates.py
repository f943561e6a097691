from __future__ import annotations

import logging
import re
from typing import Sequence

from ..engine.models import DuplicateMatch, Entity
from ..engine.text import normalize_text

logger = logging.getLogger(__name__)

_NON_DIGIT_RE = re.compile(r"\D")


def _digits(value: str | None) -> str:
    return _NON_DIGIT_RE.sub("", value or "")


def find_duplicates(
    catalog: Sequence[Entity],
    name: str | None = None,
    tax_id: str | None = None,
    phone: str | None = None,
) -> list[DuplicateMatch]:
    """Return catalog entries colliding with a prospective new vendor.

    Names and tax ids compare after case folding and whitespace collapsing;
    phones compare on their digits only, so ``02-2788-1234`` equals
    ``(02) 27881234``.
    """
    wanted_name = normalize_text(name)
    wanted_tax = normalize_text(tax_id)
    wanted_phone = _digits(phone)

    matches: list[DuplicateMatch] = []
    for entity in catalog:
        fields: list[str] = []
        if wanted_name and normalize_text(entity.display_name) == wanted_name:
            fields.append("name")
        if wanted_tax and normalize_text(entity.tax_id) == wanted_tax:
            fields.append("tax_id")
        if wanted_phone and _digits(entity.phone) == wanted_phone:
            fields.append("phone")
        if fields:
            matches.append(DuplicateMatch(
                entity_id=entity.id,
                display_name=entity.display_name,
                fields=fields,
            ))

    if matches:
        logger.info("Duplicate check found %d candidate(s)", len(matches))
    return matches
