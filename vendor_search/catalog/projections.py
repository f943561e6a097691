"""
Communication-hub projections.

Flattens each vendor's messaging groups and contact windows into standalone
entities so the same filter / paginate pipeline serves the hub's two views.
Projections inherit the owning vendor's region, service area, rating and
flags, and carry the vendor name as a search key.
"""
from __future__ import annotations

import pandas as pd

from ..engine.filters import Predicate
from ..engine.models import ActivityCounters, Entity, EntityKind
from ..engine.text import normalize_text
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .data_store import get_vendor_dataframe, read_table

PLATFORMS = ("LINE", "WeChat")

_ACCOUNT_COLUMN = {"LINE": "line_id", "WeChat": "wechat_id"}


def _check_platform(platform: str) -> None:
    if platform not in PLATFORMS:
        raise ValueError(f"Unknown platform {platform!r}, expected one of {PLATFORMS}")


def _inherited(vendor: pd.Series) -> dict:
    return {
        "categories": vendor["categories_list"],
        "region": vendor["region"],
        "service_area": vendor["service_area"],
        "rating": float(vendor["rating"]),
        "is_favorite": bool(vendor["is_favorite"]),
        "is_blacklisted": bool(vendor["is_blacklisted"]),
        "activity": ActivityCounters(
            contact_log_count=int(vendor["contact_log_count"]),
            missed_contact_log_count=int(vendor["missed_contact_log_count"]),
        ),
        "vendor_id": vendor["id"],
        "vendor_name": vendor["name"],
    }


def matches_hub_search(term: str) -> Predicate:
    """Free-text match over a projection's name and identifiers only.

    Groups are found by group name, vendor name or system code and contacts by
    contact name, vendor name or account id. Platform, role and inherited
    category labels are not searched.
    """
    needle = normalize_text(term)

    def predicate(entity: Entity) -> bool:
        fields = [entity.display_name, *entity.search_keys]
        return any(needle in normalize_text(field) for field in fields if field)

    return predicate


def flatten_groups(
    platform: str,
    config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
) -> list[Entity]:
    """Return the messaging groups on ``platform`` as entities."""
    _check_platform(platform)
    vendors = get_vendor_dataframe(config).set_index("id", drop=False)
    groups = read_table(config.groups_path)
    groups = groups[groups["platform"] == platform]

    entities: list[Entity] = []
    for _, group in groups.iterrows():
        if group["vendor_id"] not in vendors.index:
            continue
        vendor = vendors.loc[group["vendor_id"]]
        entities.append(Entity(
            id=group["system_code"] or f"{group['vendor_id']}-{group['group_id']}",
            display_name=group["group_name"],
            kind=EntityKind.group.value,
            tags=[platform],
            notes_text=group["note"],
            search_keys=[vendor["name"], group["system_code"]],
            platform=platform,
            **_inherited(vendor),
        ))
    return entities


def flatten_contacts(
    platform: str,
    config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
) -> list[Entity]:
    """Return every reachable account on ``platform`` as an entity.

    For each vendor the corporate (or main personal) account comes first,
    followed by its individual contact windows that have an account on the
    platform.
    """
    _check_platform(platform)
    account_col = _ACCOUNT_COLUMN[platform]
    vendors = get_vendor_dataframe(config)
    contacts = read_table(config.contacts_path)

    entities: list[Entity] = []
    for _, vendor in vendors.iterrows():
        corporate_account = vendor[account_col]
        if corporate_account:
            is_company = vendor["entity_type"] == EntityKind.company.value
            entities.append(Entity(
                id=f"{vendor['id']}-corp-{platform.lower()}",
                display_name="官方帳號/主帳號" if is_company else vendor["name"],
                kind=EntityKind.contact.value,
                tags=[platform, "企業窗口"],
                search_keys=[vendor["name"], corporate_account],
                platform=platform,
                role="企業窗口",
                **_inherited(vendor),
            ))

        own = contacts[contacts["vendor_id"] == vendor["id"]]
        for _, contact in own.iterrows():
            account = contact[account_col]
            if not account:
                continue
            entities.append(Entity(
                id=f"{vendor['id']}-{contact['contact_id']}",
                display_name=contact["name"],
                kind=EntityKind.contact.value,
                tags=[platform],
                search_keys=[vendor["name"], account],
                phone=contact["mobile"] or None,
                platform=platform,
                role=contact["role"],
                **_inherited(vendor),
            ))
    return entities
