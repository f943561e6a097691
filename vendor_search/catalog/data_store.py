from __future__ import annotations

import logging

import pandas as pd

from ..engine.models import ActivityCounters, Entity
from ..engine.text import split_labels
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig

logger = logging.getLogger(__name__)

_vendors_df: pd.DataFrame | None = None
_catalog: tuple[Entity, ...] | None = None


def read_table(path) -> pd.DataFrame:
    # Everything as text first; ids, tax ids and phones must keep leading zeros.
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def _to_bool(series: pd.Series) -> pd.Series:
    return series.str.strip().str.lower().isin(["true", "1", "yes"])


def _load_vendors(config: CatalogConfig) -> pd.DataFrame:
    df = read_table(config.vendors_path)

    df["categories_list"] = df["categories"].apply(split_labels)
    df["tags_list"] = df["tags"].apply(split_labels)

    # Clamp to [0, 5]; unparseable ratings count as unrated
    df["rating"] = pd.to_numeric(df["rating"], errors="coerce").fillna(0.0).clip(0.0, 5.0)

    for col in ("transaction_count", "contact_log_count", "missed_contact_log_count"):
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0).astype(int)

    df["last_activity"] = pd.to_datetime(df["last_activity"], errors="coerce")

    df["is_favorite"] = _to_bool(df["is_favorite"])
    df["is_blacklisted"] = _to_bool(df["is_blacklisted"])
    return df


def _row_to_entity(row: pd.Series) -> Entity:
    last = row["last_activity"]
    return Entity(
        id=row["id"],
        display_name=row["name"],
        kind=row["entity_type"],
        categories=row["categories_list"],
        tags=row["tags_list"],
        region=row["region"],
        service_area=row["service_area"],
        rating=float(row["rating"]),
        notes_text=row["internal_notes"],
        is_favorite=bool(row["is_favorite"]),
        is_blacklisted=bool(row["is_blacklisted"]),
        activity=ActivityCounters(
            transaction_count=int(row["transaction_count"]),
            last_activity=last.date() if pd.notna(last) else None,
            contact_log_count=int(row["contact_log_count"]),
            missed_contact_log_count=int(row["missed_contact_log_count"]),
        ),
        tax_id=row["tax_id"] or None,
        phone=row["main_phone"] or None,
    )


def get_vendor_dataframe(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> pd.DataFrame:
    """Return the parsed vendor table, loading it on first call."""
    global _vendors_df
    if _vendors_df is None:
        _vendors_df = _load_vendors(config)
    return _vendors_df


def build_catalog(df: pd.DataFrame) -> tuple[Entity, ...]:
    return tuple(_row_to_entity(row) for _, row in df.iterrows())


def get_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> tuple[Entity, ...]:
    """Return the current vendor catalog snapshot, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = build_catalog(get_vendor_dataframe(config))
        logger.info("Loaded %d vendors from %s", len(_catalog), config.vendors_path)
    return _catalog


def reload_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> tuple[Entity, ...]:
    """Drop the cached tables and publish a fresh snapshot."""
    global _vendors_df, _catalog
    _vendors_df = None
    _catalog = None
    return get_catalog(config)


def publish_catalog(entities: tuple[Entity, ...]) -> None:
    """Replace the snapshot wholesale, e.g. after an external store update."""
    global _catalog
    _catalog = tuple(entities)
