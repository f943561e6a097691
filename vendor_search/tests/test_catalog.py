from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from vendor_search.catalog.config import CatalogConfig
from vendor_search.catalog.data_store import (
    build_catalog,
    get_catalog,
    get_vendor_dataframe,
    publish_catalog,
    reload_catalog,
)
from vendor_search.catalog.duplicates import find_duplicates
from vendor_search.catalog.projections import (
    flatten_contacts,
    flatten_groups,
    matches_hub_search,
)
from vendor_search.engine.filters import apply_predicates, filter_entities
from vendor_search.engine.models import EntityKind, QueryCriteria


def _by_id(entities):
    return {e.id: e for e in entities}


class TestDataStore:
    def test_catalog_loads_seed_vendors(self):
        catalog = get_catalog()
        assert len(catalog) == 6
        assert [e.id for e in catalog][:2] == ["C2024001", "I2024001"]

    def test_labels_are_split(self):
        vendor = _by_id(get_catalog())["C2024001"]
        assert vendor.categories == ["水電", "裝修工程"]
        assert vendor.tags[0] == "優良廠商"

    def test_types_are_parsed(self):
        vendor = _by_id(get_catalog())["C2024001"]
        assert vendor.rating == 4.8
        assert vendor.is_favorite is True
        assert vendor.is_blacklisted is False
        assert vendor.tax_id == "23456789"
        assert vendor.activity.last_activity == date(2024, 5, 1)
        assert vendor.activity.missed_contact_log_count == 2

    def test_missing_activity_is_none(self):
        vendor = _by_id(get_catalog())["I2024003"]
        assert vendor.activity.last_activity is None
        assert vendor.activity.transaction_count == 0
        assert vendor.tax_id is None

    def test_ratings_are_clamped(self, tmp_path: Path):
        source = CatalogConfig().vendors_path.read_text(encoding="utf-8")
        lines = source.splitlines()
        lines[1] = lines[1].replace(",4.8,15,", ",7.5,15,")
        (tmp_path / "vendors.csv").write_text("\n".join(lines) + "\n", encoding="utf-8")

        # Bypass the module cache: build straight from a fresh table
        from vendor_search.catalog.data_store import _load_vendors

        df = _load_vendors(CatalogConfig(data_dir=tmp_path))
        catalog = build_catalog(df)
        assert catalog[0].rating == 5.0

    def test_snapshot_entities_are_immutable(self):
        vendor = get_catalog()[0]
        with pytest.raises(Exception):
            vendor.is_favorite = not vendor.is_favorite

    def test_dataframe_has_parsed_columns(self):
        df = get_vendor_dataframe()
        assert "categories_list" in df.columns
        assert df["rating"].dtype.kind == "f"

    def test_publish_replaces_snapshot(self):
        original = get_catalog()
        updated = original[0].model_copy(update={"is_favorite": False})
        try:
            publish_catalog((updated,) + original[1:])
            assert get_catalog()[0].is_favorite is False
            # The previous snapshot is untouched
            assert original[0].is_favorite is True
        finally:
            reload_catalog()
        assert get_catalog()[0].is_favorite is True


class TestProjections:
    def test_line_groups(self):
        groups = flatten_groups("LINE")
        assert [g.id for g in groups] == ["GRP-C2024001", "GRP-C2024003"]
        assert all(g.kind == EntityKind.group.value for g in groups)
        assert groups[0].vendor_name == "大發水電工程行"

    def test_wechat_groups(self):
        groups = flatten_groups("WeChat")
        assert [g.vendor_id for g in groups] == ["C2024002"]

    def test_contacts_put_corporate_account_first(self):
        contacts = flatten_contacts("LINE")
        ids = [c.id for c in contacts]
        assert ids[:2] == ["C2024001-corp-line", "C2024001-c1"]
        # c2 has no LINE account
        assert "C2024001-c2" not in ids

    def test_contact_inherits_vendor_fields(self):
        contact = _by_id(flatten_contacts("WeChat"))["C2024002-c4"]
        assert contact.region == "大陸"
        assert contact.role == "業務窗口"
        assert "suda_logistics_wang" in contact.search_keys

    def test_projection_search_by_vendor_name(self):
        contacts = flatten_contacts("LINE")
        result = filter_entities(contacts, QueryCriteria(search="大發"))
        assert {c.vendor_id for c in result} == {"C2024001"}

    def test_unknown_platform(self):
        with pytest.raises(ValueError):
            flatten_groups("Telegram")


class TestHubSearch:
    @staticmethod
    def _search(entities, term):
        return [e.id for e in apply_predicates(entities, [matches_hub_search(term)])]

    def test_group_found_by_name_or_system_code(self):
        groups = flatten_groups("LINE")
        assert self._search(groups, "急修") == ["GRP-C2024003"]
        assert self._search(groups, "grp-c2024001") == ["GRP-C2024001"]

    def test_group_platform_is_not_searchable(self):
        assert self._search(flatten_groups("LINE"), "line") == []

    def test_group_inherited_category_is_not_searchable(self):
        # Only the vendor name "大發水電工程行" carries the term
        assert self._search(flatten_groups("LINE"), "水電") == ["GRP-C2024001"]

    def test_contact_found_by_name_vendor_or_account(self):
        contacts = flatten_contacts("LINE")
        assert self._search(contacts, "張大發") == ["C2024001-c1"]
        assert self._search(contacts, "@dafa") == ["C2024001-corp-line"]
        assert self._search(contacts, "大發水電") == ["C2024001-corp-line", "C2024001-c1"]

    def test_contact_role_is_not_searchable(self):
        assert self._search(flatten_contacts("LINE"), "企業") == []
        assert self._search(flatten_contacts("WeChat"), "wechat") == []


class TestDuplicates:
    def test_name_match_ignores_case_and_spacing(self):
        matches = find_duplicates(get_catalog(), name="  大發水電工程行 ")
        assert [m.entity_id for m in matches] == ["C2024001"]
        assert matches[0].fields == ["name"]

    def test_tax_id_match(self):
        matches = find_duplicates(get_catalog(), tax_id="cn-555888")
        assert [m.entity_id for m in matches] == ["C2024002"]

    def test_phone_match_on_digits(self):
        matches = find_duplicates(get_catalog(), phone="(02) 2788 1234")
        assert [m.entity_id for m in matches] == ["C2024001"]

    def test_multiple_fields(self):
        matches = find_duplicates(get_catalog(), name="林小美", phone="0911222333")
        assert matches[0].fields == ["name", "phone"]

    def test_no_criteria_no_matches(self):
        assert find_duplicates(get_catalog()) == []
