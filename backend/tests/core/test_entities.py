"""Resource Catalog — verifies the seven descriptors match the existing schema names."""

import pytest

from ministry_api.core.entities import ALL_ENTITIES, ASSET, LOCATION


def test_catalog_has_seven_resources():
    assert [d.name for d in ALL_ENTITIES] == [
        "Church", "Person", "Stats", "User", "Calendar", "Location", "Asset",
    ]


@pytest.mark.parametrize("name, table, pk", [
    ("Church", "Church", "churchId"),
    ("Person", "Person", "personId"),
    ("Stats", "Stats", "statsId"),
    ("User", "User", "userId"),
    ("Calendar", "Calendar", "id"),
    ("Location", "Locations", "location_id"),
    ("Asset", "Assets", "asset_id"),
])
def test_table_and_primary_key_names(name, table, pk):
    descriptor = next(d for d in ALL_ENTITIES if d.name == name)
    assert descriptor.table_name == table
    assert descriptor.primary_key == pk
    assert descriptor.path == table
    assert pk not in descriptor.field_names


def test_references_point_at_known_tables():
    tables = {d.table_name for d in ALL_ENTITIES}
    for descriptor in ALL_ENTITIES:
        for spec in descriptor.fields:
            if spec.references:
                assert spec.references in tables


def test_referenced_tables_come_first():
    order = [d.table_name for d in ALL_ENTITIES]
    for index, descriptor in enumerate(ALL_ENTITIES):
        for spec in descriptor.fields:
            if spec.references:
                assert order.index(spec.references) < index


def test_asset_requires_location():
    assert ASSET.get_field("location_id").references == LOCATION.table_name
    assert "location_id" in ASSET.required_fields
