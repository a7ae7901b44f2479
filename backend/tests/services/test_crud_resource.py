"""CRUD Resource — verifies the generic engine against every configured resource.

Invariants:
    - Create then Get returns the submitted values (password excepted)
    - Get/Update/Delete on a missing id raise ResourceNotFoundError
    - Non-integer ids raise RecordValidationError before any statement runs
    - Quotes and SQL metacharacters are stored verbatim
    - Null for a defaultable field falls back to the storage default

Design Decisions:
    - Engine-level tests call CrudResource directly with the executor fixture;
      HTTP status mapping is covered in test_resource_routes.py
"""

from datetime import date

import pytest
from sqlalchemy import select

from ministry_api.core.errors import RecordValidationError, ResourceNotFoundError
from ministry_api.db.tables import build_table
from ministry_api.core.entities import USER
from ministry_api.services import resources
from ministry_api.services.password_hashing import verify_password


SAMPLES = [
    (resources.CHURCHES, {
        "churchName": "Grace", "location": "Harare", "branch": "North",
        "province": "Harare", "city": "Harare", "region": "Central", "pastorId": 3,
    }),
    (resources.PEOPLE, {
        "name": "Tendai", "surname": "Moyo", "gender": "F",
        "comments": "Joined in spring", "regContribution": 20,
    }),
    (resources.STATISTICS, {
        "churchId": 1, "date": date(2024, 3, 10), "adult": 40, "visitors": 5,
    }),
    (resources.CALENDAR_EVENTS, {
        "name": "Youth Camp", "month": "June", "year": 2024,
        "dayFrom": "12", "dayTo": "15",
    }),
    (resources.LOCATIONS, {
        "name": "HQ", "address": "1 Main St",
        "contact_person": "A", "contact_phone": "000",
    }),
]


async def _seed_location(executor):
    created = await resources.LOCATIONS.create(executor, {
        "name": "HQ", "address": "1 Main St",
        "contact_person": "A", "contact_phone": "000",
    })
    return created["id"]


@pytest.mark.parametrize(
    "resource, body", SAMPLES, ids=[r.descriptor.name for r, _ in SAMPLES],
)
async def test_create_then_get_round_trip(executor, resource, body):
    created = await resource.create(executor, body)
    record = await resource.get(executor, created["id"])
    assert record[resource.descriptor.primary_key] == created["id"]
    for key, value in body.items():
        assert record[key] == value


async def test_asset_round_trip(executor):
    location_id = await _seed_location(executor)
    body = {
        "location_id": location_id, "name": "Projector",
        "purchase_date": date(2023, 1, 5), "purchase_price": 450.5,
        "condition": "good",
    }
    created = await resources.ASSETS.create(executor, body)
    record = await resources.ASSETS.get(executor, created["id"])
    for key, value in body.items():
        assert record[key] == value


@pytest.mark.parametrize("resource, body", SAMPLES[:2])
async def test_create_message_uses_resource_label(executor, resource, body):
    created = await resource.create(executor, body)
    assert created["message"] == f"{resource.descriptor.label} created successfully"


async def test_calendar_messages_use_event_label(executor):
    created = await resources.CALENDAR_EVENTS.create(executor, {"name": "Camp"})
    assert created["message"] == "Calendar event created successfully"
    deleted = await resources.CALENDAR_EVENTS.delete(executor, created["id"])
    assert deleted["message"] == "Calendar event deleted successfully"


async def test_list_returns_rows_in_id_order(executor):
    for name in ("A", "B", "C"):
        await resources.CHURCHES.create(executor, {"churchName": name, "location": "X"})
    rows = await resources.CHURCHES.list_all(executor)
    assert [r["churchName"] for r in rows] == ["A", "B", "C"]


async def test_list_empty_table_returns_empty_list(executor):
    assert await resources.PEOPLE.list_all(executor) == []


async def test_list_pagination(executor):
    for name in ("A", "B", "C", "D"):
        await resources.CHURCHES.create(executor, {"churchName": name, "location": "X"})
    rows = await resources.CHURCHES.list_all(executor, limit=2, offset=1)
    assert [r["churchName"] for r in rows] == ["B", "C"]


async def test_missing_required_fields_rejected(executor):
    with pytest.raises(RecordValidationError) as info:
        await resources.CHURCHES.create(executor, {"churchName": "Only name"})
    assert "location" in info.value.message
    assert info.value.details == [{"field": "location"}]


async def test_blank_required_field_counts_as_missing(executor):
    with pytest.raises(RecordValidationError):
        await resources.PEOPLE.create(executor, {"name": "  ", "surname": "Moyo"})


async def test_unknown_keys_are_ignored(executor):
    created = await resources.CHURCHES.create(executor, {
        "churchName": "Grace", "location": "Harare", "churchId": 99, "bogus": 1,
    })
    assert created["id"] == 1
    record = await resources.CHURCHES.get(executor, 1)
    assert "bogus" not in record


async def test_null_defaultable_field_stored_as_default(executor):
    created = await resources.CHURCHES.create(executor, {
        "churchName": "Grace", "location": "Harare", "branch": None,
    })
    record = await resources.CHURCHES.get(executor, created["id"])
    assert record["branch"] is None


async def test_metacharacters_stored_verbatim(executor):
    tricky = "O'Brien\"; DROP TABLE Person; --"
    created = await resources.PEOPLE.create(executor, {"name": tricky, "surname": "%_\\"})
    record = await resources.PEOPLE.get(executor, created["id"])
    assert record["name"] == tricky
    assert record["surname"] == "%_\\"
    assert len(await resources.PEOPLE.list_all(executor)) == 1


# --- not found / bad ids ------------------------------------------------------

async def test_get_missing_raises_not_found(executor):
    with pytest.raises(ResourceNotFoundError) as info:
        await resources.CHURCHES.get(executor, 42)
    assert info.value.message == "Church not found"


async def test_update_missing_raises_not_found(executor):
    with pytest.raises(ResourceNotFoundError):
        await resources.PEOPLE.update(executor, "7", {"name": "X"})


async def test_delete_missing_raises_not_found(executor):
    with pytest.raises(ResourceNotFoundError):
        await resources.STATISTICS.delete(executor, 7)


@pytest.mark.parametrize("raw_id", ["abc", "1; DROP TABLE Church", "1.5", "", True])
async def test_non_integer_id_rejected(executor, raw_id):
    with pytest.raises(RecordValidationError) as info:
        await resources.CHURCHES.get(executor, raw_id)
    assert info.value.details == [{"field": "churchId"}]


# --- update / delete ----------------------------------------------------------

async def test_partial_update_keeps_other_fields(executor):
    created = await resources.CHURCHES.create(executor, {
        "churchName": "Grace", "location": "Harare", "city": "Harare",
    })
    result = await resources.CHURCHES.update(executor, created["id"], {"city": "Bulawayo"})
    assert result == {"message": "Church updated successfully"}
    record = await resources.CHURCHES.get(executor, created["id"])
    assert record["city"] == "Bulawayo"
    assert record["churchName"] == "Grace"


async def test_update_without_known_fields_rejected(executor):
    created = await resources.CHURCHES.create(executor, {"churchName": "G", "location": "L"})
    with pytest.raises(RecordValidationError):
        await resources.CHURCHES.update(executor, created["id"], {"bogus": 1})


async def test_update_cannot_clear_required_field(executor):
    created = await resources.CHURCHES.create(executor, {"churchName": "G", "location": "L"})
    with pytest.raises(RecordValidationError) as info:
        await resources.CHURCHES.update(executor, created["id"], {"location": ""})
    assert info.value.details == [{"field": "location"}]


async def test_delete_removes_record(executor):
    created = await resources.PEOPLE.create(executor, {"name": "A", "surname": "B"})
    result = await resources.PEOPLE.delete(executor, created["id"])
    assert result == {"message": "Person deleted successfully"}
    with pytest.raises(ResourceNotFoundError):
        await resources.PEOPLE.get(executor, created["id"])


async def test_second_delete_raises_not_found(executor):
    created = await resources.PEOPLE.create(executor, {"name": "A", "surname": "B"})
    await resources.PEOPLE.delete(executor, created["id"])
    with pytest.raises(ResourceNotFoundError):
        await resources.PEOPLE.delete(executor, created["id"])


# --- users --------------------------------------------------------------------

async def test_user_password_hashed_and_never_returned(executor):
    created = await resources.USERS.create(executor, {
        "username": "admin", "password": "s3cret", "role": 1,
    })
    record = await resources.USERS.get(executor, created["id"])
    assert "password" not in record
    assert record["username"] == "admin"
    assert all("password" not in r for r in await resources.USERS.list_all(executor))

    users = build_table(USER)
    stored = (await executor.fetch_one(select(users.c.password)))["password"]
    assert stored != "s3cret"
    assert verify_password("s3cret", stored)


async def test_user_password_update_is_rehashed(executor):
    created = await resources.USERS.create(executor, {"username": "u", "password": "old"})
    await resources.USERS.update(executor, created["id"], {"password": "new"})
    users = build_table(USER)
    stored = (await executor.fetch_one(select(users.c.password)))["password"]
    assert verify_password("new", stored)
    assert not verify_password("old", stored)


# --- ids outside the Integer column range -------------------------------------

HUGE_ID = "99999999999999999999"


async def test_get_out_of_range_id_raises_not_found(executor):
    with pytest.raises(ResourceNotFoundError):
        await resources.CHURCHES.get(executor, HUGE_ID)


async def test_update_out_of_range_id_raises_not_found(executor):
    with pytest.raises(ResourceNotFoundError):
        await resources.CHURCHES.update(executor, HUGE_ID, {"city": "X"})


async def test_delete_out_of_range_id_raises_not_found(executor):
    with pytest.raises(ResourceNotFoundError):
        await resources.CHURCHES.delete(executor, -(2**31) - 1)
