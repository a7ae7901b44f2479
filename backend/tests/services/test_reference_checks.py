"""Reference Checks — verifies Asset to Location integrity enforced before writes and deletes.

Invariants:
    - Asset create/update with an unknown location_id -> RecordValidationError, nothing stored
    - Asset create message names the referenced location
    - Location delete while Assets reference it -> ConflictError, location kept
"""

import pytest

from ministry_api.core.errors import ConflictError, RecordValidationError
from ministry_api.services import resources


@pytest.fixture
async def hq_id(executor):
    created = await resources.LOCATIONS.create(executor, {
        "name": "HQ", "address": "1 Main St",
        "contact_person": "A", "contact_phone": "000",
    })
    return created["id"]


async def test_asset_with_unknown_location_rejected(executor):
    with pytest.raises(RecordValidationError) as info:
        await resources.ASSETS.create(executor, {"location_id": 99, "name": "Projector"})
    assert info.value.message == "Invalid location reference: 99"
    assert await resources.ASSETS.list_all(executor) == []


async def test_asset_message_names_location(executor, hq_id):
    created = await resources.ASSETS.create(
        executor, {"location_id": hq_id, "name": "Projector"},
    )
    assert created["message"] == (
        "Asset 'Projector' added successfully at location 'HQ'"
    )


async def test_asset_location_given_as_text_is_parsed(executor, hq_id):
    created = await resources.ASSETS.create(
        executor, {"location_id": str(hq_id), "name": "Chairs"},
    )
    record = await resources.ASSETS.get(executor, created["id"])
    assert record["location_id"] == hq_id


async def test_asset_update_to_unknown_location_rejected(executor, hq_id):
    created = await resources.ASSETS.create(
        executor, {"location_id": hq_id, "name": "Projector"},
    )
    with pytest.raises(RecordValidationError):
        await resources.ASSETS.update(executor, created["id"], {"location_id": 500})
    record = await resources.ASSETS.get(executor, created["id"])
    assert record["location_id"] == hq_id


async def test_asset_update_without_location_skips_check(executor, hq_id):
    created = await resources.ASSETS.create(
        executor, {"location_id": hq_id, "name": "Projector"},
    )
    result = await resources.ASSETS.update(executor, created["id"], {"condition": "worn"})
    assert result == {"message": "Asset updated successfully"}


async def test_referenced_location_delete_conflicts(executor, hq_id):
    await resources.ASSETS.create(executor, {"location_id": hq_id, "name": "Projector"})
    with pytest.raises(ConflictError) as info:
        await resources.LOCATIONS.delete(executor, hq_id)
    assert "1 asset record(s)" in info.value.message
    assert (await resources.LOCATIONS.get(executor, hq_id))["name"] == "HQ"


async def test_unreferenced_location_delete_succeeds(executor, hq_id):
    result = await resources.LOCATIONS.delete(executor, hq_id)
    assert result == {"message": "Location deleted successfully"}


async def test_asset_with_out_of_range_location_rejected(executor):
    with pytest.raises(RecordValidationError) as info:
        await resources.ASSETS.create(
            executor, {"location_id": 99999999999999999999, "name": "Projector"},
        )
    assert info.value.message == "Invalid location reference: 99999999999999999999"
    assert await resources.ASSETS.list_all(executor) == []


async def test_rejected_reference_names_the_written_resource(executor, hq_id):
    created = await resources.ASSETS.create(
        executor, {"location_id": hq_id, "name": "Projector"},
    )
    with pytest.raises(RecordValidationError) as info:
        await resources.ASSETS.update(executor, created["id"], {"location_id": 77})
    assert info.value.context.resource == "Asset"
    assert info.value.context.record_id == created["id"]
    assert info.value.to_response()["error"]["context"]["resource"] == "Asset"
