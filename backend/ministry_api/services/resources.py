"""Resource Registry — the seven configured CrudResource instances.

Invariants:
    - Every descriptor in ALL_ENTITIES has exactly one CrudResource here
    - Asset writes require an existing Location; Location deletes are refused while Assets reference it
    - User passwords are hashed before they reach the database
"""

from ministry_api.core.entities import (
    ASSET, CALENDAR, CHURCH, LOCATION, PERSON, STATS, USER,
)
from ministry_api.services.crud_resource import CrudResource
from ministry_api.services.password_hashing import hash_password_field
from ministry_api.services.reference_checks import (
    forbid_referenced_delete, require_reference,
)

CHURCHES = CrudResource(CHURCH)
PEOPLE = CrudResource(PERSON)
STATISTICS = CrudResource(STATS)
USERS = CrudResource(USER, before_write=[hash_password_field("password")])
CALENDAR_EVENTS = CrudResource(CALENDAR)
LOCATIONS = CrudResource(
    LOCATION,
    before_delete=[forbid_referenced_delete(LOCATION, ASSET, "location_id")],
)
ASSETS = CrudResource(
    ASSET,
    before_write=[require_reference(ASSET, "location_id", LOCATION)],
)

ALL_RESOURCES: tuple[CrudResource, ...] = (
    CHURCHES, PEOPLE, STATISTICS, USERS, CALENDAR_EVENTS, LOCATIONS, ASSETS,
)
