"""Resource Catalog — the seven ministry resources as EntityDescriptors.

Invariants:
    - Table and primary-key names match the existing MySQL schema exactly
    - ALL_ENTITIES order is parent-before-child (Church before Person, Locations before Assets)
    - User.password is write-only and stored hashed (see services/resources.py)
"""

from ministry_api.core.entity_descriptor import EntityDescriptor, FieldSpec, FieldType

STR = FieldType.STRING
INT = FieldType.INTEGER


CHURCH = EntityDescriptor(
    name="Church",
    table_name="Church",
    primary_key="churchId",
    fields=(
        FieldSpec("churchName", STR, required=True, max_length=255),
        FieldSpec("location", STR, required=True, max_length=255),
        FieldSpec("branch", STR, max_length=255),
        FieldSpec("province", STR, max_length=100),
        FieldSpec("city", STR, max_length=100),
        FieldSpec("region", STR, max_length=100),
        FieldSpec("pastorId", INT),
    ),
)

PERSON = EntityDescriptor(
    name="Person",
    table_name="Person",
    primary_key="personId",
    fields=(
        FieldSpec("name", STR, required=True, max_length=100),
        FieldSpec("surname", STR, required=True, max_length=100),
        FieldSpec("address", STR, max_length=255),
        FieldSpec("comments", FieldType.TEXT),
        FieldSpec("contactNumber", STR, max_length=50),
        FieldSpec("gender", STR, max_length=20),
        FieldSpec("maritalStatus", STR, max_length=50),
        FieldSpec("churchId", INT, references="Church"),
        FieldSpec("cellLeader", STR, max_length=100),
        FieldSpec("cellLocation", STR, max_length=255),
        FieldSpec("ministry", STR, max_length=100),
        FieldSpec("church", STR, max_length=255),
        FieldSpec("region", STR, max_length=100),
        FieldSpec("regContribution", INT),
        FieldSpec("seedContribution", INT),
        FieldSpec("amount", INT),
    ),
)

STATS = EntityDescriptor(
    name="Stats",
    table_name="Stats",
    primary_key="statsId",
    fields=(
        FieldSpec("churchId", INT, required=True, references="Church"),
        FieldSpec("date", FieldType.DATE, required=True),
        FieldSpec("adult", INT),
        FieldSpec("car", INT),
        FieldSpec("fk", INT),
        FieldSpec("saved", INT),
        FieldSpec("offering", INT),
        FieldSpec("visitors", INT),
        FieldSpec("aow", INT),
        FieldSpec("ck", INT),
    ),
)

USER = EntityDescriptor(
    name="User",
    table_name="User",
    primary_key="userId",
    fields=(
        FieldSpec("username", STR, required=True, unique=True, max_length=100),
        FieldSpec("password", STR, required=True, write_only=True, max_length=255),
        FieldSpec("role", INT),
        FieldSpec("personId", INT, references="Person"),
    ),
)

CALENDAR = EntityDescriptor(
    name="Calendar",
    table_name="Calendar",
    primary_key="id",
    label="Calendar event",
    fields=(
        FieldSpec("name", STR, required=True, max_length=255),
        FieldSpec("time", STR, max_length=50),
        FieldSpec("month", STR, max_length=20),
        FieldSpec("year", INT),
        FieldSpec("department", STR, max_length=100),
        FieldSpec("region", STR, max_length=100),
        FieldSpec("dayFrom", STR, max_length=20),
        FieldSpec("dayTo", STR, max_length=20),
    ),
)

LOCATION = EntityDescriptor(
    name="Location",
    table_name="Locations",
    primary_key="location_id",
    created_message="{label} added successfully",
    fields=(
        FieldSpec("name", STR, required=True, max_length=255),
        FieldSpec("address", STR, required=True, max_length=255),
        FieldSpec("contact_person", STR, required=True, max_length=100),
        FieldSpec("contact_phone", STR, required=True, max_length=50),
    ),
)

ASSET = EntityDescriptor(
    name="Asset",
    table_name="Assets",
    primary_key="asset_id",
    created_message="Asset '{name}' added successfully at location '{location_name}'",
    fields=(
        FieldSpec("location_id", INT, required=True, references="Locations"),
        FieldSpec("name", STR, required=True, max_length=255),
        FieldSpec("description", FieldType.TEXT),
        FieldSpec("purchase_date", FieldType.DATE),
        FieldSpec("purchase_price", FieldType.DECIMAL),
        FieldSpec("serial_number", STR, max_length=100),
        FieldSpec("category", STR, max_length=100),
        FieldSpec("condition", STR, max_length=50),
        FieldSpec("last_maintenance_date", FieldType.DATE),
    ),
)

ALL_ENTITIES: tuple[EntityDescriptor, ...] = (
    CHURCH, PERSON, STATS, USER, CALENDAR, LOCATION, ASSET,
)
