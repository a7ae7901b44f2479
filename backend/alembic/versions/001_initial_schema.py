"""Initial schema — churches, people, stats, users, calendar, locations, assets.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "Church",
        sa.Column("churchId", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("churchName", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("branch", sa.String(255), nullable=True),
        sa.Column("province", sa.String(100), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("region", sa.String(100), nullable=True),
        sa.Column("pastorId", sa.Integer, nullable=True),
    )

    op.create_table(
        "Person",
        sa.Column("personId", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("surname", sa.String(100), nullable=False),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("comments", sa.Text, nullable=True),
        sa.Column("contactNumber", sa.String(50), nullable=True),
        sa.Column("gender", sa.String(20), nullable=True),
        sa.Column("maritalStatus", sa.String(50), nullable=True),
        sa.Column(
            "churchId", sa.Integer,
            sa.ForeignKey("Church.churchId", ondelete="RESTRICT"), nullable=True,
        ),
        sa.Column("cellLeader", sa.String(100), nullable=True),
        sa.Column("cellLocation", sa.String(255), nullable=True),
        sa.Column("ministry", sa.String(100), nullable=True),
        sa.Column("church", sa.String(255), nullable=True),
        sa.Column("region", sa.String(100), nullable=True),
        sa.Column("regContribution", sa.Integer, nullable=True),
        sa.Column("seedContribution", sa.Integer, nullable=True),
        sa.Column("amount", sa.Integer, nullable=True),
    )

    op.create_table(
        "Stats",
        sa.Column("statsId", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "churchId", sa.Integer,
            sa.ForeignKey("Church.churchId", ondelete="RESTRICT"), nullable=False,
        ),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("adult", sa.Integer, nullable=True),
        sa.Column("car", sa.Integer, nullable=True),
        sa.Column("fk", sa.Integer, nullable=True),
        sa.Column("saved", sa.Integer, nullable=True),
        sa.Column("offering", sa.Integer, nullable=True),
        sa.Column("visitors", sa.Integer, nullable=True),
        sa.Column("aow", sa.Integer, nullable=True),
        sa.Column("ck", sa.Integer, nullable=True),
    )

    op.create_table(
        "User",
        sa.Column("userId", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(100), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("role", sa.Integer, nullable=True),
        sa.Column(
            "personId", sa.Integer,
            sa.ForeignKey("Person.personId", ondelete="RESTRICT"), nullable=True,
        ),
    )

    op.create_table(
        "Calendar",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("time", sa.String(50), nullable=True),
        sa.Column("month", sa.String(20), nullable=True),
        sa.Column("year", sa.Integer, nullable=True),
        sa.Column("department", sa.String(100), nullable=True),
        sa.Column("region", sa.String(100), nullable=True),
        sa.Column("dayFrom", sa.String(20), nullable=True),
        sa.Column("dayTo", sa.String(20), nullable=True),
    )

    op.create_table(
        "Locations",
        sa.Column("location_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("contact_person", sa.String(100), nullable=False),
        sa.Column("contact_phone", sa.String(50), nullable=False),
    )

    op.create_table(
        "Assets",
        sa.Column("asset_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "location_id", sa.Integer,
            sa.ForeignKey("Locations.location_id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("purchase_date", sa.Date, nullable=True),
        sa.Column("purchase_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("serial_number", sa.String(100), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("condition", sa.String(50), nullable=True),
        sa.Column("last_maintenance_date", sa.Date, nullable=True),
    )


def downgrade() -> None:
    op.drop_table("Assets")
    op.drop_table("Locations")
    op.drop_table("Calendar")
    op.drop_table("User")
    op.drop_table("Stats")
    op.drop_table("Person")
    op.drop_table("Church")
