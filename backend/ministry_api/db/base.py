"""Shared MetaData — the single source of truth for table metadata.

Design Decisions:
    - Separate file for metadata: tables.py and alembic env import it without cycles
    - Naming convention on constraints: migrations produce stable names
"""

from sqlalchemy import MetaData

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)
