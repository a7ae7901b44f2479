"""Database Schema — SQLAlchemy MetaData and the tables generated from descriptors.

Invariants:
    - Single MetaData for every table (alembic and test fixtures share it)
"""
