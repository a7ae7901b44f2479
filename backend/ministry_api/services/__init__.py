"""Services Layer — the generic CRUD engine, its hooks, and authentication.

Invariants:
    - Services talk to the database only through QueryExecutor
    - Services raise core/errors.py types; HTTP rendering happens in api/
"""
