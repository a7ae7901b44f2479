"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Every driver error is mapped to the core error taxonomy before it leaves this package
"""
