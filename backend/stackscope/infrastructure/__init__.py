"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Store errors are mapped to DatabaseError at the session boundary
    - Infrastructure returns core records, never ORM objects

Design Decisions:
    - The store converts rows to core dataclasses inside the session, so no
      detached ORM object crosses into the pure core
"""
