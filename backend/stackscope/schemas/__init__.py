"""API Schemas — Pydantic response models at the HTTP boundary.

Invariants:
    - Field names are snake_case in Python, camelCase on the wire (aliases)
    - Schemas are built from core records via from_* classmethods, never from ORM rows
"""
