"""Service Layer — async orchestration around the pure core.

Invariants:
    - Services await the store; core functions never do
    - No service keeps state between requests
"""
