"""Core Layer — pure search resolution logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the shell fetches,
      core classifies, merges, paginates and formats
"""
