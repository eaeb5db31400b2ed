"""Core Layer — domain types, errors, receipt rendering and boundary protocols.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions here are pure and deterministic (the clock is passed in)

Design Decisions:
    - Functional core separated from imperative shell
"""
