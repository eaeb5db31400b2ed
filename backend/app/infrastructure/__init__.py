"""Infrastructure Layer — database, printer drivers, background tasks and logging.

Invariants:
    - Every IO failure is mapped to a PrintAgentError subclass at this layer

Design Decisions:
    - Concrete implementations of the core/ protocols live here
"""
