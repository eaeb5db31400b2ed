"""Services Layer — agent service, printer adapter, report aggregator, retention sweep.

Invariants:
    - Services depend on core/ protocols, not on concrete infrastructure classes
    - Every service object is built once in main.lifespan and injected

Design Decisions:
    - Explicit constructor injection so tests pass fakes directly
"""
