"""Database Infrastructure — SQLAlchemy Base shared by models and migrations.

Invariants:
    - Single async engine per process (owned by DatabaseSessionManager)

Design Decisions:
    - aiosqlite driver by default (ADR: local agent, one file next to the service)
"""
