"""Infrastructure Layer — persistence, database sessions, and logging.

Invariants:
    - Infrastructure depends on core/ only for aggregates and errors, never the reverse
    - All SQLAlchemy exceptions mapped to PersistenceError

Design Decisions:
    - Thin wrappers over SQLAlchemy and logging (single responsibility per module)
"""
