"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - Single engine per persistence gateway (infrastructure/database.py)
    - All sessions are synchronous (the engine never runs concurrently)
"""
