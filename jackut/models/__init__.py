"""ORM Models — SQLAlchemy declarative models for durable state.

Invariants:
    - All models inherit from Base (db/base.py)
    - Durable state is snapshot blobs only; live aggregates never touch the DB

Design Decisions:
    - All models imported here so Base.metadata knows every table before create_all runs
"""

from jackut.models.snapshot_blob import SnapshotBlob  # noqa: F401
