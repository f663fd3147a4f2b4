"""Snapshot Blob ORM — one row per persisted aggregate (users, communities).

Invariants:
    - key is the primary key: at most one blob per aggregate
    - payload is the JSON-safe dict produced by core/snapshot.py
    - saved_at is refreshed on every rewrite

Design Decisions:
    - JSON column for the whole aggregate: snapshot is written and read as a unit
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from jackut.db.base import Base


class SnapshotBlob(Base):
    """Serialized aggregate, keyed by aggregate name."""
    __tablename__ = "snapshot_blobs"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    saved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
