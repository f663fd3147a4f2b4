"""Persistence Gateway — snapshot / restore / wipe of the durable aggregates.

Invariants:
    - Two independent blobs: users (keyed by login) and communities (keyed by name)
    - restore() returns empty aggregates when no snapshot exists (first run), never fails on absence
    - restore() validates each blob against schemas/snapshot.py before re-linking
    - wipe() deletes durable state only; clearing memory is the caller's job
    - snapshot() writes both blobs in one transaction

Design Decisions:
    - Serialization lives in core/snapshot.py (pure); this module only moves dicts in and out of SQL
"""

import logging
from datetime import datetime, timezone

from pydantic import BaseModel, ValidationError
from sqlalchemy import delete, select

from jackut.core.community_registry import CommunityRegistry
from jackut.core.errors import SnapshotCorruptedError
from jackut.core.identity_store import IdentityStore
from jackut.core.snapshot import (
    communities_from_snapshot,
    communities_to_snapshot,
    identity_from_snapshot,
    identity_to_snapshot,
)
from jackut.infrastructure.database import DatabaseSessionManager
from jackut.models.snapshot_blob import SnapshotBlob
from jackut.schemas.snapshot import CommunitiesSnapshot, UsersSnapshot

logger = logging.getLogger(__name__)


class PersistenceGateway:
    """Reads and writes the users / communities snapshot blobs."""

    def __init__(
        self,
        db: DatabaseSessionManager,
        users_key: str = "users",
        communities_key: str = "communities",
    ):
        self._db = db
        self._users_key = users_key
        self._communities_key = communities_key

    def snapshot(
        self, identity: IdentityStore, communities: CommunityRegistry,
    ) -> None:
        """Serialize both aggregates and overwrite the stored blobs."""
        payloads = {
            self._users_key: identity_to_snapshot(identity),
            self._communities_key: communities_to_snapshot(communities),
        }
        with self._db.session() as db:
            for key, payload in payloads.items():
                blob = db.get(SnapshotBlob, key)
                if blob is None:
                    db.add(SnapshotBlob(key=key, payload=payload))
                else:
                    blob.payload = payload
                    blob.saved_at = datetime.now(timezone.utc)
            db.commit()
        logger.info(
            f"Snapshot written: {len(identity)} users, {len(communities)} communities",
            extra={"snapshot_key": self._users_key},
        )

    def restore(self) -> tuple[IdentityStore, CommunityRegistry]:
        """Rebuild fresh stores from the stored blobs (empty if none)."""
        users_payload = self._load(self._users_key, UsersSnapshot)
        communities_payload = self._load(self._communities_key, CommunitiesSnapshot)
        identity = identity_from_snapshot(users_payload)
        communities = communities_from_snapshot(communities_payload, identity)
        if users_payload is None and communities_payload is None:
            logger.info("No snapshot found, starting with empty aggregates")
        else:
            logger.info(
                f"Snapshot restored: {len(identity)} users, {len(communities)} communities",
            )
        return identity, communities

    def wipe(self) -> None:
        """Delete every stored blob."""
        with self._db.session() as db:
            db.execute(delete(SnapshotBlob))
            db.commit()
        logger.info("Snapshot storage wiped")

    def close(self) -> None:
        """Release pooled connections; the next call reconnects."""
        self._db.dispose()

    def stored_keys(self) -> list[str]:
        with self._db.session() as db:
            return list(db.scalars(select(SnapshotBlob.key).order_by(SnapshotBlob.key)))

    def _load(self, key: str, schema: type[BaseModel]) -> dict | None:
        with self._db.session() as db:
            blob = db.get(SnapshotBlob, key)
            payload = blob.payload if blob is not None else None
        if payload is None:
            return None
        try:
            return schema.model_validate(payload).model_dump()
        except ValidationError as e:
            logger.error(
                f"Snapshot validation failed: {e.error_count()} error(s)",
                extra={"snapshot_key": key},
            )
            raise SnapshotCorruptedError(key, str(e)) from e
