"""System Lifecycle — pairs context construction with restore, teardown with snapshot / wipe.

Invariants:
    - start() restores durable state into a fresh SystemContext (empty on first run)
    - shutdown() snapshots, then clears memory only and releases pooled DB connections;
      the blobs survive for the next start()
    - reset() wipes durable state AND clears memory; the session counter restarts at 1
    - The context object stays the same across shutdown() / reset() (cleared in place)

Design Decisions:
    - One lifecycle per process, owning the gateway; the facade never touches the gateway directly
    - setup_logging runs on start(), mirroring an application startup hook
"""

import logging

from jackut.config import Settings, get_settings
from jackut.core.system_context import SystemContext
from jackut.infrastructure.database import DatabaseSessionManager
from jackut.infrastructure.observability import setup_logging
from jackut.infrastructure.persistence_gateway import PersistenceGateway

logger = logging.getLogger(__name__)


class SystemLifecycle:
    """Startup / shutdown / reset around one SystemContext."""

    def __init__(
        self,
        settings: Settings | None = None,
        gateway: PersistenceGateway | None = None,
        configure_logging: bool = True,
    ):
        self._settings = settings or get_settings()
        self._configure_logging = configure_logging
        self._gateway = gateway or PersistenceGateway(
            DatabaseSessionManager(self._settings.database_url),
            users_key=self._settings.users_snapshot_key,
            communities_key=self._settings.communities_snapshot_key,
        )
        self._context: SystemContext | None = None

    @property
    def context(self) -> SystemContext:
        if self._context is None:
            raise RuntimeError("System not started")
        return self._context

    @property
    def gateway(self) -> PersistenceGateway:
        return self._gateway

    def start(self) -> SystemContext:
        """Restore snapshot into a fresh context."""
        if self._configure_logging:
            setup_logging(self._settings.log_level, self._settings.log_format)
        identity, communities = self._gateway.restore()
        self._context = SystemContext(identity=identity, communities=communities)
        logger.info("Jackut started")
        return self._context

    def shutdown(self) -> None:
        """Persist both aggregates, then clear memory."""
        context = self.context
        self._gateway.snapshot(context.identity, context.communities)
        context.clear()
        self._gateway.close()
        logger.info("Jackut shut down")

    def reset(self) -> None:
        """Delete durable state and clear memory."""
        self._gateway.wipe()
        self.context.clear()
        logger.info("Jackut reset")
