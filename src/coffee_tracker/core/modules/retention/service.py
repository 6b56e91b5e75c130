from datetime import timedelta
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from coffee_tracker.core.core import Service
from coffee_tracker.core.modules.retention.models import DATA_RETENTION
from coffee_tracker.core.modules.retention.sweeper import RetentionSweeper
from coffee_tracker.utils import now

logger = structlog.get_logger(__name__)


class RetentionService(Service):
    """Deletes expired entries, per session on demand and globally in the background."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._sweeper: RetentionSweeper | None = None

    async def on_start(self) -> None:
        """Start the periodic sweep using the configured horizon and interval."""
        config = self.core.config
        expiration = timedelta(hours=config.session_expiration_hours)
        self._sweeper = RetentionSweeper(
            sweep=lambda: self.sweep_expired(expiration),
            interval=timedelta(hours=config.cleanup_interval_hours),
        )
        self._sweeper.start()

    async def on_stop(self) -> None:
        if self._sweeper is not None:
            await self._sweeper.stop()

    @property
    def sweeper(self) -> RetentionSweeper | None:
        return self._sweeper

    async def sweep_session(self, session_token: str) -> int:
        """Delete one session's entries older than the retention window."""
        deleted = await self.core.services.entry.delete_older_than(session_token, now() - DATA_RETENTION)
        if deleted:
            logger.info("session_entries_expired", session_token=session_token, deleted_count=deleted)
        return deleted

    async def sweep_expired(self, expiration: timedelta = DATA_RETENTION) -> int:
        """Delete entries older than `expiration` across all sessions."""
        cutoff = now() - expiration
        logger.debug("retention_sweep_running", cutoff=cutoff.isoformat())
        return await self.core.services.entry.delete_all_older_than(cutoff)
