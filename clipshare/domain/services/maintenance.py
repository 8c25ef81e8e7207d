# clipshare/domain/services/maintenance.py

"""
Background removal of expired clips.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from clipshare.adapters.configuration.config import settings
from clipshare.adapters.outbound.persistence.database import AppDatabase
from clipshare.adapters.outbound.persistence.repositories.clip_repository import clip_repository
from clipshare.application.ports.outbound import IClipRepository

logger = logging.getLogger(__name__)


class Maintenance:
    """
    Periodic sweeper deleting expired clips from the store.

    A failed sweep is logged and retried on the next tick; only
    :meth:`shutdown` ends the loop.
    """

    def __init__(
            self,
            database: AppDatabase,
            interval: Optional[float] = None,
            repository: Optional[IClipRepository] = None,
    ):
        self.database = database
        self.interval = interval if interval is not None else settings.MAINTENANCE_INTERVAL_SECONDS
        self.repository = repository or clip_repository
        self._task: Optional[asyncio.Task] = None

    @classmethod
    def spawn(
            cls,
            database: AppDatabase,
            interval: Optional[float] = None,
            repository: Optional[IClipRepository] = None,
    ) -> "Maintenance":
        maintenance = cls(database, interval, repository)
        maintenance.start()
        return maintenance

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if not self.running:
            self._task = asyncio.create_task(self._run(), name="clipshare-maintenance")
            logger.info(f"Maintenance started (interval: {self.interval}s)")

    async def sweep(self, now: Optional[datetime] = None) -> int:
        """Run one sweep and return the number of deleted clips."""
        now = now or datetime.now(timezone.utc)
        async with self.database.session() as db:
            deleted = await self.repository.delete_expired(db, now)

        if deleted:
            logger.info(f"Removed {deleted} expired clip(s)")
        else:
            logger.debug("No expired clips to remove")
        return deleted

    async def shutdown(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        logger.info("Maintenance stopped")

    async def _run(self) -> None:
        while True:
            try:
                await asyncio.sleep(self.interval)
                await self.sweep()
            except asyncio.CancelledError:
                logger.info("Maintenance task cancelled")
                break
            except Exception as e:
                logger.exception(f"Error sweeping expired clips: {e}")
