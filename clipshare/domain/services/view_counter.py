# clipshare/domain/services/view_counter.py

"""
Asynchronous view counting.

Reads only enqueue an increment; a single consumer task drains the
queue, sums increments per short code and applies them to the store.
"""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional

from clipshare.adapters.outbound.persistence.database import AppDatabase
from clipshare.adapters.outbound.persistence.repositories.clip_repository import clip_repository
from clipshare.application.ports.outbound import IClipRepository
from clipshare.domain.exceptions import DatabaseOperationException, ResourceNotFoundException
from clipshare.domain.models.short_code import ShortCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewCommand:
    short_code: ShortCode
    count: int = 1


class ViewCounter:
    """
    Owns an unbounded command queue and the task that flushes it.

    Create it with :meth:`spawn` from inside the running event loop.
    """

    def __init__(self, database: AppDatabase, repository: Optional[IClipRepository] = None):
        self.database = database
        self.repository = repository or clip_repository
        self._queue: "asyncio.Queue[ViewCommand]" = asyncio.Queue()
        self._task: Optional[asyncio.Task] = None
        self._accepting = True

    @classmethod
    def spawn(cls, database: AppDatabase, repository: Optional[IClipRepository] = None) -> "ViewCounter":
        counter = cls(database, repository)
        counter.start()
        return counter

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if not self.running:
            self._accepting = True
            self._task = asyncio.create_task(self._run(), name="clipshare-view-counter")
            logger.info("View counter started")

    def record_view(self, short_code: str, count: int = 1) -> None:
        """Enqueue `count` views of a clip without waiting for the store."""
        if not self._accepting:
            logger.debug(f"View counter stopped, ignoring view of {short_code}")
            return
        self._queue.put_nowait(ViewCommand(ShortCode(short_code), count))

    async def flush(self) -> None:
        """Wait until every queued view has been written (or discarded)."""
        await self._queue.join()

    async def shutdown(self, timeout: float = 5.0) -> None:
        """
        Stop accepting views, drain what is queued, then stop the consumer.
        """
        self._accepting = False
        if self._task is None:
            return

        if not self._task.done():
            try:
                await asyncio.wait_for(self._queue.join(), timeout)
            except asyncio.TimeoutError:
                logger.warning(f"Abandoning {self._queue.qsize()} pending view(s) on shutdown")

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        logger.info("View counter stopped")

    async def _run(self) -> None:
        while True:
            batch = [await self._queue.get()]
            while True:
                try:
                    batch.append(self._queue.get_nowait())
                except asyncio.QueueEmpty:
                    break

            try:
                await self._apply(batch)
            finally:
                for _ in batch:
                    self._queue.task_done()

    async def _apply(self, batch: List[ViewCommand]) -> None:
        increments: Counter = Counter()
        for command in batch:
            increments[command.short_code] += command.count

        for short_code, delta in increments.items():
            try:
                async with self.database.session() as db:
                    await self.repository.update_hits(db, short_code, delta)
            except ResourceNotFoundException:
                logger.warning(f"Dropping {delta} view(s) of missing clip {short_code}")
            except DatabaseOperationException as e:
                logger.error(f"Dropping {delta} view(s) of clip {short_code}: {e.detail}")
            except Exception as e:
                logger.exception(f"Unexpected error recording views of clip {short_code}: {e}")
