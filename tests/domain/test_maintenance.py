import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from clipshare.adapters.configuration.config import settings
from clipshare.adapters.outbound.persistence.repositories import clip_repository
from clipshare.application.ports.outbound import IClipRepository
from clipshare.domain.exceptions import DatabaseOperationException, ResourceNotFoundException
from clipshare.domain.services import Maintenance


class FlakyRepository(IClipRepository):
    """Fails the first sweep, then succeeds."""

    def __init__(self):
        self.calls = 0

    async def insert(self, db, clip):
        raise NotImplementedError

    async def get(self, db, short_code):
        raise NotImplementedError

    async def update_hits(self, db, short_code, delta):
        raise NotImplementedError

    async def delete_expired(self, db, now):
        self.calls += 1
        if self.calls == 1:
            raise DatabaseOperationException(detail="store is down")
        return 0


async def store_clip(database, clip):
    async with database.session() as db:
        await clip_repository.insert(db, clip)


async def exists(database, short_code):
    async with database.session() as db:
        try:
            await clip_repository.get(db, short_code)
        except ResourceNotFoundException:
            return False
    return True


async def wait_until(predicate, timeout=3.0):
    deadline = asyncio.get_running_loop().time() + timeout
    while not await predicate():
        if asyncio.get_running_loop().time() > deadline:
            return False
        await asyncio.sleep(0.02)
    return True


async def test_sweep_removes_expired_clips(database, make_clip):
    now = datetime.now(timezone.utc)
    await store_clip(database, make_clip("aaaaaaaaaa", expires_at=now - timedelta(seconds=1)))
    await store_clip(database, make_clip("bbbbbbbbbb", expires_at=now + timedelta(hours=1)))
    await store_clip(database, make_clip("cccccccccc"))

    maintenance = Maintenance(database, interval=60)
    assert await maintenance.sweep() == 1

    assert not await exists(database, "aaaaaaaaaa")
    assert await exists(database, "bbbbbbbbbb")
    assert await exists(database, "cccccccccc")


async def test_sweep_uses_the_given_time(database, make_clip):
    now = datetime.now(timezone.utc)
    await store_clip(database, make_clip("aaaaaaaaaa", expires_at=now + timedelta(hours=1)))

    maintenance = Maintenance(database, interval=60)
    assert await maintenance.sweep(now) == 0
    assert await maintenance.sweep(now + timedelta(hours=2)) == 1
    assert await maintenance.sweep(now + timedelta(hours=2)) == 0


async def test_interval_defaults_to_settings(database):
    assert Maintenance(database).interval == settings.MAINTENANCE_INTERVAL_SECONDS


async def test_background_loop_removes_expired_clips(database, make_clip):
    past = datetime.now(timezone.utc) - timedelta(minutes=1)
    await store_clip(database, make_clip("aaaaaaaaaa", expires_at=past))

    maintenance = Maintenance.spawn(database, interval=0.05)
    try:
        async def removed():
            return not await exists(database, "aaaaaaaaaa")

        assert await wait_until(removed)
        assert maintenance.running
    finally:
        await maintenance.shutdown()

    assert not maintenance.running


async def test_failed_sweep_does_not_stop_the_loop(database):
    repository = FlakyRepository()
    maintenance = Maintenance.spawn(database, interval=0.01, repository=repository)
    try:
        async def swept_again():
            return repository.calls >= 3

        assert await wait_until(swept_again)
        assert maintenance.running
    finally:
        await maintenance.shutdown()


async def test_sweep_propagates_store_errors(database):
    maintenance = Maintenance(database, repository=FlakyRepository())
    with pytest.raises(DatabaseOperationException):
        await maintenance.sweep()


async def test_shutdown_without_start(database):
    maintenance = Maintenance(database)
    await maintenance.shutdown()
    assert not maintenance.running
