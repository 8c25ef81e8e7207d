"""
Tests for AsyncClipRepository against a temporary SQLite database.

Test coverage includes:

1. Insert / get
   - Round trip of every field, including aware datetimes.
   - Duplicate short code raises ResourceAlreadyExistsException.
   - Unknown short code raises ResourceNotFoundException.
   - Expired clips are still returned by the store.

2. Hit counter
   - Increments add up, including concurrent ones.
   - Unknown short code raises ResourceNotFoundException.

3. Expired clip removal
   - Only clips with an expiration at or before `now` are removed.
   - A second pass removes nothing.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from clipshare.adapters.outbound.persistence.repositories import clip_repository
from clipshare.domain.exceptions import ResourceAlreadyExistsException, ResourceNotFoundException


async def insert(database, clip):
    async with database.session() as db:
        return await clip_repository.insert(db, clip)


async def get(database, short_code):
    async with database.session() as db:
        return await clip_repository.get(db, short_code)


# -------------------------------
# Insert / get
# -------------------------------


async def test_insert_and_get_round_trip(database, make_clip):
    posted_at = datetime(2026, 3, 1, 10, 30, 15, 123456, tzinfo=timezone.utc)
    expires_at = datetime(2099, 1, 1, tzinfo=timezone.utc)
    clip = make_clip(
        "a1b2c3d4aa",
        content="some text",
        title="A title",
        password="123",
        posted_at=posted_at,
        expires_at=expires_at,
    )

    stored = await insert(database, clip)
    assert stored == clip

    found = await get(database, "a1b2c3d4aa")
    assert found.short_code == "a1b2c3d4aa"
    assert found.content == "some text"
    assert found.title == "A title"
    assert found.password == "123"
    assert found.posted_at == posted_at
    assert found.expires_at == expires_at
    assert found.posted_at.tzinfo is not None
    assert found.hits == 0


async def test_optional_fields_round_trip_as_absent(database, make_clip):
    await insert(database, make_clip("bbbbbbbbbb"))

    found = await get(database, "bbbbbbbbbb")
    assert found.title is None
    assert found.password == ""
    assert not found.has_password
    assert found.expires_at is None


async def test_non_utc_timestamps_are_stored_as_utc(database, make_clip):
    plus_two = timezone(timedelta(hours=2))
    expires_at = datetime(2099, 6, 1, 14, 0, tzinfo=plus_two)
    await insert(database, make_clip("cccccccccc", expires_at=expires_at))

    found = await get(database, "cccccccccc")
    assert found.expires_at == expires_at
    assert found.expires_at.utcoffset() == timedelta(0)


async def test_unicode_content_is_preserved(database, make_clip):
    content = "línea 1\r\nzeile 2\t✓ 🎉 <script>alert('x')</script> \\ \"quoted\""
    await insert(database, make_clip("dddddddddd", content=content))

    assert (await get(database, "dddddddddd")).content == content


async def test_duplicate_short_code_is_rejected(database, make_clip):
    await insert(database, make_clip("aaaaaaaaaa", content="first"))

    with pytest.raises(ResourceAlreadyExistsException):
        await insert(database, make_clip("aaaaaaaaaa", content="second"))

    assert (await get(database, "aaaaaaaaaa")).content == "first"


async def test_concurrent_inserts_of_one_short_code(database, make_clip):
    results = await asyncio.gather(
        insert(database, make_clip("eeeeeeeeee", content="left")),
        insert(database, make_clip("eeeeeeeeee", content="right")),
        return_exceptions=True,
    )

    conflicts = [r for r in results if isinstance(r, ResourceAlreadyExistsException)]
    stored = [r for r in results if not isinstance(r, Exception)]
    assert len(conflicts) == 1
    assert len(stored) == 1
    assert (await get(database, "eeeeeeeeee")).content == stored[0].content


async def test_get_unknown_short_code(database):
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await get(database, "nope")
    assert exc_info.value.internal_code == "RESOURCE_NOT_FOUND"


async def test_get_returns_expired_clips(database, make_clip):
    past = datetime.now(timezone.utc) - timedelta(minutes=5)
    await insert(database, make_clip("1111111111", expires_at=past))

    found = await get(database, "1111111111")
    assert found.is_expired()


async def test_session_can_be_reused_after_a_conflict(database, make_clip):
    async with database.session() as db:
        await clip_repository.insert(db, make_clip("2222222222"))
        with pytest.raises(ResourceAlreadyExistsException):
            await clip_repository.insert(db, make_clip("2222222222"))
        await clip_repository.insert(db, make_clip("3333333333"))

    assert (await get(database, "3333333333")).short_code == "3333333333"


# -------------------------------
# Hit counter
# -------------------------------


async def test_update_hits_adds_delta(database, make_clip):
    await insert(database, make_clip("4444444444"))

    async with database.session() as db:
        await clip_repository.update_hits(db, "4444444444", 3)
        await clip_repository.update_hits(db, "4444444444", 2)

    assert (await get(database, "4444444444")).hits == 5


async def test_update_hits_is_visible_in_the_same_session(database, make_clip):
    await insert(database, make_clip("5555555555"))

    async with database.session() as db:
        assert (await clip_repository.get(db, "5555555555")).hits == 0
        await clip_repository.update_hits(db, "5555555555", 4)
        assert (await clip_repository.get(db, "5555555555")).hits == 4


async def test_concurrent_hit_updates_are_not_lost(database, make_clip):
    await insert(database, make_clip("6666666666"))

    async def bump():
        async with database.session() as db:
            await clip_repository.update_hits(db, "6666666666", 1)

    await asyncio.gather(*(bump() for _ in range(5)))

    assert (await get(database, "6666666666")).hits == 5


async def test_update_hits_of_unknown_clip(database):
    async with database.session() as db:
        with pytest.raises(ResourceNotFoundException):
            await clip_repository.update_hits(db, "missing", 1)


# -------------------------------
# Expired clip removal
# -------------------------------


async def test_delete_expired_removes_only_expired_clips(database, make_clip):
    now = datetime.now(timezone.utc)
    await insert(database, make_clip("aaaa111111", expires_at=now - timedelta(hours=1)))
    await insert(database, make_clip("aaaa222222", expires_at=now))
    await insert(database, make_clip("aaaa333333", expires_at=now + timedelta(hours=1)))
    await insert(database, make_clip("aaaa444444"))

    async with database.session() as db:
        assert await clip_repository.delete_expired(db, now) == 2

    for short_code in ("aaaa111111", "aaaa222222"):
        with pytest.raises(ResourceNotFoundException):
            await get(database, short_code)
    assert (await get(database, "aaaa333333")).short_code == "aaaa333333"
    assert (await get(database, "aaaa444444")).short_code == "aaaa444444"


async def test_delete_expired_is_idempotent(database, make_clip):
    now = datetime.now(timezone.utc)
    await insert(database, make_clip("bbbb111111", expires_at=now - timedelta(seconds=1)))

    async with database.session() as db:
        assert await clip_repository.delete_expired(db, now) == 1
        assert await clip_repository.delete_expired(db, now) == 0


async def test_delete_expired_on_empty_store(database):
    async with database.session() as db:
        assert await clip_repository.delete_expired(db, datetime.now(timezone.utc)) == 0
