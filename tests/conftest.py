"""Shared fixtures: a throwaway SQLite database per test and a clip factory."""

from datetime import datetime, timezone

import pytest

from clipshare.adapters.outbound.persistence.database import AppDatabase
from clipshare.domain.models import Clip, ShortCode


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'clips.db'}"


@pytest.fixture
async def database(database_url):
    database = AppDatabase(database_url)
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
def make_clip():
    """Build a domain Clip with sensible defaults."""

    def _make_clip(short_code: str = "abcd1234ab", content: str = "hello world", **overrides) -> Clip:
        values = {
            "short_code": ShortCode(short_code),
            "content": content,
            "posted_at": datetime.now(timezone.utc),
        }
        values.update(overrides)
        return Clip(**values)

    return _make_clip
