# clipshare/application/ports/outbound.py

from abc import ABC, abstractmethod
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from clipshare.domain.models.clip_domain_model import Clip


class IClipRepository(ABC):
    """Clip store interface."""

    @abstractmethod
    async def insert(self, db: AsyncSession, clip: Clip) -> Clip:
        """Persist a new clip, failing if its short code is taken."""
        pass

    @abstractmethod
    async def get(self, db: AsyncSession, short_code: str) -> Clip:
        """Get a clip by short code, whatever its expiration state."""
        pass

    @abstractmethod
    async def update_hits(self, db: AsyncSession, short_code: str, delta: int) -> None:
        """Atomically add delta to the clip's hit counter."""
        pass

    @abstractmethod
    async def delete_expired(self, db: AsyncSession, now: datetime) -> int:
        """Delete clips expired at `now`, returning how many were removed."""
        pass
