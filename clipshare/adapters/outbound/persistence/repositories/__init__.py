# clipshare/adapters/outbound/persistence/repositories/__init__.py

from clipshare.adapters.outbound.persistence.repositories.clip_repository import (
    AsyncClipRepository,
    clip_repository,
)

__all__ = [
    "AsyncClipRepository",
    "clip_repository",
]
