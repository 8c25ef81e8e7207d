# clipshare/adapters/inbound/api/deps.py

"""
Dependencies for injection into API endpoints.

The store handle and the view counter are created by the application
lifespan and kept on ``app.state``.
"""

from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from clipshare.adapters.outbound.persistence.database import AppDatabase
from clipshare.application.use_cases.clip_use_cases import AsyncClipService
from clipshare.domain.services.view_counter import ViewCounter


def get_database(request: Request) -> AppDatabase:
    return request.app.state.database


async def get_db_session(
        database: AppDatabase = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session


def get_view_counter(request: Request) -> Optional[ViewCounter]:
    return getattr(request.app.state, "view_counter", None)


def get_clip_service(
        db_session: AsyncSession = Depends(get_db_session),
        view_counter: Optional[ViewCounter] = Depends(get_view_counter),
) -> AsyncClipService:
    return AsyncClipService(db_session, view_counter=view_counter)
