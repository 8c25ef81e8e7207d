# clipshare/adapters/outbound/persistence/database.py

import logging
from typing import AsyncGenerator, Optional
from contextlib import asynccontextmanager
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError

from clipshare.adapters.configuration.config import settings
from clipshare.adapters.outbound.persistence.models import Base

# Configure logger
logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create the async engine for the given URL.

    Pool sizing only applies to server databases; SQLite picks its own pool.
    """
    url = make_url(database_url)
    options = {"echo": False, "pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
    return create_async_engine(url, **options)


class AppDatabase:
    """
    Store handle shared by request handlers and background tasks.

    Owns the pooled engine and the session factory; every unit of work
    opens its own session through :meth:`session`.
    """

    def __init__(self, database_url: Optional[str] = None):
        database_url = database_url or settings.DATABASE_URL
        logger.info(f"Connecting to database: {database_url.split('@')[-1]}")

        try:
            self.engine = build_engine(database_url)
            self.session_factory = async_sessionmaker(
                bind=self.engine,
                autoflush=False,
                expire_on_commit=False,
            )
            logger.info("Async database connection configured successfully")

        except SQLAlchemyError as e:
            logger.error(f"Error connecting to database: {str(e)}")
            raise

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provides an async context for database operations,
        ensuring the session is closed at the end.

        Example:
            ```python
            async with database.session() as db:
                clip = await clip_repository.get(db, short_code)
            ```
        """
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_all(self) -> None:
        """Create the tables if they don't exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connections closed")
