# clipshare/adapters/outbound/persistence/repositories/clip_repository.py

"""
Repository for clip operations.

This module implements the clip store on top of the ``clips`` table,
implementing the IClipRepository interface. Uniqueness of short codes
and hit increments rely on the database's own atomicity.
"""

import logging
from datetime import datetime

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from clipshare.adapters.outbound.persistence.models import Clip
from clipshare.application.ports.outbound import IClipRepository
from clipshare.domain.models.clip_domain_model import Clip as DomainClip
from clipshare.domain.models.short_code import ShortCode
from clipshare.domain.exceptions import (
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    DatabaseOperationException
)


class AsyncClipRepository(IClipRepository):
    """
    Async implementation of the clip store.

    Every method receives the session to work in, commits its own
    changes and converts SQLAlchemy failures into domain exceptions.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{Clip.__name__}")

    async def insert(self, db: AsyncSession, clip: DomainClip) -> DomainClip:
        """
        Persist a new clip.

        Args:
            db: Async database session
            clip: Domain clip to store

        Returns:
            The stored clip

        Raises:
            ResourceAlreadyExistsException: If the short code is already taken
            DatabaseOperationException: If another database error occurs
        """
        try:
            values = self.to_row(clip)
            await db.execute(insert(Clip).values(**values))
            await db.commit()

            self.logger.info(f"Clip created with short code: {clip.short_code}")
            return self.to_domain(Clip(**values))

        except IntegrityError as e:
            await db.rollback()
            error_msg = str(e).lower()
            if 'unique' in error_msg or 'duplicate' in error_msg:
                self.logger.warning(f"Short code already in use: {clip.short_code}")
                raise ResourceAlreadyExistsException(
                    detail="Clip with this short code already exists",
                    resource_id=clip.short_code
                )
            else:
                self.logger.error(f"Integrity error creating clip: {str(e)}")
                raise DatabaseOperationException(detail="Error creating clip", original_error=e)

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error creating clip: {str(e)}")
            raise DatabaseOperationException(
                detail="Error creating clip",
                original_error=e
            )

    async def get(self, db: AsyncSession, short_code: str) -> DomainClip:
        """
        Find a clip by short code.

        Expired clips are returned too; hiding them is up to the caller.

        Raises:
            ResourceNotFoundException: If no clip has this short code
            DatabaseOperationException: In case of database error
        """
        try:
            query = (
                select(Clip)
                .where(Clip.short_code == str(short_code))
                .execution_options(populate_existing=True)
            )
            result = await db.execute(query)
            db_obj = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching clip '{short_code}': {str(e)}")
            raise DatabaseOperationException(
                detail="Error fetching clip",
                original_error=e
            )

        if db_obj is None:
            raise ResourceNotFoundException(detail="Clip not found", resource_id=short_code)

        return self.to_domain(db_obj)

    async def update_hits(self, db: AsyncSession, short_code: str, delta: int) -> None:
        """
        Add `delta` to the stored hit counter in a single statement.

        Raises:
            ResourceNotFoundException: If the clip no longer exists
            DatabaseOperationException: In case of database error
        """
        try:
            query = (
                update(Clip)
                .where(Clip.short_code == str(short_code))
                .values(hits=Clip.hits + delta)
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(query)
            if result.rowcount == 0:
                raise ResourceNotFoundException(detail="Clip not found", resource_id=short_code)

            await db.commit()
            self.logger.debug(f"Added {delta} hit(s) to clip {short_code}")

        except ResourceNotFoundException:
            await db.rollback()
            raise

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error updating hits of clip '{short_code}': {str(e)}")
            raise DatabaseOperationException(
                detail="Error updating clip hits",
                original_error=e
            )

    async def delete_expired(self, db: AsyncSession, now: datetime) -> int:
        """
        Remove every clip whose expiration is set and not after `now`.

        Args:
            db: Async database session
            now: Reference time

        Returns:
            Number of records deleted
        """
        try:
            query = (
                delete(Clip)
                .where(Clip.expires_at.is_not(None), Clip.expires_at <= now)
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(query)
            await db.commit()
            return result.rowcount or 0

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error deleting expired clips: {str(e)}")
            raise DatabaseOperationException(
                detail="Error deleting expired clips",
                original_error=e
            )

    @staticmethod
    def to_row(clip: DomainClip) -> dict:
        return {
            "short_code": str(clip.short_code),
            "content": clip.content,
            "title": clip.title or None,
            "password": clip.password or None,
            "posted_at": clip.posted_at,
            "expires_at": clip.expires_at,
            "hits": clip.hits,
        }

    def to_domain(self, db_model: Clip) -> DomainClip:
        """
        Convert database model to domain model.

        Args:
            db_model: Clip ORM model

        Returns:
            Domain model of clip
        """
        return DomainClip(
            short_code=ShortCode(db_model.short_code),
            content=db_model.content,
            title=db_model.title or None,
            password=db_model.password or "",
            posted_at=db_model.posted_at,
            expires_at=db_model.expires_at,
            hits=db_model.hits or 0,
        )


# Public instance to be used by use cases and background services
clip_repository = AsyncClipRepository()
