# clipshare/application/use_cases/clip_use_cases.py

"""
Service for clip management.

This module implements the "new clip" and "get clip" use cases:
field validation, short code allocation, expiration and password checks.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from clipshare.adapters.configuration.config import settings
from clipshare.adapters.outbound.persistence.repositories.clip_repository import clip_repository
from clipshare.application.dtos.clip_dto import GetClipRequest, NewClipRequest
from clipshare.application.ports.inbound import IClipUseCase
from clipshare.application.ports.outbound import IClipRepository
from clipshare.domain.exceptions import (
    DatabaseOperationException,
    InvalidInputException,
    PermissionDeniedException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from clipshare.domain.models import ClipFieldError, Content, ExpiresAt, Password, Title
from clipshare.domain.models.clip_domain_model import Clip
from clipshare.domain.models.short_code import ShortCode
from clipshare.domain.services.view_counter import ViewCounter

logger = logging.getLogger(__name__)

PASSWORD_REQUIRED_HINT = "A password is required to view this clip"
PASSWORD_INVALID_HINT = "Invalid password"


@dataclass(frozen=True)
class ValidatedClip:
    content: Content
    title: Title
    password: Password
    expires_at: ExpiresAt


def validate_new_clip(request: NewClipRequest, now: Optional[datetime] = None) -> ValidatedClip:
    """
    Parse every field of a new clip request.

    Raises:
        InvalidInputException: Listing each failing field and why
    """
    errors: Dict[str, str] = {}
    parsed = {}

    for name, parse in (
            ("content", lambda: Content.parse(request.content)),
            ("title", lambda: Title.parse(request.title)),
            ("password", lambda: Password.parse(request.password)),
            ("expires_at", lambda: ExpiresAt.parse(request.expires_at, now=now)),
    ):
        try:
            parsed[name] = parse()
        except ClipFieldError as e:
            errors[e.field] = e.reason

    if errors:
        raise InvalidInputException(detail="Invalid clip", fields=errors)

    return ValidatedClip(**parsed)


class AsyncClipService(IClipUseCase):
    """
    Service for clip management.

    Hits are recorded through the optional view counter; without one,
    reads simply aren't counted.
    """

    def __init__(
            self,
            db_session: AsyncSession,
            view_counter: Optional[ViewCounter] = None,
            repository: Optional[IClipRepository] = None,
            max_attempts: Optional[int] = None,
    ):
        self.db_session = db_session
        self.view_counter = view_counter
        self.repository = repository or clip_repository
        self.max_attempts = max_attempts or settings.SHORT_CODE_MAX_ATTEMPTS

    async def new_clip(self, request: NewClipRequest) -> Clip:
        """
        Validates the request and stores the clip under a fresh short code.

        A short code collision is retried with a new code, up to
        `max_attempts` times.

        Raises:
            InvalidInputException: If any field is invalid
            DatabaseOperationException: On store failure, or when no free
                short code was found
        """
        now = datetime.now(timezone.utc)
        fields = validate_new_clip(request, now=now)

        for attempt in range(1, self.max_attempts + 1):
            clip = Clip(
                short_code=ShortCode.generate(),
                content=fields.content.value,
                title=fields.title.value,
                password=fields.password.value,
                posted_at=now,
                expires_at=fields.expires_at.value,
                hits=0,
            )
            try:
                return await self.repository.insert(self.db_session, clip)
            except ResourceAlreadyExistsException:
                logger.warning(
                    f"Short code collision on {clip.short_code} "
                    f"(attempt {attempt}/{self.max_attempts})"
                )

        logger.error(f"Could not allocate a short code after {self.max_attempts} attempts")
        raise DatabaseOperationException(detail="Could not allocate a unique short code")

    async def get_clip(self, request: GetClipRequest) -> Clip:
        """
        Returns a live clip, enforcing expiration and password.

        Raises:
            ResourceNotFoundException: If the clip doesn't exist or has expired
            PermissionDeniedException: If the clip is protected and the
                password is missing or wrong
            DatabaseOperationException: On store failure
        """
        short_code = ShortCode.parse(request.short_code)
        clip = await self.repository.get(self.db_session, short_code)

        if clip.is_expired():
            logger.info(f"Clip {short_code} requested after expiration")
            raise ResourceNotFoundException(detail="Clip not found", resource_id=short_code)

        if clip.has_password and not clip.password_matches(request.password):
            raise PermissionDeniedException(
                detail=PASSWORD_INVALID_HINT if request.password else PASSWORD_REQUIRED_HINT
            )

        self._record_view(short_code)
        return clip

    def _record_view(self, short_code: ShortCode) -> None:
        if self.view_counter is None:
            return
        try:
            self.view_counter.record_view(short_code)
        except Exception as e:
            logger.warning(f"Could not record view of clip {short_code}: {e}")
