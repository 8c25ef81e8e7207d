# clipshare/application/dtos/clip_dto.py

"""
Schemas for clip data.

This module defines the Pydantic models for the "new clip" and
"get clip" requests and for the clip representation returned to callers.
Field rules beyond basic typing are enforced by the clip service so
that every failing field can be reported at once.
"""

from datetime import datetime, timedelta
from typing import Optional, Union

from pydantic import BaseModel, Field

from clipshare.domain.models.clip_domain_model import Clip


class NewClipRequest(BaseModel):
    """
    Schema for creating a clip.

    `expires_at` accepts a timestamp, or a duration given as a number of
    seconds; leave it out for a clip that never expires.
    """
    content: Optional[str] = Field(None, description="Text content (required, non-empty)")
    title: Optional[str] = Field(None, description="Optional title")
    password: Optional[str] = Field(None, description="Optional password protecting the clip")
    expires_at: Union[datetime, timedelta, int, float, str, None] = Field(
        None, description="Expiration timestamp or duration in seconds"
    )


class GetClipRequest(BaseModel):
    """Schema for fetching a clip."""
    short_code: str = Field(..., description="Clip short code")
    password: Optional[str] = Field(None, description="Password, when the clip is protected")


class ClipPasswordForm(BaseModel):
    """Password submitted to unlock a protected clip."""
    password: Optional[str] = Field(None, description="Clip password")


class ClipOutput(BaseModel):
    """
    Schema for returning clip data.

    The password itself is never returned, only whether one is set.
    """
    short_code: str
    content: str
    title: Optional[str] = None
    posted_at: datetime
    expires_at: Optional[datetime] = None
    hits: int = 0
    has_password: bool = False

    @classmethod
    def from_domain(cls, clip: Clip) -> "ClipOutput":
        return cls(
            short_code=clip.short_code.as_str(),
            content=clip.content,
            title=clip.title,
            posted_at=clip.posted_at,
            expires_at=clip.expires_at,
            hits=clip.hits,
            has_password=clip.has_password,
        )
