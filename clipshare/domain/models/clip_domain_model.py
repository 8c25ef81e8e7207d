# clipshare/domain/models/clip_domain_model.py

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from clipshare.domain.models.clip_fields import ExpiresAt, Password
from clipshare.domain.models.short_code import ShortCode


@dataclass
class Clip:
    """Domain model for a shared text clip."""
    short_code: ShortCode  # Public identifier
    content: str
    posted_at: datetime
    title: Optional[str] = None
    password: str = ""  # Empty means no password
    expires_at: Optional[datetime] = None  # None means never expires
    hits: int = 0

    @property
    def has_password(self) -> bool:
        return Password(self.password).is_set

    def password_matches(self, candidate: Optional[str]) -> bool:
        return Password(self.password).matches(candidate)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return ExpiresAt(self.expires_at).is_expired(now)
