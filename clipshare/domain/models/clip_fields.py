# clipshare/domain/models/clip_fields.py

"""
Value objects for the user-supplied clip fields.

Each field exposes a ``parse`` classmethod that turns raw input into a
well-formed value or raises :class:`ClipFieldError` naming the field
and the reason.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from clipshare.shared.utils.input_validation import ClipInputValidator


class ClipFieldError(ValueError):
    """A single clip field failed validation."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


@dataclass(frozen=True)
class Content:
    value: str

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Content":
        valid, error = ClipInputValidator.validate_content(raw)
        if not valid:
            raise ClipFieldError("content", error)
        return cls(raw)


@dataclass(frozen=True)
class Title:
    value: Optional[str] = None

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Title":
        valid, error = ClipInputValidator.validate_title(raw)
        if not valid:
            raise ClipFieldError("title", error)
        if raw is None or not raw.strip():
            return cls(None)
        return cls(raw)


@dataclass(frozen=True)
class Password:
    """Empty string is the "no password" value."""

    value: str = ""

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Password":
        valid, error = ClipInputValidator.validate_password(raw)
        if not valid:
            raise ClipFieldError("password", error)
        return cls(raw or "")

    @property
    def is_set(self) -> bool:
        return self.value != ""

    def matches(self, candidate: Optional[str]) -> bool:
        """
        Compares the candidate against this password in constant time.

        An unset password matches anything.
        """
        if not self.is_set:
            return True
        return secrets.compare_digest(
            (candidate or "").encode("utf-8"),
            self.value.encode("utf-8"),
        )

    def __repr__(self) -> str:
        return f"Password(is_set={self.is_set})"


@dataclass(frozen=True)
class ExpiresAt:
    value: Optional[datetime] = None

    @classmethod
    def parse(cls, raw: Any, now: Optional[datetime] = None) -> "ExpiresAt":
        expires_at, error = ClipInputValidator.resolve_expiration(raw, now=now)
        if error:
            raise ClipFieldError("expires_at", error)
        return cls(expires_at)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.value is None:
            return False
        now = now or datetime.now(timezone.utc)
        return ClipInputValidator.to_utc(self.value) <= now
