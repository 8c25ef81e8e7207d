# clipshare/shared/utils/input_validation.py

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Tuple


class ClipInputValidator:
    """
    Validation rules for raw clip input, complementing the Pydantic
    request models.

    Every method returns a tuple whose last element is the error message
    (None when the input is valid).
    """

    # A bare integer (optionally signed) is read as a number of seconds
    SECONDS_PATTERN = re.compile(r'^[+-]?\d+$')

    @classmethod
    def validate_content(cls, content: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Validates the clip body.

        Args:
            content: Raw text submitted by the user

        Returns:
            Tuple (valid, error_message)
        """
        if content is None or not content.strip():
            return False, "Content must not be empty"

        return True, None

    @classmethod
    def validate_title(cls, title: Optional[str]) -> Tuple[bool, Optional[str]]:
        """Any title is accepted; blank means no title."""
        return True, None

    @classmethod
    def validate_password(cls, password: Optional[str]) -> Tuple[bool, Optional[str]]:
        """Any password is accepted; empty means no password. No complexity rules."""
        return True, None

    @classmethod
    def resolve_expiration(
            cls,
            raw: Any,
            now: Optional[datetime] = None,
    ) -> Tuple[Optional[datetime], Optional[str]]:
        """
        Resolves an expiration given as a duration or a timestamp.

        Accepted inputs:
            - None or "": never expires
            - datetime: absolute timestamp, naive values are taken as UTC
            - timedelta, int, float: duration from now (seconds for numbers)
            - str: integer number of seconds, or an ISO-8601 timestamp

        Args:
            raw: Raw expiration value
            now: Reference time, defaults to the current UTC time

        Returns:
            Tuple (expires_at, error_message); expires_at is None both
            for "never expires" and on error
        """
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return None, None

        now = now or datetime.now(timezone.utc)

        if isinstance(raw, bool):
            return None, "Expiration must be a duration or a timestamp"

        try:
            expires_at, error = cls._resolve(raw, now)
        except (OverflowError, ValueError):
            # Past datetime.max, or a NaN/infinite duration
            return None, "Expiration is out of range"
        if error:
            return None, error

        if expires_at <= now:
            return None, "Expiration must be in the future"

        return expires_at, None

    @classmethod
    def _resolve(cls, raw: Any, now: datetime) -> Tuple[Optional[datetime], Optional[str]]:
        if isinstance(raw, datetime):
            expires_at = cls.to_utc(raw)
        elif isinstance(raw, timedelta):
            if raw <= timedelta(0):
                return None, "Expiration duration must be positive"
            expires_at = now + raw
        elif isinstance(raw, (int, float)):
            if raw <= 0:
                return None, "Expiration duration must be positive"
            expires_at = now + timedelta(seconds=raw)
        elif isinstance(raw, str):
            text = raw.strip()
            if cls.SECONDS_PATTERN.match(text):
                seconds = int(text)
                if seconds <= 0:
                    return None, "Expiration duration must be positive"
                expires_at = now + timedelta(seconds=seconds)
            else:
                try:
                    # Python < 3.11 does not understand the "Z" suffix
                    parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
                except ValueError:
                    return None, f"Invalid expiration timestamp: {text!r}"
                expires_at = cls.to_utc(parsed)
        else:
            return None, "Expiration must be a duration or a timestamp"

        return expires_at, None

    @staticmethod
    def to_utc(value: datetime) -> datetime:
        """Normalizes a datetime to an aware UTC datetime."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
