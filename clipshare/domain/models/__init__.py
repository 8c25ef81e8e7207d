# clipshare/domain/models/__init__.py

from clipshare.domain.models.short_code import ShortCode
from clipshare.domain.models.clip_fields import ClipFieldError, Content, ExpiresAt, Password, Title
from clipshare.domain.models.clip_domain_model import Clip

__all__ = [
    "ShortCode",
    "ClipFieldError",
    "Content",
    "Title",
    "Password",
    "ExpiresAt",
    "Clip",
]
