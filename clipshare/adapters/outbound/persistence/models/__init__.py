# clipshare/adapters/outbound/persistence/models/__init__.py

"""
Data model module.

Exports the SQLAlchemy models so that importing this package registers
every table on ``Base.metadata``.
"""

from clipshare.adapters.outbound.persistence.models.base_model import Base, UTCDateTime
from clipshare.adapters.outbound.persistence.models.clip_model import Clip

__all__ = [
    "Base",
    "UTCDateTime",
    "Clip",
]
