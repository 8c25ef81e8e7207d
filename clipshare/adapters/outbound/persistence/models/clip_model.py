# clipshare/adapters/outbound/persistence/models/clip_model.py

"""
Clip model.

This module defines the single table of the service: one row per
shared clip, keyed by its short code.
"""

from sqlalchemy import Column, BigInteger, String, Text
from clipshare.adapters.outbound.persistence.models.base_model import Base, UTCDateTime


class Clip(Base):
    """
    Model representing a shared text clip.

    Attributes:
        short_code: Public identifier, primary key
        content: Text body
        title: Optional display label (NULL when absent)
        password: Optional secret (NULL when absent)
        posted_at: Creation timestamp (UTC)
        expires_at: Optional expiration timestamp (UTC)
        hits: Number of recorded views
    """
    __tablename__ = "clips"

    short_code = Column(String, primary_key=True)
    content = Column(Text, nullable=False)
    title = Column(String, nullable=True)
    password = Column(String, nullable=True)
    posted_at = Column(UTCDateTime, nullable=False)
    expires_at = Column(UTCDateTime, nullable=True, index=True)
    hits = Column(BigInteger, nullable=False, default=0, server_default="0")

    def __repr__(self) -> str:
        return f"<Clip(short_code={self.short_code}, hits={self.hits})>"
