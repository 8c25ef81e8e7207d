# clipshare/application/ports/inbound.py

from abc import ABC, abstractmethod

from clipshare.application.dtos.clip_dto import GetClipRequest, NewClipRequest
from clipshare.domain.models.clip_domain_model import Clip


class IClipUseCase(ABC):
    """Interface for clip-related use cases."""

    @abstractmethod
    async def new_clip(self, request: NewClipRequest) -> Clip:
        """Validate and store a new clip."""
        pass

    @abstractmethod
    async def get_clip(self, request: GetClipRequest) -> Clip:
        """Get a live clip, checking its password."""
        pass
