# clipshare/adapters/inbound/api/v1/endpoints/clip_endpoint.py

"""
Endpoints for creating and reading clips.

Domain exceptions raised here are turned into responses by
AsyncExceptionMiddleware: 404 for missing or expired clips, 401 when a
password is required or wrong, 400 for invalid fields.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import PlainTextResponse

from clipshare.adapters.inbound.api.deps import get_clip_service
from clipshare.application.dtos.clip_dto import (
    ClipOutput,
    ClipPasswordForm,
    GetClipRequest,
    NewClipRequest,
)
from clipshare.application.use_cases.clip_use_cases import AsyncClipService

PASSWORD_HEADER = "X-Clip-Password"

router = APIRouter(prefix="/clips", tags=["Clips"])


@router.post("", response_model=ClipOutput, status_code=status.HTTP_201_CREATED)
async def new_clip(
        payload: NewClipRequest,
        service: AsyncClipService = Depends(get_clip_service),
):
    """Create a clip and return it with its short code."""
    clip = await service.new_clip(payload)
    return ClipOutput.from_domain(clip)


@router.get("/{short_code}", response_model=ClipOutput)
async def get_clip(
        short_code: str,
        x_clip_password: Optional[str] = Header(None, alias=PASSWORD_HEADER),
        service: AsyncClipService = Depends(get_clip_service),
):
    """Fetch a clip; protected clips need the password header."""
    clip = await service.get_clip(GetClipRequest(short_code=short_code, password=x_clip_password))
    return ClipOutput.from_domain(clip)


@router.post("/{short_code}", response_model=ClipOutput)
async def submit_clip_password(
        short_code: str,
        form: ClipPasswordForm,
        service: AsyncClipService = Depends(get_clip_service),
):
    """Fetch a protected clip with the password in the request body."""
    clip = await service.get_clip(GetClipRequest(short_code=short_code, password=form.password))
    return ClipOutput.from_domain(clip)


@router.get("/{short_code}/raw", response_class=PlainTextResponse)
async def get_raw_clip(
        short_code: str,
        x_clip_password: Optional[str] = Header(None, alias=PASSWORD_HEADER),
        service: AsyncClipService = Depends(get_clip_service),
):
    """Return only the clip content, as plain text."""
    clip = await service.get_clip(GetClipRequest(short_code=short_code, password=x_clip_password))
    return PlainTextResponse(clip.content)
