# clipshare/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
from clipshare.adapters.inbound.api.v1.endpoints import clip_endpoint

api_router = APIRouter()

api_router.include_router(clip_endpoint.router)
