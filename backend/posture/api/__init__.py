"""API routes."""

from fastapi import APIRouter

from posture.api import analysis, streams

api_router = APIRouter()

api_router.include_router(analysis.router, prefix="/analysis", tags=["Analysis"])
api_router.include_router(streams.router, prefix="/streams", tags=["Streams"])
