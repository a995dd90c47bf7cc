"""Liveness endpoint."""

import time

from fastapi import APIRouter

from stokmakmur.application.dto.responses import HealthResponse
from stokmakmur.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

_started_at = time.monotonic()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Service is up; reports version and seconds since import."""
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        uptime_seconds=round(time.monotonic() - _started_at, 3),
    )
