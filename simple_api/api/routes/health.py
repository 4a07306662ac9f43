from __future__ import annotations

from fastapi import APIRouter, Request

from simple_api.models import HealthResponse
from simple_api.models.user import utcnow

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def healthcheck(request: Request) -> HealthResponse:
    """Liveness probe."""

    return HealthResponse(status="ok", timestamp=utcnow(), version=request.app.version)
