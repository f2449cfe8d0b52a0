"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /api/health always returns 200 while the process is up
    - timestamp is ISO-8601 UTC
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status

from dhi_workshop.core.locale_format import iso_timestamp
from dhi_workshop.schemas.time import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["health"])


@router.get(
    "/health", response_model=HealthResponse, status_code=status.HTTP_200_OK,
)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return HealthResponse(
        status="ok", timestamp=iso_timestamp(datetime.now(timezone.utc)),
    )
