"""Health check endpoint."""

import time
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends

from tokenlens import __version__
from tokenlens.models.entities import UsageRecord
from tokenlens.server.dependencies import get_records
from tokenlens.server.models.common import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(records: List[UsageRecord] = Depends(get_records)):
    """Health check: returns status, uptime and dataset size."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=int(time.time() - _start_time),
        records_loaded=len(records),
        version=__version__,
    )
