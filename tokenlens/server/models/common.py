"""Common Pydantic models for API request/response validation."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class ErrorDetails(BaseModel):
    code: str
    message: str
    details: Optional[Any] = None


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: ErrorDetails


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    uptime_seconds: int
    records_loaded: int
    version: str
