"""FastAPI dependency injection for the dataset, engine and config."""

from typing import List

from fastapi import Request

from tokenlens.analytics.engine import AnalyticsEngine
from tokenlens.models.entities import UsageRecord


def get_records(request: Request) -> List[UsageRecord]:
    """Get the currently loaded dataset from app state."""
    return request.app.state.records


def get_engine(request: Request) -> AnalyticsEngine:
    """Get the shared analytics engine from app state."""
    return request.app.state.engine


def get_config(request: Request) -> dict:
    """Get the loaded config from app state."""
    return request.app.state.config
