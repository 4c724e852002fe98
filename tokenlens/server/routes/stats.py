"""Comprehensive statistics endpoint."""

from dataclasses import asdict
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from tokenlens.analytics.engine import AnalyticsEngine
from tokenlens.config.loader import build_view_options
from tokenlens.models.entities import DateRange, UsageRecord
from tokenlens.server.dependencies import get_config, get_engine, get_records
from tokenlens.server.errors import APIError
from tokenlens.server.models.stats import (
    ComprehensiveStatsModel,
    ComprehensiveStatsResponse,
    ViewOptionsModel,
)
from tokenlens.utils.timestamps import end_of_day, resolve_timezone, start_of_day

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats/comprehensive", response_model=ComprehensiveStatsResponse)
async def comprehensive_stats(
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
    model_view: Optional[str] = Query(None),
    granularity: Optional[str] = Query(None),
    tz: Optional[str] = Query(None),
    records: List[UsageRecord] = Depends(get_records),
    engine: AnalyticsEngine = Depends(get_engine),
    config: dict = Depends(get_config),
):
    """
    Every aggregate for the loaded dataset.

    from/to (YYYY-MM-DD, inclusive, in the reference zone) narrow the
    time series only; the other aggregates cover the whole dataset.
    """
    try:
        zone_name = tz or config.get("timezone", "UTC")
        zone = resolve_timezone(zone_name)
        date_range = DateRange(
            start=start_of_day(date_from, zone) if date_from else None,
            end=end_of_day(date_to, zone) if date_to else None,
        )
        options = build_view_options(
            config,
            model_view=model_view,
            granularity=granularity,
            timezone=zone_name,
            date_range=date_range,
        )
    except ValueError as e:
        raise APIError(400, "INVALID_VIEW_OPTIONS", str(e)) from None

    options_model = ViewOptionsModel(
        model_view=options.model_view,
        granularity=options.granularity,
        timezone=options.timezone,
        date_from=date_from.isoformat() if date_from else None,
        date_to=date_to.isoformat() if date_to else None,
    )

    if not records:
        return ComprehensiveStatsResponse(
            message="No data available. Please upload a CSV file first.",
            record_count=0,
            options=options_model,
        )

    stats = engine.comprehensive(records, options)
    return ComprehensiveStatsResponse(
        message="Comprehensive statistics calculated successfully.",
        record_count=len(records),
        options=options_model,
        data=ComprehensiveStatsModel(**asdict(stats)),
    )
