"""CSV upload endpoints.

Uploaded data lives in process memory only; it is replaced by
/api/upload and merged into by /api/upload/append.
"""

import logging
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from tokenlens.analytics.engine import AnalyticsEngine
from tokenlens.analytics.summary import merge_records
from tokenlens.config.loader import build_view_options, get_max_upload_bytes
from tokenlens.etl.parser import CSVFormatError, parse_csv_text
from tokenlens.models.entities import UsageRecord
from tokenlens.server.dependencies import get_config, get_engine
from tokenlens.server.errors import APIError
from tokenlens.server.models.stats import UploadResponse, UsageSummaryModel

logger = logging.getLogger("tokenlens.server")

router = APIRouter(prefix="/api", tags=["upload"])


async def _read_upload(upload: Optional[UploadFile], max_bytes: int) -> List[UsageRecord]:
    """Validate an uploaded export and parse it into records."""
    if upload is None:
        raise APIError(
            400, "NO_FILE",
            "No CSV file provided. Please upload a file with field name 'csvFile'",
        )

    if not (upload.filename or "").lower().endswith(".csv"):
        raise APIError(400, "INVALID_FILE_TYPE", "Only CSV files are allowed")

    # Read at most one byte past the limit
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise APIError(
            413, "FILE_TOO_LARGE",
            f"File exceeds maximum allowed size ({max_bytes} bytes)",
            {"max_bytes": max_bytes},
        )

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        raise APIError(400, "INVALID_ENCODING", "File must be UTF-8 encoded") from None

    try:
        return parse_csv_text(text)
    except CSVFormatError as e:
        raise APIError(400, "CSV_PARSE_ERROR", str(e), {"row": e.row or None}) from None


def _summary_model(engine: AnalyticsEngine, records: List[UsageRecord], config: dict) -> UsageSummaryModel:
    summary = engine.summary(records, build_view_options(config))
    return UsageSummaryModel(**asdict(summary))


@router.post("/upload", response_model=UploadResponse)
async def upload_csv(
    request: Request,
    csvFile: Optional[UploadFile] = File(None),
    engine: AnalyticsEngine = Depends(get_engine),
    config: dict = Depends(get_config),
):
    """Replace the loaded dataset with an uploaded export."""
    records = await _read_upload(csvFile, get_max_upload_bytes(config))
    request.app.state.records = records
    logger.info("Loaded %d records from %s", len(records), csvFile.filename)

    return UploadResponse(
        message="CSV file uploaded and parsed successfully",
        new_records=len(records),
        total_records=len(records),
        summary=_summary_model(engine, records, config),
    )


@router.post("/upload/append", response_model=UploadResponse)
async def append_csv(
    request: Request,
    csvFile: Optional[UploadFile] = File(None),
    engine: AnalyticsEngine = Depends(get_engine),
    config: dict = Depends(get_config),
):
    """Merge an uploaded export into the loaded dataset, dropping duplicates."""
    new_records = await _read_upload(csvFile, get_max_upload_bytes(config))
    merged = merge_records(request.app.state.records, new_records)
    request.app.state.records = merged
    logger.info(
        "Appended %d records from %s (%d total)",
        len(new_records), csvFile.filename, len(merged),
    )

    return UploadResponse(
        message="CSV file appended successfully",
        new_records=len(new_records),
        total_records=len(merged),
        summary=_summary_model(engine, merged, config),
    )
