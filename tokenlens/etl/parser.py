"""
CSV parser for usage exports.

This is the boundary where records enter TokenLens: every row is
converted to a UsageRecord here, and anything malformed fails fast
with CSVFormatError instead of reaching the analytics engine.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Union

from tokenlens.models.entities import UsageRecord
from tokenlens.utils.timestamps import parse_timestamp

logger = logging.getLogger("tokenlens.etl")

# Export column -> UsageRecord field
COLUMNS: Dict[str, str] = {
    'Date': 'timestamp',
    'Kind': 'kind',
    'Model': 'model',
    'Max Mode': 'max_mode',
    'Input (w/ Cache Write)': 'input_with_cache',
    'Input (w/o Cache Write)': 'input_without_cache',
    'Cache Read': 'cache_read',
    'Output Tokens': 'output_tokens',
    'Total Tokens': 'total_tokens',
    'Cost': 'cost',
}

TOKEN_COLUMNS = [
    'Input (w/ Cache Write)',
    'Input (w/o Cache Write)',
    'Cache Read',
    'Output Tokens',
    'Total Tokens',
]

_TRUE_VALUES = {'yes', 'true', '1'}
_FALSE_VALUES = {'no', 'false', '0', ''}


class CSVFormatError(ValueError):
    """Raised when an export cannot be turned into usage records."""

    def __init__(self, message: str, row: int = 0):
        self.row = row
        if row:
            message = f"Row {row}: {message}"
        super().__init__(message)


def _parse_bool(value: str, row: int) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise CSVFormatError(f"Invalid Max Mode value: {value!r}", row)


def _parse_tokens(value: str, column: str, row: int) -> int:
    try:
        count = int(value.strip().replace(',', '') or 0)
    except ValueError:
        raise CSVFormatError(f"Invalid {column} value: {value!r}", row) from None
    if count < 0:
        raise CSVFormatError(f"Negative {column} value: {count}", row)
    return count


def _parse_cost(value: str, row: int) -> float:
    cleaned = value.strip().lstrip('$').replace(',', '')
    try:
        cost = float(cleaned or 0)
    except ValueError:
        raise CSVFormatError(f"Invalid Cost value: {value!r}", row) from None
    if cost < 0:
        raise CSVFormatError(f"Negative Cost value: {cost}", row)
    return cost


def parse_row(row: Dict[str, str], row_number: int) -> UsageRecord:
    """
    Convert one CSV row (keyed by export column) to a UsageRecord.

    Raises:
        CSVFormatError: on a bad timestamp or number
    """
    timestamp = parse_timestamp(row['Date'])
    if timestamp is None:
        raise CSVFormatError(f"Invalid timestamp format: {row['Date']!r}", row_number)

    tokens = {
        COLUMNS[column]: _parse_tokens(row[column], column, row_number)
        for column in TOKEN_COLUMNS
    }

    return UsageRecord(
        timestamp=timestamp,
        kind=row['Kind'].strip(),
        model=row['Model'].strip(),
        max_mode=_parse_bool(row['Max Mode'], row_number),
        cost=_parse_cost(row['Cost'], row_number),
        **tokens,
    )


def parse_csv_text(text: str) -> List[UsageRecord]:
    """
    Parse a full usage export.

    Args:
        text: CSV content including the header row

    Returns:
        Records in file order

    Raises:
        CSVFormatError: if the file is empty, a column is missing, or
            any row is malformed
    """
    if not text or not text.strip():
        raise CSVFormatError("CSV content is empty")

    reader = csv.reader(io.StringIO(text.lstrip('\ufeff')))
    try:
        header = [h.strip() for h in next(reader)]
    except csv.Error as e:
        raise CSVFormatError(f"Malformed header: {e}", 1) from None

    missing = [column for column in COLUMNS if column not in header]
    if missing:
        raise CSVFormatError(f"Missing required columns: {', '.join(missing)}")

    records = []
    # Header is line 1
    row_number = 1
    try:
        for row_number, values in enumerate(reader, start=2):
            if not any(v.strip() for v in values):
                continue
            if len(values) != len(header):
                raise CSVFormatError(
                    f"Expected {len(header)} columns, found {len(values)}", row_number
                )
            records.append(parse_row(dict(zip(header, values)), row_number))
    except csv.Error as e:
        raise CSVFormatError(f"Malformed CSV: {e}", row_number + 1) from None

    logger.debug("Parsed %d usage records", len(records))
    return records


def parse_csv_file(path: Union[str, Path]) -> List[UsageRecord]:
    """Read and parse a usage export from disk."""
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return parse_csv_text(f.read())
