"""
Uploaded file ingestion.

Parses delimited text into generic row records keyed by the file's own
column names. Column types are inferred from the header text. PDF statements
and spreadsheets are not parsed; they yield a placeholder price history drawn
from the session's random source. Failures never raise out of
``ingest_file``; they come back as a failed IngestionResult.
"""

import io
import math
import random
from pathlib import PurePath
from typing import Optional, Union

import pandas as pd

from ..config.defaults import IngestParams, get_default_config
from ..errors import IngestionError
from ..logging.config import get_logger
from ..utils.time import date_sequence, parse_date
from .models import IngestionResult, Row, RowValue

logger = get_logger(__name__)

PRICE_HEADER_TOKENS = ("price", "close", "open", "high", "low", "volume")
DATE_HEADER_TOKEN = "date"

_KIND_BY_SUFFIX = {
    ".csv": "csv",
    ".pdf": "pdf",
    ".xls": "excel",
    ".xlsx": "excel",
}

# Spreadsheet fundamentals
SHARE_COUNT_RANGE = (1_000_000, 1_500_000)
PE_RATIO_RANGE = (15.0, 35.0)


def detect_kind(file_name: str) -> Optional[str]:
    """Infer the declared kind of an upload from its file extension."""
    return _KIND_BY_SUFFIX.get(PurePath(file_name).suffix.lower())


def _to_number(value: str) -> Optional[float]:
    """Parse a finite float, None when the text is not a number."""
    try:
        number = float(value)
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _clean(cell: str) -> str:
    return cell.strip().replace('"', '')


def _clean_header(column: object) -> str:
    # pandas names blank header cells "Unnamed: <n>"
    name = str(column)
    if name.startswith("Unnamed: "):
        return ""
    return _clean(name)


def _convert_cell(header: str, value: Optional[str]) -> RowValue:
    """Type one cell based on its column header."""
    lowered = header.lower()
    text = value if value is not None else ""

    if any(token in lowered for token in PRICE_HEADER_TOKENS):
        number = _to_number(text)
        return number if number is not None else 0.0

    if DATE_HEADER_TOKEN in lowered:
        return text

    number = _to_number(text) if text else None
    return number if number is not None else text


def parse_csv(content: str, params: Optional[IngestParams] = None) -> list[Row]:
    """
    Parse CSV text into row records.

    Blank lines are dropped, the first remaining line is the header, and
    quotes are stripped from headers and values. Rows without a ``date`` or
    ``Date`` value get a synthetic date counting up from the configured start.

    Args:
        content: Decoded file text
        params: Ingestion parameters (defaults if None)

    Returns:
        List of row dictionaries

    Raises:
        IngestionError: If the file has no header, no data rows, or rows the
            tokenizer cannot split
    """
    params = params or get_default_config().ingest

    lines = [line for line in content.splitlines() if line.strip()]
    if not lines:
        raise IngestionError("File is empty", kind="csv")

    try:
        frame = pd.read_csv(
            io.StringIO("\n".join(lines)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
            index_col=False,
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise IngestionError(f"Could not parse CSV: {e}", kind="csv") from e

    headers = [_clean_header(column) for column in frame.columns]
    if not any(headers):
        raise IngestionError("Missing header row", kind="csv")

    if frame.empty:
        raise IngestionError("File has a header but no data rows", kind="csv")

    synthetic_dates = date_sequence(parse_date(params.synthetic_start_date), len(frame))
    rows: list[Row] = []

    for index, cells in enumerate(frame.itertuples(index=False, name=None)):
        row: Row = {}

        for header, cell in zip(headers, cells):
            # short rows are padded with NaN
            value = _clean(cell) if isinstance(cell, str) else None
            row[header] = _convert_cell(header, value)

        if not row.get("date") and not row.get("Date"):
            row["date"] = synthetic_dates[index]

        rows.append(row)

    return rows


def _price_bar(price: float, rng: random.Random, range_pct: float,
               params: IngestParams) -> dict[str, float]:
    return {
        "open": price * (1 + (rng.random() - 0.5) * params.open_spread),
        "high": price * (1 + rng.random() * range_pct),
        "low": price * (1 - rng.random() * range_pct),
        "close": price,
    }


def pdf_rows(rng: random.Random, params: Optional[IngestParams] = None) -> list[Row]:
    """
    Produce the price history shown for an uploaded PDF statement.

    Statement tables are not extracted. Each row scatters a close around one
    base price drawn per upload, with open/high/low bracketing it.

    Args:
        rng: Random source
        params: Ingestion parameters (defaults if None)

    Returns:
        ``pdf_rows`` OHLCV rows on consecutive days from ``pdf_start_date``
    """
    params = params or get_default_config().ingest
    low_base, high_base = params.pdf_base_price_range
    base_price = low_base + rng.random() * (high_base - low_base)

    rows: list[Row] = []
    for day in date_sequence(parse_date(params.pdf_start_date), params.pdf_rows):
        price = base_price * (1 + (rng.random() - 0.5) * params.pdf_price_spread)
        row: Row = {"date": day}
        row.update(_price_bar(price, rng, params.pdf_range_pct, params))
        row["volume"] = float(rng.randrange(*params.pdf_volume_range))
        rows.append(row)

    return rows


def excel_rows(rng: random.Random, params: Optional[IngestParams] = None) -> list[Row]:
    """
    Produce the multi-symbol sheet shown for an uploaded spreadsheet.

    Workbooks are not read. Rows cycle through ``excel_symbols`` and carry
    market cap and P/E columns next to OHLCV.
    """
    params = params or get_default_config().ingest
    low_base, high_base = params.excel_base_price_range
    base_price = low_base + rng.random() * (high_base - low_base)
    symbols = params.excel_symbols

    rows: list[Row] = []
    days = date_sequence(parse_date(params.excel_start_date), params.excel_rows)
    for index, day in enumerate(days):
        price = base_price * (1 + (rng.random() - 0.5) * params.excel_price_spread)
        row: Row = {"date": day, "symbol": symbols[index % len(symbols)]}
        row.update(_price_bar(price, rng, params.excel_range_pct, params))
        row["volume"] = float(rng.randrange(*params.excel_volume_range))
        row["marketCap"] = price * rng.uniform(*SHARE_COUNT_RANGE)
        row["pe_ratio"] = rng.uniform(*PE_RATIO_RANGE)
        rows.append(row)

    return rows


def _decode(content: Union[str, bytes], file_name: str, kind: str) -> str:
    if isinstance(content, str):
        return content
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise IngestionError(f"File is not valid UTF-8: {e}", file_name=file_name, kind=kind)


def ingest_file(content: Union[str, bytes], kind: Optional[str] = "csv",
                file_name: str = "upload.csv",
                params: Optional[IngestParams] = None,
                rng: Optional[random.Random] = None) -> IngestionResult:
    """
    Ingest an uploaded file into generic rows.

    Args:
        content: Raw file bytes or decoded text
        kind: Declared kind; None infers it from ``file_name``
        file_name: Original file name, carried into the result
        params: Ingestion parameters (defaults if None)
        rng: Random source for PDF and spreadsheet rows (fresh if None)

    Returns:
        IngestionResult, failed with an error message on any problem
    """
    params = params or get_default_config().ingest
    kind = kind or detect_kind(file_name)

    try:
        if kind not in params.supported_kinds:
            raise IngestionError(f"Unsupported file kind: {kind}", file_name=file_name, kind=kind)

        if kind == "pdf":
            rows = pdf_rows(rng or random.Random(), params)
        elif kind == "excel":
            rows = excel_rows(rng or random.Random(), params)
        else:
            rows = parse_csv(_decode(content, file_name, kind), params)

    except IngestionError as e:
        logger.warning("File ingestion failed", file_name=file_name, kind=kind, error=str(e))
        return IngestionResult.failed(str(e), file_name=file_name)

    logger.info("File ingested", file_name=file_name, kind=kind, record_count=len(rows))
    return IngestionResult.ok(rows, file_name=file_name)
