"""
Row-to-PricePoint adapter.

Resolves the loosely-typed rows produced by the ingestor into PricePoint
records once, so the analytics core only ever sees typed series.
"""

import random
from typing import Iterable, Optional

from ..config.defaults import IngestParams, get_default_config
from ..utils.time import format_date, today
from .models import PricePoint, Row, RowValue, Series

DATE_ALIASES = ("date", "Date")
OPEN_ALIASES = ("open", "Open")
HIGH_ALIASES = ("high", "High")
LOW_ALIASES = ("low", "Low")
CLOSE_ALIASES = ("close", "Close", "price", "Price")
VOLUME_ALIASES = ("volume", "Volume")


def _first_truthy(row: Row, aliases: Iterable[str]) -> Optional[RowValue]:
    """First alias whose value is present and non-empty/non-zero."""
    for alias in aliases:
        value = row.get(alias)
        if value:
            return value
    return None


def _as_float(value: Optional[RowValue]) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value)
    except ValueError:
        return None


def row_to_point(row: Row, rng: random.Random, params: Optional[IngestParams] = None) -> PricePoint:
    """
    Map one ingested row onto a PricePoint.

    Zero or empty values fall through to the next alias. Open, high and low
    default to the resolved close, close defaults to ``default_close`` and a
    missing volume is filled with a random integer.

    Args:
        row: Row produced by the file ingestor
        rng: Random source for the volume filler
        params: Ingestion parameters (defaults if None)

    Returns:
        Un-annotated PricePoint
    """
    params = params or get_default_config().ingest

    close = _as_float(_first_truthy(row, CLOSE_ALIASES)) or params.default_close

    def resolve(aliases: tuple[str, ...]) -> float:
        return _as_float(_first_truthy(row, aliases)) or close

    volume = _as_float(_first_truthy(row, VOLUME_ALIASES))
    if volume is None:
        volume = float(rng.randrange(params.max_filler_volume))

    date_value = _first_truthy(row, DATE_ALIASES)

    return PricePoint(
        date=str(date_value) if date_value else format_date(today()),
        open=resolve(OPEN_ALIASES),
        high=resolve(HIGH_ALIASES),
        low=resolve(LOW_ALIASES),
        close=close,
        volume=volume,
    )


def rows_to_series(rows: Iterable[Row], rng: random.Random,
                   params: Optional[IngestParams] = None) -> Series:
    """Adapt every ingested row, preserving file order."""
    return [row_to_point(row, rng, params) for row in rows]
