"""
Synthetic OHLCV series generation.

Produces a geometric-drift random walk per symbol and annotates it with the
technical indicators before returning it.
"""

import random
from datetime import date, timedelta
from typing import Optional

from ..config.defaults import DefaultConfig, get_default_config
from ..errors import InsufficientDataError
from ..logging.config import get_logger
from ..metrics.calculator import IndicatorCalculator
from ..utils.time import date_sequence, today
from .models import PricePoint, Series

logger = get_logger(__name__)


def generate_raw_series(symbol: str, days: int, rng: random.Random, *,
                        config: Optional[DefaultConfig] = None,
                        end_date: Optional[date] = None) -> Series:
    """
    Generate an un-annotated random-walk OHLCV series.

    Each day: price *= 1 + drift + noise, with noise uniform on
    [-volatility, volatility]. High and low bracket the price by up to
    ``range_pct``; open and close are drawn independently between them.

    Args:
        symbol: Symbol used to look up the base price
        days: Number of points to generate
        rng: Random source
        config: Configuration (defaults if None)
        end_date: Date the series counts back from (default: today)

    Returns:
        List of ``days`` price points, one calendar day apart

    Raises:
        InsufficientDataError: If days is not positive
    """
    if days <= 0:
        raise InsufficientDataError(
            "Series generation needs at least one day",
            required_count=1,
            available_count=days
        )

    params = (config or get_default_config()).generator
    price = params.base_price_for(symbol)
    dates = date_sequence(today(end_date) - timedelta(days=days), days)

    series: Series = []
    for day in dates:
        random_change = (rng.random() - 0.5) * 2 * params.volatility
        price = price * (1 + params.drift + random_change)

        high = price * (1 + rng.random() * params.range_pct)
        low = price * (1 - rng.random() * params.range_pct)
        open_ = low + rng.random() * (high - low)
        close = low + rng.random() * (high - low)
        volume = rng.randrange(params.min_volume, params.max_volume)

        series.append(PricePoint(
            date=day,
            open=open_,
            high=high,
            low=low,
            close=close,
            volume=volume,
        ))

    return series


def generate_series(symbol: str, days: int, rng: random.Random, *,
                    config: Optional[DefaultConfig] = None,
                    end_date: Optional[date] = None) -> Series:
    """
    Generate a synthetic series for a symbol and annotate it with indicators.

    Args:
        symbol: Symbol used to look up the base price
        days: Number of points to generate
        rng: Random source shared by the walk and the indicator overlays
        config: Configuration (defaults if None)
        end_date: Date the series counts back from (default: today)

    Returns:
        Annotated series of length ``days``
    """
    config = config or get_default_config()
    series = generate_raw_series(symbol, days, rng, config=config, end_date=end_date)

    logger.debug("Generated synthetic series", symbol=symbol, days=days,
                 last_close=series[-1].close)

    return IndicatorCalculator(config.indicators).annotate(series, rng)
