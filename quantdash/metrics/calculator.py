"""Indicator calculator that annotates a price series"""

import math
import random
from dataclasses import replace
from typing import Optional

from ..config.defaults import IndicatorParams, get_default_config
from ..data.models import PricePoint, Series
from ..errors import MalformedDataError, MetricsCalculationError
from ..logging.config import get_logger
from .momentum import calculate_macd, calculate_macd_signal, calculate_rsi
from .moving_average import calculate_bollinger_bands, simple_moving_average

logger = get_logger(__name__)


class IndicatorCalculator:
    """
    Coordinates all technical indicator calculations for a series

    Every annotation at index i uses only points 0..i. Fields whose window is
    not yet full stay None.
    """

    def __init__(self, params: Optional[IndicatorParams] = None):
        self.params = params or get_default_config().indicators

    def annotate(self, series: Series, rng: random.Random) -> Series:
        """
        Annotate every point with indicators and display overlays

        Args:
            series: Price points in chronological order
            rng: Random source for the cosmetic overlays

        Returns:
            New list of annotated points, same length and order
        """
        self._validate_series(series)

        p = self.params
        closes = [point.close for point in series]
        macd_values: list[Optional[float]] = []
        annotated: Series = []

        try:
            for i, point in enumerate(series):
                macd = calculate_macd(closes, i, fast=p.macd_fast, slow=p.macd_slow)
                macd_values.append(macd)
                signal = None
                if macd is not None:
                    signal = calculate_macd_signal(
                        macd_values, i, period=p.macd_signal, start_index=p.macd_signal_start
                    )
                bands = calculate_bollinger_bands(closes, period=p.bb_period, width=p.bb_width, end_index=i)

                annotated.append(replace(
                    point,
                    ma20=simple_moving_average(closes, p.short_ma_period, i),
                    ma50=simple_moving_average(closes, p.long_ma_period, i),
                    rsi=calculate_rsi(closes, i, period=p.rsi_period),
                    macd=macd,
                    macd_signal=signal,
                    upper_bb=bands.upper if bands else None,
                    lower_bb=bands.lower if bands else None,
                    **self._overlays(point.close, rng),
                ))
        except (TypeError, ValueError, ZeroDivisionError) as e:
            raise MetricsCalculationError(
                f"Indicator calculation failed: {str(e)}",
                metric_name="indicators",
                calculation_input={"point_count": len(series)}
            )

        logger.debug("Annotated series", point_count=len(annotated))
        return annotated

    def get_warmup_period(self) -> int:
        """Get the number of points needed before every indicator is defined"""
        p = self.params
        return max(p.long_ma_period, p.macd_signal_start + 1, p.bb_period, p.rsi_period + 1)

    def _overlays(self, close: float, rng: random.Random) -> dict[str, Optional[float]]:
        """Cosmetic portfolio/benchmark/prediction multipliers of close."""
        p = self.params
        portfolio = close * (1 + rng.random() * p.portfolio_amplitude)
        benchmark = close * (1 + rng.random() * p.benchmark_amplitude)

        prediction = None
        if rng.random() < p.prediction_probability:
            prediction = close * (1 + (rng.random() - 0.5) * p.prediction_amplitude)

        return {"portfolio": portfolio, "benchmark": benchmark, "prediction": prediction}

    def _validate_series(self, series: Series) -> None:
        """Validate close prices are finite numbers."""
        for point in series:
            close = point.close
            if not isinstance(close, (int, float)) or isinstance(close, bool):
                raise MalformedDataError(f"Invalid close type: {type(close)}", raw_data=point.date)
            if math.isnan(close) or math.isinf(close):
                raise MalformedDataError(f"Invalid close value: {close}", raw_data=point.date)
