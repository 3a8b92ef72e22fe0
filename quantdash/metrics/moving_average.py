"""Simple/exponential moving averages and Bollinger Bands"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass
class BollingerBands:
    """Bollinger Band values at one index"""
    upper: float
    middle: float
    lower: float


def _window(values: Sequence[float], period: int, end_index: Optional[int]) -> Optional[Sequence[float]]:
    """Trailing window of ``period`` values ending at ``end_index`` (inclusive)."""
    if period <= 0:
        return None

    end = len(values) - 1 if end_index is None else end_index
    if end < period - 1 or end >= len(values):
        return None

    return values[end - period + 1:end + 1]


def simple_moving_average(values: Sequence[float], period: int,
                          end_index: Optional[int] = None) -> Optional[float]:
    """
    Calculate a trailing simple moving average

    Args:
        values: Values in chronological order
        period: Window length
        end_index: Last index of the window (default: last value)

    Returns:
        Mean of the window or None if the window is not full
    """
    window = _window(values, period, end_index)
    if window is None:
        return None

    return sum(window) / period


def calculate_ema(values: Sequence[float], period: int) -> Optional[float]:
    """
    Calculate an exponential moving average over the whole sequence

    The EMA is seeded with the first value and walked forward to the last:
    ema = value * k + ema * (1 - k), k = 2 / (period + 1)

    Args:
        values: Values in chronological order
        period: EMA period

    Returns:
        EMA at the last value, or None for an empty sequence
    """
    if not values:
        return None

    multiplier = 2 / (period + 1)
    ema = values[0]

    for value in values[1:]:
        ema = (value * multiplier) + (ema * (1 - multiplier))

    return ema


def calculate_bollinger_bands(values: Sequence[float], period: int = 20, width: float = 2.0,
                              end_index: Optional[int] = None) -> Optional[BollingerBands]:
    """
    Calculate Bollinger Bands from a trailing window

    Uses the population standard deviation (divisor = period).

    Args:
        values: Values in chronological order
        period: Window length (default 20)
        width: Standard deviation multiple (default 2)
        end_index: Last index of the window (default: last value)

    Returns:
        BollingerBands or None if the window is not full
    """
    window = _window(values, period, end_index)
    if window is None:
        return None

    sma = sum(window) / period
    variance = sum((value - sma) ** 2 for value in window) / period
    std_dev = math.sqrt(variance)

    return BollingerBands(
        upper=sma + width * std_dev,
        middle=sma,
        lower=sma - width * std_dev,
    )
