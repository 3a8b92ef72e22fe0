"""Technical indicator engine"""

from .calculator import IndicatorCalculator
from .momentum import calculate_macd, calculate_macd_signal, calculate_rsi
from .moving_average import (
    BollingerBands,
    calculate_bollinger_bands,
    calculate_ema,
    simple_moving_average,
)

__all__ = [
    "IndicatorCalculator",
    "BollingerBands",
    "simple_moving_average",
    "calculate_ema",
    "calculate_bollinger_bands",
    "calculate_rsi",
    "calculate_macd",
    "calculate_macd_signal",
]
