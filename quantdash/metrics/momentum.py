"""RSI and MACD momentum calculations"""

from typing import Optional, Sequence

from .moving_average import calculate_ema


def calculate_rsi(closes: Sequence[float], end_index: Optional[int] = None,
                  period: int = 14) -> Optional[float]:
    """
    Calculate the Relative Strength Index at an index

    Gains and absolute losses of the trailing ``period`` one-day deltas are
    each summed and divided by ``period``. A zero average loss is treated as 1.

    RSI = 100 - 100 / (1 + avg_gain / avg_loss)

    Args:
        closes: Close prices in chronological order
        end_index: Index to evaluate (default: last close)
        period: RSI period (default 14)

    Returns:
        RSI in [0, 100] or None if fewer than ``period`` deltas precede the index
    """
    end = len(closes) - 1 if end_index is None else end_index
    if end < period or end >= len(closes):
        return None

    gains = 0.0
    losses = 0.0
    for j in range(end - period + 1, end + 1):
        change = closes[j] - closes[j - 1]
        if change > 0:
            gains += change
        else:
            losses += abs(change)

    avg_gain = gains / period
    avg_loss = losses / period
    rs = avg_gain / (avg_loss or 1)

    return 100 - (100 / (1 + rs))


def calculate_macd(closes: Sequence[float], end_index: Optional[int] = None,
                   fast: int = 12, slow: int = 26) -> Optional[float]:
    """
    Calculate the MACD line at an index

    Both EMAs are recomputed from the first close up to ``end_index``, so the
    value at each index depends on the whole prefix.

    Args:
        closes: Close prices in chronological order
        end_index: Index to evaluate (default: last close)
        fast: Fast EMA period (default 12)
        slow: Slow EMA period (default 26)

    Returns:
        EMA(fast) - EMA(slow) or None before index ``slow``
    """
    end = len(closes) - 1 if end_index is None else end_index
    if end < slow or end >= len(closes):
        return None

    prefix = closes[:end + 1]
    return calculate_ema(prefix, fast) - calculate_ema(prefix, slow)


def calculate_macd_signal(macd_values: Sequence[Optional[float]], end_index: Optional[int] = None,
                          period: int = 9, start_index: int = 34) -> Optional[float]:
    """
    Calculate the MACD signal line as a simple average of trailing MACD values

    Missing MACD values inside the window count as 0.

    Args:
        macd_values: MACD line per index (None where undefined)
        end_index: Index to evaluate (default: last value)
        period: Signal window (default 9)
        start_index: First index carrying a signal value (default 34)

    Returns:
        Signal value or None before ``start_index``
    """
    end = len(macd_values) - 1 if end_index is None else end_index
    if end < start_index or end >= len(macd_values) or end < period - 1:
        return None

    window = macd_values[end - period + 1:end + 1]
    return sum(value or 0 for value in window) / period
