"""Returns-based risk metrics and dataset statistics"""

import math
from typing import Iterable, Optional, Sequence

from ..config.defaults import RiskParams, get_default_config
from ..data.models import DatasetStats, PortfolioMetrics, Row, Series
from ..errors import InsufficientDataError

PRICE_FIELD_TOKENS = ("close", "price")


def calculate_returns(closes: Sequence[float]) -> list[float]:
    """
    Day-over-day simple returns

    A zero previous close yields NaN for that return.
    """
    return [
        (closes[i] - closes[i - 1]) / closes[i - 1] if closes[i - 1] != 0 else math.nan
        for i in range(1, len(closes))
    ]


def calculate_max_drawdown(closes: Sequence[float]) -> float:
    """
    Largest peak-to-trough fractional decline

    The running peak is tracked left to right.

    Returns:
        Drawdown as a fraction in [0, 1], 0 for an empty sequence
    """
    if not closes:
        return 0.0

    max_drawdown = 0.0
    peak = closes[0]

    for close in closes:
        if close > peak:
            peak = close
        if peak > 0:
            drawdown = (peak - close) / peak
            if drawdown > max_drawdown:
                max_drawdown = drawdown

    return max_drawdown


def calculate_portfolio_metrics(series: Series,
                                params: Optional[RiskParams] = None) -> PortfolioMetrics:
    """
    Summarize a series' daily returns

    Volatility uses the population variance annualized by ``trading_days``.
    var95/var99 are the empirical 5th/1st percentile daily returns.
    Sharpe = (mean * trading_days - risk_free_rate) / volatility, NaN when
    volatility is zero.

    Args:
        series: Price series, at least two points
        params: Risk parameters (defaults if None)

    Returns:
        PortfolioMetrics

    Raises:
        InsufficientDataError: If the series has fewer than two points
    """
    params = params or get_default_config().risk

    if len(series) < 2:
        raise InsufficientDataError(
            "Portfolio metrics need at least two points",
            required_count=2,
            available_count=len(series)
        )

    closes = [point.close for point in series]
    returns = calculate_returns(closes)
    n = len(returns)

    avg_return = sum(returns) / n
    variance = sum((r - avg_return) ** 2 for r in returns) / n
    volatility = math.sqrt(variance * params.trading_days)

    sorted_returns = sorted(returns)
    var95 = sorted_returns[math.floor(n * params.var95_quantile)]
    var99 = sorted_returns[math.floor(n * params.var99_quantile)]

    annual_excess = avg_return * params.trading_days - params.risk_free_rate
    sharpe_ratio = annual_excess / volatility if volatility else math.nan

    return PortfolioMetrics(
        avg_return=avg_return * params.trading_days,
        volatility=volatility,
        var95=var95,
        var99=var99,
        sharpe_ratio=sharpe_ratio,
        max_drawdown=calculate_max_drawdown(closes),
    )


def find_price_field(rows: Sequence[Row]) -> Optional[str]:
    """First column of the first row whose name contains 'close' or 'price'."""
    if not rows:
        return None

    for key in rows[0].keys():
        lowered = key.lower()
        if any(token in lowered for token in PRICE_FIELD_TOKENS):
            return key
    return None


def _numeric(values: Iterable) -> list[float]:
    return [
        float(v) for v in values
        if isinstance(v, (int, float)) and not isinstance(v, bool) and not math.isnan(v)
    ]


def calculate_dataset_stats(rows: Sequence[Row],
                            params: Optional[RiskParams] = None) -> Optional[DatasetStats]:
    """
    Summary statistics for an uploaded dataset's price column

    Volatility is the root-mean-square daily return, annualized for display;
    the Sharpe ratio divides total return less the risk-free rate by the
    un-annualized figure.

    Args:
        rows: Ingested rows
        params: Risk parameters (defaults if None)

    Returns:
        DatasetStats, or None when no price column or no numeric prices exist
    """
    params = params or get_default_config().risk

    price_field = find_price_field(rows)
    if price_field is None:
        return None

    prices = _numeric(row.get(price_field) for row in rows)
    if not prices:
        return None

    returns = [r for r in calculate_returns(prices) if not math.isnan(r)]
    raw_volatility = math.sqrt(sum(r * r for r in returns) / len(returns)) if returns else 0.0

    first = prices[0]
    total_return = (prices[-1] - first) / first if first else math.nan
    sharpe_ratio = (total_return - params.risk_free_rate) / raw_volatility if raw_volatility else math.nan

    return DatasetStats(
        avg_price=sum(prices) / len(prices),
        max_price=max(prices),
        min_price=min(prices),
        volatility=raw_volatility * math.sqrt(params.trading_days),
        total_return=total_return,
        sharpe_ratio=sharpe_ratio,
        price_field=price_field,
        prices=tuple(prices),
    )
