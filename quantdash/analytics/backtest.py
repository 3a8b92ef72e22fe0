"""Moving-average crossover backtest"""

import math
from typing import Optional

from ..config.defaults import BacktestParams, get_default_config
from ..data.models import BacktestRecord, PricePoint, Series
from ..logging.config import get_logger

logger = get_logger(__name__)


def _has_averages(point: PricePoint) -> bool:
    return point.ma20 is not None and point.ma50 is not None


def is_golden_cross(current: PricePoint, previous: PricePoint) -> bool:
    """ma20 moved from at-or-below ma50 to above it."""
    return (_has_averages(current) and _has_averages(previous)
            and current.ma20 > current.ma50 and previous.ma20 <= previous.ma50)


def is_death_cross(current: PricePoint, previous: PricePoint) -> bool:
    """ma20 moved from at-or-above ma50 to below it."""
    return (_has_averages(current) and _has_averages(previous)
            and current.ma20 < current.ma50 and previous.ma20 >= previous.ma50)


def run_crossover_backtest(series: Series,
                           params: Optional[BacktestParams] = None) -> list[BacktestRecord]:
    """
    Backtest a long-only MA(20)/MA(50) crossover strategy

    A golden cross with no open position buys as many whole shares as the cash
    allows; a death cross liquidates the position. No shorting, costs or
    partial fills.

    Args:
        series: Annotated series (ma20/ma50 populated)
        params: Backtest parameters (defaults if None)

    Returns:
        One record per point from ``start_index`` onward
    """
    params = params or get_default_config().backtest
    initial = params.initial_capital

    capital = initial
    shares = 0
    trades = 0
    results: list[BacktestRecord] = []

    for i in range(params.start_index, len(series)):
        current = series[i]
        previous = series[i - 1]

        if is_golden_cross(current, previous) and shares == 0 and capital > 0 and current.close > 0:
            shares = math.floor(capital / current.close)
            capital = capital - shares * current.close
            trades += 1
        elif is_death_cross(current, previous) and shares > 0:
            capital = capital + shares * current.close
            shares = 0
            trades += 1

        total_value = capital + shares * current.close
        results.append(BacktestRecord(
            date=current.date,
            value=total_value,
            return_percent=(total_value - initial) / initial * 100,
        ))

    logger.debug("Backtest complete", records=len(results), trades=trades,
                 final_value=results[-1].value if results else initial)
    return results
