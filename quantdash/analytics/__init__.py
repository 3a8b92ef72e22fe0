"""Backtesting and risk metrics"""

from .backtest import is_death_cross, is_golden_cross, run_crossover_backtest
from .risk import (
    calculate_dataset_stats,
    calculate_max_drawdown,
    calculate_portfolio_metrics,
    calculate_returns,
    find_price_field,
)

__all__ = [
    "run_crossover_backtest",
    "is_golden_cross",
    "is_death_cross",
    "calculate_returns",
    "calculate_max_drawdown",
    "calculate_portfolio_metrics",
    "calculate_dataset_stats",
    "find_price_field",
]
