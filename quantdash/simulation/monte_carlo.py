"""Monte Carlo price path simulation"""

import math
import random
import time
from typing import Optional

from ..config.defaults import MonteCarloParams, get_default_config
from ..data.models import SimulationResult
from ..errors import MalformedDataError
from ..logging.config import get_logger

logger = get_logger(__name__)


def simulate_terminal_price(start_price: float, horizon_days: int, rng: random.Random,
                            daily_drift: float, daily_shock: float) -> float:
    """
    Walk one path forward and return its terminal price

    Each step: price *= 1 + drift + U(-shock, shock)
    """
    price = start_price
    for _ in range(horizon_days):
        random_shock = (rng.random() - 0.5) * daily_shock * 2
        price = price * (1 + daily_drift + random_shock)
    return price


def simulate(start_price: float, rng: random.Random, *,
             paths: Optional[int] = None, horizon_days: Optional[int] = None,
             params: Optional[MonteCarloParams] = None) -> SimulationResult:
    """
    Run independent price paths and summarize their terminal prices

    var95/var99 are the terminal prices at the 5th/1st percentile of the
    ascending sort, i.e. price levels rather than losses.

    Args:
        start_price: Price every path starts from (> 0)
        rng: Random source
        paths: Number of trials (default from params)
        horizon_days: Steps per trial (default from params)
        params: Simulation parameters (defaults if None)

    Returns:
        SimulationResult with the first ``min(sample_size, paths)`` raw
        terminal prices in trial order

    Raises:
        MalformedDataError: If start price, paths or horizon is out of range
    """
    params = params or get_default_config().monte_carlo
    paths = params.paths if paths is None else paths
    horizon_days = params.horizon_days if horizon_days is None else horizon_days

    if not isinstance(start_price, (int, float)) or math.isnan(start_price) or start_price <= 0:
        raise MalformedDataError(f"Start price must be positive, got {start_price}",
                                 raw_data=str(start_price))
    if paths <= 0:
        raise MalformedDataError(f"Path count must be positive, got {paths}", raw_data=str(paths))
    if horizon_days < 0:
        raise MalformedDataError(f"Horizon must be non-negative, got {horizon_days}",
                                 raw_data=str(horizon_days))

    started = time.perf_counter()
    results = [
        simulate_terminal_price(start_price, horizon_days, rng,
                                params.daily_drift, params.daily_shock)
        for _ in range(paths)
    ]

    sample = tuple(results[:params.sample_size])
    ordered = sorted(results)

    result = SimulationResult(
        expected_value=sum(results) / paths,
        var95=ordered[math.floor(paths * 0.05)],
        var99=ordered[math.floor(paths * 0.01)],
        sample=sample,
        paths=paths,
        horizon_days=horizon_days,
    )

    logger.info(
        "Monte Carlo simulation complete",
        paths=paths,
        horizon_days=horizon_days,
        expected_value=result.expected_value,
        elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return result
