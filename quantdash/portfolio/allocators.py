"""
Simplified portfolio allocators.

Both allocators are proportional normalizations, not covariance-aware
optimizations. A zero normalization sum yields NaN weights rather than an
exception; callers must not feed an all-zero return vector.
"""

import math
from typing import Mapping, Optional, Sequence

from ..config.defaults import PortfolioParams, get_default_config
from ..data.models import AllocationResult, BlendedAllocation
from ..errors import MalformedDataError
from ..logging.config import get_logger

logger = get_logger(__name__)


def _safe_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return math.nan
    return numerator / denominator


def _normalize(values: Sequence[float]) -> tuple[float, ...]:
    total = sum(values)
    return tuple(_safe_ratio(value, total) for value in values)


def _check_lengths(**arrays: Sequence) -> None:
    lengths = {name: len(values) for name, values in arrays.items()}
    if len(set(lengths.values())) > 1:
        raise MalformedDataError(f"Parallel arrays differ in length: {lengths}")


def optimize_sharpe(assets: Sequence[str], returns: Sequence[float],
                    volatilities: Sequence[float]) -> AllocationResult:
    """
    Weight assets in proportion to their return/volatility ratio

    Portfolio volatility treats the assets as uncorrelated:
    sqrt(sum((w_i * vol_i)^2)).

    Args:
        assets: Asset names
        returns: Expected annual returns, parallel to assets
        volatilities: Annual volatilities, parallel to assets

    Returns:
        AllocationResult with fractional weights

    Raises:
        MalformedDataError: If the arrays differ in length
    """
    _check_lengths(assets=assets, returns=returns, volatilities=volatilities)

    sharpe_ratios = [_safe_ratio(ret, vol) for ret, vol in zip(returns, volatilities)]
    weights = _normalize(sharpe_ratios)

    expected_return = sum(ret * weight for ret, weight in zip(returns, weights))
    expected_volatility = math.sqrt(sum((vol * weight) ** 2 for vol, weight in zip(volatilities, weights)))

    return AllocationResult(
        assets=tuple(assets),
        weights=weights,
        expected_return=expected_return,
        expected_volatility=expected_volatility,
    )


def blend_views(assets: Sequence[str], market_weights: Sequence[float],
                priors: Sequence[float], views: Mapping[str, float]) -> BlendedAllocation:
    """
    Blend prior returns with manual views and weight by blended return

    An asset with a view gets (prior + view) / 2; others keep the prior.

    Args:
        assets: Asset names
        market_weights: Market-cap weights, parallel to assets
        priors: Prior expected returns, parallel to assets
        views: Subjective return per asset name, for a subset of assets

    Returns:
        BlendedAllocation with weights normalized to sum to 1

    Raises:
        MalformedDataError: If the arrays differ in length
    """
    _check_lengths(assets=assets, market_weights=market_weights, priors=priors)

    blended = tuple(
        (prior + views[asset]) / 2 if asset in views else prior
        for asset, prior in zip(assets, priors)
    )

    return BlendedAllocation(
        assets=tuple(assets),
        market_weights=tuple(market_weights),
        expected_returns=blended,
        optimal_weights=_normalize(blended),
        views=dict(views),
    )


def default_sharpe_allocation(params: Optional[PortfolioParams] = None) -> AllocationResult:
    """Sharpe allocation over the configured illustrative universe."""
    params = params or get_default_config().portfolio
    result = optimize_sharpe(params.sharpe_assets, params.sharpe_returns, params.sharpe_volatilities)
    logger.info("Portfolio optimized", assets=list(result.assets),
                expected_return=result.expected_return,
                expected_volatility=result.expected_volatility)
    return result


def default_blended_allocation(params: Optional[PortfolioParams] = None) -> BlendedAllocation:
    """Blended allocation over the configured universe and views."""
    params = params or get_default_config().portfolio
    result = blend_views(params.blend_assets, params.blend_market_weights,
                         params.blend_priors, params.blend_views)
    logger.info("Blended allocation complete", assets=list(result.assets),
                views=result.views)
    return result
