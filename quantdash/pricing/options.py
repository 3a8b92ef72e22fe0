"""
Illustrative option pricing.

A Black-Scholes variant with a closed-form normal CDF approximation and
cosmetic adjustments layered on the call price. The put is derived from the
adjusted call through put-call parity. Not a finance-grade pricer.
"""

import math
import random
from typing import Optional

from ..config.defaults import OptionParams, SurfaceParams, get_default_config
from ..data.models import OptionQuote, VolatilityPoint
from ..errors import MalformedDataError
from ..logging.config import get_logger

logger = get_logger(__name__)


def approx_norm_cdf(x: float) -> float:
    """
    Approximate the standard normal CDF

    N(x) ~= 0.5 * (1 + sign(x) * sqrt(1 - exp(-2x^2 / pi)))
    """
    sign = (x > 0) - (x < 0)
    return 0.5 * (1 + sign * math.sqrt(1 - math.exp(-2 * x * x / math.pi)))


def price_option(spot: float, strike: float, days_to_expiry: float,
                 risk_free_rate_pct: float, volatility_pct: float, *,
                 params: Optional[OptionParams] = None) -> OptionQuote:
    """
    Price a European call/put pair

    Args:
        spot: Underlying price S (> 0)
        strike: Strike K (> 0)
        days_to_expiry: Calendar days to expiry (> 0)
        risk_free_rate_pct: Annual risk-free rate in percent
        volatility_pct: Annual volatility in percent (> 0)
        params: Pricer parameters (defaults if None)

    Returns:
        OptionQuote with both prices floored at ``min_price``

    Raises:
        MalformedDataError: If any input is out of range
    """
    params = params or get_default_config().options

    for name, value in (("spot", spot), ("strike", strike),
                        ("days_to_expiry", days_to_expiry), ("volatility_pct", volatility_pct)):
        if not isinstance(value, (int, float)) or math.isnan(value) or value <= 0:
            raise MalformedDataError(f"Option input {name} must be positive, got {value}",
                                     raw_data=str(value), expected_format="positive number")

    t = days_to_expiry / params.days_per_year
    r = risk_free_rate_pct / 100
    sigma = volatility_pct / 100
    sigma_sqrt_t = sigma * math.sqrt(t)
    discount = math.exp(-r * t)

    d1 = (math.log(spot / strike) + (r + 0.5 * sigma * sigma) * t) / sigma_sqrt_t
    d2 = d1 - sigma_sqrt_t

    call = spot * approx_norm_cdf(d1) - strike * discount * approx_norm_cdf(d2)

    if spot > strike:
        moneyness = abs(spot - strike) / strike
        call = call + sigma * spot * params.itm_premium_factor * (1 + moneyness)
    else:
        time_factor = max(params.min_time_factor, t)
        call = max(call, time_factor * sigma * spot * params.otm_floor_factor)

    call = max(call, params.min_price)
    put = call + strike * discount - spot

    quote = OptionQuote(call=call, put=max(put, params.min_price))
    logger.debug("Priced option", spot=spot, strike=strike, days=days_to_expiry,
                 call=quote.call, put=quote.put)
    return quote


def generate_volatility_surface(rng: random.Random,
                                params: Optional[SurfaceParams] = None) -> list[VolatilityPoint]:
    """
    Build a mock implied volatility surface

    One node per (expiration, strike), expiration-major, each volatility
    drawn uniformly from [base, base + range).
    """
    params = params or get_default_config().surface

    return [
        VolatilityPoint(
            strike=strike,
            expiration=expiration,
            volatility=params.base_volatility + rng.random() * params.volatility_range,
        )
        for expiration in params.expirations
        for strike in params.strikes
    ]
