"""Tests for the illustrative option pricer and volatility surface"""

import math

import pytest
from quantdash.config.defaults import SurfaceParams
from quantdash.errors import MalformedDataError
from quantdash.pricing.options import approx_norm_cdf, generate_volatility_surface, price_option


class TestNormCdf:
    """Test the closed-form normal CDF approximation"""

    def test_midpoint(self):
        assert approx_norm_cdf(0.0) == pytest.approx(0.5)

    @pytest.mark.parametrize("x", [0.1, 0.5, 1.0, 2.5])
    def test_symmetry(self, x):
        """Test N(x) + N(-x) = 1"""
        assert approx_norm_cdf(x) + approx_norm_cdf(-x) == pytest.approx(1.0)

    def test_monotonic_and_bounded(self):
        values = [approx_norm_cdf(x / 10) for x in range(-50, 51)]
        assert all(0.0 <= v <= 1.0 for v in values)
        assert values == sorted(values)

    def test_close_to_true_cdf(self):
        """Test the approximation is within a percent of the exact CDF at 1"""
        exact = 0.5 * (1 + math.erf(1 / math.sqrt(2)))
        assert approx_norm_cdf(1.0) == pytest.approx(exact, abs=0.01)


class TestPriceOption:
    """Test call/put pricing"""

    def test_at_the_money_example(self):
        """Test S = K = 100, 30 days, 5%, 25% prices call above put"""
        quote = price_option(100, 100, 30, 5, 25)

        assert quote.call == pytest.approx(3.06, abs=0.01)
        assert quote.put == pytest.approx(2.65, abs=0.01)
        assert quote.call > quote.put > 0.01

    def test_put_call_parity_when_unclamped(self):
        """Test put = call + K e^(-rT) - S before flooring"""
        spot, strike, days, rate, vol = 100.0, 105.0, 60, 4.0, 30.0
        quote = price_option(spot, strike, days, rate, vol)

        t = days / 365
        expected_put = quote.call + strike * math.exp(-rate / 100 * t) - spot
        assert quote.put == pytest.approx(expected_put)

    def test_in_the_money_premium(self):
        """Test an in-the-money call carries the moneyness premium"""
        spot, strike, days, rate, vol = 120.0, 100.0, 90, 5.0, 20.0
        quote = price_option(spot, strike, days, rate, vol)

        t = days / 365
        r, sigma = rate / 100, vol / 100
        d1 = (math.log(spot / strike) + (r + sigma * sigma / 2) * t) / (sigma * math.sqrt(t))
        d2 = d1 - sigma * math.sqrt(t)
        base = spot * approx_norm_cdf(d1) - strike * math.exp(-r * t) * approx_norm_cdf(d2)
        premium = sigma * spot * 0.1 * (1 + 0.2)

        assert quote.call == pytest.approx(base + premium)

    def test_out_of_the_money_time_value_floor(self):
        """Test a deep out-of-the-money call keeps a time-value floor"""
        quote = price_option(10.0, 1000.0, 10, 5.0, 20.0)

        # max(0.1, 10/365) * 0.2 * 10 * 0.05
        assert quote.call == pytest.approx(0.01)
        assert quote.put > 900

    def test_out_of_the_money_long_dated_floor(self):
        quote = price_option(100.0, 1000.0, 730, 5.0, 40.0)
        floor = 2.0 * 0.4 * 100.0 * 0.05
        assert quote.call >= floor

    def test_prices_floored(self):
        """Test both prices are at least one cent"""
        for spot, strike in [(1000.0, 10.0), (10.0, 1000.0), (100.0, 100.0)]:
            quote = price_option(spot, strike, 1, 0.0, 1.0)
            assert quote.call >= 0.01
            assert quote.put >= 0.01

    def test_negative_rate_accepted(self):
        quote = price_option(100, 100, 30, -1.0, 25)
        assert quote.call > 0

    @pytest.mark.parametrize("args", [
        (0, 100, 30, 5, 25),
        (100, 0, 30, 5, 25),
        (100, 100, 0, 5, 25),
        (100, 100, 30, 5, 0),
        (100, 100, -1, 5, 25),
        (float("nan"), 100, 30, 5, 25),
    ])
    def test_invalid_inputs(self, args):
        with pytest.raises(MalformedDataError):
            price_option(*args)


class TestVolatilitySurface:
    """Test the mock volatility surface"""

    def test_grid_shape_and_order(self, rng):
        surface = generate_volatility_surface(rng)

        assert len(surface) == 25
        assert [p.strike for p in surface[:5]] == [80.0, 90.0, 100.0, 110.0, 120.0]
        assert all(p.expiration == 30 for p in surface[:5])
        assert all(p.expiration == 365 for p in surface[20:])

    def test_volatility_range(self, rng):
        for point in generate_volatility_surface(rng):
            assert 0.15 <= point.volatility < 0.45

    def test_custom_grid(self, rng):
        params = SurfaceParams(strikes=(95.0, 105.0), expirations=(7,))
        surface = generate_volatility_surface(rng, params)
        assert [(p.strike, p.expiration) for p in surface] == [(95.0, 7), (105.0, 7)]
