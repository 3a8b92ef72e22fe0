"""Tests for the series indicator calculator"""

import math
import random

import pytest
from quantdash.config.defaults import IndicatorParams
from quantdash.data.generator import generate_series
from quantdash.errors import MalformedDataError
from quantdash.metrics.calculator import IndicatorCalculator


class TestIndicatorPresence:
    """Test each annotation appears exactly when its window is full"""

    @pytest.fixture
    def annotated(self, make_series, rng):
        closes = [100 + math.sin(i / 3) * 10 + i * 0.2 for i in range(80)]
        return IndicatorCalculator().annotate(make_series(closes), rng)

    def test_length_and_order_preserved(self, annotated):
        """Test annotation keeps every point in order"""
        assert len(annotated) == 80
        dates = [point.date for point in annotated]
        assert dates == sorted(dates)

    @pytest.mark.parametrize("field,first_index", [
        ("ma20", 19),
        ("ma50", 49),
        ("rsi", 14),
        ("macd", 26),
        ("macd_signal", 34),
        ("upper_bb", 19),
        ("lower_bb", 19),
    ])
    def test_presence_window(self, annotated, field, first_index):
        """Test annotation is None before its first index and set from it on"""
        assert getattr(annotated[first_index - 1], field) is None
        assert all(getattr(point, field) is not None for point in annotated[first_index:])

    def test_rsi_bounds(self, annotated):
        """Test RSI values stay in [0, 100]"""
        for point in annotated[14:]:
            assert 0 <= point.rsi <= 100

    def test_bands_ordered(self, annotated):
        """Test upper band is at or above lower band"""
        for point in annotated[19:]:
            assert point.upper_bb >= point.lower_bb

    def test_ohlcv_untouched(self, make_series, annotated):
        """Test annotation does not alter raw fields"""
        original = make_series([100 + math.sin(i / 3) * 10 + i * 0.2 for i in range(80)])
        for before, after in zip(original, annotated):
            assert (before.open, before.high, before.low, before.close, before.volume) == \
                   (after.open, after.high, after.low, after.close, after.volume)


class TestGeneratedSeriesIndicators:
    """Test indicators on generator output"""

    def test_ma20_matches_mean_of_first_twenty(self, pinned_date):
        """Test ma20 at index 19 is the mean of closes 0..19"""
        series = generate_series("AAPL", 60, random.Random(7), end_date=pinned_date)

        assert series[18].ma20 is None
        expected = sum(point.close for point in series[:20]) / 20
        assert series[19].ma20 == pytest.approx(expected)


class TestOverlays:
    """Test cosmetic overlays"""

    def test_portfolio_and_benchmark_ranges(self, make_series, rng):
        """Test overlays stay within their amplitude of close"""
        series = IndicatorCalculator().annotate(make_series([100.0] * 30), rng)
        for point in series:
            assert 100.0 <= point.portfolio <= 110.0
            assert 100.0 <= point.benchmark <= 105.0

    def test_prediction_always_present_with_probability_one(self, make_series, rng):
        """Test prediction is set on every point when probability is 1"""
        calculator = IndicatorCalculator(IndicatorParams(prediction_probability=1.0))
        series = calculator.annotate(make_series([100.0] * 30), rng)
        for point in series:
            assert 95.0 <= point.prediction <= 105.0

    def test_prediction_never_present_with_probability_zero(self, make_series, rng):
        """Test prediction is absent when probability is 0"""
        calculator = IndicatorCalculator(IndicatorParams(prediction_probability=0.0))
        series = calculator.annotate(make_series([100.0] * 30), rng)
        assert all(point.prediction is None for point in series)

    def test_same_seed_same_annotation(self, make_series):
        """Test overlays are reproducible for a seed"""
        closes = [100.0 + i for i in range(30)]
        first = IndicatorCalculator().annotate(make_series(closes), random.Random(3))
        second = IndicatorCalculator().annotate(make_series(closes), random.Random(3))
        assert first == second


class TestCalculatorValidation:
    """Test input validation"""

    def test_nan_close_rejected(self, make_series, rng):
        """Test a NaN close raises a data quality error"""
        series = make_series([100.0, float("nan"), 101.0])
        with pytest.raises(MalformedDataError):
            IndicatorCalculator().annotate(series, rng)

    def test_empty_series(self, rng):
        """Test annotating an empty series yields an empty series"""
        assert IndicatorCalculator().annotate([], rng) == []

    def test_warmup_period(self):
        """Test warm-up covers the longest window"""
        assert IndicatorCalculator().get_warmup_period() == 50
