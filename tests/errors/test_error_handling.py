"""
Error handling tests for the analytics core.

Tests cover the error classification and how each layer surfaces
recoverable problems instead of crashing the session.
"""

import random

import pytest

from quantdash.errors import (
    DataQualityError,
    ExportError,
    IngestionError,
    InsufficientDataError,
    MalformedDataError,
    MetricsCalculationError,
    SystemFailureError,
)
from quantdash.metrics.calculator import IndicatorCalculator
from quantdash.state import commands


class TestErrorClassification:
    """Test error classification system."""

    def test_data_quality_error_hierarchy(self):
        """Test that data quality errors are recoverable."""
        base_error = DataQualityError("base error")
        assert base_error.recoverable is True
        assert base_error.context == {}

        malformed = MalformedDataError("bad close", raw_data="abc", expected_format="float")
        assert isinstance(malformed, DataQualityError)
        assert malformed.raw_data == "abc"
        assert malformed.expected_format == "float"

        insufficient = InsufficientDataError("short", required_count=2, available_count=1)
        assert insufficient.required_count == 2
        assert insufficient.available_count == 1

        ingestion = IngestionError("empty", file_name="a.csv", kind="csv",
                                   context={"size": 0})
        assert ingestion.file_name == "a.csv"
        assert ingestion.kind == "csv"
        assert ingestion.context == {"size": 0}

    def test_system_failure_hierarchy(self):
        """Test that system failures are not recoverable."""
        metrics_error = MetricsCalculationError("overflow", metric_name="rsi",
                                                calculation_input={"n": 3})
        assert isinstance(metrics_error, SystemFailureError)
        assert metrics_error.recoverable is False
        assert metrics_error.metric_name == "rsi"

        export_error = ExportError("disk full", operation="write", target="/tmp/x.json")
        assert export_error.recoverable is False
        assert export_error.target == "/tmp/x.json"

    def test_families_disjoint(self):
        assert not issubclass(ExportError, DataQualityError)
        assert not issubclass(IngestionError, SystemFailureError)


class TestCalculationErrors:
    """Test wrapping of unexpected calculation failures."""

    def test_type_error_wrapped(self, make_series, rng):
        calculator = IndicatorCalculator()
        series = make_series([100.0] * 30)

        def broken(*args, **kwargs):
            raise ZeroDivisionError("division by zero")

        calculator._overlays = broken
        with pytest.raises(MetricsCalculationError) as exc_info:
            calculator.annotate(series, rng)
        assert exc_info.value.calculation_input == {"point_count": 30}


class TestSessionRecovery:
    """Test the session survives recoverable errors."""

    def test_session_usable_after_bad_upload(self, sample_csv):
        rng = random.Random(4)
        state = commands.initial_state(rng, "TSLA", days=60)

        state = commands.upload_file(state, "", "empty.csv", rng)
        assert state.latest_notification.is_destructive

        state = commands.upload_file(state, sample_csv, "prices.csv", rng)
        assert state.latest_notification.title == "Custom Dataset Loaded"
        assert len(state.notifications) == 2

    def test_bad_option_inputs_then_good(self):
        rng = random.Random(4)
        state = commands.initial_state(rng, "TSLA", days=60)

        state = commands.set_option_inputs(state, volatility_pct=0)
        state = commands.set_option_inputs(state, volatility_pct=30.0)
        state = commands.calculate_option_price(state)

        assert state.option_inputs.volatility_pct == 30.0
        assert state.option_quote is not None
