"""Tests for analysis report export."""

import math
import random
from dataclasses import replace
from datetime import datetime, timezone

import orjson
import pytest

from quantdash.errors import ExportError
from quantdash.export.report import build_report, report_file_name, serialize_report, write_report
from quantdash.state import commands


GENERATED_AT = datetime(2024, 7, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def analysed_state(rng):
    state = commands.initial_state(rng, "NVDA", days=80)
    return commands.change_symbol(state, "NVDA", rng, days=80)


class TestReportFileName:
    """Test report file naming."""

    def test_plain_symbol(self):
        assert report_file_name("AAPL") == "AAPL_analysis_report.json"

    def test_unsafe_characters_replaced(self):
        assert report_file_name("A/B C") == "A_B_C_analysis_report.json"

    def test_dash_kept(self):
        assert report_file_name("BTC-USD") == "BTC-USD_analysis_report.json"


class TestBuildReport:
    """Test report bundle structure."""

    def test_top_level_keys(self, analysed_state):
        report = build_report(analysed_state, GENERATED_AT)

        assert set(report) == {"symbol", "analysisResults", "portfolioState", "generatedAtTimestamp"}
        assert report["symbol"] == "NVDA"
        assert report["generatedAtTimestamp"] == "2024-07-01T12:30:00+00:00"

    def test_analysis_sections(self, analysed_state):
        analysis = build_report(analysed_state, GENERATED_AT)["analysisResults"]

        assert set(analysis) == {
            "technicalIndicators", "optionPricing", "volatilitySurface", "backtest", "portfolioMetrics"
        }
        assert len(analysis["technicalIndicators"]) == 80
        assert len(analysis["backtest"]) == 30
        assert set(analysis["optionPricing"]) == {"call", "put"}

    def test_undefined_indicators_omitted(self, analysed_state):
        points = build_report(analysed_state, GENERATED_AT)["analysisResults"]["technicalIndicators"]

        assert "ma20" not in points[0]
        assert "ma20" in points[19]
        assert "macdSignal" in points[34]
        assert "upperBB" in points[19]

    def test_portfolio_state(self, analysed_state):
        portfolio = build_report(analysed_state, GENERATED_AT)["portfolioState"]
        assert portfolio == {"initial": 10000.0, "current": 12500.0, "return": 25.0}

    def test_without_analysis(self, rng):
        state = commands.initial_state(rng, "TSLA", days=10)
        assert build_report(state, GENERATED_AT)["analysisResults"] is None


class TestSerializeReport:
    """Test JSON serialization."""

    def test_round_trip(self, analysed_state):
        payload = serialize_report(build_report(analysed_state, GENERATED_AT))
        decoded = orjson.loads(payload)

        assert decoded["symbol"] == "NVDA"
        assert b'\n  "symbol"' in payload

    def test_nan_sharpe_serialized_as_null(self, analysed_state, make_series):
        flat = commands.build_analysis(replace(analysed_state, series=make_series([5.0] * 60)),
                                       random.Random(1))
        state = replace(analysed_state, analysis=flat)

        decoded = orjson.loads(serialize_report(build_report(state, GENERATED_AT)))
        assert decoded["analysisResults"]["portfolioMetrics"]["sharpeRatio"] is None

    def test_unserializable_value(self):
        with pytest.raises(ExportError) as exc_info:
            serialize_report({"bad": object()})
        assert exc_info.value.operation == "serialize"
        assert exc_info.value.recoverable is False


class TestWriteReport:
    """Test writing the report file."""

    def test_writes_file(self, analysed_state, tmp_path):
        path = write_report(analysed_state, tmp_path / "reports", GENERATED_AT)

        assert path == tmp_path / "reports" / "NVDA_analysis_report.json"
        decoded = orjson.loads(path.read_bytes())
        assert decoded["generatedAtTimestamp"] == "2024-07-01T12:30:00+00:00"
        assert not math.isnan(decoded["analysisResults"]["optionPricing"]["call"])

    def test_write_failure(self, analysed_state, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(ExportError) as exc_info:
            write_report(analysed_state, blocker, GENERATED_AT)
        assert exc_info.value.operation == "write"
