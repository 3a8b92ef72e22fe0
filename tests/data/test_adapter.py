"""Tests for the row-to-PricePoint adapter."""

import random
from datetime import date

from quantdash.data.adapter import row_to_point, rows_to_series
from quantdash.data.ingest import parse_csv


class TestRowToPoint:
    """Test alias resolution and defaults."""

    def test_capitalized_columns(self, rng):
        row = {"Date": "2024-01-02", "Open": 1.0, "High": 3.0, "Low": 0.5, "Close": 2.0, "Volume": 10.0}
        point = row_to_point(row, rng)

        assert point.date == "2024-01-02"
        assert (point.open, point.high, point.low, point.close, point.volume) == (1.0, 3.0, 0.5, 2.0, 10.0)

    def test_price_alias_for_close(self, rng):
        point = row_to_point({"date": "2024-01-02", "Price": 55.0, "volume": 5.0}, rng)

        assert point.close == 55.0
        assert point.open == 55.0
        assert point.high == 55.0
        assert point.low == 55.0

    def test_lowercase_wins_over_capitalized(self, rng):
        point = row_to_point({"close": 10.0, "Close": 20.0, "volume": 1.0}, rng)
        assert point.close == 10.0

    def test_zero_falls_through_to_next_alias(self, rng):
        point = row_to_point({"close": 0.0, "Price": 42.0, "volume": 1.0}, rng)
        assert point.close == 42.0

    def test_close_defaults_to_hundred(self, rng):
        point = row_to_point({"date": "2024-01-02", "volume": 1.0}, rng)
        assert point.close == 100.0

    def test_numeric_string_values(self, rng):
        point = row_to_point({"Close": "12.5", "Volume": "300"}, rng)
        assert point.close == 12.5
        assert point.volume == 300.0

    def test_missing_volume_filled_from_rng(self):
        point = row_to_point({"Close": 10.0}, random.Random(5))
        expected = random.Random(5).randrange(1_000_000)

        assert point.volume == float(expected)
        assert 0 <= point.volume < 1_000_000

    def test_missing_date_defaults_to_today(self, rng):
        point = row_to_point({"Close": 10.0, "Volume": 1.0}, rng)
        assert point.date == date.today().isoformat()


class TestRowsToSeries:
    """Test adapting a whole upload."""

    def test_preserves_order(self, sample_csv, rng):
        series = rows_to_series(parse_csv(sample_csv), rng)

        assert [point.date for point in series] == [
            "2024-01-02", "2024-01-03", "2024-01-04", "2024-01-05"
        ]
        assert [point.close for point in series] == [101.0, 103.0, 102.0, 105.0]

    def test_empty(self, rng):
        assert rows_to_series([], rng) == []
