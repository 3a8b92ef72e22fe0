"""Pytest configuration and shared fixtures."""

import random
from datetime import date
from typing import Callable, Sequence

import pytest

from quantdash.config.defaults import DefaultConfig, get_default_config
from quantdash.data.models import PricePoint, Series
from quantdash.utils.time import date_sequence


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so runs are reproducible."""
    return random.Random(42)


@pytest.fixture
def default_config() -> DefaultConfig:
    """Built-in default configuration."""
    return get_default_config()


@pytest.fixture
def pinned_date() -> date:
    """Reference date series generation counts back from."""
    return date(2024, 6, 28)


@pytest.fixture
def make_series() -> Callable[[Sequence[float]], Series]:
    """Factory building an un-annotated series from close prices."""

    def _make(closes: Sequence[float], start: date = date(2024, 1, 1)) -> Series:
        dates = date_sequence(start, len(closes))
        return [
            PricePoint(
                date=day,
                open=close,
                high=close * 1.01,
                low=close * 0.99,
                close=close,
                volume=1_000_000,
            )
            for day, close in zip(dates, closes)
        ]

    return _make


@pytest.fixture
def sample_csv() -> str:
    """Small OHLCV upload in the shape most brokers export."""
    return (
        "Date,Open,High,Low,Close,Volume\n"
        "2024-01-02,100.0,102.0,99.0,101.0,1500000\n"
        "2024-01-03,101.0,103.5,100.5,103.0,1700000\n"
        "\n"
        "2024-01-04,103.0,104.0,101.0,102.0,1200000\n"
        "2024-01-05,102.0,106.0,101.5,105.0,2100000\n"
    )
