"""
Canonical data models for the analytics core.

This module defines immutable data structures for price series and for the
results of each computation. Results are rebuilt on every recomputation and
replaced wholesale, never mutated in place.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional, Union

# Row value produced by the file ingestor
RowValue = Union[str, float]
Row = dict[str, RowValue]

_DERIVED_KEYS = {
    "ma20": "ma20",
    "ma50": "ma50",
    "rsi": "rsi",
    "macd": "macd",
    "macd_signal": "macdSignal",
    "upper_bb": "upperBB",
    "lower_bb": "lowerBB",
    "portfolio": "portfolio",
    "benchmark": "benchmark",
    "prediction": "prediction",
}


def _finite_or_none(value: Optional[float]) -> Optional[float]:
    """Map NaN/inf to None so undefined numbers serialize as null."""
    if value is None or math.isnan(value) or math.isinf(value):
        return None
    return value


@dataclass(frozen=True)
class PricePoint:
    """One trading day of OHLCV data plus indicator annotations."""
    date: str           # ISO calendar date
    open: float
    high: float
    low: float
    close: float
    volume: float

    # Indicator annotations, None before their window is full
    ma20: Optional[float] = None
    ma50: Optional[float] = None
    rsi: Optional[float] = None
    macd: Optional[float] = None
    macd_signal: Optional[float] = None
    upper_bb: Optional[float] = None
    lower_bb: Optional[float] = None

    # Display-only overlays
    portfolio: Optional[float] = None
    benchmark: Optional[float] = None
    prediction: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with dashboard keys, omitting undefined annotations."""
        result: dict[str, Any] = {
            "date": self.date,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }
        for attr, key in _DERIVED_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        return result


# Chronological, unique dates, at least one point
Series = list[PricePoint]


@dataclass(frozen=True)
class OptionQuote:
    """Call/put price pair from the option pricer."""
    call: float
    put: float

    def to_dict(self) -> dict[str, Any]:
        return {"call": self.call, "put": self.put}


@dataclass(frozen=True)
class VolatilityPoint:
    """Single node of an implied volatility surface."""
    strike: float
    expiration: int
    volatility: float

    def to_dict(self) -> dict[str, Any]:
        return {"strike": self.strike, "expiration": self.expiration, "volatility": self.volatility}


@dataclass(frozen=True)
class SimulationResult:
    """
    Monte Carlo outcome.

    var95/var99 are low-percentile terminal price levels, not losses.
    """
    expected_value: float
    var95: float
    var99: float
    sample: tuple[float, ...]
    paths: int
    horizon_days: int

    @property
    def confidence95(self) -> float:
        return self.var95

    @property
    def confidence99(self) -> float:
        return self.var99

    def to_dict(self) -> dict[str, Any]:
        return {
            "expectedValue": self.expected_value,
            "var95": self.var95,
            "var99": self.var99,
            "confidence95": self.confidence95,
            "confidence99": self.confidence99,
            "simulations": list(self.sample),
            "paths": self.paths,
            "horizonDays": self.horizon_days,
        }


@dataclass(frozen=True)
class AllocationResult:
    """Sharpe-proportional allocation. Weights are fractions summing to 1."""
    assets: tuple[str, ...]
    weights: tuple[float, ...]
    expected_return: float
    expected_volatility: float

    @property
    def weights_pct(self) -> tuple[float, ...]:
        """Weights as percentages, the form the dashboard displays."""
        return tuple(weight * 100 for weight in self.weights)

    def to_dict(self) -> dict[str, Any]:
        return {
            "assets": list(self.assets),
            "weights": [_finite_or_none(w) for w in self.weights],
            "expectedReturn": _finite_or_none(self.expected_return),
            "expectedVolatility": _finite_or_none(self.expected_volatility),
        }


@dataclass(frozen=True)
class BlendedAllocation:
    """Black-Litterman-style blend of market priors with manual views."""
    assets: tuple[str, ...]
    market_weights: tuple[float, ...]
    expected_returns: tuple[float, ...]
    optimal_weights: tuple[float, ...]
    views: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "assets": list(self.assets),
            "marketWeights": list(self.market_weights),
            "expectedReturns": list(self.expected_returns),
            "optimalWeights": [_finite_or_none(w) for w in self.optimal_weights],
            "views": dict(self.views),
        }


@dataclass(frozen=True)
class BacktestRecord:
    """Per-day portfolio value of the crossover strategy."""
    date: str
    value: float
    return_percent: float

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "value": self.value, "return": self.return_percent}


@dataclass(frozen=True)
class PortfolioMetrics:
    """
    Returns-based risk summary.

    var95/var99 here are quantiles of daily returns (loss-like), unlike the
    price levels in SimulationResult.
    """
    avg_return: float
    volatility: float
    var95: float
    var99: float
    sharpe_ratio: float
    max_drawdown: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "avgReturn": _finite_or_none(self.avg_return),
            "volatility": _finite_or_none(self.volatility),
            "var95": _finite_or_none(self.var95),
            "var99": _finite_or_none(self.var99),
            "sharpeRatio": _finite_or_none(self.sharpe_ratio),
            "maxDrawdown": _finite_or_none(self.max_drawdown),
        }


@dataclass(frozen=True)
class DatasetStats:
    """Summary statistics of an uploaded dataset's price column."""
    avg_price: float
    max_price: float
    min_price: float
    volatility: float
    total_return: float
    sharpe_ratio: float
    price_field: str
    prices: tuple[float, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "avgPrice": self.avg_price,
            "maxPrice": self.max_price,
            "minPrice": self.min_price,
            "volatility": _finite_or_none(self.volatility),
            "totalReturn": _finite_or_none(self.total_return),
            "sharpeRatio": _finite_or_none(self.sharpe_ratio),
            "priceField": self.price_field,
        }


@dataclass(frozen=True)
class IngestionResult:
    """Result of parsing an uploaded file."""

    rows: tuple[Row, ...] = ()
    file_name: str = ""
    columns: tuple[str, ...] = ()

    success: bool = True
    error_msg: Optional[str] = None

    @property
    def record_count(self) -> int:
        return len(self.rows)

    @classmethod
    def ok(cls, rows: list[Row], file_name: str):
        """Create successful result with rows."""
        columns = tuple(rows[0].keys()) if rows else ()
        return cls(rows=tuple(rows), file_name=file_name, columns=columns, success=True)

    @classmethod
    def failed(cls, error_msg: str, file_name: str = ""):
        """Create failed result; rows are empty."""
        return cls(file_name=file_name, success=False, error_msg=error_msg)
