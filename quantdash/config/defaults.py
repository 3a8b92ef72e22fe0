"""Default configuration parameters for the analytics core."""

from dataclasses import dataclass, field


def _default_base_prices() -> dict[str, float]:
    return {
        "TSLA": 250.0,
        "AAPL": 180.0,
        "GOOGL": 140.0,
        "MSFT": 350.0,
        "AMZN": 145.0,
        "NVDA": 450.0,
        "META": 280.0,
        "BTC-USD": 45000.0,
        "CUSTOM": 100.0,
        "FORECAST": 250.0,
    }


@dataclass(frozen=True)
class GeneratorParams:
    """Synthetic series generation parameters."""
    default_days: int = 252
    default_base_price: float = 100.0                # Unknown symbols start here
    drift: float = 0.0002                            # Constant daily drift
    volatility: float = 0.02                         # Daily noise uniform on [-volatility, volatility]
    range_pct: float = 0.02                          # Max high/low excursion from price
    min_volume: int = 1_000_000
    max_volume: int = 11_000_000                     # Exclusive upper bound
    base_prices: dict[str, float] = field(default_factory=_default_base_prices)

    def base_price_for(self, symbol: str) -> float:
        """Base price for a symbol, falling back to the default."""
        return self.base_prices.get(symbol) or self.default_base_price


@dataclass(frozen=True)
class IndicatorParams:
    """Technical indicator windows and overlay amplitudes."""
    short_ma_period: int = 20
    long_ma_period: int = 50
    rsi_period: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    macd_signal_start: int = 34                      # First index carrying a signal value
    bb_period: int = 20
    bb_width: float = 2.0
    portfolio_amplitude: float = 0.1
    benchmark_amplitude: float = 0.05
    prediction_probability: float = 0.5
    prediction_amplitude: float = 0.1                # Full width, centred on close


@dataclass(frozen=True)
class OptionParams:
    """Option pricer parameters."""
    days_per_year: int = 365
    min_price: float = 0.01
    itm_premium_factor: float = 0.1
    otm_floor_factor: float = 0.05
    min_time_factor: float = 0.1
    default_strike: float = 351.0511426955417
    default_days_to_expiry: int = 30
    default_rate_pct: float = 5.0
    default_volatility_pct: float = 25.0


@dataclass(frozen=True)
class SurfaceParams:
    """Volatility surface grid."""
    strikes: tuple[float, ...] = (80.0, 90.0, 100.0, 110.0, 120.0)
    expirations: tuple[int, ...] = (30, 60, 90, 180, 365)
    base_volatility: float = 0.15
    volatility_range: float = 0.3


@dataclass(frozen=True)
class MonteCarloParams:
    """Monte Carlo simulation parameters."""
    paths: int = 10000
    horizon_days: int = 252
    daily_drift: float = 0.0008
    daily_shock: float = 0.02                        # Shock uniform on [-shock, shock]
    sample_size: int = 100
    default_start_price: float = 100.0


@dataclass(frozen=True)
class PortfolioParams:
    """Illustrative universes for the two allocators."""
    sharpe_assets: tuple[str, ...] = ("Tech", "Healthcare", "Finance", "Energy", "Consumer")
    sharpe_returns: tuple[float, ...] = (0.12, 0.08, 0.06, 0.10, 0.07)
    sharpe_volatilities: tuple[float, ...] = (0.20, 0.15, 0.12, 0.25, 0.14)
    blend_assets: tuple[str, ...] = ("Stocks", "Bonds", "Commodities", "REITs")
    blend_market_weights: tuple[float, ...] = (0.6, 0.3, 0.05, 0.05)
    blend_priors: tuple[float, ...] = (0.08, 0.04, 0.06, 0.07)
    blend_views: dict[str, float] = field(default_factory=lambda: {"Stocks": 0.10, "Bonds": 0.03})
    risk_aversion: float = 3.0
    initial_value: float = 10000.0
    current_value: float = 12500.0
    return_pct: float = 25.0


@dataclass(frozen=True)
class BacktestParams:
    """Moving-average crossover backtest parameters."""
    initial_capital: float = 10000.0
    start_index: int = 50


@dataclass(frozen=True)
class RiskParams:
    """Returns-based risk metric parameters."""
    trading_days: int = 252
    risk_free_rate: float = 0.02
    var95_quantile: float = 0.05
    var99_quantile: float = 0.01


@dataclass(frozen=True)
class IngestParams:
    """Uploaded file ingestion parameters."""
    supported_kinds: tuple[str, ...] = ("csv", "pdf", "excel")
    synthetic_start_date: str = "2020-01-01"         # First date for rows without one
    pdf_rows: int = 100
    pdf_start_date: str = "2020-01-01"
    pdf_base_price_range: tuple[float, float] = (100.0, 300.0)
    pdf_price_spread: float = 0.1                    # Full width around the base price
    pdf_range_pct: float = 0.03                      # Max high/low excursion from close
    pdf_volume_range: tuple[int, int] = (1_000_000, 11_000_000)
    excel_rows: int = 150
    excel_start_date: str = "2021-01-01"
    excel_symbols: tuple[str, ...] = ("STOCK_A", "STOCK_B", "STOCK_C")
    excel_base_price_range: tuple[float, float] = (150.0, 250.0)
    excel_price_spread: float = 0.15
    excel_range_pct: float = 0.04
    excel_volume_range: tuple[int, int] = (2_000_000, 17_000_000)
    open_spread: float = 0.02                        # Full width of open around close
    default_close: float = 100.0
    max_filler_volume: int = 1_000_000


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    generator: GeneratorParams
    indicators: IndicatorParams
    options: OptionParams
    surface: SurfaceParams
    monte_carlo: MonteCarloParams
    portfolio: PortfolioParams
    backtest: BacktestParams
    risk: RiskParams
    ingest: IngestParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        generator=GeneratorParams(),
        indicators=IndicatorParams(),
        options=OptionParams(),
        surface=SurfaceParams(),
        monte_carlo=MonteCarloParams(),
        portfolio=PortfolioParams(),
        backtest=BacktestParams(),
        risk=RiskParams(),
        ingest=IngestParams(),
    )
