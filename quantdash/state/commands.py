"""
Session commands.

Each command takes the current SessionState plus its input and returns a new
SessionState. Commands never raise for data problems: recoverable errors are
logged and turned into a destructive notification, and the previous results
stay in place.
"""

import random
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from ..analytics.backtest import run_crossover_backtest
from ..analytics.risk import calculate_dataset_stats, calculate_portfolio_metrics
from ..config.defaults import DefaultConfig, get_default_config
from ..config.validation import ConfigValidator
from ..data.adapter import rows_to_series
from ..data.generator import generate_series
from ..data.ingest import ingest_file
from ..data.models import IngestionResult, SimulationResult
from ..errors import DataQualityError, ExportError, MetricsCalculationError
from ..export.report import write_report
from ..logging.config import get_session_logger, log_notification
from ..metrics.calculator import IndicatorCalculator
from ..portfolio.allocators import default_blended_allocation, default_sharpe_allocation
from ..pricing.options import generate_volatility_surface, price_option
from ..simulation.monte_carlo import simulate
from .models import (
    AnalysisResults,
    NotificationVariant,
    OptionInputs,
    PortfolioState,
    SessionState,
    StrategyKind,
)

logger = get_session_logger(__name__)

CUSTOM_UPLOAD_SYMBOL = "CUSTOM_UPLOAD"


def _notify(state: SessionState, title: str, description: str = "",
            variant: NotificationVariant = NotificationVariant.DEFAULT) -> SessionState:
    new_state = state.notify(title, description, variant)
    log_notification(logger, new_state.latest_notification, context={"symbol": state.symbol})
    return new_state


def _fail(state: SessionState, title: str, error: Exception) -> SessionState:
    return _notify(state, title, str(error), NotificationVariant.DESTRUCTIVE)


def _quote_for(state: SessionState, inputs: OptionInputs, config: DefaultConfig):
    spot = state.last_close or inputs.strike
    return price_option(
        spot,
        inputs.strike,
        inputs.days_to_expiry,
        inputs.risk_free_rate_pct,
        inputs.volatility_pct,
        params=config.options,
    )


def build_analysis(state: SessionState, rng: random.Random,
                   config: Optional[DefaultConfig] = None) -> AnalysisResults:
    """Compute the per-symbol analysis bundle for the state's series."""
    config = config or get_default_config()
    return AnalysisResults(
        technical_indicators=state.series,
        option_pricing=_quote_for(state, state.option_inputs, config),
        volatility_surface=generate_volatility_surface(rng, config.surface),
        backtest=run_crossover_backtest(state.series, config.backtest),
        portfolio_metrics=calculate_portfolio_metrics(state.series, config.risk),
    )


def initial_state(rng: random.Random, symbol: str = "TSLA", days: Optional[int] = None,
                  config: Optional[DefaultConfig] = None) -> SessionState:
    """
    Create the session shown before any user interaction.

    Args:
        rng: Random source
        symbol: Symbol whose series is generated first
        days: Series length (default from config)
        config: Configuration (defaults if None)

    Returns:
        SessionState with a generated series and default option inputs
    """
    config = config or get_default_config()
    options = config.options
    portfolio = config.portfolio

    series = generate_series(symbol, days or config.generator.default_days, rng, config=config)
    logger.info("Session created", symbol=symbol, points=len(series))

    return SessionState(
        symbol=symbol,
        series=series,
        portfolio=PortfolioState(
            initial=portfolio.initial_value,
            current=portfolio.current_value,
            return_pct=portfolio.return_pct,
        ),
        option_inputs=OptionInputs(
            strike=options.default_strike,
            days_to_expiry=options.default_days_to_expiry,
            risk_free_rate_pct=options.default_rate_pct,
            volatility_pct=options.default_volatility_pct,
        ),
    )


def change_symbol(state: SessionState, symbol: str, rng: random.Random,
                  config: Optional[DefaultConfig] = None,
                  days: Optional[int] = None) -> SessionState:
    """Generate a fresh series for ``symbol`` and recompute the analysis bundle."""
    config = config or get_default_config()

    try:
        series = generate_series(symbol, days or config.generator.default_days, rng, config=config)
        new_state = replace(state, symbol=symbol, series=series)
        analysis = build_analysis(new_state, rng, config)
    except (DataQualityError, MetricsCalculationError) as e:
        logger.error("Symbol analysis failed", symbol=symbol, error=str(e))
        return _fail(state, "Analysis Failed", e)

    new_state = replace(new_state, analysis=analysis, option_quote=analysis.option_pricing)
    return _notify(new_state, "Analysis Complete",
                   f"Generated comprehensive analysis for {symbol}")


def load_custom_rows(state: SessionState, ingestion: IngestionResult, rng: random.Random,
                     config: Optional[DefaultConfig] = None) -> SessionState:
    """
    Replace the session series with an uploaded dataset.

    A failed or empty ingestion leaves the data untouched and raises a
    destructive notification.
    """
    config = config or get_default_config()

    if not ingestion.success or not ingestion.rows:
        logger.warning("Custom dataset rejected", file_name=ingestion.file_name,
                       error=ingestion.error_msg)
        return _notify(
            state,
            "Processing Error",
            f"Failed to process {ingestion.file_name or 'the uploaded file'}: "
            f"{ingestion.error_msg or 'no records found'}",
            NotificationVariant.DESTRUCTIVE,
        )

    try:
        series = rows_to_series(ingestion.rows, rng, config.ingest)
        series = IndicatorCalculator(config.indicators).annotate(series, rng)
    except (DataQualityError, MetricsCalculationError) as e:
        logger.error("Custom dataset analysis failed", file_name=ingestion.file_name, error=str(e))
        return _fail(state, "Processing Error", e)

    new_state = replace(
        state,
        symbol=CUSTOM_UPLOAD_SYMBOL,
        series=series,
        custom_rows=tuple(ingestion.rows),
        custom_file_name=ingestion.file_name,
        custom_stats=calculate_dataset_stats(ingestion.rows, config.risk),
    )
    return _notify(new_state, "Custom Dataset Loaded",
                   f"Successfully processed {ingestion.record_count} records from {ingestion.file_name}")


def upload_file(state: SessionState, content: Union[str, bytes], file_name: str,
                rng: random.Random, kind: Optional[str] = None,
                config: Optional[DefaultConfig] = None) -> SessionState:
    """Ingest an uploaded file and load it as the session's custom dataset."""
    config = config or get_default_config()
    ingestion = ingest_file(content, kind=kind, file_name=file_name, params=config.ingest, rng=rng)
    return load_custom_rows(state, ingestion, rng, config)


def set_option_inputs(state: SessionState, **fields) -> SessionState:
    """
    Update option pricer inputs.

    Accepts strike, days_to_expiry, risk_free_rate_pct and volatility_pct.
    Invalid values are rejected as a whole with a destructive notification.
    """
    unknown = set(fields) - set(OptionInputs.__dataclass_fields__)
    errors = ConfigValidator.validate_option_inputs(fields)

    if unknown or errors:
        messages = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
        messages.extend(f"{name}: Unknown option input" for name in sorted(unknown))
        logger.warning("Option inputs rejected", errors=messages)
        return _notify(state, "Invalid Option Inputs", "; ".join(messages),
                       NotificationVariant.DESTRUCTIVE)

    return replace(state, option_inputs=replace(state.option_inputs, **fields))


def calculate_option_price(state: SessionState,
                           config: Optional[DefaultConfig] = None) -> SessionState:
    """Price the call/put pair for the current inputs, spot = latest close."""
    config = config or get_default_config()

    try:
        quote = _quote_for(state, state.option_inputs, config)
    except DataQualityError as e:
        logger.error("Option pricing failed", error=str(e))
        return _fail(state, "Option Pricing Failed", e)

    return replace(state, option_quote=quote)


def simulation_start_price(state: SessionState, config: Optional[DefaultConfig] = None) -> float:
    """Latest close, or the configured fallback for an empty series."""
    config = config or get_default_config()
    return state.last_close or config.monte_carlo.default_start_price


def apply_monte_carlo(state: SessionState, result: SimulationResult) -> SessionState:
    """Store a finished simulation in the session."""
    new_state = replace(state, monte_carlo=result, active_strategy=StrategyKind.MONTE_CARLO)
    return _notify(new_state, "Monte Carlo Complete", f"Ran {result.paths} simulations")


def run_monte_carlo(state: SessionState, rng: random.Random,
                    config: Optional[DefaultConfig] = None,
                    paths: Optional[int] = None) -> SessionState:
    """Run the Monte Carlo simulation synchronously from the latest close."""
    config = config or get_default_config()

    try:
        result = simulate(simulation_start_price(state, config), rng,
                          paths=paths, params=config.monte_carlo)
    except DataQualityError as e:
        logger.error("Monte Carlo simulation failed", error=str(e))
        return _fail(state, "Monte Carlo Failed", e)

    return apply_monte_carlo(state, result)


def run_blended_allocation(state: SessionState,
                           config: Optional[DefaultConfig] = None) -> SessionState:
    """Blend market priors with the configured views."""
    config = config or get_default_config()
    result = default_blended_allocation(config.portfolio)

    new_state = replace(state, blended=result, active_strategy=StrategyKind.BLACK_LITTERMAN)
    return _notify(new_state, "Black-Litterman Complete", "Portfolio optimization completed")


def optimize_portfolio(state: SessionState,
                       config: Optional[DefaultConfig] = None) -> SessionState:
    """Compute the Sharpe-proportional allocation and store it in the portfolio."""
    config = config or get_default_config()
    result = default_sharpe_allocation(config.portfolio)

    new_state = replace(state, portfolio=replace(state.portfolio, optimized=result))
    return _notify(new_state, "Portfolio Optimized", "Optimal asset allocation calculated")


def activate_technical(state: SessionState) -> SessionState:
    """Switch the dashboard to the technical strategy view."""
    new_state = replace(state, active_strategy=StrategyKind.TECHNICAL)
    return _notify(new_state, "Technical Strategy Activated")


def export_report(state: SessionState, directory: Path) -> tuple[SessionState, Optional[Path]]:
    """
    Write the report bundle to ``directory``.

    Returns:
        The new state and the written path (None when the export failed)
    """
    try:
        path = write_report(state, directory)
    except ExportError as e:
        logger.error("Report export failed", error=str(e), target=e.target)
        return _fail(state, "Export Failed", e), None

    return _notify(state, "Report Exported", "Analysis report downloaded successfully"), path
