"""
Dashboard engine coordinator.

Owns the live analysis session: the seeded random source, the per-symbol
configuration and the ComputationRunner that publishes new session states.
Every user action is one method call here.
"""

import random
from functools import partial
from pathlib import Path
from typing import Any, Optional, Union

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.models import IngestionResult
from .errors import MalformedDataError
from .logging.config import get_logger
from .simulation.monte_carlo import simulate
from .state import commands
from .state.models import SessionState
from .state.runtime import ComputationRunner

logger = get_logger(__name__)

MONTE_CARLO_KIND = "monte_carlo"


class DashboardEngine:
    """
    Main coordinator for one analytics dashboard session.

    Manages the command pipeline:
    User Action → Command → New SessionState → Published State
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        config_dir: Optional[Union[str, Path]] = None,
        symbol: str = "TSLA",
        days: Optional[int] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> None:
        """
        Initialize the dashboard engine.

        Args:
            seed: Seed for the session's random source (None for OS entropy)
            config_dir: Directory holding symbols.yaml (default: repo config/)
            symbol: Symbol loaded at start-up
            days: Series length (default from config)
            overrides: Highest-priority configuration overrides

        Raises:
            MalformedDataError: If the overrides fail validation
        """
        self.logger = logger
        self.rng = random.Random(seed)
        self.days = days

        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        self.overrides = overrides or {}
        self._validate_overrides(self.overrides)

        self.config = self.config_loader.build_config(symbol, self.overrides)
        self.runner = ComputationRunner(
            commands.initial_state(self.rng, symbol, days, self.config)
        )

        self.logger.info("Dashboard engine initialized", symbol=symbol, seed=seed)

    @property
    def state(self) -> SessionState:
        """Latest published session state."""
        return self.runner.state

    def _validate_overrides(self, overrides: dict[str, Any]) -> None:
        errors = ConfigValidator.validate_config(overrides)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            self.logger.error("Configuration override validation failed", errors=error_msgs)
            raise MalformedDataError(
                "Invalid configuration overrides: " + "; ".join(error_msgs),
                raw_data=str(errors[0].value),
                context={"fields": [err.field for err in errors]}
            )

    def change_symbol(self, symbol: str) -> SessionState:
        """Generate data for a new symbol and run the full analysis."""
        config = self.config_loader.build_config(symbol, self.overrides)
        state = self.runner.apply(commands.change_symbol, symbol, self.rng, config, self.days)

        # a failed load keeps the previous symbol, and with it the previous config
        if state.symbol == symbol:
            self.config = config
        return state

    def upload_file(self, content: Union[str, bytes], file_name: str,
                    kind: Optional[str] = None) -> SessionState:
        """Ingest an uploaded file and analyse it as custom data."""
        return self.runner.apply(commands.upload_file, content, file_name, self.rng,
                                 kind, self.config)

    def load_custom_rows(self, ingestion: IngestionResult) -> SessionState:
        """Load rows already produced by an external ingestor."""
        return self.runner.apply(commands.load_custom_rows, ingestion, self.rng, self.config)

    def set_option_inputs(self, **fields) -> SessionState:
        return self.runner.apply(commands.set_option_inputs, **fields)

    def calculate_option_price(self) -> SessionState:
        return self.runner.apply(commands.calculate_option_price, self.config)

    def run_monte_carlo(self, paths: Optional[int] = None) -> SessionState:
        """Run the Monte Carlo simulation on the calling thread."""
        return self.runner.apply(commands.run_monte_carlo, self.rng, self.config, paths)

    def submit_monte_carlo(self, paths: Optional[int] = None) -> int:
        """
        Run the Monte Carlo simulation on a background worker.

        The worker gets its own random source seeded from the session's, so
        the session RNG is never shared across threads. A newer submission
        supersedes this one.

        Returns:
            Generation number of the submission
        """
        config = self.config
        start_price = commands.simulation_start_price(self.state, config)
        worker_rng = random.Random(self.rng.getrandbits(64))

        compute = partial(simulate, start_price, worker_rng,
                          paths=paths, params=config.monte_carlo)
        generation = self.runner.submit(MONTE_CARLO_KIND, compute, commands.apply_monte_carlo)

        self.logger.info("Monte Carlo submitted", start_price=start_price,
                         paths=paths or config.monte_carlo.paths, generation=generation)
        return generation

    def run_blended_allocation(self) -> SessionState:
        return self.runner.apply(commands.run_blended_allocation, self.config)

    def optimize_portfolio(self) -> SessionState:
        return self.runner.apply(commands.optimize_portfolio, self.config)

    def activate_technical(self) -> SessionState:
        return self.runner.apply(commands.activate_technical)

    def export_report(self, directory: Union[str, Path]) -> Optional[Path]:
        """
        Export the analysis report into a directory.

        Returns:
            Path of the written report, None if the export failed
        """
        return self.runner.transact(commands.export_report, Path(directory))

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until background computations have finished."""
        return self.runner.wait(timeout=timeout)

    def get_config(self) -> DefaultConfig:
        """Get the configuration in effect for the current symbol."""
        return self.config
