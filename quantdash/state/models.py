"""
Session state data models.

This module defines the immutable session record that every command takes
and returns. A recomputation replaces the affected fields wholesale through
``dataclasses.replace``; nothing is mutated in place.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional

from ..data.models import (
    AllocationResult,
    BacktestRecord,
    BlendedAllocation,
    DatasetStats,
    OptionQuote,
    PortfolioMetrics,
    Row,
    Series,
    SimulationResult,
    VolatilityPoint,
)


class NotificationVariant(str, Enum):
    """Presentation variant of a user-visible notification."""
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class StrategyKind(str, Enum):
    """Analysis strategy currently shown by the dashboard."""
    TECHNICAL = "technical"
    MONTE_CARLO = "montecarlo"
    BLACK_LITTERMAN = "blacklitterman"


@dataclass(frozen=True)
class Notification:
    """Toast-style message produced by a command."""
    title: str
    description: str = ""
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @property
    def is_destructive(self) -> bool:
        return self.variant == NotificationVariant.DESTRUCTIVE


@dataclass(frozen=True)
class OptionInputs:
    """User-editable option pricer inputs."""
    strike: float = 351.0511426955417
    days_to_expiry: float = 30
    risk_free_rate_pct: float = 5.0
    volatility_pct: float = 25.0


@dataclass(frozen=True)
class AnalysisResults:
    """Bundle computed when a symbol is (re)loaded."""
    technical_indicators: Series
    option_pricing: OptionQuote
    volatility_surface: list[VolatilityPoint]
    backtest: list[BacktestRecord]
    portfolio_metrics: PortfolioMetrics

    def to_dict(self) -> dict[str, Any]:
        return {
            "technicalIndicators": [point.to_dict() for point in self.technical_indicators],
            "optionPricing": self.option_pricing.to_dict(),
            "volatilitySurface": [point.to_dict() for point in self.volatility_surface],
            "backtest": [record.to_dict() for record in self.backtest],
            "portfolioMetrics": self.portfolio_metrics.to_dict(),
        }


@dataclass(frozen=True)
class PortfolioState:
    """Headline portfolio figures plus the latest optimized allocation."""
    initial: float = 10000.0
    current: float = 12500.0
    return_pct: float = 25.0
    optimized: Optional[AllocationResult] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "initial": self.initial,
            "current": self.current,
            "return": self.return_pct,
        }
        if self.optimized is not None:
            result["optimized"] = self.optimized.to_dict()
        return result


@dataclass(frozen=True)
class SessionState:
    """Everything one analysis session displays."""

    symbol: str
    series: Series

    analysis: Optional[AnalysisResults] = None
    portfolio: PortfolioState = field(default_factory=PortfolioState)

    option_inputs: OptionInputs = field(default_factory=OptionInputs)
    option_quote: Optional[OptionQuote] = None

    active_strategy: StrategyKind = StrategyKind.TECHNICAL
    monte_carlo: Optional[SimulationResult] = None
    blended: Optional[BlendedAllocation] = None

    custom_rows: tuple[Row, ...] = ()
    custom_file_name: str = ""
    custom_stats: Optional[DatasetStats] = None

    notifications: tuple[Notification, ...] = ()

    @property
    def last_close(self) -> Optional[float]:
        return self.series[-1].close if self.series else None

    @property
    def show_custom_analytics(self) -> bool:
        return bool(self.custom_file_name)

    def notify(self, title: str, description: str = "",
               variant: NotificationVariant = NotificationVariant.DEFAULT) -> "SessionState":
        """Return a copy with one more notification appended."""
        notification = Notification(title=title, description=description, variant=variant)
        return replace(self, notifications=self.notifications + (notification,))

    @property
    def latest_notification(self) -> Optional[Notification]:
        return self.notifications[-1] if self.notifications else None
