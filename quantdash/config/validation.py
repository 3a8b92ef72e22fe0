"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_generator_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate series generator parameters."""
        errors = []

        if "default_days" in params:
            value = params["default_days"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="default_days",
                    message="Must be a positive integer",
                    value=value
                ))

        for name in ("drift", "volatility", "range_pct"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0 or value >= 1:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a number between 0 and 1",
                        value=value
                    ))

        if "min_volume" in params and "max_volume" in params:
            low, high = params["min_volume"], params["max_volume"]
            if not _is_number(low) or not _is_number(high) or low < 0 or high <= low:
                errors.append(ValidationError(
                    field="max_volume",
                    message="Must be greater than a non-negative min_volume",
                    value=high
                ))

        if "base_prices" in params:
            value = params["base_prices"]
            if not isinstance(value, dict) or any(
                not _is_number(price) or price <= 0 for price in value.values()
            ):
                errors.append(ValidationError(
                    field="base_prices",
                    message="Must map symbols to positive prices",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_monte_carlo_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate Monte Carlo parameters."""
        errors = []

        for name in ("paths", "sample_size"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        if "horizon_days" in params:
            value = params["horizon_days"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="horizon_days",
                    message="Must be a non-negative integer",
                    value=value
                ))

        if "daily_shock" in params:
            value = params["daily_shock"]
            if not _is_number(value) or value < 0 or value >= 1:
                errors.append(ValidationError(
                    field="daily_shock",
                    message="Must be a number between 0 and 1",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_option_inputs(params: dict[str, Any]) -> list[ValidationError]:
        """Validate option pricer inputs (strike, days, rate, volatility)."""
        errors = []

        for name in ("strike", "days_to_expiry", "volatility_pct"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive number",
                        value=value
                    ))

        if "risk_free_rate_pct" in params:
            value = params["risk_free_rate_pct"]
            if not _is_number(value):
                errors.append(ValidationError(
                    field="risk_free_rate_pct",
                    message="Must be a number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "generator" in config:
            errors.extend(ConfigValidator.validate_generator_params(config["generator"]))

        if "monte_carlo" in config:
            errors.extend(ConfigValidator.validate_monte_carlo_params(config["monte_carlo"]))

        return errors
