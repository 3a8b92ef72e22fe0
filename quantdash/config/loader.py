"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import DefaultConfig, get_default_config


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_symbol_config(self, symbol: str) -> dict[str, Any]:
        """Load symbol-specific configuration overrides."""
        symbols_file = self.config_dir / "symbols.yaml"

        if not symbols_file.exists():
            return {}

        with open(symbols_file) as f:
            symbols_config = yaml.safe_load(f) or {}

        return symbols_config.get("symbols", {}).get(symbol, {}) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        symbol: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Call overrides (highest priority)
        2. Symbol-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        symbol_config = self.load_symbol_config(symbol)
        config = self._deep_merge(config, symbol_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(
        self,
        symbol: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """Merge configuration for a symbol and rebuild the frozen dataclasses."""
        merged = self.merge_config(symbol, overrides)

        sections = {}
        for section in fields(self.defaults):
            current = getattr(self.defaults, section.name)
            values = merged.get(section.name, {})
            known = {f.name: f for f in fields(current)}
            updates = {
                key: self._coerce(getattr(current, key), value)
                for key, value in values.items()
                if key in known
            }
            sections[section.name] = replace(current, **updates)

        return DefaultConfig(**sections)

    def _coerce(self, default: Any, value: Any) -> Any:
        """Match YAML lists to tuple-typed defaults."""
        if isinstance(default, tuple) and isinstance(value, list):
            return tuple(value)
        return value

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, dict):
                    result[field_name] = dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
