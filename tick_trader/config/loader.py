"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    AccountParams,
    IndicatorParams,
    PersistenceParams,
    RiskParams,
    StrategyParams,
    TradingConfig,
    WindowParams,
    get_default_config,
)
from .validation import ConfigValidator

CONFIG_FILENAME = "trading.yaml"

_SECTIONS = {
    "strategy": StrategyParams,
    "risk": RiskParams,
    "window": WindowParams,
    "indicators": IndicatorParams,
    "account": AccountParams,
    "persistence": PersistenceParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: TradingConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from trading.yaml, empty if the file is absent."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        return file_config or {}

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. trading.yaml in the config directory
        3. Built-in defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> TradingConfig:
        """Merge, validate and build a TradingConfig."""
        config = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            messages = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise ConfigurationError(
                "Invalid trading configuration: " + "; ".join(messages),
                errors=errors
            )

        return self.build(config)

    @staticmethod
    def build(config: dict[str, Any]) -> TradingConfig:
        """Build a TradingConfig from a merged dictionary, ignoring unknown keys."""
        sections = {}
        for name, params_cls in _SECTIONS.items():
            values = config.get(name) or {}
            known = {
                key: value for key, value in values.items()
                if key in params_cls.__dataclass_fields__
            }
            sections[name] = params_cls(**known)
        return TradingConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
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
