"""Configuration defaults, loading and validation."""

from .defaults import TradingConfig, get_default_config
from .loader import ConfigLoader

__all__ = ["TradingConfig", "ConfigLoader", "get_default_config"]
