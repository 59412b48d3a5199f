"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

PERSISTENCE_BACKENDS = ("json", "sqlite", "memory")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_strategy_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate oscillator thresholds."""
        errors = []

        for name in ("rsi_overbought", "rsi_oversold", "stoch_overbought", "stoch_oversold"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0 or value > 100:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a number between 0 and 100",
                        value=value
                    ))

        if errors:
            return errors

        # Oversold must sit below overbought
        if params.get("rsi_oversold", 0) >= params.get("rsi_overbought", 100):
            errors.append(ValidationError(
                field="rsi_oversold",
                message="Must be lower than rsi_overbought",
                value=params.get("rsi_oversold")
            ))

        if params.get("stoch_oversold", 0) >= params.get("stoch_overbought", 100):
            errors.append(ValidationError(
                field="stoch_oversold",
                message="Must be lower than stoch_overbought",
                value=params.get("stoch_oversold")
            ))

        return errors

    @staticmethod
    def validate_risk_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate sizing and loss-limit parameters."""
        errors = []

        for name in ("account_risk_percent", "stop_loss_percent", "max_daily_loss_percent"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0 or value > 100:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive percentage no greater than 100",
                        value=value
                    ))

        if "take_profit_ratio" in params:
            value = params["take_profit_ratio"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="take_profit_ratio",
                    message="Must be a positive number",
                    value=value
                ))

        min_size = params.get("min_position_size")
        max_size = params.get("max_position_size")

        if min_size is not None and (not _is_number(min_size) or min_size <= 0):
            errors.append(ValidationError(
                field="min_position_size",
                message="Must be a positive number",
                value=min_size
            ))
        elif max_size is not None and (not _is_number(max_size) or max_size <= 0):
            errors.append(ValidationError(
                field="max_position_size",
                message="Must be a positive number",
                value=max_size
            ))
        elif min_size is not None and max_size is not None and min_size > max_size:
            errors.append(ValidationError(
                field="min_position_size",
                message="Must not exceed max_position_size",
                value=min_size
            ))

        return errors

    @staticmethod
    def validate_window_params(
        window: dict[str, Any],
        indicators: dict[str, Any]
    ) -> list[ValidationError]:
        """Validate window capacity and indicator periods."""
        errors = []

        capacity = window.get("capacity")
        if capacity is not None and not _is_positive_int(capacity):
            errors.append(ValidationError(
                field="capacity",
                message="Must be a positive integer",
                value=capacity
            ))

        for name in ("period", "signal_period"):
            if name in indicators and not _is_positive_int(indicators[name]):
                errors.append(ValidationError(
                    field=name,
                    message="Must be a positive integer",
                    value=indicators[name]
                ))

        if errors:
            return errors

        period = indicators.get("period")
        if capacity is not None and period is not None and capacity < period:
            errors.append(ValidationError(
                field="capacity",
                message="Must hold at least one indicator period of samples",
                value=capacity
            ))

        return errors

    @staticmethod
    def validate_account_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate account parameters."""
        errors = []

        if "initial_balance" in params:
            value = params["initial_balance"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="initial_balance",
                    message="Must be a positive number",
                    value=value
                ))

        if "symbol" in params:
            value = params["symbol"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="symbol",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "reset_daily_stats_on_new_day" in params:
            value = params["reset_daily_stats_on_new_day"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="reset_daily_stats_on_new_day",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_persistence_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate persistence parameters."""
        errors = []

        if "backend" in params and params["backend"] not in PERSISTENCE_BACKENDS:
            errors.append(ValidationError(
                field="backend",
                message=f"Must be one of {', '.join(PERSISTENCE_BACKENDS)}",
                value=params["backend"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "strategy" in config:
            errors.extend(ConfigValidator.validate_strategy_params(config["strategy"]))

        if "risk" in config:
            errors.extend(ConfigValidator.validate_risk_params(config["risk"]))

        errors.extend(ConfigValidator.validate_window_params(
            config.get("window") or {},
            config.get("indicators") or {}
        ))

        if "account" in config:
            errors.extend(ConfigValidator.validate_account_params(config["account"]))

        if "persistence" in config:
            errors.extend(ConfigValidator.validate_persistence_params(config["persistence"]))

        return errors
