"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

VALID_ORDER_TYPES = ("market", "limit")
VALID_TRENDS = ("sharp_up", "sharp_down", "stabilized")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_exchange_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate exchange endpoint parameters."""
        errors = []

        if "base_url" in params:
            value = params["base_url"]
            if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                errors.append(ValidationError(
                    field="exchange.base_url",
                    message="Must be an http(s) URL",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="exchange.timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_trading_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate order parameters."""
        errors = []

        if "pair" in params:
            value = params["pair"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="trading.pair",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "volume" in params:
            value = params["volume"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="trading.volume",
                    message="Must be a positive number",
                    value=value
                ))

        if "order_type" in params:
            value = params["order_type"]
            if value not in VALID_ORDER_TYPES:
                errors.append(ValidationError(
                    field="trading.order_type",
                    message=f"Must be one of {', '.join(VALID_ORDER_TYPES)}",
                    value=value
                ))

        if "validate_only" in params:
            value = params["validate_only"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="trading.validate_only",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_indicator_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate moving average and trend parameters."""
        errors = []

        for name in ("short_period", "long_period", "ohlc_interval_minutes"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"indicators.{name}",
                        message="Must be a positive integer",
                        value=value
                    ))

        short = params.get("short_period")
        long = params.get("long_period")
        if _is_int(short) and _is_int(long) and short >= long:
            errors.append(ValidationError(
                field="indicators.short_period",
                message="Must be smaller than long_period",
                value=short
            ))

        for name in ("sharp_up_pct", "sharp_down_pct"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"indicators.{name}",
                        message="Must be a positive number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_strategy_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate the trend threshold table."""
        errors = []

        table = params.get("thresholds", {})
        if not isinstance(table, dict):
            return [ValidationError(
                field="strategy.thresholds",
                message="Must be a mapping of trend to thresholds",
                value=table
            )]

        for trend, pair in table.items():
            if trend not in VALID_TRENDS:
                errors.append(ValidationError(
                    field=f"strategy.thresholds.{trend}",
                    message=f"Unknown trend, expected one of {', '.join(VALID_TRENDS)}",
                    value=pair
                ))
                continue

            if not isinstance(pair, dict):
                errors.append(ValidationError(
                    field=f"strategy.thresholds.{trend}",
                    message="Must define buy_drop_pct and sell_rise_pct",
                    value=pair
                ))
                continue

            for name in ("buy_drop_pct", "sell_rise_pct"):
                value = pair.get(name)
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"strategy.thresholds.{trend}.{name}",
                        message="Must be a positive number",
                        value=value
                    ))

        if "require_reentry_drop" in params:
            value = params["require_reentry_drop"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="strategy.require_reentry_drop",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_scheduler_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate the polling interval."""
        errors = []

        if "interval_seconds" in params:
            value = params["interval_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="scheduler.interval_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging output options."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in VALID_LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(VALID_LOG_LEVELS)}",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_credentials(params: dict[str, Any]) -> list[ValidationError]:
        """Validate that API credentials are present."""
        errors = []

        for name, env_var in (("api_key", "KRAKEN_API_KEY"), ("api_secret", "KRAKEN_API_SECRET")):
            value = params.get(name)
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field=f"exchange.{name}",
                    message=f"Missing credential, set {env_var}",
                    value=None
                ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate a complete merged configuration dictionary."""
        errors = []
        validators = {
            "exchange": cls.validate_exchange_params,
            "trading": cls.validate_trading_params,
            "indicators": cls.validate_indicator_params,
            "strategy": cls.validate_strategy_params,
            "scheduler": cls.validate_scheduler_params,
            "logging": cls.validate_logging_params,
        }

        for section, validator in validators.items():
            params = config.get(section, {})
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Section must be a mapping",
                    value=params
                ))
                continue
            errors.extend(validator(params))

        return errors
