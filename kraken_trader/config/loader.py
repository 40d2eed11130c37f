"""Configuration loader with 3-tier parameter precedence."""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from ..errors import ConfigurationError
from .defaults import (
    ExchangeParams,
    IndicatorParams,
    LoggingParams,
    SchedulerParams,
    StrategyParams,
    ThresholdPair,
    TraderConfig,
    TradingParams,
    get_default_config,
)
from .validation import ConfigValidator, ValidationError

CONFIG_FILENAME = "trader.yaml"
API_KEY_ENV = "KRAKEN_API_KEY"
API_SECRET_ENV = "KRAKEN_API_SECRET"

_SECTIONS = {
    "exchange": ExchangeParams,
    "trading": TradingParams,
    "indicators": IndicatorParams,
    "strategy": StrategyParams,
    "scheduler": SchedulerParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: TraderConfig

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
        """Load overrides from trader.yaml, empty if the file is absent."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        if file_config is None:
            return {}
        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"{config_file} must contain a mapping at the top level",
                context={"path": str(config_file)}
            )
        return file_config

    def load_credentials(self) -> dict[str, Any]:
        """Read API credentials from the environment (and a .env file)."""
        load_dotenv(find_dotenv(usecwd=True))

        credentials = {}
        api_key = os.environ.get(API_KEY_ENV)
        api_secret = os.environ.get(API_SECRET_ENV)
        if api_key:
            credentials["api_key"] = api_key
        if api_secret:
            credentials["api_secret"] = api_secret
        return credentials

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. trader.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        credentials = self.load_credentials()
        if credentials:
            config = self._deep_merge(config, {"exchange": credentials})

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(
        self,
        overrides: Optional[dict[str, Any]] = None,
        require_credentials: bool = True
    ) -> TraderConfig:
        """
        Load, validate and build the typed configuration.

        Raises:
            ConfigurationError: If any field fails validation
        """
        merged = self.merge_config(overrides)

        errors = self._unknown_fields(merged)
        errors.extend(ConfigValidator.validate_config(merged))
        if require_credentials:
            exchange = merged.get("exchange")
            errors.extend(ConfigValidator.validate_credentials(
                exchange if isinstance(exchange, dict) else {}
            ))

        if errors:
            messages = [f"{err.field}: {err.message} (got: {err.value!r})" for err in errors]
            raise ConfigurationError(
                f"Invalid configuration: {len(errors)} error(s) found",
                field=errors[0].field,
                errors=messages
            )

        return self._build_config(merged)

    def _build_config(self, merged: dict[str, Any]) -> TraderConfig:
        """Convert the merged dictionary into frozen dataclasses."""
        sections = {}
        for name, params_cls in _SECTIONS.items():
            values = dict(merged.get(name, {}))
            if params_cls is StrategyParams and "thresholds" in values:
                values["thresholds"] = {
                    trend: ThresholdPair(
                        buy_drop_pct=pair["buy_drop_pct"],
                        sell_rise_pct=pair["sell_rise_pct"]
                    )
                    for trend, pair in values["thresholds"].items()
                }
            sections[name] = params_cls(**values)
        return TraderConfig(**sections)

    def _unknown_fields(self, merged: dict[str, Any]) -> list[ValidationError]:
        """Report sections and keys that do not map onto a parameter."""
        errors = []
        for section, values in merged.items():
            params_cls = _SECTIONS.get(section)
            if params_cls is None:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=values
                ))
                continue
            if not isinstance(values, dict):
                continue
            known = {f.name for f in fields(params_cls)}
            for key in values:
                if key not in known:
                    errors.append(ValidationError(
                        field=f"{section}.{key}",
                        message="Unknown configuration field",
                        value=values[key]
                    ))
        return errors

    def _dataclass_to_dict(self, obj: Any) -> Any:
        """Convert nested dataclasses (and dicts of them) to dictionaries."""
        if hasattr(obj, '__dataclass_fields__'):
            return {
                field_name: self._dataclass_to_dict(getattr(obj, field_name))
                for field_name in obj.__dataclass_fields__
            }
        if isinstance(obj, dict):
            return {key: self._dataclass_to_dict(value) for key, value in obj.items()}
        return obj

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
