"""Default configuration parameters for the trading agent."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ExchangeParams:
    """Kraken REST endpoint and credentials."""
    base_url: str = "https://api.kraken.com"
    api_version: str = "0"
    timeout_seconds: float = 10.0
    api_key: Optional[str] = None                  # From KRAKEN_API_KEY
    api_secret: Optional[str] = None               # Base64, from KRAKEN_API_SECRET


@dataclass(frozen=True)
class TradingParams:
    """Order parameters for the traded asset."""
    pair: str = "XXRPZUSD"                         # XRP/USD
    volume: float = 15.0                           # Fixed trade size in base asset
    order_type: str = "market"                     # market | limit
    validate_only: bool = False                    # Send Kraken validate=true (no execution)


@dataclass(frozen=True)
class IndicatorParams:
    """Moving average and trend classification parameters."""
    short_period: int = 5
    long_period: int = 20
    ohlc_interval_minutes: int = 1
    sharp_up_pct: float = 3.0                      # Single-bar rise classified as SharpUp
    sharp_down_pct: float = 3.0                    # Single-bar drop classified as SharpDown


@dataclass(frozen=True)
class ThresholdPair:
    """Buy-drop and sell-rise percentages for one trend regime."""
    buy_drop_pct: float
    sell_rise_pct: float


def _default_threshold_table() -> dict[str, ThresholdPair]:
    return {
        "sharp_up": ThresholdPair(buy_drop_pct=0.5, sell_rise_pct=4.0),
        "sharp_down": ThresholdPair(buy_drop_pct=3.0, sell_rise_pct=2.0),
        "stabilized": ThresholdPair(buy_drop_pct=0.75, sell_rise_pct=2.0),
    }


@dataclass(frozen=True)
class StrategyParams:
    """Adaptive threshold strategy parameters."""
    thresholds: dict[str, ThresholdPair] = field(default_factory=_default_threshold_table)
    require_reentry_drop: bool = True              # Flat after a sell waits for a drop from exit price


@dataclass(frozen=True)
class SchedulerParams:
    """Periodic driver parameters."""
    interval_seconds: float = 30.0


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False
    include_timestamp: bool = True


@dataclass(frozen=True)
class TraderConfig:
    """Complete trading agent configuration."""
    exchange: ExchangeParams
    trading: TradingParams
    indicators: IndicatorParams
    strategy: StrategyParams
    scheduler: SchedulerParams
    logging: LoggingParams


def get_default_config() -> TraderConfig:
    """Get the default configuration instance."""
    return TraderConfig(
        exchange=ExchangeParams(),
        trading=TradingParams(),
        indicators=IndicatorParams(),
        strategy=StrategyParams(),
        scheduler=SchedulerParams(),
        logging=LoggingParams(),
    )
