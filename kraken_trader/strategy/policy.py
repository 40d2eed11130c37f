"""
Adaptive threshold policy.

Asymmetric thresholds bias the agent towards riding upward momentum (wide
sell target, narrow buy trigger) and waiting out downward momentum (wide
buy trigger) instead of catching a falling price.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import StrategyParams, ThresholdPair
from ..metrics.trend import Trend


@dataclass(frozen=True)
class StrategyThresholds:
    """Percentages that gate buy and sell decisions for one cycle."""
    buy_drop_pct: float
    sell_rise_pct: float

    def __post_init__(self):
        if self.buy_drop_pct <= 0 or self.sell_rise_pct <= 0:
            raise ValueError(
                f"Thresholds must be positive, got buy_drop_pct={self.buy_drop_pct}, "
                f"sell_rise_pct={self.sell_rise_pct}"
            )

    def buy_price(self, reference_price: float) -> float:
        """Price at or below which a buy is allowed."""
        return reference_price * (1 - self.buy_drop_pct / 100)

    def sell_price(self, reference_price: float) -> float:
        """Price at or above which a sell is allowed."""
        return reference_price * (1 + self.sell_rise_pct / 100)


DEFAULT_THRESHOLDS: dict[Trend, StrategyThresholds] = {
    Trend.SHARP_UP: StrategyThresholds(buy_drop_pct=0.5, sell_rise_pct=4.0),
    Trend.SHARP_DOWN: StrategyThresholds(buy_drop_pct=3.0, sell_rise_pct=2.0),
    Trend.STABILIZED: StrategyThresholds(buy_drop_pct=0.75, sell_rise_pct=2.0),
}


class ThresholdPolicy:
    """Pure trend -> thresholds mapping with no memory of earlier cycles."""

    def __init__(self, table: Optional[Mapping[Trend, StrategyThresholds]] = None):
        merged = dict(DEFAULT_THRESHOLDS)
        if table:
            merged.update(table)
        self.table = merged

    @classmethod
    def from_params(cls, params: StrategyParams) -> "ThresholdPolicy":
        """Build a policy from the configured threshold table."""
        return cls({
            Trend(trend): _to_thresholds(pair)
            for trend, pair in params.thresholds.items()
        })

    def adjust(self, trend: Trend) -> StrategyThresholds:
        """Thresholds to apply this cycle; unknown trends fall back to Stabilized."""
        return self.table.get(trend, self.table[Trend.STABILIZED])


def _to_thresholds(pair: ThresholdPair) -> StrategyThresholds:
    return StrategyThresholds(
        buy_drop_pct=pair.buy_drop_pct,
        sell_rise_pct=pair.sell_rise_pct,
    )
