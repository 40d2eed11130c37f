"""Indicator calculator combining moving averages and trend classification"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

import structlog

from ..data.models import PriceBar
from ..errors import InsufficientDataError
from .sma import simple_moving_average
from .trend import LatestBarTrendClassifier, Trend, TrendClassifier

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class IndicatorResult:
    """Indicators derived from one cycle's bar history"""
    short_sma: float
    long_sma: float
    trend: Trend
    pct_change: float

    @property
    def short_below_long(self) -> bool:
        return self.short_sma < self.long_sma

    @property
    def short_above_long(self) -> bool:
        return self.short_sma > self.long_sma


def compute_indicators(
    bars: Sequence[PriceBar],
    short_period: int,
    long_period: int,
    classifier: Optional[TrendClassifier] = None
) -> IndicatorResult:
    """
    Compute short/long SMAs and the trend classification

    Args:
        bars: Price bars in chronological order
        short_period: Short SMA period
        long_period: Long SMA period
        classifier: Trend classifier (defaults to LatestBarTrendClassifier)

    Returns:
        IndicatorResult for the most recent bar

    Raises:
        InsufficientDataError: If bars is empty or has fewer than 2 entries
    """
    if not bars:
        raise InsufficientDataError(
            "No price bars available",
            required_count=long_period,
            available_count=0
        )

    classifier = classifier or LatestBarTrendClassifier()
    closes = [bar.close for bar in bars]

    short_sma = simple_moving_average(closes, short_period)
    long_sma = simple_moving_average(closes, long_period)
    trend, pct_change = classifier.classify(bars)

    return IndicatorResult(
        short_sma=short_sma,
        long_sma=long_sma,
        trend=trend,
        pct_change=pct_change,
    )


class IndicatorCalculator:
    """Indicator engine bound to configured periods and a trend classifier"""

    def __init__(
        self,
        short_period: int = 5,
        long_period: int = 20,
        classifier: Optional[TrendClassifier] = None
    ):
        self.short_period = short_period
        self.long_period = long_period
        self.classifier = classifier or LatestBarTrendClassifier()

    def calculate(self, bars: Sequence[PriceBar]) -> IndicatorResult:
        result = compute_indicators(
            bars,
            self.short_period,
            self.long_period,
            self.classifier,
        )

        logger.debug(
            "Indicators calculated",
            bars=len(bars),
            short_sma=result.short_sma,
            long_sma=result.long_sma,
            trend=result.trend.value,
            pct_change=round(result.pct_change, 4)
        )
        return result
