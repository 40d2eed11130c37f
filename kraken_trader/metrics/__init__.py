"""Indicator engine: moving averages and trend classification"""

from .calculator import IndicatorCalculator, IndicatorResult, compute_indicators
from .sma import simple_moving_average
from .trend import LatestBarTrendClassifier, Trend, TrendClassifier

__all__ = [
    "IndicatorCalculator",
    "IndicatorResult",
    "compute_indicators",
    "simple_moving_average",
    "Trend",
    "TrendClassifier",
    "LatestBarTrendClassifier",
]
