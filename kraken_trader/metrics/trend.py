"""Trend classification over recent closing prices"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum

from ..data.models import PriceBar
from ..errors import InsufficientDataError, MalformedDataError


class Trend(str, Enum):
    """Market trend regimes driving the threshold policy."""
    SHARP_UP = "sharp_up"
    SHARP_DOWN = "sharp_down"
    STABILIZED = "stabilized"


class TrendClassifier(ABC):
    """Strategy interface for classifying the current trend from bars."""

    @abstractmethod
    def classify(self, bars: Sequence[PriceBar]) -> tuple[Trend, float]:
        """
        Classify the trend.

        Args:
            bars: Price bars in chronological order

        Returns:
            Tuple of (trend, percent change the decision was based on)
        """


class LatestBarTrendClassifier(TrendClassifier):
    """
    Classify trend from the change between the two most recent closes

    pct_change = (latest - previous) * 100 / previous

    SharpUp if pct_change >= sharp_up_pct, SharpDown if
    pct_change <= -sharp_down_pct, otherwise Stabilized. A single step is
    noisy; a multi-bar classifier can replace this one without touching the
    state machine.
    """

    def __init__(self, sharp_up_pct: float = 3.0, sharp_down_pct: float = 3.0):
        if sharp_up_pct <= 0 or sharp_down_pct <= 0:
            raise ValueError("Sharp trend thresholds must be positive")
        self.sharp_up_pct = sharp_up_pct
        self.sharp_down_pct = sharp_down_pct

    def classify(self, bars: Sequence[PriceBar]) -> tuple[Trend, float]:
        if len(bars) < 2:
            raise InsufficientDataError(
                "Trend classification needs at least 2 bars",
                required_count=2,
                available_count=len(bars)
            )

        previous = bars[-2].close
        latest = bars[-1].close
        if previous == 0:
            raise MalformedDataError("Previous close is zero, percent change undefined")

        pct_change = (latest - previous) * 100 / previous

        if pct_change >= self.sharp_up_pct:
            return Trend.SHARP_UP, pct_change
        if pct_change <= -self.sharp_down_pct:
            return Trend.SHARP_DOWN, pct_change
        return Trend.STABILIZED, pct_change
