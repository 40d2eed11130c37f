"""
Canonical data models for normalized market data.

This module defines immutable data structures that represent clean, validated
market data after parsing from raw Kraken payloads.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class PriceBar:
    """Normalized OHLC bar with UTC timestamp."""
    ts: datetime        # UTC bar open time
    open: float
    high: float
    low: float
    close: float
    vwap: float = 0.0
    volume: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class MarketSnapshot:
    """Current price plus chronological bar history for one cycle."""
    pair: str
    current_price: float
    bars: tuple[PriceBar, ...]
    observed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def closes(self) -> list[float]:
        """Closing prices in chronological order."""
        return [bar.close for bar in self.bars]
