"""Pytest configuration and shared fixtures."""

import base64
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest

from kraken_trader.config.defaults import TraderConfig, get_default_config
from kraken_trader.data.models import PriceBar
from kraken_trader.errors import ExchangeRejection

TEST_SECRET = base64.b64encode(b"test-secret-key-material").decode("ascii")


def make_bars(closes: list[float], start: Optional[datetime] = None) -> list[PriceBar]:
    """Build one-minute bars whose OHLC all equal the given closes."""
    start = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
    return [
        PriceBar(
            ts=start + timedelta(minutes=i),
            open=close,
            high=close,
            low=close,
            close=close,
            vwap=close,
            volume=100.0,
            count=10,
        )
        for i, close in enumerate(closes)
    ]


def falling_closes(last: float = 0.501, count: int = 20, step: float = 0.001) -> list[float]:
    """Gently falling closes (short SMA below long SMA, Stabilized trend)."""
    return [last + (count - 1 - i) * step for i in range(count)]


def rising_closes(last: float = 0.501, count: int = 20, step: float = 0.001) -> list[float]:
    """Gently rising closes (short SMA above long SMA, Stabilized trend)."""
    return [last - (count - 1 - i) * step for i in range(count)]


class FakeKrakenClient:
    """In-memory stand-in for KrakenClient driven by queued market data."""

    def __init__(self):
        self.price: float = 0.5
        self.bars: list[PriceBar] = make_bars(falling_closes())
        self.orders: list[Any] = []
        self.reject_orders: bool = False
        self.market_data_error: Optional[Exception] = None

    def get_ticker_price(self, pair: str) -> float:
        if self.market_data_error:
            raise self.market_data_error
        return self.price

    def get_ohlc(self, pair: str, interval_minutes: int = 1) -> list[PriceBar]:
        if self.market_data_error:
            raise self.market_data_error
        return list(self.bars)

    def add_order(self, order, validate_only: bool = False) -> dict[str, Any]:
        self.orders.append(order)
        if self.reject_orders:
            raise ExchangeRejection("EOrder:Insufficient funds", errors=["EOrder:Insufficient funds"])
        return {
            "descr": {"order": f"{order.side.value} {order.volume} {order.pair} @ market"},
            "txid": [f"TX-{len(self.orders)}"],
        }


@pytest.fixture
def default_config() -> TraderConfig:
    """Default configuration with test credentials."""
    config = get_default_config()
    return replace(
        config,
        exchange=replace(config.exchange, api_key="test-key", api_secret=TEST_SECRET),
    )


@pytest.fixture
def fake_client() -> FakeKrakenClient:
    return FakeKrakenClient()


@pytest.fixture
def ticker_payload() -> dict[str, Any]:
    """Sample Kraken Ticker response."""
    return {
        "error": [],
        "result": {
            "XXRPZUSD": {
                "a": ["0.52010000", "1000", "1000.000"],
                "b": ["0.52000000", "500", "500.000"],
                "c": ["0.52005000", "25.00000000"],
            }
        },
    }


@pytest.fixture
def ohlc_payload() -> dict[str, Any]:
    """Sample Kraken OHLC response with three rows."""
    return {
        "error": [],
        "result": {
            "XXRPZUSD": [
                [1704067200, "0.50000", "0.51000", "0.49000", "0.50500", "0.50200", "1200.5", 42],
                [1704067260, "0.50500", "0.51500", "0.50000", "0.51000", "0.50800", "980.0", 31],
                [1704067320, "0.51000", "0.52000", "0.50500", "0.51500", "0.51200", "1500.25", 55],
            ],
            "last": 1704067320,
        },
    }


@pytest.fixture
def bar_factory():
    """Factory building PriceBars from a list of closes."""
    return make_bars


@pytest.fixture
def falling_bars() -> list[PriceBar]:
    """Twenty gently falling bars ending at 0.501."""
    return make_bars(falling_closes())


@pytest.fixture
def rising_bars() -> list[PriceBar]:
    """Twenty gently rising bars ending at 0.501."""
    return make_bars(rising_closes())


@pytest.fixture
def api_secret() -> str:
    """Base64 API secret used by signing tests."""
    return TEST_SECRET


@pytest.fixture
def no_credentials(monkeypatch):
    """Environment without Kraken credentials (and no .env lookup)."""
    monkeypatch.delenv("KRAKEN_API_KEY", raising=False)
    monkeypatch.delenv("KRAKEN_API_SECRET", raising=False)
    monkeypatch.setattr("kraken_trader.config.loader.load_dotenv", lambda *args, **kwargs: False)
