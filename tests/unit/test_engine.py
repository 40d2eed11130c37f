"""Unit tests for the trading cycle orchestrator."""

from dataclasses import replace

import pytest

from kraken_trader.engine import TradingEngine, build_client
from kraken_trader.errors import ConfigurationError, TransportError
from kraken_trader.exchange.orders import LimitOrder
from kraken_trader.metrics.trend import Trend
from kraken_trader.state.models import PositionState, TradeAction
from kraken_trader.strategy.policy import StrategyThresholds


@pytest.fixture
def engine(default_config, fake_client) -> TradingEngine:
    return TradingEngine(default_config, client=fake_client)


class TestTradingEngine:
    """Test suite for the TradingEngine class."""

    def test_engine_initialization(self, engine) -> None:
        """Test the engine starts flat with no cycles run."""
        assert engine.position == PositionState.flat()
        assert engine.cycle_count == 0
        assert engine.thresholds is None
        assert engine.pair == "XXRPZUSD"

    def test_bootstrap_cycle(self, engine, fake_client) -> None:
        """Test the first cycle buys and commits Holding(price)."""
        fake_client.price = 0.50

        report = engine.run_cycle()

        assert report.cycle == 1
        assert report.action == TradeAction.BUY
        assert report.success is True
        assert report.order_result.txids == ["TX-1"]
        assert engine.position == PositionState(held=True, entry_price=0.50)
        assert report.position == engine.position
        assert fake_client.orders[0].volume == 15.0

    def test_hold_cycle_sends_no_order(self, engine, fake_client) -> None:
        """Test a hold decision commits nothing and sends nothing."""
        engine.position = PositionState.flat().with_buy(0.50)
        fake_client.price = 0.501

        report = engine.run_cycle()

        assert report.action == TradeAction.HOLD
        assert report.success is True
        assert fake_client.orders == []
        assert engine.position.entry_price == 0.50

    def test_thresholds_follow_trend(self, engine, fake_client, bar_factory) -> None:
        """Test the cycle thresholds come from the classified trend."""
        engine.position = PositionState.flat().with_buy(0.50)
        fake_client.bars = bar_factory([0.50] * 19 + [0.52])
        fake_client.price = 0.501

        report = engine.run_cycle()

        assert report.indicators.trend == Trend.SHARP_UP
        assert report.thresholds == StrategyThresholds(buy_drop_pct=0.5, sell_rise_pct=4.0)
        assert engine.thresholds == report.thresholds

    def test_failed_buy_rolls_back(self, engine, fake_client) -> None:
        """Test a rejected bootstrap buy leaves the position flat."""
        fake_client.reject_orders = True
        before = engine.position

        report = engine.run_cycle()

        assert report.action == TradeAction.BUY
        assert report.success is False
        assert "Insufficient funds" in report.error
        assert engine.position == before
        assert engine.position.never_traded is True

    def test_failed_sell_keeps_holding(self, engine, fake_client, rising_bars) -> None:
        """Test a rejected sell keeps the original entry."""
        engine.position = PositionState.flat().with_buy(0.49)
        fake_client.bars = rising_bars
        fake_client.price = 0.51
        fake_client.reject_orders = True

        report = engine.run_cycle()

        assert report.action == TradeAction.SELL
        assert report.success is False
        assert engine.position == PositionState(held=True, entry_price=0.49)

    def test_market_data_failure_skips_cycle(self, engine, fake_client) -> None:
        """Test a transport failure while fetching data is reported and skipped."""
        fake_client.market_data_error = TransportError("HTTP 502", status_code=502)

        report = engine.run_cycle()

        assert report.action is None
        assert report.success is False
        assert report.error == "HTTP 502"
        assert engine.position == PositionState.flat()
        assert fake_client.orders == []

    def test_insufficient_bars_skips_cycle(self, engine, fake_client, bar_factory) -> None:
        """Test one bar is not enough to trade."""
        fake_client.bars = bar_factory([0.5])

        report = engine.run_cycle()

        assert report.action is None
        assert "at least 2 bars" in report.error
        assert fake_client.orders == []

    def test_unexpected_error_is_contained(self, engine, fake_client) -> None:
        """Test an unexpected exception does not escape the cycle."""
        def broken_add_order(order, validate_only=False):
            raise RuntimeError("boom")

        fake_client.add_order = broken_add_order

        report = engine.run_cycle()

        assert report.success is False
        assert report.error == "boom"
        assert engine.position == PositionState.flat()

    def test_reentrant_cycle_is_skipped(self, engine, fake_client) -> None:
        """Test a cycle requested while one is running is skipped."""
        nested_reports = []

        def reentrant_ticker(pair):
            nested_reports.append(engine.run_cycle())
            return 0.5

        fake_client.get_ticker_price = reentrant_ticker

        report = engine.run_cycle()

        assert report.action == TradeAction.BUY
        assert nested_reports[0].skipped is True
        assert nested_reports[0].reason == "cycle_in_progress"
        assert engine.cycle_count == 1

    def test_limit_orders_use_current_price(self, default_config, fake_client) -> None:
        """Test limit order configuration prices at the current ticker."""
        config = replace(default_config, trading=replace(default_config.trading, order_type="limit"))
        engine = TradingEngine(config, client=fake_client)
        fake_client.price = 0.4321

        engine.run_cycle()

        order = fake_client.orders[0]
        assert isinstance(order, LimitOrder)
        assert order.price == 0.4321

    def test_nonces_increase_across_cycles(self, engine, fake_client, falling_bars) -> None:
        """Test orders across cycles carry strictly increasing nonces."""
        fake_client.bars = falling_bars
        for price in (0.50, 0.49, 0.48):
            fake_client.price = price
            engine.run_cycle()

        nonces = [order.nonce for order in fake_client.orders]
        assert len(nonces) == 3
        assert nonces == sorted(set(nonces))


class TestBuildClient:
    """Test client construction from configuration."""

    def test_bad_secret_fails_at_startup(self, default_config) -> None:
        """Test a malformed secret is a configuration error before any cycle."""
        config = replace(default_config,
                         exchange=replace(default_config.exchange, api_secret="***"))

        with pytest.raises(ConfigurationError):
            build_client(config)

    def test_client_uses_exchange_params(self, default_config) -> None:
        """Test the client is configured from the exchange section."""
        client = build_client(default_config)

        assert client.base_url == "https://api.kraken.com"
        assert client.api_key == "test-key"
        assert client.signer is not None
        assert client.timeout_seconds == 10.0

    @pytest.mark.parametrize("field", ["api_key", "api_secret"])
    def test_missing_credentials_fail_at_startup(self, default_config, field) -> None:
        """Test an engine cannot be built without credentials to sign orders."""
        config = replace(default_config,
                         exchange=replace(default_config.exchange, **{field: None}))

        with pytest.raises(ConfigurationError) as exc_info:
            TradingEngine(config)

        assert exc_info.value.field == f"exchange.{field}"
