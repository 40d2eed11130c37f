"""
Main trading cycle coordinator.

Orchestrates one trading cycle: market data fetch, indicator calculation,
threshold adjustment, position decision and order dispatch. The engine
instance owns the only state that survives across cycles (the position and
the nonce generator).
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import structlog

from .config.defaults import TraderConfig
from .data.models import MarketSnapshot
from .errors import ConfigurationError, DataQualityError, ExchangeError
from .exchange.client import KrakenClient
from .exchange.dispatcher import OrderDispatcher, OrderResult
from .exchange.nonce import NonceGenerator
from .exchange.orders import OrderType
from .exchange.signer import RequestSigner
from .logging.config import (
    get_state_logger,
    get_trade_logger,
    log_state_transition,
    log_trade_decision,
)
from .metrics.calculator import IndicatorCalculator, IndicatorResult
from .metrics.trend import LatestBarTrendClassifier
from .state.machine import decide
from .state.models import Decision, PositionState, TradeAction
from .strategy.policy import StrategyThresholds, ThresholdPolicy

logger = structlog.get_logger(__name__)
trade_logger = get_trade_logger(__name__)
state_logger = get_state_logger(__name__)


@dataclass(frozen=True)
class CycleReport:
    """Summary of one trading cycle."""
    cycle: int
    started_at: datetime
    position: PositionState
    action: Optional[TradeAction] = None
    success: bool = False
    skipped: bool = False
    reason: Optional[str] = None
    current_price: Optional[float] = None
    indicators: Optional[IndicatorResult] = None
    thresholds: Optional[StrategyThresholds] = None
    order_result: Optional[OrderResult] = None
    error: Optional[str] = None


def build_client(config: TraderConfig) -> KrakenClient:
    """Create the Kraken client; missing or malformed credentials fail here, at startup."""
    exchange = config.exchange
    for name, value in (("api_key", exchange.api_key), ("api_secret", exchange.api_secret)):
        if not value:
            raise ConfigurationError(
                "API key and secret are required to sign orders",
                field=f"exchange.{name}"
            )

    return KrakenClient(
        base_url=exchange.base_url,
        api_version=exchange.api_version,
        api_key=exchange.api_key,
        signer=RequestSigner(exchange.api_secret),
        timeout_seconds=exchange.timeout_seconds,
    )


class TradingEngine:
    """
    Coordinator for the single-asset trading agent.

    Manages the cycle pipeline:
    Ticker + OHLC → Indicators → Thresholds → Decision → Order → Position
    """

    def __init__(
        self,
        config: TraderConfig,
        client: Optional[KrakenClient] = None,
        dispatcher: Optional[OrderDispatcher] = None,
        nonces: Optional[NonceGenerator] = None,
        calculator: Optional[IndicatorCalculator] = None,
        policy: Optional[ThresholdPolicy] = None,
        position: Optional[PositionState] = None
    ) -> None:
        self.config = config
        self.pair = config.trading.pair
        self.logger = logger.bind(pair=self.pair)

        self.client = client or build_client(config)
        self.nonces = nonces or NonceGenerator()
        self.dispatcher = dispatcher or OrderDispatcher(
            client=self.client,
            nonces=self.nonces,
            pair=self.pair,
            order_type=OrderType(config.trading.order_type),
            validate_only=config.trading.validate_only,
        )
        self.calculator = calculator or IndicatorCalculator(
            short_period=config.indicators.short_period,
            long_period=config.indicators.long_period,
            classifier=LatestBarTrendClassifier(
                sharp_up_pct=config.indicators.sharp_up_pct,
                sharp_down_pct=config.indicators.sharp_down_pct,
            ),
        )
        self.policy = policy or ThresholdPolicy.from_params(config.strategy)

        self.position = position or PositionState.flat()
        self.thresholds: Optional[StrategyThresholds] = None
        self.cycle_count = 0
        self._cycle_lock = threading.Lock()

        self.logger.info(
            "Trading engine initialized",
            volume=config.trading.volume,
            order_type=config.trading.order_type,
            validate_only=config.trading.validate_only,
            short_period=config.indicators.short_period,
            long_period=config.indicators.long_period
        )

    def fetch_snapshot(self) -> MarketSnapshot:
        """Fetch the current price and bar history for the traded pair."""
        current_price = self.client.get_ticker_price(self.pair)
        bars = self.client.get_ohlc(self.pair, self.config.indicators.ohlc_interval_minutes)
        return MarketSnapshot(pair=self.pair, current_price=current_price, bars=tuple(bars))

    def run_cycle(self) -> CycleReport:
        """
        Run one full trading cycle.

        Returns:
            CycleReport describing what happened. Per-cycle failures are
            reported, never raised; the position is only changed after a
            successful order (or never, for Hold).
        """
        if not self._cycle_lock.acquire(blocking=False):
            self.logger.warning("Cycle already in progress, skipping")
            return CycleReport(
                cycle=self.cycle_count,
                started_at=datetime.now(timezone.utc),
                position=self.position,
                skipped=True,
                reason="cycle_in_progress"
            )

        try:
            self.cycle_count += 1
            return self._run_cycle(self.cycle_count)
        finally:
            self._cycle_lock.release()

    def _run_cycle(self, cycle: int) -> CycleReport:
        started_at = datetime.now(timezone.utc)
        position_before = self.position

        try:
            snapshot = self.fetch_snapshot()
            indicators = self.calculator.calculate(snapshot.bars)

        except DataQualityError as e:
            self.logger.warning(
                "Data quality issue, skipping cycle",
                cycle=cycle,
                error=str(e),
                error_type=type(e).__name__,
                context=e.context
            )
            return CycleReport(cycle=cycle, started_at=started_at,
                               position=position_before, error=str(e))

        except ExchangeError as e:
            self.logger.warning(
                "Market data unavailable, skipping cycle",
                cycle=cycle,
                error=str(e),
                error_type=type(e).__name__,
                endpoint=e.endpoint
            )
            return CycleReport(cycle=cycle, started_at=started_at,
                               position=position_before, error=str(e))

        self.thresholds = self.policy.adjust(indicators.trend)

        try:
            decision = decide(
                position_before,
                snapshot.current_price,
                indicators.short_sma,
                indicators.long_sma,
                self.thresholds,
                require_reentry_drop=self.config.strategy.require_reentry_drop,
            )
            return self._execute(cycle, started_at, snapshot, indicators, decision)

        except ConfigurationError:
            raise

        except Exception as e:
            self.logger.error(
                "Unexpected error during trading cycle",
                cycle=cycle,
                error=str(e),
                error_type=type(e).__name__
            )
            self.position = position_before
            return CycleReport(cycle=cycle, started_at=started_at, position=position_before,
                               current_price=snapshot.current_price, indicators=indicators,
                               thresholds=self.thresholds, error=str(e))

    def _execute(
        self,
        cycle: int,
        started_at: datetime,
        snapshot: MarketSnapshot,
        indicators: IndicatorResult,
        decision: Decision
    ) -> CycleReport:
        """Dispatch the decided order and commit the position on success."""
        log_trade_decision(
            trade_logger,
            pair=self.pair,
            action=decision.action.value,
            reason=decision.reason,
            context={
                "cycle": cycle,
                "current_price": snapshot.current_price,
                "position": self.position.label,
                "trigger_price": decision.trigger_price,
                "short_sma": indicators.short_sma,
                "long_sma": indicators.long_sma,
                "trend": indicators.trend.value,
                "buy_drop_pct": self.thresholds.buy_drop_pct,
                "sell_rise_pct": self.thresholds.sell_rise_pct,
            }
        )

        report = dict(
            cycle=cycle,
            started_at=started_at,
            action=decision.action,
            reason=decision.reason,
            current_price=snapshot.current_price,
            indicators=indicators,
            thresholds=self.thresholds,
        )

        if decision.action == TradeAction.HOLD:
            return CycleReport(position=self.position, success=True, **report)

        result = self.dispatcher.dispatch(
            decision.action,
            self.config.trading.volume,
            price=snapshot.current_price,
        )

        if not result.success:
            self.logger.warning(
                "Order failed, position left unchanged",
                cycle=cycle,
                action=decision.action.value,
                position=self.position.label,
                error=result.error_message
            )
            return CycleReport(position=self.position, success=False, order_result=result,
                               error=result.error_message, **report)

        previous = self.position
        self.position = decision.next_state
        log_state_transition(
            state_logger,
            pair=self.pair,
            from_state=previous.label,
            to_state=self.position.label,
            trigger=decision.reason,
            context={"cycle": cycle, "txids": result.txids}
        )
        return CycleReport(position=self.position, success=True, order_result=result, **report)
