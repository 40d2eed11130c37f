"""
Core position state machine logic.

``decide`` is a pure function of the current position, the current price,
the SMAs and the cycle thresholds. The orchestrator is responsible for
committing ``Decision.next_state`` once the order outcome is known.
"""

from ..strategy.policy import StrategyThresholds
from .models import Decision, PositionState, TradeAction


def decide(
    state: PositionState,
    current_price: float,
    short_sma: float,
    long_sma: float,
    thresholds: StrategyThresholds,
    require_reentry_drop: bool = True
) -> Decision:
    """
    Decide Buy / Sell / Hold for the current cycle.

    Args:
        state: Position state before this cycle
        current_price: Last trade price
        short_sma: Short simple moving average
        long_sma: Long simple moving average
        thresholds: Buy-drop / sell-rise percentages for this cycle
        require_reentry_drop: When Flat after a sell, wait for a drop of
            buy_drop_pct below the exit price (with short SMA below long SMA)
            instead of buying unconditionally

    Returns:
        Decision with the action and the state to commit on success
    """
    if current_price <= 0:
        raise ValueError(f"current_price must be positive, got {current_price}")

    if not state.held:
        return _decide_from_flat(state, current_price, short_sma, long_sma,
                                 thresholds, require_reentry_drop)

    return _decide_from_holding(state, current_price, short_sma, long_sma, thresholds)


def _decide_from_flat(
    state: PositionState,
    current_price: float,
    short_sma: float,
    long_sma: float,
    thresholds: StrategyThresholds,
    require_reentry_drop: bool
) -> Decision:
    if state.never_traded:
        return Decision(
            action=TradeAction.BUY,
            next_state=state.with_buy(current_price),
            reason="bootstrap_buy",
        )

    if not require_reentry_drop:
        return Decision(
            action=TradeAction.BUY,
            next_state=state.with_buy(current_price),
            reason="reentry_bootstrap_buy",
        )

    reentry_price = thresholds.buy_price(state.last_exit_price)
    if current_price <= reentry_price and short_sma < long_sma:
        return Decision(
            action=TradeAction.BUY,
            next_state=state.with_buy(current_price),
            reason="reentry_drop_buy",
            trigger_price=reentry_price,
        )

    return Decision(
        action=TradeAction.HOLD,
        next_state=state,
        reason="awaiting_reentry_drop",
        trigger_price=reentry_price,
    )


def _decide_from_holding(
    state: PositionState,
    current_price: float,
    short_sma: float,
    long_sma: float,
    thresholds: StrategyThresholds
) -> Decision:
    buy_threshold = thresholds.buy_price(state.entry_price)
    sell_threshold = thresholds.sell_price(state.entry_price)

    if current_price <= buy_threshold and short_sma < long_sma:
        return Decision(
            action=TradeAction.BUY,
            next_state=state.with_buy(current_price),
            reason="average_down",
            trigger_price=buy_threshold,
        )

    if current_price >= sell_threshold and short_sma > long_sma:
        return Decision(
            action=TradeAction.SELL,
            next_state=state.with_sell(current_price),
            reason="take_profit",
            trigger_price=sell_threshold,
        )

    if current_price <= buy_threshold or current_price >= sell_threshold:
        reason = "price_threshold_without_trend_confirmation"
    else:
        reason = "within_thresholds"

    return Decision(
        action=TradeAction.HOLD,
        next_state=state,
        reason=reason,
    )
