"""
Position state data models.

This module defines the immutable position state that survives across
cycles and the decision record produced by the state machine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import StateTransitionError


class TradeAction(str, Enum):
    """Action decided for a cycle."""
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


@dataclass(frozen=True)
class PositionState:
    """Single-asset position: Flat or Holding(entry_price)."""

    held: bool = False
    entry_price: Optional[float] = None
    last_exit_price: Optional[float] = None          # Price of the most recent sell

    def __post_init__(self):
        if self.held != (self.entry_price is not None):
            raise StateTransitionError(
                "entry_price must be set exactly when a position is held",
                current_state=f"held={self.held}, entry_price={self.entry_price}"
            )
        if self.entry_price is not None and self.entry_price <= 0:
            raise StateTransitionError(
                f"entry_price must be positive, got {self.entry_price}",
                current_state=self.label
            )

    @classmethod
    def flat(cls) -> "PositionState":
        """Initial state at process start."""
        return cls()

    @property
    def never_traded(self) -> bool:
        """Flat with no entry or exit recorded in this process."""
        return not self.held and self.last_exit_price is None

    @property
    def label(self) -> str:
        if self.held:
            return f"holding@{self.entry_price}"
        return "flat"

    def with_buy(self, price: float) -> "PositionState":
        """Enter (or average down) at price; entry is overwritten, not averaged."""
        return PositionState(
            held=True,
            entry_price=price,
            last_exit_price=self.last_exit_price
        )

    def with_sell(self, price: float) -> "PositionState":
        """Close the position at price."""
        if not self.held:
            raise StateTransitionError(
                "Cannot sell without an open position",
                current_state=self.label,
                attempted_transition="sell"
            )
        return PositionState(held=False, entry_price=None, last_exit_price=price)


@dataclass(frozen=True)
class Decision:
    """State machine result for one cycle."""

    action: TradeAction
    next_state: PositionState
    reason: str
    trigger_price: Optional[float] = None            # Threshold price that gated the action
