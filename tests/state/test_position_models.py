"""Tests for position state data models."""

import pytest

from kraken_trader.errors import StateTransitionError
from kraken_trader.state.models import PositionState


class TestPositionState:
    """Test PositionState invariants and transitions."""

    def test_initial_state(self):
        """Test the process-start state is flat and never traded."""
        state = PositionState.flat()

        assert state.held is False
        assert state.entry_price is None
        assert state.last_exit_price is None
        assert state.never_traded is True
        assert state.label == "flat"

    def test_with_buy(self):
        """Test buying records the entry price."""
        state = PositionState.flat().with_buy(0.5)

        assert state.held is True
        assert state.entry_price == 0.5
        assert state.label == "holding@0.5"

    def test_average_down_overwrites_entry(self):
        """Test a second buy overwrites rather than averages the entry."""
        state = PositionState.flat().with_buy(0.5).with_buy(0.4)
        assert state.entry_price == 0.4

    def test_with_sell(self):
        """Test selling clears the entry and records the exit."""
        state = PositionState.flat().with_buy(0.5).with_sell(0.51)

        assert state.held is False
        assert state.entry_price is None
        assert state.last_exit_price == 0.51
        assert state.never_traded is False

    def test_sell_while_flat(self):
        """Test selling without a position is an invalid transition."""
        with pytest.raises(StateTransitionError) as exc_info:
            PositionState.flat().with_sell(0.5)

        assert exc_info.value.attempted_transition == "sell"

    @pytest.mark.parametrize("held,entry_price", [
        (True, None),
        (False, 0.5),
    ])
    def test_entry_price_iff_held(self, held, entry_price):
        """Test entry_price present exactly when held."""
        with pytest.raises(StateTransitionError):
            PositionState(held=held, entry_price=entry_price)

    def test_non_positive_entry(self):
        """Test a non-positive entry price is rejected."""
        with pytest.raises(StateTransitionError):
            PositionState(held=True, entry_price=0.0)

    def test_immutable(self):
        """Test states cannot be mutated in place."""
        state = PositionState.flat()
        with pytest.raises(AttributeError):
            state.held = True
