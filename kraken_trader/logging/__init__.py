"""
Logging configuration and audit helpers for the trading agent.
"""
from .config import configure_logging, log_state_transition, log_trade_decision

__all__ = ["configure_logging", "log_state_transition", "log_trade_decision"]
