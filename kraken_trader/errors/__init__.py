"""
Error classification for the trading agent.

This module provides the exception hierarchy for data quality problems,
unrecoverable system failures and exchange/transport failures encountered
while running trading cycles.
"""

from .data_quality import (
    DataQualityError,
    InsufficientDataError,
    MalformedDataError,
)
from .exchange import (
    ExchangeError,
    ExchangeRejection,
    TransportError,
)
from .system_failures import (
    ConfigurationError,
    StateTransitionError,
    SystemFailureError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "InsufficientDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
    "StateTransitionError",
    # Exchange Errors
    "ExchangeError",
    "TransportError",
    "ExchangeRejection",
]
