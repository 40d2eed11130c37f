"""SMA (Simple Moving Average) calculation"""

from collections.abc import Sequence

import structlog

from ..errors import InsufficientDataError

logger = structlog.get_logger(__name__)


def simple_moving_average(closes: Sequence[float], period: int) -> float:
    """
    Calculate the Simple Moving Average of the most recent closes

    SMA = sum(last `period` closes) / period

    When fewer than `period` closes are available the partial sum is still
    divided by the full period, which biases the average towards zero until
    the history fills up.

    Args:
        closes: Closing prices in chronological order
        period: Number of most recent closes to average

    Returns:
        SMA value

    Raises:
        InsufficientDataError: If no closes are available
    """
    if period < 1:
        raise ValueError(f"SMA period must be positive, got {period}")

    if not closes:
        raise InsufficientDataError(
            "Cannot compute SMA without any bars",
            required_count=period,
            available_count=0
        )

    window = list(closes[-period:])
    if len(window) < period:
        logger.warning(
            "Degraded SMA over partial window",
            period=period,
            available=len(window)
        )

    return sum(window) / period
