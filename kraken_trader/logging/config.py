"""
Logging setup for the trading agent.

structlog renders every event; stdlib logging only routes the rendered line
to stdout so level filtering is configured in one place. Position
transitions and trade decisions go through dedicated helpers so they share
one audit format.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True
) -> None:
    """
    Configure structlog for the whole process.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: Emit one JSON object per line instead of console output
        include_timestamp: Prefix events with an ISO-8601 UTC timestamp
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        stream=sys.stdout,
        format="%(message)s",
        force=True
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_trade_logger(name: str) -> FilteringBoundLogger:
    """Logger bound for trade decision auditing."""
    return structlog.get_logger(name).bind(subsystem="trading", audit_trail=True)


def get_state_logger(name: str) -> FilteringBoundLogger:
    """Logger bound for position state transitions."""
    return structlog.get_logger(name).bind(subsystem="position_state", audit_trail=True)


def log_trade_decision(
    logger: FilteringBoundLogger,
    pair: str,
    action: str,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a trade decision with standardized format.

    Args:
        logger: Structlog logger instance
        pair: Trading pair the decision applies to
        action: Decided action (buy, sell, hold)
        reason: Why the state machine chose this action
        context: Additional context data (prices, thresholds, SMAs)
    """
    bound_logger = logger.bind(pair=pair, action=action, reason=reason)

    if context:
        bound_logger = bound_logger.bind(context=context)

    if action == "hold":
        bound_logger.debug("Trade decision")
    else:
        bound_logger.info("Trade decision")


def log_state_transition(
    logger: FilteringBoundLogger,
    pair: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a position state transition with standardized format.

    Args:
        logger: Structlog logger instance
        pair: Trading pair whose position changed
        from_state: Previous position state
        to_state: New position state
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        pair=pair,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Position state transition")
