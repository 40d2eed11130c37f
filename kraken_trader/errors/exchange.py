"""
Exchange and transport error classifications.

Both are recoverable per cycle: the orchestrator logs them and retries on
the next scheduled tick without committing any position change.
"""

from typing import Any, Optional


class ExchangeError(Exception):
    """Base class for failures talking to the exchange."""

    def __init__(self, message: str, endpoint: Optional[str] = None,
                 context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.context = context or {}
        self.recoverable = True


class TransportError(ExchangeError):
    """HTTP or network level failure (including timeouts)."""

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code


class ExchangeRejection(ExchangeError):
    """Exchange answered with a non-empty ``error`` array."""

    def __init__(self, message: str, errors: Optional[list[str]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
