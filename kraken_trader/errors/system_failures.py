"""
System failure error classifications for unrecoverable errors.

These exceptions represent failures that require intervention: bad
configuration or a corrupted position state machine.
"""

from typing import Any, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ConfigurationError(SystemFailureError):
    """Invalid configuration or credentials; aborts startup."""

    def __init__(self, message: str, field: Optional[str] = None,
                 errors: Optional[list[str]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.errors = errors or []


class StateTransitionError(SystemFailureError):
    """Invalid position state that would corrupt the state machine."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition
