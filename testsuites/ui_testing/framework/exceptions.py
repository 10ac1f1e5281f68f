"""
================================================================================
UI Framework Exceptions
================================================================================

Error taxonomy shared by every layer of the UI framework.

Recoverable conditions (a stale handle on the first attempt, an ad overlay
that could not be closed, a slow page load) are absorbed inside the
framework. Everything raised from here reaches the test body as a failure.

================================================================================
"""

from typing import Any, Optional


class UIFrameworkError(Exception):
    """Base exception for all UI framework failures."""
    pass


class ConfigurationError(UIFrameworkError):
    """Raised when UI configuration is missing or invalid."""
    pass


class WaitTimeoutError(UIFrameworkError, TimeoutError):
    """
    Raised when a wait predicate never became truthy within the timeout.

    Attributes:
        elapsed: Seconds spent polling before giving up
        last_error: Last ignored exception raised by the predicate (if any)
        last_result: Last value returned by the predicate (if any)
    """

    def __init__(
        self,
        message: str,
        elapsed: float = 0.0,
        last_error: Optional[BaseException] = None,
        last_result: Any = None,
    ):
        super().__init__(message)
        self.elapsed = elapsed
        self.last_error = last_error
        self.last_result = last_result


class ElementNotFoundError(UIFrameworkError):
    """Raised when no DOM node matches an element reference."""
    pass


class FrameNotFoundError(ElementNotFoundError):
    """Raised when an iframe never became available for switching."""
    pass


class StaleReferenceError(UIFrameworkError):
    """Raised when a resolved handle no longer points at a live DOM node."""
    pass


class DialogNotPresentError(UIFrameworkError):
    """Raised when an expected native dialog never appeared."""
    pass


class OptionNotFoundError(UIFrameworkError):
    """Raised when no candidate matched the requested selection text."""
    pass


class InteractionError(UIFrameworkError):
    """Raised when both the native action and its script fallback failed."""
    pass


class FrameContextError(UIFrameworkError, RuntimeError):
    """Raised on unbalanced or nested frame switching (programming error)."""
    pass


class SessionOwnershipError(UIFrameworkError, RuntimeError):
    """Raised when a browser session is driven from a thread that does not own it."""
    pass


__all__ = [
    "UIFrameworkError",
    "ConfigurationError",
    "WaitTimeoutError",
    "ElementNotFoundError",
    "FrameNotFoundError",
    "StaleReferenceError",
    "DialogNotPresentError",
    "OptionNotFoundError",
    "InteractionError",
    "FrameContextError",
    "SessionOwnershipError",
]
