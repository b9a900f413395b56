"""
Custom exception hierarchy for the PPE monitor.

Used by the vision gateway client, the persistence use cases and the API
controllers. Every error carries a user-facing message so the capture loop
and the HTTP layer can turn any failure into a notification without
exposing internals.
"""

# -----------------------------------------------------------------------------
# Standard library
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional


# -----------------------------------------------------------------------------
# Base
# -----------------------------------------------------------------------------


class PPEMonitorError(Exception):
    """Base exception for all PPE monitor errors."""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.user_message = user_message or "An error occurred. Please try again."
        self.details = details or {}


# -----------------------------------------------------------------------------
# Model output
# -----------------------------------------------------------------------------


class MalformedResponseError(PPEMonitorError):
    """Raised when the vision model output cannot be parsed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            user_message="The vision model returned an unreadable answer.",
            **kwargs,
        )


# -----------------------------------------------------------------------------
# Transport
# -----------------------------------------------------------------------------


class TransportFailure(PPEMonitorError):
    """Raised when a network, storage or database call fails."""

    def __init__(
        self,
        message: str,
        service_name: Optional[str] = None,
        user_message: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(
            message,
            user_message=user_message or "Remote storage is unavailable. Working offline.",
            **kwargs,
        )
        self.service_name = service_name


class VisionGatewayError(TransportFailure):
    """Raised when the vision gateway fails or answers with a server error."""

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        super().__init__(
            message,
            service_name="VisionGateway",
            user_message="The vision service failed. Please try again.",
            **kwargs,
        )
        self.status_code = status_code


class RateLimitedError(PPEMonitorError):
    """Raised when the vision gateway answers HTTP 429."""

    def __init__(self, message: str = "Vision gateway rate limit exceeded", **kwargs):
        super().__init__(
            message,
            user_message="Rate limits exceeded, please try again later.",
            **kwargs,
        )


class QuotaExceededError(PPEMonitorError):
    """Raised when the vision gateway answers HTTP 402."""

    def __init__(self, message: str = "Vision gateway quota exhausted", **kwargs):
        super().__init__(
            message,
            user_message="Vision credits exhausted, please add funds to the workspace.",
            **kwargs,
        )


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------


class ValidationFailure(PPEMonitorError):
    """Raised when an input is rejected before any network call."""

    def __init__(self, message: str, too_large: bool = False, **kwargs):
        super().__init__(
            message,
            user_message=message,
            **kwargs,
        )
        self.too_large = too_large


class InvalidSyncTransitionError(PPEMonitorError):
    """Raised when a capture is moved to a state it cannot reach."""
    pass


# -----------------------------------------------------------------------------
# Safe user-facing message
# -----------------------------------------------------------------------------

def get_user_message(exc: BaseException) -> str:
    """
    Return a safe, user-facing message for any exception.
    Use this at API/use-case boundaries so internal details are never exposed.
    """
    if isinstance(exc, PPEMonitorError) and getattr(exc, "user_message", None):
        return exc.user_message
    return "Something went wrong. Please try again."
