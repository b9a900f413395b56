# External package imports
from fastapi import HTTPException, status

# Local application imports
from ...exceptions import (
    MalformedResponseError,
    PPEMonitorError,
    QuotaExceededError,
    RateLimitedError,
    TransportFailure,
    ValidationFailure,
    get_user_message,
)


def http_error_for(exception: PPEMonitorError) -> HTTPException:
    """Map a PPE monitor error to the HTTP status the client sees"""
    if isinstance(exception, ValidationFailure):
        code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE if exception.too_large else status.HTTP_400_BAD_REQUEST
    elif isinstance(exception, RateLimitedError):
        code = status.HTTP_429_TOO_MANY_REQUESTS
    elif isinstance(exception, QuotaExceededError):
        code = status.HTTP_402_PAYMENT_REQUIRED
    elif isinstance(exception, (MalformedResponseError, TransportFailure)):
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=get_user_message(exception))
