import logging

from fastapi import HTTPException, status

from studyatlas.exceptions import (
    ConflictError,
    GatewayConnectionError,
    GatewayCreditsExhaustedError,
    GatewayException,
    GatewayRateLimitError,
    GatewayTimeoutError,
    HistoryEmptyError,
    InvalidReferenceError,
    NotFoundError,
    PermissionDeniedError,
    StudyAtlasException,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (HistoryEmptyError, status.HTTP_409_CONFLICT),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (InvalidReferenceError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (GatewayRateLimitError, status.HTTP_429_TOO_MANY_REQUESTS),
    (GatewayCreditsExhaustedError, status.HTTP_402_PAYMENT_REQUIRED),
    (GatewayTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (GatewayConnectionError, status.HTTP_502_BAD_GATEWAY),
    (GatewayException, status.HTTP_502_BAD_GATEWAY),
)


def http_error(e: StudyAtlasException) -> HTTPException:
    """Translate a domain exception into the HTTP error the client sees."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(e, error_type):
            if isinstance(e, GatewayException):
                logger.warning(f"Model gateway error ({status_code}): {e}")
            return HTTPException(status_code=status_code, detail=str(e))

    logger.error(f"Unmapped application error: {e}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
