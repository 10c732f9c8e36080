class StudyAtlasException(Exception):
    """Base exception for the application."""


class NotFoundError(StudyAtlasException):
    """Requested row does not exist (or is not visible to the caller)."""


class ConflictError(StudyAtlasException):
    """Write would violate a uniqueness rule."""


class PermissionDeniedError(StudyAtlasException):
    """Caller does not own the row being mutated."""


class InvalidReferenceError(StudyAtlasException):
    """Diary item points at a course or lab that does not exist."""


class HistoryEmptyError(StudyAtlasException):
    """Nothing to undo or redo on a diary page."""


class GatewayException(StudyAtlasException):
    """Base exception for model gateway errors."""


class GatewayConnectionError(GatewayException):
    """Cannot reach the model gateway."""


class GatewayTimeoutError(GatewayException):
    """Model gateway did not answer in time."""


class GatewayRateLimitError(GatewayException):
    """Model gateway rejected the request with 429."""


class GatewayCreditsExhaustedError(GatewayException):
    """Model gateway rejected the request with 402."""
