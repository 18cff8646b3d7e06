"""Session provider exceptions."""

from .base import UnexpectedError


class SessionProviderException(UnexpectedError):
    """Raised when the session provider returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="SESSION_PROVIDER_ERROR",
        )
        self.status_code = status_code


class SessionProviderTimeoutException(SessionProviderException):
    """Raised when the session provider times out."""

    def __init__(self):
        super().__init__(
            message="Session provider request timed out",
            status_code=None,
        )
        self.code = "SESSION_PROVIDER_TIMEOUT"
