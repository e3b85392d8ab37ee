"""
SDK exceptions.

Everything except CallbackError propagates to the caller of the operation.
CallbackError is only ever built by the response dispatcher and logged.
"""
from typing import Any, Optional


class PayzenError(Exception):
    """Base exception for the SDK"""
    pass


class ConfigurationError(PayzenError):
    """Raised when credentials or endpoint settings are missing or unusable"""
    pass


class SessionTokenError(PayzenError):
    """Raised when the 3-D Secure MD token cannot be produced or read"""
    pass


class EncodingError(SessionTokenError):
    """Raised when a session cookie or request id cannot be packed into an MD"""
    pass


class MalformedTokenError(SessionTokenError):
    """Raised when an MD does not split back into a session cookie and a request id"""
    pass


class TransportError(PayzenError):
    """Raised when the remote call could not be completed"""

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code
        self.payload = payload


class CallbackError(PayzenError):
    """Wraps a failure raised by a caller-supplied response callback"""
    pass
