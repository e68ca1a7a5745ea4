"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.

Dispatch failures are split into transport failures (the exchange never
completed) and HTTP status failures (the server answered with a non-2xx
status). Both propagate to the session driver, which decides whether to
continue (interactive shell) or exit non-zero (one-shot modes).
"""

from enum import Enum

UNREADABLE_BODY = "(could not read response body)"


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when settings or the credential store cannot be loaded or saved."""

    def __init__(self, message: str = "Configuration error") -> None:
        super().__init__(message, code="CFG_INVALID")


class InputError(ApplicationError):
    """Raised when command text cannot be read from a file or stdin."""

    def __init__(self, message: str = "Could not read input") -> None:
        super().__init__(message, code="IO_INPUT_ERROR")


class DispatchError(ApplicationError):
    """Base exception for a command that could not be dispatched successfully."""


class TransportFailure(str, Enum):
    """Cause category of a transport-level failure."""

    TIMEOUT = "timeout"
    CONNECT = "connect"
    BUILD = "build"
    OTHER = "other"


_TRANSPORT_MESSAGES = {
    TransportFailure.TIMEOUT: "Request timed out",
    TransportFailure.CONNECT: "Connection failed - check if the server is running and the URL is correct",
    TransportFailure.BUILD: "Request construction failed - check your URL and parameters",
    TransportFailure.OTHER: "Request failed",
}


class TransportError(DispatchError):
    """Raised when the request could not be completed."""

    def __init__(self, failure: TransportFailure, detail: str = "") -> None:
        self.failure = failure
        self.detail = detail
        message = _TRANSPORT_MESSAGES[failure]
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, code=f"NET_{failure.name}")


class HttpStatusError(DispatchError):
    """Raised when the server responds with a non-2xx status."""

    def __init__(self, status_code: int, body: str, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        status = f"{status_code} {reason}".strip()
        if body == UNREADABLE_BODY:
            message = f"Server returned error {status} {UNREADABLE_BODY}"
        else:
            message = f"Server returned error {status}: {body}"
        super().__init__(message, code=f"HTTP_{status_code}")
