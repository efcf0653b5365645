"""Error taxonomy for calls to the authentication service."""

from __future__ import annotations

from typing import Optional

GENERIC_ERROR_MESSAGE = "An error occurred. Please try again."
REGISTRATION_FAILED_MESSAGE = "Failed to register. Please try again."


class AuthServiceError(Exception):
    """Base class for failures of a single submission attempt."""

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE) -> None:
        super().__init__(message)
        self.message = message


class RejectedRequestError(AuthServiceError):
    """The service answered with a non-success status."""

    def __init__(self, status_code: int, detail: Optional[str] = None) -> None:
        super().__init__(detail or f"Request rejected with status {status_code}")
        self.status_code = status_code
        self.detail = detail


class TransportError(AuthServiceError):
    """The request never produced a usable response (network, timeout)."""


class ResponseFormatError(TransportError):
    """The response body was not the JSON shape the contract promises."""


class RegistrationFailedError(AuthServiceError):
    """Generic signup failure; the server's body is deliberately ignored."""

    def __init__(self, message: str = REGISTRATION_FAILED_MESSAGE) -> None:
        super().__init__(message)
