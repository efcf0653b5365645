"""
Auth Interface - client for the remote authentication service.
"""

from onboard.shared.infrastructure.auth.base import (
    GENERIC_ERROR_MESSAGE,
    REGISTRATION_FAILED_MESSAGE,
    AuthServiceError,
    RejectedRequestError,
    TransportError,
    ResponseFormatError,
    RegistrationFailedError,
)
from onboard.shared.infrastructure.auth.models import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
    ErrorResponse,
)
from onboard.shared.infrastructure.auth.client import AuthServiceClient

__all__ = [
    # Errors
    "GENERIC_ERROR_MESSAGE",
    "REGISTRATION_FAILED_MESSAGE",
    "AuthServiceError",
    "RejectedRequestError",
    "TransportError",
    "ResponseFormatError",
    "RegistrationFailedError",
    # Models
    "LoginRequest",
    "LoginResponse",
    "SignupRequest",
    "SignupResponse",
    "ErrorResponse",
    # Client
    "AuthServiceClient",
]
