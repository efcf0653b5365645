"""
Shared Infrastructure Module
=============================

Adapters for external systems (the authentication service).
"""

from onboard.shared.infrastructure.auth import (
    AuthServiceClient,
    AuthServiceError,
    RejectedRequestError,
    TransportError,
    ResponseFormatError,
    RegistrationFailedError,
)

__all__ = [
    "AuthServiceClient",
    "AuthServiceError",
    "RejectedRequestError",
    "TransportError",
    "ResponseFormatError",
    "RegistrationFailedError",
]
