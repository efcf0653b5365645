"""
Async client for the remote authentication service.

Wraps ``httpx.AsyncClient`` and maps every outcome onto either a parsed
response model or one of the errors in ``auth.base``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from onboard.shared.core.configuration import ApiConfig
from onboard.shared.infrastructure.auth.base import (
    RejectedRequestError,
    ResponseFormatError,
    TransportError,
)
from onboard.shared.infrastructure.auth.models import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class AuthServiceClient:
    """Client for ``POST /login`` and ``POST /sign-up``."""

    DEFAULT_BASE_URL = "http://localhost:8000/api/v1"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 10.0,
        login_path: str = "/login",
        signup_path: str = "/sign-up",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Service root, e.g. ``http://localhost:8000/api/v1``
            timeout: Request timeout in seconds
            login_path: Path of the login endpoint, relative to base_url
            signup_path: Path of the registration endpoint, relative to base_url
            transport: Optional transport (tests pass ``httpx.MockTransport``)
            client: Optional preconfigured client; takes precedence over
                base_url, timeout and transport
        """
        self.base_url = base_url.rstrip("/")
        self.login_path = login_path
        self.signup_path = signup_path
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    @classmethod
    def from_config(
        cls,
        config: ApiConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AuthServiceClient":
        return cls(
            config.base_url,
            timeout=config.timeout,
            login_path=config.login_path,
            signup_path=config.signup_path,
            transport=transport,
        )

    async def __aenter__(self) -> "AuthServiceClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # --- Endpoints ---

    async def login(self, username: str, password: str) -> LoginResponse:
        """Authenticate a user.

        Raises:
            RejectedRequestError: Non-success status; ``detail`` holds the
                server's message when it sent one
            ResponseFormatError: Success status with an unexpected body
            TransportError: The request failed before a response arrived
        """
        body = LoginRequest(username=username, password=password)
        response = await self._post(self.login_path, body)

        if not response.is_success:
            raise RejectedRequestError(response.status_code, self._read_detail(response))

        return self._parse(response, LoginResponse)

    async def sign_up(self, request: SignupRequest) -> SignupResponse:
        """Register a new user.

        The body of a rejected registration is not read.

        Raises:
            RejectedRequestError: Non-success status
            ResponseFormatError: Success status with an unexpected body
            TransportError: The request failed before a response arrived
        """
        response = await self._post(self.signup_path, request)

        if not response.is_success:
            raise RejectedRequestError(response.status_code)

        return self._parse(response, SignupResponse)

    # --- Helpers ---

    async def _post(self, path: str, body: BaseModel) -> httpx.Response:
        logger.debug(f"POST {path}")
        try:
            response = await self._client.post(path, json=body.model_dump())
        except httpx.HTTPError as e:
            logger.warning(f"POST {path} failed: {e.__class__.__name__}: {e}")
            raise TransportError(str(e)) from e

        logger.info(f"POST {path} -> {response.status_code}")
        return response

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ResponseFormatError(
                f"Malformed response from authentication service ({response.status_code})"
            ) from e

    def _parse(self, response: httpx.Response, model: Type[ModelT]) -> ModelT:
        payload = self._json(response)
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Unexpected {model.__name__} body: {e.error_count()} error(s)")
            raise ResponseFormatError(
                f"Unexpected response from authentication service ({response.status_code})"
            ) from e

    def _read_detail(self, response: httpx.Response) -> Optional[str]:
        """Extract the ``detail`` string of an error body.

        Raises:
            ResponseFormatError: The error body is not JSON
        """
        payload = self._json(response)
        if not isinstance(payload, dict):
            return None
        return ErrorResponse.model_validate(payload).message
