"""
Tests for the authentication service client.

Run with:
    pytest onboard/shared/infrastructure/auth/client_test.py -v
"""

import httpx
import pytest

from onboard.shared.core.configuration import ApiConfig
from onboard.shared.infrastructure.auth.base import (
    RejectedRequestError,
    ResponseFormatError,
    TransportError,
)
from onboard.shared.infrastructure.auth.client import AuthServiceClient
from onboard.shared.infrastructure.auth.models import SignupRequest

SIGNUP = SignupRequest(
    firstname="Alice",
    lastname="Liddell",
    username="alice",
    email="user@example.com",
    phone="555-0100",
)


class TestLogin:
    """Tests for POST /login."""

    @pytest.mark.asyncio
    async def test_success_parses_token_and_user(self, auth_client, auth_service):
        auth_service.reply("/login", json={"access_token": "tok123", "user_id": "42"})

        response = await auth_client.login("alice", "Abcdef1!")

        assert response.access_token == "tok123"
        assert response.user_id == "42"

    @pytest.mark.asyncio
    async def test_sends_only_credentials(self, auth_client, auth_service):
        auth_service.reply("/login", json={"access_token": "t", "user_id": "1"})

        await auth_client.login("alice", "Abcdef1!")

        request = auth_service.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/v1/login"
        assert auth_service.bodies() == [{"username": "alice", "password": "Abcdef1!"}]

    @pytest.mark.asyncio
    async def test_numeric_user_id_is_coerced(self, auth_client, auth_service):
        auth_service.reply("/login", json={"access_token": "tok", "user_id": 42})

        response = await auth_client.login("alice", "Abcdef1!")

        assert response.user_id == "42"

    @pytest.mark.asyncio
    async def test_rejection_carries_detail(self, auth_client, auth_service):
        auth_service.reply("/login", status_code=401, json={"detail": "Invalid credentials"})

        with pytest.raises(RejectedRequestError) as exc_info:
            await auth_client.login("alice", "Wrong1pass!")

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_rejection_with_structured_detail(self, auth_client, auth_service):
        auth_service.reply("/login", status_code=422, json={"detail": [{"loc": ["body"], "msg": "bad"}]})

        with pytest.raises(RejectedRequestError) as exc_info:
            await auth_client.login("alice", "Abcdef1!")

        assert exc_info.value.detail is None

    @pytest.mark.asyncio
    async def test_rejection_with_non_json_body(self, auth_client, auth_service):
        auth_service.reply("/login", status_code=502, content=b"<html>Bad Gateway</html>")

        with pytest.raises(ResponseFormatError):
            await auth_client.login("alice", "Abcdef1!")

    @pytest.mark.asyncio
    async def test_success_missing_fields(self, auth_client, auth_service):
        auth_service.reply("/login", json={"token": "tok"})

        with pytest.raises(ResponseFormatError):
            await auth_client.login("alice", "Abcdef1!")

    @pytest.mark.asyncio
    async def test_network_failure(self, auth_client, auth_service):
        auth_service.fail("/login")

        with pytest.raises(TransportError) as exc_info:
            await auth_client.login("alice", "Abcdef1!")

        assert not isinstance(exc_info.value, ResponseFormatError)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestSignUp:
    """Tests for POST /sign-up."""

    @pytest.mark.asyncio
    async def test_success_with_message(self, auth_client, auth_service):
        auth_service.reply("/sign-up", json={"message": "Welcome!"})

        response = await auth_client.sign_up(SIGNUP)

        assert response.message == "Welcome!"
        assert auth_service.bodies() == [SIGNUP.model_dump()]

    @pytest.mark.asyncio
    async def test_success_without_message(self, auth_client, auth_service):
        auth_service.reply("/sign-up", json={})

        response = await auth_client.sign_up(SIGNUP)

        assert response.message is None

    @pytest.mark.asyncio
    async def test_rejection_ignores_body(self, auth_client, auth_service):
        auth_service.reply("/sign-up", status_code=400, content=b"not even json")

        with pytest.raises(RejectedRequestError) as exc_info:
            await auth_client.sign_up(SIGNUP)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail is None

    @pytest.mark.asyncio
    async def test_timeout_is_transport_failure(self, auth_client, auth_service):
        auth_service.fail("/sign-up", httpx.ReadTimeout, "timed out")

        with pytest.raises(TransportError, match="timed out"):
            await auth_client.sign_up(SIGNUP)


class TestClientConfig:
    """Tests for construction from configuration."""

    @pytest.mark.asyncio
    async def test_from_config_uses_paths(self, auth_service):
        config = ApiConfig(base_url="http://auth.test/api/v1/", login_path="/auth/login")
        auth_service.reply("/auth/login", json={"access_token": "t", "user_id": "1"})

        async with AuthServiceClient.from_config(config, transport=auth_service.transport) as client:
            await client.login("alice", "Abcdef1!")
            assert client.base_url == "http://auth.test/api/v1"

        assert auth_service.requests[0].url.path == "/api/v1/auth/login"

    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self, auth_service):
        http = httpx.AsyncClient(base_url="http://auth.test/api/v1", transport=auth_service.transport)
        client = AuthServiceClient(client=http)

        await client.aclose()

        assert not http.is_closed
        await http.aclose()
