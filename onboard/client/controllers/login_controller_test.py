"""
Tests for the login screen controller.

Run with:
    pytest onboard/client/controllers/login_controller_test.py -v
"""

import asyncio
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from onboard.client.controllers.login_controller import LOGIN_SUCCESS_MESSAGE, LoginController
from onboard.client.navigation.navigator import HOME_ROUTE, SIGNUP_ROUTE, Navigator
from onboard.client.state.notification_state import Severity
from onboard.shared.core import events
from onboard.shared.core.configuration import UIConfig
from onboard.shared.domain.session.session_store import FileSessionStore, load_session
from onboard.shared.infrastructure.auth.base import GENERIC_ERROR_MESSAGE

TOKEN_RESPONSE = {"access_token": "tok123", "user_id": "42"}


@pytest.fixture
def established():
    return AsyncMock()


@pytest.fixture
def controller(auth_client, navigator, session_store, event_bus, established):
    controller = LoginController(
        auth_client,
        navigator,
        session_store,
        event_bus,
        on_session_established=established,
    )
    yield controller
    controller.unmount()


def fill(controller, username="alice", password="Abcdef1!"):
    controller.handle_change("username", username)
    controller.handle_change("password", password)


class TestLoginValidation:
    """Tests for the validation gate before any request."""

    @pytest.mark.asyncio
    async def test_blank_username_never_reaches_service(self, controller, auth_service):
        fill(controller, username="   ")

        await controller.submit()

        assert controller.form.errors["username"] == "Username is required."
        assert auth_service.requests == []
        assert controller.loading is False
        assert controller.notification.visible is False

    @pytest.mark.asyncio
    async def test_weak_password_never_reaches_service(self, controller, auth_service):
        fill(controller, password="NoSymbol123")

        await controller.submit()

        assert controller.form.errors["password"].startswith("Password must include")
        assert auth_service.requests == []

    @pytest.mark.asyncio
    async def test_invalid_form_is_published(self, controller, event_bus):
        seen = []

        async def on_invalid(payload):
            seen.append(payload)

        await event_bus.subscribe(events.TOPIC_FORM_INVALID, on_invalid)
        await controller.submit()
        await event_bus.wait_until_idle()

        assert seen == [{"screen": "login", "fields": ["password", "username"]}]

    @pytest.mark.asyncio
    async def test_editing_clears_error_before_resubmitting(self, controller):
        await controller.submit()
        controller.handle_change("username", "a")

        assert controller.form.errors["username"] is None
        assert controller.form.errors["password"] == "Password is required."


class TestLoginSuccess:
    """Tests for the successful login scenario."""

    @pytest.mark.asyncio
    async def test_stores_session_and_redirects_home(
        self, controller, auth_service, session_store, navigator, established, fake_sleep
    ):
        auth_service.reply("/login", json=TOKEN_RESPONSE)
        fill(controller)

        await controller.submit()

        assert session_store.snapshot() == {"authToken": "tok123", "user_id": "42"}
        assert load_session(session_store).token == "tok123"
        assert controller.notification.visible
        assert controller.notification.severity is Severity.SUCCESS
        assert controller.notification.message == LOGIN_SUCCESS_MESSAGE
        assert navigator.history == []

        await controller.redirect.wait()

        assert fake_sleep.calls == [1.0]
        assert [target.path for target in navigator.history] == [HOME_ROUTE]
        established.assert_awaited_once_with("alice")

    @pytest.mark.asyncio
    async def test_session_established_before_navigation(self, controller, auth_service, navigator, established):
        history_at_call = []
        established.side_effect = lambda username: history_at_call.append(list(navigator.history))
        auth_service.reply("/login", json=TOKEN_RESPONSE)
        fill(controller)

        await controller.submit()
        await controller.redirect.wait()

        assert history_at_call == [[]]
        assert len(navigator.history) == 1

    @pytest.mark.asyncio
    async def test_sync_session_callback(self, auth_client, navigator, session_store, event_bus, auth_service):
        calls = []
        controller = LoginController(
            auth_client, navigator, session_store, event_bus, on_session_established=calls.append
        )
        auth_service.reply("/login", json=TOKEN_RESPONSE)
        fill(controller)

        await controller.submit()
        await controller.redirect.wait()

        assert calls == ["alice"]
        controller.unmount()

    @pytest.mark.asyncio
    async def test_only_credentials_are_sent(self, controller, auth_service):
        auth_service.reply("/login", json=TOKEN_RESPONSE)
        fill(controller)

        await controller.submit()

        assert auth_service.bodies() == [{"username": "alice", "password": "Abcdef1!"}]

    @pytest.mark.asyncio
    async def test_lifecycle_events(self, controller, auth_service, event_bus):
        seen = []

        async def record(payload):
            seen.append(payload)

        for topic in (events.TOPIC_SUBMISSION_START, events.TOPIC_SESSION_STORED, events.TOPIC_SUBMISSION_END):
            await event_bus.subscribe(topic, record)
        auth_service.reply("/login", json=TOKEN_RESPONSE)
        fill(controller)

        await controller.submit()
        await event_bus.wait_until_idle()

        assert {"screen": "login", "outcome": "pending"} in seen
        assert {"user_id": "42"} in seen
        assert {"screen": "login", "outcome": "success"} in seen
        assert all("tok123" not in str(payload) for payload in seen)


class TestLoginFailure:
    """Tests for rejected and failed logins."""

    @pytest.mark.asyncio
    async def test_bad_credentials_show_server_detail(self, controller, auth_service, session_store, navigator):
        auth_service.reply("/login", status_code=401, json={"detail": "Invalid credentials"})
        fill(controller)

        await controller.submit()

        assert controller.notification.visible
        assert controller.notification.message == "Invalid credentials"
        assert controller.notification.severity is Severity.ERROR
        assert session_store.snapshot() == {}
        assert controller.redirect is None
        assert navigator.history == []
        assert controller.loading is False

    @pytest.mark.asyncio
    async def test_rejection_without_detail_uses_generic_message(self, controller, auth_service):
        auth_service.reply("/login", status_code=500, json={})
        fill(controller)

        await controller.submit()

        assert controller.notification.message == GENERIC_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_network_failure_shows_generic_message(self, controller, auth_service, session_store):
        auth_service.fail("/login")
        fill(controller)

        await controller.submit()

        assert controller.notification.message == GENERIC_ERROR_MESSAGE
        assert controller.notification.severity is Severity.ERROR
        assert session_store.snapshot() == {}
        assert controller.loading is False

    @pytest.mark.asyncio
    async def test_malformed_success_body_is_a_failure(self, controller, auth_service, session_store):
        auth_service.reply("/login", content=b"OK")
        fill(controller)

        await controller.submit()

        assert controller.notification.message == GENERIC_ERROR_MESSAGE
        assert session_store.snapshot() == {}
        assert controller.redirect is None

    @pytest.mark.asyncio
    async def test_user_can_retry_after_failure(self, controller, auth_service, session_store):
        auth_service.reply("/login", status_code=401, json={"detail": "Invalid credentials"})
        fill(controller)
        await controller.submit()

        auth_service.reply("/login", json=TOKEN_RESPONSE)
        await controller.submit()

        assert controller.notification.severity is Severity.SUCCESS
        assert load_session(session_store) is not None

    @pytest.mark.asyncio
    async def test_session_write_failure_shows_generic_message(
        self, auth_client, navigator, event_bus, auth_service, tmp_path
    ):
        path = tmp_path / "session.json"
        path.mkdir()
        store = FileSessionStore(path)
        controller = LoginController(auth_client, navigator, store, event_bus)
        auth_service.reply("/login", json=TOKEN_RESPONSE)
        fill(controller)

        await controller.submit()

        assert controller.notification.visible
        assert controller.notification.message == GENERIC_ERROR_MESSAGE
        assert controller.notification.severity is Severity.ERROR
        assert load_session(store) is None
        assert controller.redirect is None
        assert navigator.history == []
        assert controller.loading is False
        controller.unmount()


class TestLoadingFlag:
    """Tests for single-flight submission."""

    @pytest.mark.asyncio
    async def test_loading_is_set_during_request(self, controller, auth_service):
        seen = []

        def handler(request):
            seen.append(controller.loading)
            return httpx.Response(200, json=TOKEN_RESPONSE)

        auth_service.routes["/login"] = handler
        fill(controller)

        await controller.submit()

        assert seen == [True]
        assert controller.loading is False

    @pytest.mark.asyncio
    async def test_resubmission_while_loading_is_ignored(self, controller, auth_service):
        release = asyncio.Event()

        async def slow(request):
            await release.wait()
            return httpx.Response(200, json=TOKEN_RESPONSE)

        auth_service.routes["/login"] = slow
        fill(controller)

        first = asyncio.create_task(controller.submit())
        while not controller.loading:
            await asyncio.sleep(0)

        await controller.submit()
        release.set()
        await first

        assert len(auth_service.requests) == 1
        assert controller.loading is False

    @pytest.mark.asyncio
    async def test_unexpected_error_still_releases_loading(self, controller):
        fill(controller)

        with patch.object(controller.client, "login", AsyncMock(side_effect=RuntimeError("bug"))):
            with pytest.raises(RuntimeError):
                await controller.submit()

        assert controller.loading is False


class TestUnmount:
    """Tests for responses arriving after the screen is gone."""

    @pytest.mark.asyncio
    async def test_late_response_does_not_touch_screen_state(self, controller, auth_service, session_store, navigator):
        release = asyncio.Event()

        async def slow(request):
            await release.wait()
            return httpx.Response(200, json=TOKEN_RESPONSE)

        auth_service.routes["/login"] = slow
        fill(controller)

        pending = asyncio.create_task(controller.submit())
        while not controller.loading:
            await asyncio.sleep(0)
        controller.unmount()
        release.set()
        await pending

        assert controller.notification.visible is False
        assert controller.redirect is None
        assert navigator.history == []
        # The session store outlives the screen
        assert load_session(session_store) is not None

    @pytest.mark.asyncio
    async def test_unmount_cancels_pending_redirect(self, auth_client, session_store, event_bus, auth_service):
        navigator = Navigator(event_bus)
        controller = LoginController(auth_client, navigator, session_store, event_bus)
        auth_service.reply("/login", json=TOKEN_RESPONSE)
        fill(controller)

        await controller.submit()
        controller.unmount()
        await controller.redirect.wait()

        assert controller.redirect.cancelled
        assert navigator.history == []

    @pytest.mark.asyncio
    async def test_redirect_survives_unmount_when_configured(
        self, auth_client, navigator, session_store, event_bus, auth_service
    ):
        controller = LoginController(
            auth_client, navigator, session_store, event_bus, cancel_redirect_on_unmount=False
        )
        auth_service.reply("/login", json=TOKEN_RESPONSE)
        fill(controller)

        await controller.submit()
        controller.unmount()
        await controller.redirect.wait()

        assert [target.path for target in navigator.history] == [HOME_ROUTE]


class TestLoginNavigation:
    """Tests for links and configuration."""

    @pytest.mark.asyncio
    async def test_go_to_signup(self, controller, navigator):
        await controller.go_to_signup()
        assert navigator.current.path == SIGNUP_ROUTE

    @pytest.mark.asyncio
    async def test_from_config(self, auth_client, navigator, session_store, event_bus):
        config = UIConfig(login_redirect_delay_ms=250, login_notification_auto_hide_ms=None, home_route="/dashboard")

        controller = LoginController.from_config(config, auth_client, navigator, session_store, event_bus)

        assert controller.redirect_delay_ms == 250
        assert controller.home_route == "/dashboard"
        assert controller.notification.auto_hide_ms is None
