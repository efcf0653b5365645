"""Login screen controller."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Mapping, Optional

from onboard.client.controllers.base_controller import FormController
from onboard.client.navigation.navigator import HOME_ROUTE, SIGNUP_ROUTE, Navigator
from onboard.client.state.notification_state import Severity
from onboard.shared.core import events
from onboard.shared.core.configuration import UIConfig
from onboard.shared.core.event_bus import EventBus
from onboard.shared.core.scheduling import SleepFunc
from onboard.shared.domain.session.session_store import SessionRecord, SessionStore, save_session
from onboard.shared.domain.validation.rules import LOGIN_FIELDS, ValidationResult, validate_login
from onboard.shared.infrastructure.auth.base import (
    GENERIC_ERROR_MESSAGE,
    RejectedRequestError,
    TransportError,
)
from onboard.shared.infrastructure.auth.client import AuthServiceClient

logger = logging.getLogger(__name__)

LOGIN_SUCCESS_MESSAGE = "Login successful!"

SessionCallback = Callable[[str], Any]


class LoginController(FormController):
    """Validates credentials, logs in, stores the session and goes home.

    Submission is single-flight: while ``loading`` is set further
    ``submit`` calls return immediately, and ``loading`` is released on
    every exit path.
    """

    SCREEN = "login"
    FIELDS = LOGIN_FIELDS

    def __init__(
        self,
        client: AuthServiceClient,
        navigator: Navigator,
        session_store: SessionStore,
        event_bus: EventBus,
        *,
        on_session_established: Optional[SessionCallback] = None,
        home_route: str = HOME_ROUTE,
        redirect_delay_ms: int = 1000,
        auto_hide_ms: Optional[int] = 3000,
        cancel_redirect_on_unmount: bool = True,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        super().__init__(
            client,
            navigator,
            event_bus,
            redirect_delay_ms=redirect_delay_ms,
            auto_hide_ms=auto_hide_ms,
            cancel_redirect_on_unmount=cancel_redirect_on_unmount,
            sleep=sleep,
        )
        self.session_store = session_store
        self.on_session_established = on_session_established
        self.home_route = home_route
        self.loading = False

    @classmethod
    def from_config(
        cls,
        config: UIConfig,
        client: AuthServiceClient,
        navigator: Navigator,
        session_store: SessionStore,
        event_bus: EventBus,
        *,
        on_session_established: Optional[SessionCallback] = None,
    ) -> "LoginController":
        return cls(
            client,
            navigator,
            session_store,
            event_bus,
            on_session_established=on_session_established,
            home_route=config.home_route,
            redirect_delay_ms=config.login_redirect_delay_ms,
            auto_hide_ms=config.login_notification_auto_hide_ms,
            cancel_redirect_on_unmount=config.cancel_redirect_on_unmount,
        )

    def validate(self, values: Mapping[str, str]) -> ValidationResult:
        return validate_login(values)

    async def submit(self) -> None:
        if self.loading:
            logger.debug("login: submission already in flight, ignoring")
            return

        if not await self._check_form():
            return

        username = self.form.values["username"]
        password = self.form.values["password"]

        self.loading = True
        outcome = "failed"
        await self._publish_submission(events.TOPIC_SUBMISSION_START, "pending")
        try:
            response = await self.client.login(username, password)

            record = SessionRecord(token=response.access_token, user_id=response.user_id)
            save_session(self.session_store, record)
            await self.bus.publish(
                events.TOPIC_SESSION_STORED,
                events.create_session_stored_event(record.user_id),
            )

            await self._notify(LOGIN_SUCCESS_MESSAGE, Severity.SUCCESS)
            self._schedule_redirect(
                self.home_route,
                before=lambda: self._establish_session(username),
            )
            outcome = "success"

        except RejectedRequestError as exc:
            logger.info(f"login: rejected with status {exc.status_code}")
            await self._notify(exc.detail or GENERIC_ERROR_MESSAGE, Severity.ERROR)
            outcome = "rejected"

        except TransportError as exc:
            logger.warning(f"login: transport failure: {exc}")
            await self._notify(GENERIC_ERROR_MESSAGE, Severity.ERROR)

        except OSError as exc:
            logger.error(f"login: could not store session: {exc}")
            await self._notify(GENERIC_ERROR_MESSAGE, Severity.ERROR)

        finally:
            self.loading = False
            await self._publish_submission(events.TOPIC_SUBMISSION_END, outcome)

    async def _establish_session(self, username: str) -> None:
        if self.on_session_established is None:
            return
        result = self.on_session_established(username)
        if inspect.isawaitable(result):
            await result

    async def go_to_signup(self) -> None:
        await self._go_to(SIGNUP_ROUTE)
