"""Signup screen controller."""

from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Optional

from onboard.client.controllers.base_controller import FormController
from onboard.client.navigation.navigator import LOGIN_ROUTE, VERIFY_ROUTE, Navigator
from onboard.client.state.notification_state import Severity
from onboard.shared.core import events
from onboard.shared.core.configuration import UIConfig
from onboard.shared.core.event_bus import EventBus
from onboard.shared.core.scheduling import SleepFunc
from onboard.shared.domain.validation.rules import SIGNUP_FIELDS, ValidationResult, validate_signup
from onboard.shared.infrastructure.auth.base import (
    GENERIC_ERROR_MESSAGE,
    AuthServiceError,
    RegistrationFailedError,
    RejectedRequestError,
)
from onboard.shared.infrastructure.auth.client import AuthServiceClient
from onboard.shared.infrastructure.auth.models import SignupRequest

logger = logging.getLogger(__name__)

SIGNUP_SUCCESS_MESSAGE = "Registration successful!"


class SignupController(FormController):
    """Registers a user and hands off to the verification view.

    There is no busy flag here: submissions may overlap and whichever
    response resolves last decides the notification. No session is
    created; the verification step owns that.
    """

    SCREEN = "signup"
    FIELDS = SIGNUP_FIELDS

    def __init__(
        self,
        client: AuthServiceClient,
        navigator: Navigator,
        event_bus: EventBus,
        *,
        redirect_delay_ms: int = 1500,
        auto_hide_ms: Optional[int] = None,
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

    @classmethod
    def from_config(
        cls,
        config: UIConfig,
        client: AuthServiceClient,
        navigator: Navigator,
        event_bus: EventBus,
    ) -> "SignupController":
        return cls(
            client,
            navigator,
            event_bus,
            redirect_delay_ms=config.signup_redirect_delay_ms,
            auto_hide_ms=config.signup_notification_auto_hide_ms,
            cancel_redirect_on_unmount=config.cancel_redirect_on_unmount,
        )

    def validate(self, values: Mapping[str, str]) -> ValidationResult:
        return validate_signup(values)

    async def submit(self) -> None:
        if not await self._check_form():
            return

        payload = self.form.payload()
        email = payload["email"]

        outcome = "failed"
        await self._publish_submission(events.TOPIC_SUBMISSION_START, "pending")
        try:
            try:
                response = await self.client.sign_up(SignupRequest(**payload))
            except RejectedRequestError as exc:
                logger.info(f"signup: rejected with status {exc.status_code}")
                outcome = "rejected"
                raise RegistrationFailedError() from exc

            await self._notify(response.message or SIGNUP_SUCCESS_MESSAGE, Severity.SUCCESS)
            self._schedule_redirect(VERIFY_ROUTE, {"email": email})
            outcome = "success"

        except AuthServiceError as exc:
            if outcome != "rejected":
                logger.warning(f"signup: {exc.__class__.__name__}: {exc}")
            await self._notify(exc.message or GENERIC_ERROR_MESSAGE, Severity.ERROR)

        finally:
            await self._publish_submission(events.TOPIC_SUBMISSION_END, outcome)

    async def go_to_login(self) -> None:
        await self._go_to(LOGIN_ROUTE)
