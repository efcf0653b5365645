"""Pieces shared by the login and signup screens."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, ClassVar, Mapping, Optional, Sequence

from onboard.client.navigation.navigator import Navigator
from onboard.client.state.form_state import FormState
from onboard.client.state.notification_state import NotificationState, Severity
from onboard.shared.core import events
from onboard.shared.core.event_bus import EventBus
from onboard.shared.core.scheduling import DelayedAction, SleepFunc
from onboard.shared.domain.validation.rules import ValidationResult
from onboard.shared.infrastructure.auth.client import AuthServiceClient

logger = logging.getLogger(__name__)


class FormController:
    """Owns one screen's form and notification state.

    Subclasses set ``SCREEN`` and ``FIELDS``, implement :meth:`validate`
    and :meth:`submit`.
    """

    SCREEN: ClassVar[str] = "form"
    FIELDS: ClassVar[Sequence[str]] = ()

    def __init__(
        self,
        client: AuthServiceClient,
        navigator: Navigator,
        event_bus: EventBus,
        *,
        redirect_delay_ms: int,
        auto_hide_ms: Optional[int] = None,
        cancel_redirect_on_unmount: bool = True,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.client = client
        self.navigator = navigator
        self.bus = event_bus
        self.redirect_delay_ms = redirect_delay_ms
        self.cancel_redirect_on_unmount = cancel_redirect_on_unmount

        self.form = FormState(self.FIELDS)
        self.notification = NotificationState(auto_hide_ms, sleep=sleep)
        self.redirect: Optional[DelayedAction] = None

    @property
    def mounted(self) -> bool:
        return self.form.mounted

    # --- User Input ---

    def handle_change(self, name: str, value: str) -> None:
        """Store a field edit; the field's error disappears immediately."""
        self.form.set_value(name, value)

    def dismiss_notification(self) -> None:
        self.notification.dismiss()

    def validate(self, values: Mapping[str, str]) -> ValidationResult:
        raise NotImplementedError

    async def submit(self) -> None:
        raise NotImplementedError

    def unmount(self) -> None:
        """Tear the screen down.

        Responses that arrive afterwards no longer touch the form or the
        notification. A pending redirect is dropped when
        ``cancel_redirect_on_unmount`` is set.
        """
        logger.debug(f"{self.SCREEN}: unmounting")
        self.form.unmount()
        self.notification.unmount()
        if self.redirect is not None and self.cancel_redirect_on_unmount:
            self.redirect.cancel()

    # --- Submission Helpers ---

    async def _check_form(self) -> bool:
        """Run validation and show inline errors. Returns True if valid."""
        result = self.validate(self.form.values)
        if result.is_valid:
            return True

        self.form.apply_validation(result)
        logger.debug(f"{self.SCREEN}: invalid fields {sorted(result.errors)}")
        await self.bus.publish(
            events.TOPIC_FORM_INVALID,
            events.create_form_invalid_event(self.SCREEN, result.errors),
        )
        return False

    async def _notify(self, message: str, severity: Severity) -> None:
        self.notification.show(message, severity)
        if not self.notification.mounted:
            return
        await self.bus.publish(
            events.TOPIC_NOTIFICATION_SHOWN,
            events.create_notification_event(message, severity.value, self.SCREEN),
        )

    async def _publish_submission(self, topic: str, outcome: str) -> None:
        await self.bus.publish(topic, events.create_submission_event(self.SCREEN, outcome))

    def _schedule_redirect(
        self,
        path: str,
        params: Optional[Mapping[str, str]] = None,
        *,
        before: Optional[Callable[[], Any]] = None,
    ) -> Optional[DelayedAction]:
        if not self.mounted and self.cancel_redirect_on_unmount:
            logger.info(f"{self.SCREEN}: screen gone, skipping redirect to {path}")
            return None

        # At most one redirect is pending per screen
        if self.redirect is not None:
            self.redirect.cancel()
        self.redirect = self.navigator.navigate_later(
            self.redirect_delay_ms,
            path,
            params,
            before=before,
            name=f"{self.SCREEN}.redirect",
        )
        return self.redirect

    async def _go_to(self, path: str) -> None:
        await self.navigator.navigate(path)
