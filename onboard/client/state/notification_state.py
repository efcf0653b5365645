"""Transient user feedback shown after each submission."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional

from onboard.shared.core.scheduling import DelayedAction, SleepFunc

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Notification tone."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class NotificationState:
    """Message, severity and visibility of a screen's notification.

    ``show`` always replaces whatever is visible, there is no queue.
    ``dismiss`` only hides; message and severity stay readable so a
    closing animation can still render the last content.
    """

    def __init__(
        self,
        auto_hide_ms: Optional[int] = None,
        *,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.visible = False
        self.message = ""
        self.severity = Severity.INFO
        self.auto_hide_ms = auto_hide_ms
        self.mounted = True
        self._sleep = sleep
        self._auto_hide: Optional[DelayedAction] = None

    def show(self, message: str, severity: Severity | str = Severity.INFO) -> None:
        if not self.mounted:
            logger.debug(f"Dropping notification on unmounted screen: {message!r}")
            return

        self._cancel_auto_hide()
        self.message = message
        self.severity = Severity(severity)
        self.visible = True
        self._schedule_auto_hide()

    def dismiss(self) -> None:
        """Hide the notification. Safe to call when already hidden."""
        self._cancel_auto_hide()
        if not self.mounted or not self.visible:
            return
        self.visible = False

    def unmount(self) -> None:
        self._cancel_auto_hide()
        self.mounted = False

    @property
    def auto_hide(self) -> Optional[DelayedAction]:
        """The pending auto-hide timer, if any."""
        return self._auto_hide

    def _schedule_auto_hide(self) -> None:
        if self.auto_hide_ms is None:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, notification will not auto-hide")
            return
        self._auto_hide = DelayedAction.schedule(
            self.auto_hide_ms,
            self.dismiss,
            name="notification.auto-hide",
            sleep=self._sleep,
        )

    def _cancel_auto_hide(self) -> None:
        if self._auto_hide is not None:
            self._auto_hide.cancel()
            self._auto_hide = None
