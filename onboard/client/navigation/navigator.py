"""Navigation between views, immediate or after a delay."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional
from urllib.parse import urlencode

from onboard.shared.core import events
from onboard.shared.core.event_bus import EventBus
from onboard.shared.core.scheduling import DelayedAction, SleepFunc

logger = logging.getLogger(__name__)

HOME_ROUTE = "/"
LOGIN_ROUTE = "/login"
SIGNUP_ROUTE = "/signup"
VERIFY_ROUTE = "/otp"


@dataclass(frozen=True)
class NavigationTarget:
    """A route plus its query parameters."""

    path: str
    params: Mapping[str, str] = field(default_factory=dict)

    @property
    def href(self) -> str:
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode(dict(self.params), safe='@')}"


class Navigator:
    """Moves the application between views.

    Each navigation is recorded in ``history`` and broadcast on the bus as
    ``nav.navigate`` so the shell state can follow along.
    """

    def __init__(self, event_bus: EventBus, *, sleep: SleepFunc = asyncio.sleep) -> None:
        self.bus = event_bus
        self.history: List[NavigationTarget] = []
        self._sleep = sleep

    @property
    def current(self) -> Optional[NavigationTarget]:
        return self.history[-1] if self.history else None

    async def navigate(self, path: str, params: Optional[Mapping[str, str]] = None) -> NavigationTarget:
        target = NavigationTarget(path, dict(params or {}))
        self.history.append(target)
        logger.info(f"Navigating to {target.path}")
        await self.bus.publish(
            events.TOPIC_NAV_NAVIGATE,
            events.create_nav_event(target.path, target.params, target.href),
        )
        return target

    def navigate_later(
        self,
        delay_ms: int,
        path: str,
        params: Optional[Mapping[str, str]] = None,
        *,
        before: Optional[Callable[[], Any]] = None,
        name: str = "navigation",
    ) -> DelayedAction:
        """Schedule a navigation.

        Args:
            delay_ms: Delay before navigating, in milliseconds
            path: Target route
            params: Query parameters for the target route
            before: Optional callable (sync or async) run right before
                navigating, e.g. session establishment
            name: Label used in log lines

        Returns:
            The scheduled action; cancel it to drop the navigation
        """

        async def _go() -> None:
            if before is not None:
                result = before()
                if inspect.isawaitable(result):
                    await result
            await self.navigate(path, params)

        return DelayedAction.schedule(delay_ms, _go, name=name, sleep=self._sleep)
