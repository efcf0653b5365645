"""Application Shell State.

Tracks which view is active and which user the application considers
authenticated. Navigation arrives through the EventBus; session
establishment is a direct call made by the login screen.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from onboard.shared.core import events
from onboard.client.navigation.navigator import LOGIN_ROUTE
from onboard.shared.core.event_bus import EventBus, EventPayload

logger = logging.getLogger(__name__)


class AppState:
    """State of the application shell.

    Subscribes to navigation events and keeps the current route and the
    route history. Screens never mutate the route directly; they go
    through the Navigator, which publishes on the bus.
    """

    def __init__(self, event_bus: EventBus, initial_route: str = LOGIN_ROUTE) -> None:
        """Initialize application state.

        Args:
            event_bus: The shared event bus
            initial_route: Route shown before any navigation happens
        """
        self.bus = event_bus
        self.current_route: str = initial_route
        self.current_params: Dict[str, str] = {}
        self.route_history: List[str] = [initial_route]
        self.authenticated_user: Optional[str] = None
        self._started = False

    async def initialize(self) -> None:
        """Bind to EventBus events. Safe to call more than once."""
        if self._started:
            return
        await self.bus.subscribe(events.TOPIC_NAV_NAVIGATE, self._handle_navigate)
        self._started = True

    @property
    def is_authenticated(self) -> bool:
        return self.authenticated_user is not None

    # --- Public Actions ---

    async def establish_session(self, username: str) -> None:
        """Mark the application as authenticated for ``username``."""
        self.authenticated_user = username
        logger.info(f"Session established for {username}")
        await self.bus.publish(
            events.TOPIC_SESSION_ESTABLISHED,
            events.create_session_established_event(username),
        )

    async def end_session(self) -> None:
        """Forget the authenticated user.

        The persisted token is left alone; removing it belongs to logout.
        """
        if self.authenticated_user is None:
            return
        username = self.authenticated_user
        self.authenticated_user = None
        await self.bus.publish(
            events.TOPIC_SESSION_ENDED,
            events.create_session_ended_event(username),
        )

    # --- Event Handlers ---

    async def _handle_navigate(self, payload: EventPayload) -> None:
        path = payload.get("path")
        if not path:
            logger.warning("Received nav.navigate event without a path")
            return
        params: Dict[str, Any] = payload.get("params") or {}
        self.current_route = str(path)
        self.current_params = {str(k): str(v) for k, v in params.items()}
        self.route_history.append(payload.get("href") or self.current_route)
        logger.debug(f"Route changed to {self.current_route}")
