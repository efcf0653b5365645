"""Global State Store - Service Locator Pattern.

Gives screens one place to reach the shell state, the session store and
the navigator without threading them through every constructor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .app_state import AppState
from onboard.shared.core.event_bus import EventBus

if TYPE_CHECKING:
    from onboard.client.navigation.navigator import Navigator
    from onboard.shared.domain.session.session_store import SessionStore


class Store:
    """Global state store for the onboarding client.

    Usage:
        # During app initialization
        Store.initialize(event_bus, session_store, navigator)

        # Anywhere else
        store = Store.get()
        store.app.is_authenticated
    """

    _instance: Optional['Store'] = None

    def __init__(
        self,
        event_bus: EventBus,
        session: 'SessionStore',
        navigator: 'Navigator',
    ) -> None:
        """Initialize store.

        Note: Do not call directly. Use Store.initialize() instead.

        Args:
            event_bus: The shared event bus instance
            session: Store that receives the token after login
            navigator: Navigator shared by all screens
        """
        self.bus = event_bus
        self.app = AppState(event_bus)
        self.session = session
        self.navigator = navigator

    @classmethod
    def initialize(
        cls,
        event_bus: EventBus,
        session: 'SessionStore',
        navigator: 'Navigator',
    ) -> 'Store':
        """Initialize the global store instance.

        Raises:
            RuntimeError: If store is already initialized
        """
        if cls._instance is not None:
            raise RuntimeError("Store already initialized!")

        cls._instance = cls(event_bus, session, navigator)
        return cls._instance

    @classmethod
    def get(cls) -> 'Store':
        """Get the global store instance.

        Raises:
            RuntimeError: If store has not been initialized
        """
        if cls._instance is None:
            raise RuntimeError("Store not initialized! Call Store.initialize() first.")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the store instance. Used by tests and on shutdown."""
        cls._instance = None
