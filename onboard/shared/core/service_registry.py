"""Service registry for cross-module access to initialized services."""

from __future__ import annotations

import atexit
import logging
from typing import Optional, TYPE_CHECKING, List, Callable

if TYPE_CHECKING:
    from onboard.shared.domain.session.session_store import SessionStore

logger = logging.getLogger(__name__)

# Global reference to the session store the rest of the application reads
_session_store: Optional["SessionStore"] = None

# Global cleanup management
_cleanup_registered = False
_cleanup_handlers: List[Callable[[], None]] = []


def set_session_store(store: Optional["SessionStore"]) -> None:
    """Set the global session store instance."""
    global _session_store
    _session_store = store


def get_session_store() -> Optional["SessionStore"]:
    """Get the global session store instance."""
    return _session_store


def register_cleanup_handler(handler: Callable[[], None]) -> None:
    """Register a cleanup handler to be called on application exit."""
    global _cleanup_registered
    _cleanup_handlers.append(handler)
    if not _cleanup_registered:
        atexit.register(run_cleanup_handlers)
        _cleanup_registered = True
        logger.debug("Registered atexit cleanup handler")


def run_cleanup_handlers() -> None:
    """Run and clear all registered handlers."""
    logger.info("Running application cleanup...")
    while _cleanup_handlers:
        handler = _cleanup_handlers.pop()
        try:
            handler()
        except Exception as e:
            logger.warning(f"Error in cleanup handler: {e}")
    logger.info("Application cleanup completed")
