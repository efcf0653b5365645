"""
Shared Core Module
==================

Event system, configuration, timers and the service registry.
"""

# Event System
from .event_bus import EventBus, EventPayload
from . import events

# Timers
from .scheduling import DelayedAction

# Service Registry
from .service_registry import (
    get_session_store,
    set_session_store,
    register_cleanup_handler,
)

# Configuration
from .configuration import (
    ConfigError,
    ConfigManager,
    SystemConfig,
    get_config_manager,
    get_config,
    ValidationLevel,
)

__all__ = [
    # Event System
    "EventBus",
    "EventPayload",
    "events",
    # Timers
    "DelayedAction",
    # Service Registry
    "get_session_store",
    "set_session_store",
    "register_cleanup_handler",
    # Configuration
    "ConfigError",
    "ConfigManager",
    "SystemConfig",
    "get_config_manager",
    "get_config",
    "ValidationLevel",
]
