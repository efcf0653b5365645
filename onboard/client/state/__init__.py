"""Screen and shell state.

- AppState: current route and authenticated user
- Store: service locator for shared state
- FormState / NotificationState: per-screen state
"""

from .app_state import AppState
from .form_state import FormState
from .notification_state import NotificationState, Severity
from .store import Store

__all__ = ["AppState", "FormState", "NotificationState", "Severity", "Store"]
