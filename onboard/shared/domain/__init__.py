"""
Shared Domain Module
====================

Business rules of the onboarding flow.

Structure:
- validation: login and signup field rules
- session: session record persistence
"""

from onboard.shared.domain.validation import ValidationResult, validate_login, validate_signup
from onboard.shared.domain.session import (
    SessionRecord,
    SessionStore,
    MemorySessionStore,
    FileSessionStore,
    save_session,
    load_session,
)

__all__ = [
    # Validation
    "ValidationResult",
    "validate_login",
    "validate_signup",
    # Session
    "SessionRecord",
    "SessionStore",
    "MemorySessionStore",
    "FileSessionStore",
    "save_session",
    "load_session",
]
