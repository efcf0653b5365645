"""Session persistence."""

from .session_store import (
    TOKEN_KEY,
    USER_ID_KEY,
    FileSessionStore,
    MemorySessionStore,
    SessionRecord,
    SessionStore,
    create_session_store,
    load_session,
    save_session,
)

__all__ = [
    "TOKEN_KEY",
    "USER_ID_KEY",
    "FileSessionStore",
    "MemorySessionStore",
    "SessionRecord",
    "SessionStore",
    "create_session_store",
    "load_session",
    "save_session",
]
