"""Navigation between views."""

from .navigator import (
    HOME_ROUTE,
    LOGIN_ROUTE,
    SIGNUP_ROUTE,
    VERIFY_ROUTE,
    NavigationTarget,
    Navigator,
)

__all__ = ["HOME_ROUTE", "LOGIN_ROUTE", "SIGNUP_ROUTE", "VERIFY_ROUTE", "NavigationTarget", "Navigator"]
