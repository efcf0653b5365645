"""Validation rules for the login and signup forms."""

from .rules import (
    LOGIN_FIELDS,
    SIGNUP_FIELDS,
    ValidationResult,
    validate_login,
    validate_signup,
)

__all__ = ["LOGIN_FIELDS", "SIGNUP_FIELDS", "ValidationResult", "validate_login", "validate_signup"]
