"""Field validation rules for the login and signup forms.

Every function here is pure: it reads a mapping of raw field values and
returns an immutable :class:`ValidationResult`. Nothing is mutated, the
controller decides what to do with the result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

# Lowercase, uppercase, digit, symbol, at least 8 characters.
# ASCII classes: only 0-9 count as digits and any non-ASCII letter is a symbol
PASSWORD_PATTERN = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[\W_]).{8,}", re.ASCII)
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

USERNAME_REQUIRED = "Username is required."
PASSWORD_REQUIRED = "Password is required."
PASSWORD_TOO_WEAK = (
    "Password must include a mix of a-z, A-Z, 0-9, special characters, "
    "and be at least 8 characters long."
)
EMAIL_REQUIRED = "Email is required."
EMAIL_INVALID = "Invalid email format."

LOGIN_FIELDS = ("username", "password")
SIGNUP_FIELDS = ("firstname", "lastname", "username", "email", "phone")

# Human-readable labels for the plain "required" signup checks
SIGNUP_REQUIRED_LABELS: Dict[str, str] = {
    "username": "User Name",
    "firstname": "First Name",
    "lastname": "Last Name",
    "phone": "Phone number",
}


@dataclass(frozen=True)
class ValidationResult:
    """Errors keyed by field name; a missing key means the field is valid."""

    errors: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error_for(self, name: str) -> Optional[str]:
        return self.errors.get(name)


def _value(values: Mapping[str, str], name: str) -> str:
    return values.get(name) or ""


def is_blank(value: str) -> bool:
    return not value.strip()


def required_message(label: str) -> str:
    return f"{label} is required."


def check_password(password: str) -> Optional[str]:
    """Return the password error, or None if the password is acceptable.

    The emptiness check short-circuits the strength check.
    """
    if is_blank(password):
        return PASSWORD_REQUIRED
    if not PASSWORD_PATTERN.fullmatch(password):
        return PASSWORD_TOO_WEAK
    return None


def check_email(email: str) -> Optional[str]:
    if is_blank(email):
        return EMAIL_REQUIRED
    if not EMAIL_PATTERN.fullmatch(email):
        return EMAIL_INVALID
    return None


def validate_login(values: Mapping[str, str]) -> ValidationResult:
    """Validate the login form."""
    errors: Dict[str, str] = {}

    if is_blank(_value(values, "username")):
        errors["username"] = USERNAME_REQUIRED

    password_error = check_password(_value(values, "password"))
    if password_error:
        errors["password"] = password_error

    return ValidationResult(errors)


def validate_signup(values: Mapping[str, str]) -> ValidationResult:
    """Validate the signup form.

    Each field is checked independently so every failing field is reported
    in a single pass.
    """
    errors: Dict[str, str] = {}

    for name, label in SIGNUP_REQUIRED_LABELS.items():
        if is_blank(_value(values, name)):
            errors[name] = required_message(label)

    email_error = check_email(_value(values, "email"))
    if email_error:
        errors["email"] = email_error

    return ValidationResult(errors)
