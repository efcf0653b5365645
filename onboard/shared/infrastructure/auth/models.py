"""Request and response bodies of the authentication service."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Body of ``POST /login``."""
    model_config = ConfigDict(extra='forbid')

    username: str
    password: str = Field(repr=False)


class SignupRequest(BaseModel):
    """Body of ``POST /sign-up``: the full registration field set."""
    model_config = ConfigDict(extra='forbid')

    firstname: str
    lastname: str
    username: str
    email: str
    phone: str


class LoginResponse(BaseModel):
    """Success body of ``POST /login``."""
    model_config = ConfigDict(extra='ignore', coerce_numbers_to_str=True)

    access_token: str = Field(repr=False)
    user_id: str


class SignupResponse(BaseModel):
    """Success body of ``POST /sign-up``."""
    model_config = ConfigDict(extra='ignore')

    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Failure body of ``POST /login``.

    ``detail`` is kept loose because frameworks also send lists of field
    errors there; only a plain string is shown to the user.
    """
    model_config = ConfigDict(extra='ignore')

    detail: Any = None

    @property
    def message(self) -> Optional[str]:
        if isinstance(self.detail, str) and self.detail:
            return self.detail
        return None
