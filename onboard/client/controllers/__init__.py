"""Screen controllers."""

from .base_controller import FormController
from .login_controller import LoginController
from .signup_controller import SignupController

__all__ = ["FormController", "LoginController", "SignupController"]
