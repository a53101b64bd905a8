"""Business logic services for the Tech News application."""

from .post_service import PostValidationError
from .session_codec import SessionClaim
from .user_service import InvalidCredentialsError, RegistrationError

__all__ = [
    "InvalidCredentialsError",
    "PostValidationError",
    "RegistrationError",
    "SessionClaim",
]
