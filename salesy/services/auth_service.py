# salesy/services/auth_service.py
import logging
from typing import Optional

from salesy.db.interface import StoreInterface
from salesy.exceptions import AuthenticationError, ValidationError
from salesy.models import AuthSession
from salesy.utils.validation import validate_login

logger = logging.getLogger(__name__)

EMAIL_NOT_CONFIRMED_MESSAGE = (
    "Please verify your email before logging in. Check your inbox for a verification link."
)
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password. Please try again."

def friendly_auth_message(provider_message: str) -> str:
    """Map an auth provider error to the message shown to the user."""
    if "Email not confirmed" in provider_message:
        return EMAIL_NOT_CONFIRMED_MESSAGE
    if "Invalid login credentials" in provider_message:
        return INVALID_CREDENTIALS_MESSAGE
    return provider_message

class AuthService:
    """Service for signing users in and out."""

    def __init__(self, store: StoreInterface):
        self.store = store

    def sign_in(self, email: Optional[str], password: Optional[str]) -> AuthSession:
        """Sign in with email and password.

        Args:
            email: Email address
            password: Password

        Returns:
            AuthSession for the signed-in user

        Raises:
            ValidationError: If the form is incomplete, with field errors in details
            AuthenticationError: If the provider refuses the credentials
        """
        errors = validate_login(email, password)
        if errors:
            raise ValidationError("Invalid sign-in form", code='INVALID_LOGIN_FORM', details=errors)

        try:
            session = self.store.authenticate(email, password)
        except AuthenticationError as e:
            logger.warning(f"Sign-in failed for {email}: {e.message}")
            raise AuthenticationError(friendly_auth_message(e.message), code='SIGN_IN_FAILED')

        logger.info(f"User {session.user_id} signed in")
        return session

    def sign_out(self) -> None:
        self.store.sign_out()

    def current_user(self) -> Optional[str]:
        return self.store.current_user()
