from typing import Optional
import logging

from permits.renewals.session import Identity

logger = logging.getLogger(__name__)


class AuthResponse:
    def __init__(
        self,
        success: bool,
        identity: Optional[Identity] = None,
        error: Optional[str] = None,
    ):
        self.success = success
        self.identity = identity
        self.error = error


def identity_from_user(user) -> Identity:
    return Identity(
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        permit_type=user.permit_type,
    )


def handle_exception(action: str, e: Exception) -> AuthResponse:
    # Détail technique dans les logs uniquement
    logger.exception("Erreur %s", action)
    return AuthResponse(False, error=f"Error during {action}.")
