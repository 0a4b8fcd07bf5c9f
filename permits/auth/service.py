import logging

from permits.users.repository import UniqueConstraintError, UserStore
from permits.utils.validators import is_valid_email, validate_password_strength
from .models import AuthResponse, handle_exception, identity_from_user
from .passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

USER_EXISTS_MESSAGE = "User already exists."
INVALID_CREDENTIALS_MESSAGE = "Incorrect email address or password."

# --- Cas d’usage Auth exposés ---

def login(store: UserStore, email: str, password: str) -> AuthResponse:
    """Connexion:
    - Recherche l'utilisateur par email (sensible à la casse, tel que stocké)
    - Vérifie le mot de passe via bcrypt.checkpw
    - Même message d'erreur pour email inconnu et mauvais mot de passe
    """
    try:
        email = (email or "").strip()
        user = store.find_by_email(email)
        if user is None or not verify_password(password or "", user.password):
            logger.info("auth.login rejected email=%s", email)
            return AuthResponse(False, error=INVALID_CREDENTIALS_MESSAGE)
        return AuthResponse(True, identity=identity_from_user(user))
    except Exception as e:
        return handle_exception("login", e)


def register(
    store: UserStore,
    *,
    first_name: str,
    last_name: str,
    email: str,
    password: str,
    permit_type: str,
) -> AuthResponse:
    """Inscription:
    - Valide les champs (noms non vides, email, force du mot de passe)
    - Vérifie si l’email existe déjà puis insère avec le mot de passe haché
    - Une insertion concurrente perdante (contrainte unique) donne le même message "existe déjà"
    """
    first_name = (first_name or "").strip()
    last_name = (last_name or "").strip()
    email = (email or "").strip()
    permit_type = (permit_type or "").strip()

    if not first_name or not last_name or not permit_type:
        return AuthResponse(False, error="All fields are required.")
    if not is_valid_email(email):
        return AuthResponse(False, error="Invalid email address.")
    try:
        validate_password_strength(password or "")
    except ValueError as e:
        return AuthResponse(False, error=str(e))

    try:
        if store.find_by_email(email) is not None:
            return AuthResponse(False, error=USER_EXISTS_MESSAGE)
        store.insert(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(password),
            permit_type=permit_type,
        )
        return AuthResponse(True)
    except UniqueConstraintError:
        return AuthResponse(False, error=USER_EXISTS_MESSAGE)
    except Exception as e:
        return handle_exception("registration", e)
