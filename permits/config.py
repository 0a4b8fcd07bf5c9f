# permits.config
from pathlib import Path
import os
from typing import List
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH)

PUBLIC_DIR = BASE_DIR / "public"
TEMPLATES_DIR = BASE_DIR / "templates"

"""
Configuration centrale de l'application.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose les chemins utiles (PUBLIC_DIR, TEMPLATES_DIR)
- Normalise et expose les secrets/URLs (base SQLite, session, Stripe), sécurité cookies, hosts
- Fournit les chemins de redirection du checkout Stripe
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

# Base SQLite: un seul fichier, chemin relatif à la racine du projet si non absolu
DB_PATH = _clean_env(os.getenv("DB_PATH") or "")
if DB_PATH and not Path(DB_PATH).is_absolute():
    DB_PATH = str(BASE_DIR / DB_PATH)
DATABASE_URL = f"sqlite:///{DB_PATH}" if DB_PATH else ""

# Session: secret de signature du cookie (itsdangerous)
SESSION_SECRET = _clean_env(os.getenv("SESSION_SECRET") or "")
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "permits_session")
# Durée de vie (glissante) d'une session côté serveur, en secondes
SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", "86400"))
PORT = int(os.getenv("PORT", "8000"))

# Cookies sécurisés en production (ou forçage explicite)
_ENV_NAME = (os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development").lower()
COOKIE_SECURE = _ENV_NAME == "production" or os.getenv("COOKIE_SECURE", "false").lower() == "true"

ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

# Stripe: clés et version d'API
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")
STRIPE_PUBLIC_KEY = _clean_env(os.getenv("STRIPE_PUBLIC_KEY") or "")
STRIPE_API_VERSION = _clean_env(os.getenv("STRIPE_API_VERSION") or "")
PAYMENT_CURRENCY = _clean_env(os.getenv("PAYMENT_CURRENCY") or "gbp").lower()

# Pages de succès/annulation du checkout
CHECKOUT_SUCCESS_PATH = os.getenv("CHECKOUT_SUCCESS_PATH", "/payment-success")
CHECKOUT_CANCEL_PATH = os.getenv("CHECKOUT_CANCEL_PATH", "/payment-cancelled")

BASE_URL = _clean_env(os.getenv("BASE_URL") or "").rstrip("/")

# Paramètres sans lesquels l'application refuse de démarrer
REQUIRED_SETTINGS = ("DB_PATH", "SESSION_SECRET")


def missing_settings() -> List[str]:
    """Retourne les noms des paramètres critiques absents (liste vide si tout est défini)."""
    values = {"DB_PATH": DB_PATH, "SESSION_SECRET": SESSION_SECRET}
    return [name for name in REQUIRED_SETTINGS if not values.get(name)]
