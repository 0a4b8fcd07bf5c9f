# module permits.app
import logging
from typing import Optional

from fastapi import FastAPI

from permits import config
from permits.app_setup.exceptions import register_exception_handlers
from permits.app_setup.lifespan import lifespan
from permits.app_setup.middlewares import register_basic_middlewares, register_no_cache_middleware
from permits.app_setup.routers import register_routers
from permits.app_setup.routes import register_routes
from permits.app_setup.security import register_security_middleware
from permits.app_setup.static import mount_static_files
from permits.payments.stripe_client import StripeGateway
from permits.sessions.repository import SessionStore
from permits.users.repository import UserStore

logger = logging.getLogger(__name__)


def create_app(
    *,
    store: Optional[UserStore] = None,
    gateway=None,
    session_secret: Optional[str] = None,
    sessions: Optional[SessionStore] = None,
) -> FastAPI:
    """
    Crée et configure l’instance FastAPI de l’application.
    - store / gateway / session_secret / sessions: injectés par l’appelant (tests) ou construits depuis la configuration.
    - Refuse de construire l’application si un paramètre critique manque (DB_PATH, SESSION_SECRET).
    Étapes et ordre:
      1) register_basic_middlewares: session signée, TrustedHost.
      2) mount_static_files: expose /static.
      3) register_security_middleware: en-têtes de sécurité + CSP.
      4) register_no_cache_middleware: pas de cache sur /members et /checkout.
      5) register_exception_handlers: 401 HTML -> redirection /login, JSON {error} sinon.
      6) register_routes + register_routers.
    """
    missing = [
        name for name in config.missing_settings()
        if (name == "DB_PATH" and store is None) or (name == "SESSION_SECRET" and not session_secret)
    ]
    if missing:
        logger.error("Missing environment variables: %s", ", ".join(missing))
        raise RuntimeError(f"Missing environment variables: {', '.join(missing)}. Please check your .env file.")

    app = FastAPI(title="Permit Renewals", lifespan=lifespan)
    app.state.store = store or UserStore(config.DATABASE_URL)
    app.state.gateway = gateway or StripeGateway.from_config()
    # Sessions côté serveur dans la même base que les utilisateurs
    app.state.sessions = sessions or SessionStore(app.state.store.engine)

    register_basic_middlewares(app, session_secret or config.SESSION_SECRET)
    mount_static_files(app)
    register_security_middleware(app)
    register_no_cache_middleware(app)
    register_exception_handlers(app)
    register_routes(app)
    register_routers(app)
    return app
