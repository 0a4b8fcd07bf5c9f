"""
Middlewares transverses de l’application.
- register_basic_middlewares: session signée (cookie httpOnly) et TrustedHost.
- register_no_cache_middleware: empêche la mise en cache sur /members et /checkout.
Notes:
- L’ordre d’ajout est important: le dernier middleware ajouté s’exécute en premier.
"""
from fastapi import Request, FastAPI
from starlette.middleware.trustedhost import TrustedHostMiddleware
from starlette.middleware.sessions import SessionMiddleware

from permits.config import ALLOWED_HOSTS, COOKIE_SECURE, SESSION_COOKIE_NAME, SESSION_TTL_SECONDS

NO_CACHE_PATHS = ("/members", "/checkout")


def register_basic_middlewares(app: FastAPI, session_secret: str) -> None:
    """
    Ajoute les middlewares « de base »:
    - SessionMiddleware: cookie signé (itsdangerous), httpOnly, ne contenant que l'identifiant
      opaque de la session; les données restent côté serveur (permits.sessions).
    - TrustedHostMiddleware: limite les hôtes acceptés (défense host header).
    """
    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret,
        session_cookie=SESSION_COOKIE_NAME,
        same_site="lax",
        https_only=COOKIE_SECURE,
        max_age=SESSION_TTL_SECONDS,
    )
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=ALLOWED_HOSTS)


def register_no_cache_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def no_cache_for_protected(request: Request, call_next):
        response = await call_next(request)
        path = request.url.path.rstrip("/")
        if request.method == "GET" and path in NO_CACHE_PATHS:
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response
