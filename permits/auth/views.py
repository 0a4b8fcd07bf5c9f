import logging
import urllib.parse
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.status import HTTP_303_SEE_OTHER

from permits.infra.deps import get_store
from permits.renewals.pricing import PermitType
from permits.users.repository import UserStore
from permits.utils.rate_limit import optional_rate_limit
from permits.utils.security import get_session_state
from permits.utils.templates import templates
from .service import login as svc_login, register as svc_register

logger = logging.getLogger(__name__)

# --- Web Router (pages de connexion / inscription) ---

web_router = APIRouter(tags=["Auth Web"])


def _redirect_with_message(path: str, message: str) -> RedirectResponse:
    msg = urllib.parse.quote_plus(message)
    return RedirectResponse(url=f"{path}?message={msg}", status_code=HTTP_303_SEE_OTHER)


@web_router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, message: Optional[str] = None):
    return templates.TemplateResponse(request, "login.html", {"message": message or ""})


@web_router.post("/login", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def login_submit(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    store: UserStore = Depends(get_store),
):
    """Connexion (formulaire).
    - Délègue la vérification au service (bcrypt)
    - En cas de succès, repart d'une session vierge et y pose l'identité, puis redirige vers /members
    - Sinon, redirige vers /login avec un message
    """
    result = svc_login(store, email, password)
    if not result.success:
        return _redirect_with_message("/login", result.error or "Incorrect email address or password.")
    get_session_state(request).sign_in(result.identity)
    logger.info("auth.login ok email=%s", result.identity.email)
    return RedirectResponse(url="/members", status_code=HTTP_303_SEE_OTHER)


@web_router.get("/register", response_class=HTMLResponse)
def register_page(request: Request, message: Optional[str] = None):
    return templates.TemplateResponse(
        request,
        "register.html",
        {"message": message or "", "permit_types": [p.value for p in PermitType]},
    )


@web_router.post("/register", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def register_submit(
    firstName: str = Form(""),
    lastName: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    permitType: str = Form(""),
    store: UserStore = Depends(get_store),
):
    """Inscription (formulaire): redirige vers /login en cas de succès, sinon vers /register avec le message."""
    result = svc_register(
        store,
        first_name=firstName,
        last_name=lastName,
        email=email,
        password=password,
        permit_type=permitType,
    )
    if not result.success:
        return _redirect_with_message("/register", result.error or "Error registering user.")
    return _redirect_with_message("/login", "Registration successful, please log in.")


@web_router.post("/logout", include_in_schema=False)
@web_router.get("/logout", include_in_schema=False)
def logout(request: Request):
    """Déconnexion: vide la session et redirige vers l’accueil."""
    get_session_state(request).clear()
    r = RedirectResponse(url="/", status_code=HTTP_303_SEE_OTHER)
    r.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
    return r
