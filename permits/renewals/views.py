# module permits.renewals.views
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse

from permits import config
from permits.infra.deps import get_workflow
from permits.utils.security import require_user
from permits.utils.templates import templates
from .service import MissingPriceError, RenewalWorkflow
from .session import SessionState

logger = logging.getLogger(__name__)

web_router = APIRouter(tags=["Renewal Pages"])


@web_router.get("/checkout", response_class=HTMLResponse)
def checkout_page(
    request: Request,
    state: SessionState = Depends(require_user),
    workflow: RenewalWorkflow = Depends(get_workflow),
):
    """Page de paiement du renouvellement.
    - Accessible uniquement après une visite de /members dans la même session (prix mémorisé)
    - 400 si le prix n’est pas disponible
    """
    try:
        view = workflow.prepare_checkout(state)
    except MissingPriceError:
        logger.error("renewals.checkout renewal price missing email=%s", state.identity.email if state.identity else None)
        raise HTTPException(status_code=400, detail="Error: Renewal price not available.")
    resp = templates.TemplateResponse(
        request,
        "checkout.html",
        {"view": view, "stripe_public_key": config.STRIPE_PUBLIC_KEY},
    )
    resp.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
    return resp
