import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, JSONResponse

from permits.infra.deps import get_workflow
from permits.renewals.service import InvalidAmountError, InvalidEmailError, MissingPriceError, RenewalWorkflow
from permits.renewals.session import SessionState
from permits.utils.rate_limit import optional_rate_limit
from permits.utils.security import require_user
from permits.utils.templates import templates
from .errors import GatewayError

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# module permits.payments.views
@router.post("/create-stripe-payment", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_stripe_payment(
    request: Request,
    state: SessionState = Depends(require_user),
    workflow: RenewalWorkflow = Depends(get_workflow),
):
    """
    Crée une session Stripe Checkout pour le renouvellement.
    - Entrée JSON: { "amount": <int, unités mineures>, "email": "...", "firstName": "...", "lastName": "..." }
    - Sortie: {"id": "<session_id>"} uniquement (aucune donnée brute Stripe relayée)
    - Le montant doit être égal au prix mémorisé en session par /members
    - Erreurs: 400 montant/email invalides, prix absent ou différent ou carte/requête refusées, 502 panne Stripe, 500 sinon
    """
    try:
        body: Dict[str, Any] = await request.json()
    except ValueError:
        return _error(400, "Invalid JSON body.")
    if not isinstance(body, dict):
        return _error(400, "Invalid JSON body.")

    try:
        intent = workflow.build_payment_intent(
            state,
            body.get("amount"),
            body.get("email"),
            body.get("firstName"),
            body.get("lastName"),
        )
    except InvalidAmountError:
        logger.info("payments.create invalid amount=%r", body.get("amount"))
        return _error(400, "Invalid amount.")
    except InvalidEmailError:
        logger.info("payments.create invalid email")
        return _error(400, "Invalid or missing email address.")
    except MissingPriceError:
        logger.info("payments.create renewal price missing")
        return _error(400, "Error: Renewal price not available.")

    try:
        session_id = await run_in_threadpool(workflow.create_payment_session, intent)
    except GatewayError as e:
        logger.error("payments.create gateway error kind=%s", type(e).__name__)
        return _error(e.status_code, e.public_message)
    return JSONResponse({"id": session_id})


@router.get("/payment-success", response_class=HTMLResponse)
def payment_success(request: Request, session_id: Optional[str] = None):
    """Page de retour après paiement sur Stripe (aucune vérification côté serveur: état rapporté par la redirection)."""
    logger.info("payments.success session_id=%s", session_id)
    return templates.TemplateResponse(request, "payment_success.html", {})


@router.get("/payment-cancelled", response_class=HTMLResponse)
def payment_cancelled(request: Request):
    return templates.TemplateResponse(request, "payment_cancelled.html", {})
