# module permits.users.views

"""Pages destinées aux titulaires de permis authentifiés.
- Membres: tarif de renouvellement de la catégorie, compteur global de renouvellements
La page applique des entêtes no-cache pour éviter la réutilisation d’état sensible via le bouton retour du navigateur.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse

from permits.infra.deps import get_workflow
from permits.renewals.service import RenewalWorkflow, UserNotFoundError
from permits.renewals.session import SessionState
from permits.utils.security import require_user
from permits.utils.templates import templates

logger = logging.getLogger(__name__)

web_router = APIRouter(tags=["User Pages"])


@web_router.get("/members", response_class=HTMLResponse)
def members_page(
    request: Request,
    state: SessionState = Depends(require_user),
    workflow: RenewalWorkflow = Depends(get_workflow),
):
    """Page membres (authentifiée).
    - Recalcule le tarif depuis la ligne utilisateur courante et le mémorise en session pour /checkout
    - 404 si l’utilisateur a été supprimé depuis la connexion
    """
    try:
        view = workflow.enter_members_area(state)
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found.")
    resp = templates.TemplateResponse(request, "members.html", {"view": view})
    resp.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
    resp.headers["Pragma"] = "no-cache"
    resp.headers["Expires"] = "0"
    return resp
