"""
Gestionnaires d’exceptions.
- Transforme 401 en redirection HTML vers /login avec message (si Accept: text/html).
- Conserve une réponse JSON pour les clients programmatiques (fetch du checkout).
"""
import urllib.parse
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.status import HTTP_303_SEE_OTHER


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def html_redirect_on_auth_errors(request: Request, exc: HTTPException):
        accept = (request.headers.get("accept") or "").lower()
        if exc.status_code == 401 and "text/html" in accept:
            detail = str(getattr(exc, "detail", "")) or "Please log in to continue."
            msg = urllib.parse.quote_plus(detail)
            return RedirectResponse(url=f"/login?message={msg}", status_code=HTTP_303_SEE_OTHER)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=getattr(exc, "headers", None))
