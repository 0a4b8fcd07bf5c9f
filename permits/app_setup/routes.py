"""
Routes simples (hors routers): page d’accueil et favicon.
"""
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, Response
from starlette.status import HTTP_204_NO_CONTENT

from permits.utils.security import is_authenticated
from permits.utils.templates import templates


def register_routes(app: FastAPI) -> None:
    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def home(request: Request):
        return templates.TemplateResponse(request, "home.html", {"authenticated": is_authenticated(request)})

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=HTTP_204_NO_CONTENT)
