"""
Dépendances FastAPI vers les ressources construites par create_app (app.state).
Les tests peuvent les remplacer via app.dependency_overrides ou en passant des faux à create_app.
"""
from fastapi import Depends, Request

from permits.renewals.service import RenewalWorkflow
from permits.users.repository import UserStore


def get_store(request: Request) -> UserStore:
    return request.app.state.store


def get_gateway(request: Request):
    return request.app.state.gateway


def get_workflow(store: UserStore = Depends(get_store), gateway=Depends(get_gateway)) -> RenewalWorkflow:
    return RenewalWorkflow(store, gateway)
