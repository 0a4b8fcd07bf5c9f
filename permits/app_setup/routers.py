"""
Registre central des routers (pages auth, membres, checkout, paiements, health).
"""
from fastapi import FastAPI
from permits.auth.views import web_router as auth_web_router
from permits.users.views import web_router as users_web_router
from permits.renewals.views import web_router as renewals_web_router
from permits.payments.views import router as payments_router
from permits.health.router import router as health_router


def register_routers(app: FastAPI) -> None:
    app.include_router(auth_web_router)
    app.include_router(users_web_router)
    app.include_router(renewals_web_router)
    app.include_router(payments_router)
    app.include_router(health_router)
