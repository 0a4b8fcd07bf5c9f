from fastapi import FastAPI

from permits.config import COOKIE_SECURE

# Scripts Stripe.js autorisés en plus de l'origine propre
STRIPE_SCRIPT_SOURCES = ["https://js.stripe.com"]
STRIPE_CONNECT_SOURCES = ["https://api.stripe.com"]


def build_csp() -> str:
    return (
        "default-src 'self'; "
        "base-uri 'self'; object-src 'none'; frame-ancestors 'none'; "
        "img-src 'self' data:; "
        "style-src 'self' 'unsafe-inline'; "
        f"script-src 'self' {' '.join(STRIPE_SCRIPT_SOURCES)}; "
        f"connect-src 'self' {' '.join(STRIPE_CONNECT_SOURCES)}; "
        "upgrade-insecure-requests"
    )


def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)

        # En-têtes de sécurité
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Permissions-Policy", "geolocation=(), microphone=(), camera=()")
        if COOKIE_SECURE:
            response.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains")

        response.headers["Content-Security-Policy"] = build_csp()
        return response
