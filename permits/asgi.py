"""
ASGI entrypoint: expose `app` pour les process managers / déploiements (uvicorn permits.asgi:app).
Toute la configuration est centralisée dans permits.app.create_app.
"""
from permits.app import create_app

app = create_app()
