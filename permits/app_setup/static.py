from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from permits.config import PUBLIC_DIR


def mount_static_files(app: FastAPI) -> None:
    """Expose le répertoire public (CSS, checkout.js) sous /static."""
    app.mount("/static", StaticFiles(directory=str(PUBLIC_DIR)), name="static")
