import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from permits.infra.deps import get_store
from permits.users.repository import UserStore
from permits.utils.rate_limit import rate_limit_health_info

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_root():
    return {"ok": True}


@router.get("/db")
def health_db(store: UserStore = Depends(get_store)):
    try:
        ok = store.ping()
    except Exception:
        logger.exception("health.db ping failed")
        ok = False
    return JSONResponse({"connect_ok": ok}, status_code=200 if ok else 503)


@router.get("/rate-limit")
def health_rate_limit(request: Request):
    return rate_limit_health_info(request)
