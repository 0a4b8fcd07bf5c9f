"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Crée le schéma SQLite (tables users et sessions) si nécessaire.
- Initialise FastAPILimiter (Redis) avec options de test (fakeredis).
- Variables d’environnement supportées:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: désactive complètement le rate limiting
  - USE_FAKE_REDIS_FOR_TESTS=1: utilise fakeredis (tests)
  - RATE_LIMIT_REDIS_URL: URL Redis (défaut redis://127.0.0.1:6379/0)
"""
import os
import logging
from contextlib import asynccontextmanager

import redis.asyncio as redis
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter

logger = logging.getLogger("uvicorn.error")


async def init_rate_limiter(app: FastAPI) -> None:
    """
    Configure le rate limiting.
    - En cas d’échec de Redis, le rate limiting est désactivé proprement (état visible sur /health/rate-limit).
    """
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
        return

    try:
        if os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1":
            from fakeredis.aioredis import FakeRedis
            r = FakeRedis(decode_responses=True)
        else:
            redis_url = os.getenv("RATE_LIMIT_REDIS_URL", "redis://127.0.0.1:6379/0")
            r = redis.from_url(redis_url, encoding="utf-8", decode_responses=True)
        await FastAPILimiter.init(r)
        app.state.rate_limit_enabled = True
        logger.info("Rate limiting enabled")
    except Exception as e:
        app.state.rate_limit_enabled = False
        logger.warning("Rate limiting disabled due to init error: %s", e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = app.state.store
    store.init_schema()
    app.state.sessions.init_schema()
    await init_rate_limiter(app)

    yield

    if getattr(app.state, "rate_limit_enabled", False):
        await FastAPILimiter.close()
    store.dispose()
    logger.info("Shutdown complete")
