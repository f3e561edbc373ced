"""
FastAPI application factory.

* Registers the public, admin, partner and auth routers.
* Wires the shared collaborators onto ``app.state`` from the given
  ``Settings``: the database engine and session factory, the Kakao Local
  client, and the Redis pool behind the admin session store.
* The rate limit is the exception: ``@limiter.limit`` binds it at import,
  so it always comes from the environment (``RATE_LIMIT``).
* Applies rate-limiting and the admin gate middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from hama.api.middleware import AdminGateMiddleware, limiter
from hama.api.routes import (
    admin,
    admin_pages,
    auth,
    events,
    health,
    local,
    partner,
    reservations,
    search,
    stores,
)
from hama.config import Settings, settings as default_settings
from hama.infrastructure import database, redis_client
from hama.infrastructure.kakao import KakaoLocalClient
from hama.infrastructure.sessions import AdminSessionStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close pooled upstream, Redis and database connections on shutdown."""
    yield
    await app.state.kakao.aclose()
    await app.state.redis_pool.disconnect()
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    missing = settings.missing_credentials()
    if missing:
        logger.warning(
            "Missing credentials: %s (affected endpoints will return 500)",
            ", ".join(missing),
        )

    app = FastAPI(
        title="HAMA API",
        description=(
            "Place discovery and reservations: Kakao Local search proxies, "
            "distance-sorted store recommendations, and the admin / partner "
            "dashboards."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.kakao = KakaoLocalClient(
        settings.kakao_rest_api_key,
        base_url=settings.kakao_api_base_url,
        timeout=settings.kakao_timeout_seconds,
    )
    if settings is default_settings:
        app.state.engine = database.engine
        app.state.session_factory = database.async_session_factory
    else:
        app.state.engine = database.build_engine(settings)
        app.state.session_factory = database.build_session_factory(app.state.engine)

    app.state.redis_pool = redis_client.create_pool(settings.redis_url)
    app.state.sessions = AdminSessionStore(
        redis_client.get_redis(app.state.redis_pool),
        ttl_seconds=settings.admin_session_max_age,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(AdminGateMiddleware)

    # Routers
    for module in (
        health, search, local, reservations, stores, events, auth, partner, admin
    ):
        app.include_router(module.router, prefix="/api")
    app.include_router(admin_pages.router)

    return app
