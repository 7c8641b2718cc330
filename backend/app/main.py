import logging

from fastapi import FastAPI

from app import models  # noqa: F401
from app.api.ai import router as ai_router
from app.api.analyses import router as analyses_router
from app.api.auth import router as auth_router
from app.api.batches import router as batch_router
from app.api.health import router as health_router
from app.api.intervals import router as intervals_router
from app.api.notifications import router as notifications_router
from app.core.config import settings
from app.core.database import Base, SessionLocal, engine
from app.core.request_logging import RequestLoggingMiddleware
from app.core.seed import seed_default_admin


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title=settings.app_name)
    app.add_middleware(RequestLoggingMiddleware)

    if settings.auto_create_tables:
        Base.metadata.create_all(bind=engine)

    if settings.seed_default_admin:
        with SessionLocal() as db:
            seed_default_admin(db)

    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(batch_router, prefix=settings.api_prefix)
    app.include_router(intervals_router, prefix=settings.api_prefix)
    app.include_router(analyses_router, prefix=settings.api_prefix)
    app.include_router(ai_router, prefix=settings.api_prefix)
    app.include_router(notifications_router, prefix=settings.api_prefix)
    return app


app = create_app()
