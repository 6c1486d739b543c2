"""Task Board application factory."""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard import models  # noqa: F401  (registers tables on Base.metadata)
from taskboard.api.v1 import api_router
from taskboard.config import Settings, settings as default_settings
from taskboard.database import Base, SessionLocal, engine
from taskboard.errors import register_exception_handlers
from taskboard.logging_config import configure_logging
from taskboard.services import BoardServices

logger = logging.getLogger(__name__)


def create_app(services: Optional[BoardServices] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API.

    Without *services* the app binds to the configured database, creates the
    tables and seeds the default columns on an empty board.
    """
    settings = settings or (services.settings if services else default_settings)
    configure_logging(settings.LOG_LEVEL)

    if services is None:
        Base.metadata.create_all(bind=engine)
        services = BoardServices.from_session_factory(SessionLocal, settings)
        if settings.SEED_DEFAULT_COLUMNS:
            services.columns.seed_defaults()

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, debug=settings.DEBUG)
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/health", include_in_schema=False)
    def health():
        return {"status": "ok", "version": settings.APP_VERSION}

    logger.info("%s %s ready (api prefix %s)", settings.APP_NAME, settings.APP_VERSION, settings.API_PREFIX)
    return app


def run() -> None:
    import uvicorn

    uvicorn.run("taskboard.main:create_app", factory=True, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
