"""
Application factory and entrypoint.

    uvicorn --factory membership_api.main:create_app
    python -m membership_api.main
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from membership_api.api.v1.error_handlers import register_exception_handlers
from membership_api.api.v1.router import api_router
from membership_api.config.settings import Settings, get_settings
from membership_api.core.logging import RequestIDMiddleware, setup_logging, stop_queue_logging
from membership_api.database.session import create_engine_from_settings, create_session_factory
from membership_api.repositories.store import SQLStore

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One engine (and pool) per process, shared by every request
        engine = create_engine_from_settings(settings)
        app.state.store = SQLStore(create_session_factory(engine))
        logger.info("app.startup", extra={"env": settings.ENV, "dialect": engine.dialect.name})
        try:
            yield
        finally:
            await engine.dispose()
            logger.info("app.shutdown")
            stop_queue_logging()

    app = FastAPI(title="Membership API", lifespan=lifespan)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)
    return app


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.API_HOST, port=settings.API_PORT, log_config=None)
