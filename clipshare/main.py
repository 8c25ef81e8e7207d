# clipshare/main.py

import logging
from typing import Optional
from fastapi import FastAPI
from contextlib import asynccontextmanager

from clipshare.adapters.configuration.config import settings
from clipshare.adapters.outbound.persistence.database import AppDatabase
from clipshare.domain.services.maintenance import Maintenance
from clipshare.domain.services.view_counter import ViewCounter
from clipshare.shared.middleware import AsyncExceptionMiddleware, AsyncRequestLoggingMiddleware
from clipshare.adapters.inbound.api.v1.router import api_router as api_v1_router

# ─── UNIQUE LOGGING CONFIGURATION ─────────────────────────────────────────────────
level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────


def create_app(database_url: Optional[str] = None, maintenance_interval: Optional[float] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The lifespan owns the store handle and both background tasks: they
    start with the application and are stopped before the engine is
    disposed.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info("Application starting up...")

        database = AppDatabase(database_url or settings.DATABASE_URL)
        if settings.AUTO_CREATE_TABLES:
            await database.create_all()

        app.state.database = database
        app.state.view_counter = ViewCounter.spawn(database)
        app.state.maintenance = Maintenance.spawn(database, interval=maintenance_interval)

        yield

        # Shutdown
        logger.info("Application shutting down...")
        await app.state.maintenance.shutdown()
        await app.state.view_counter.shutdown()
        await database.dispose()

    app = FastAPI(
        title="clipshare",
        description="Text clip sharing service",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # The last middleware added runs outermost: request logging sees the
    # responses built by the exception middleware.
    app.add_middleware(AsyncExceptionMiddleware)
    app.add_middleware(AsyncRequestLoggingMiddleware)

    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "clipshare.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
