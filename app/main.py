import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import Settings, get_settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging_setup import setup_logging
from app.database import create_db_and_tables, dispose_engine
from app.routers import auth, tasks

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        if settings.create_tables_on_startup:
            await create_db_and_tables()
        logger.info("Task Management API started")
        yield
        await dispose_engine()

    app = FastAPI(
        title="Task Management API",
        description="Multi-user task management API with token authentication",
        swagger_ui_parameters={"displayRequestDuration": True},
        version="1.0.0",
        lifespan=lifespan,
    )

    setup_exception_handlers(app)

    # Include routers
    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(tasks.router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to Task Management API",
            "docs": "/docs",
            "version": "1.0.0",
        }

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
