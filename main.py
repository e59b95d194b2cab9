"""
NutriPlan FastAPI Application
Main entry point: configuration, middleware, exception handlers and routers
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio

from api.routes import health, profiles, goals, plans
from api.middleware import RequestLoggingMiddleware, register_exception_handlers
from domain.models import init_database
from adapters import mongo_adapter
from app.config import settings

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("nutriplan.main")


async def _init_database_with_retries() -> None:
    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # create_all is blocking
            await anyio.to_thread.run_sync(init_database)
            _logger.info("Database initialization succeeded")
            return
        except Exception as exc:
            _logger.warning(
                f"Database init attempt {attempt}/{settings.db_init_attempts} failed: {exc}"
            )
            if attempt == settings.db_init_attempts:
                _logger.error(f"Database initialization failed after {attempt} attempts")
                raise
            await anyio.sleep(settings.db_init_delay_sec)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup creates the plan tables and opens the recipe catalog client.
    The testing environment skips both.
    """
    _logger.info(f"Starting {settings.app_name} in {settings.environment.value} mode")

    if not settings.is_testing():
        await _init_database_with_retries()
        # the catalog client reconnects lazily if this ping fails
        mongo_adapter.connect(settings.mongo_uri, settings.mongo_db_name)

    try:
        yield
    finally:
        _logger.info(f"Shutting down {settings.app_name}")
        mongo_adapter.close()


def create_app() -> FastAPI:
    docs_enabled = not settings.is_production()
    application = FastAPI(
        title=settings.api_title,
        version=settings.app_version,
        description=settings.api_description,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url=f"{settings.api_prefix}/openapi.json" if docs_enabled else None,
        docs_url=f"{settings.api_prefix}/docs" if docs_enabled else None,
        redoc_url=f"{settings.api_prefix}/redoc" if docs_enabled else None,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    application.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(application)

    for module in (health, profiles, goals, plans):
        application.include_router(module.router, prefix=settings.api_prefix)
    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
