"""FastAPI application initialization and configuration module.

This module builds the Resource Catalog API:
- Application lifecycle management (catalog check on startup, store cleanup
  on shutdown)
- Middleware registration in the correct order
- Exception handler registration
- OpenTelemetry instrumentation

Middleware are executed in reverse order of registration, so the last one
added is the first to see a request.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from src.api.middleware.cors import CORSMiddleware
from src.api.middleware.error_handler import register_exception_handlers
from src.api.middleware.method_guard import ReadOnlyMethodMiddleware
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.api.routes.resources import fallback_router
from src.api.routes.resources import router as resources_router
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.logging import setup_logging
from src.core.observability import instrument_app, setup_tracing
from src.core.result import Err, Ok
from src.domain.resource import ResourceStore
from src.infrastructure.catalog.factory import build_resource_store


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    On startup the catalog is read once so a broken source shows up in the
    logs immediately. A failed read does not stop the application; requests
    then answer 500 until the store recovers.

    Args:
        app_instance: The FastAPI application instance.

    Yields:
        None: Nothing is yielded, this is just a lifespan context.
    """
    store: ResourceStore = app_instance.state.resource_store

    match await store.all():
        case Ok(value=resources):
            logger.info("Catalog ready with {} resources", len(resources))
        case Err(error=error):
            logger.opt(exception=error.cause).warning(
                "Catalog check failed during startup: {}", error.message
            )

    logger.info(
        "Application startup complete - {} v{}",
        app_instance.title,
        app_instance.version,
    )

    yield

    logger.info("Application shutdown initiated")
    await store.close()
    logger.info("Application shutdown complete")


def create_app(
    settings: Settings | None = None,
    store: ResourceStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. If not provided, will use get_settings().
        store: Optional resource store. If not provided, one is built from
            ``settings.catalog_config``.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)
    setup_tracing(settings)

    if store is None:
        store = build_resource_store(settings.catalog_config)

    # settings.debug is not forwarded: Starlette's debug mode answers
    # unhandled exceptions with an HTML traceback instead of the 500 envelope
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.resource_store = store

    register_exception_handlers(application)

    # 4. Method guard (innermost: 405 for anything but GET)
    application.add_middleware(ReadOnlyMethodMiddleware)

    # 3. Request logging middleware (logs requests/responses)
    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)

    # 2. CORS (answers OPTIONS, stamps headers on every response)
    application.add_middleware(
        CORSMiddleware, headers=settings.cors_config.as_headers()
    )

    # 1. Request context middleware (creates correlation ID)
    application.add_middleware(RequestContextMiddleware)

    application.include_router(resources_router)
    # Must stay last: it matches every path
    application.include_router(fallback_router)

    instrument_app(application, settings)

    return application


app = create_app()
