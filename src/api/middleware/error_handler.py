"""Error rendering and global exception handlers.

All error responses, whether produced by a route mapping a store result or
by an exception escaping a handler, are rendered here so they share one
envelope, one logging policy and the CORS header set. Internal details are
logged but never returned to the client.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from src.api.constants import (
    MSG_ENDPOINT_NOT_FOUND,
    MSG_INTERNAL_ERROR,
    MSG_INVALID_REQUEST,
    MSG_METHOD_NOT_ALLOWED,
)
from src.api.utils.responses import error_response
from src.core.config import CorsConfig
from src.core.context import RequestContext
from src.core.exceptions import CatalogError, StoreUnavailableError
from src.core.types import LogContext

# Starlette's own 404/405 details are replaced with the API's messages
_HTTP_STATUS_MESSAGES = {
    status.HTTP_404_NOT_FOUND: MSG_ENDPOINT_NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: MSG_METHOD_NOT_ALLOWED,
}


def _cors_headers(request: Request) -> dict[str, str]:
    # Handlers for bare Exception run outside the middleware stack
    settings = getattr(request.app.state, "settings", None)
    config = settings.cors_config if settings is not None else CorsConfig()
    return config.as_headers()


def render_catalog_error(request: Request, error: CatalogError) -> Response:
    """Log a catalog error and render its envelope.

    Expected errors (bad ids, unknown paths, empty category filters) are
    logged at info level. Store failures are logged at error level with the
    original exception attached.

    Args:
        request: The request being answered.
        error: The error to render.

    Returns:
        Response: Error envelope with ``error.status_code``.
    """
    log_context: LogContext = {
        "error_code": error.error_code,
        "status_code": error.status_code,
        "correlation_id": RequestContext.get_correlation_id(),
        **error.context,
    }

    if error.is_expected:
        logger.info("{}", error.message, **log_context)
    elif isinstance(error, StoreUnavailableError):
        logger.opt(exception=error.cause).error(
            "Resource store failed during {}", error.operation, **log_context
        )
    else:
        logger.opt(exception=error.cause).error(
            "Handling {}: {}", type(error).__name__, error.message, **log_context
        )

    return error_response(error.status_code, error.message, _cors_headers(request))


async def catalog_error_handler(request: Request, exc: Exception) -> Response:
    """Handle CatalogError exceptions raised from routes or dependencies.

    Raises:
        TypeError: If exc is not a CatalogError instance
    """
    if not isinstance(exc, CatalogError):
        raise TypeError(f"Expected CatalogError, got {type(exc).__name__}")

    return render_catalog_error(request, exc)


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Handle FastAPI RequestValidationError exceptions as 400s.

    Raises:
        TypeError: If exc is not a RequestValidationError instance
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    logger.warning(
        "Request validation failed",
        path=request.url.path,
        errors=[error.get("msg") for error in exc.errors()],
    )
    return error_response(
        status.HTTP_400_BAD_REQUEST, MSG_INVALID_REQUEST, _cors_headers(request)
    )


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette HTTPException with the standard envelope.

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    message = _HTTP_STATUS_MESSAGES.get(exc.status_code, str(exc.detail))
    logger.info("HTTP exception", status_code=exc.status_code, detail=exc.detail)

    headers = _cors_headers(request)
    if exc.headers:
        headers.update(exc.headers)
    return error_response(exc.status_code, message, headers)


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle any unhandled exception with a generic 500.

    The exception type and traceback are logged; the client only ever sees
    ``Internal server error``.
    """
    logger.opt(exception=exc).error(
        "Unhandled exception: {}",
        type(exc).__name__,
        request_method=request.method,
        request_path=request.url.path,
        correlation_id=RequestContext.get_correlation_id(),
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        MSG_INTERNAL_ERROR,
        _cors_headers(request),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Exception handlers registered")
