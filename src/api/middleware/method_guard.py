"""Reject every method the read-only API does not serve."""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.api.constants import MSG_METHOD_NOT_ALLOWED, READ_METHOD
from src.api.middleware.error_handler import render_catalog_error
from src.core.exceptions import MethodNotAllowedError


class ReadOnlyMethodMiddleware(BaseHTTPMiddleware):
    """Answer any non-GET request with 405 before path matching.

    This makes ``POST /does-not-exist`` a 405 rather than a 404. Preflight
    ``OPTIONS`` requests never reach this middleware; ``CORSMiddleware``
    answers them first.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Pass GET requests through, reject the rest.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or route handler.

        Returns:
            Response: The route's response or a 405 envelope.
        """
        if request.method != READ_METHOD:
            return render_catalog_error(
                request,
                MethodNotAllowedError(
                    MSG_METHOD_NOT_ALLOWED, context={"method": request.method}
                ),
            )

        return await call_next(request)
