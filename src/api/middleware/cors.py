"""CORS middleware answering preflights and stamping headers on every response."""

from collections.abc import Awaitable, Callable, Mapping

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from src.api.constants import PREFLIGHT_METHOD
from src.core.config import CorsConfig


class CORSMiddleware(BaseHTTPMiddleware):
    """Apply the fixed cross-origin policy.

    ``OPTIONS`` requests are answered here with ``204 No Content`` and the
    CORS headers, whatever the path, before routing or method checks run.
    Every other response gets the same header set added on the way out.

    Unlike Starlette's ``CORSMiddleware`` this does not require an ``Origin``
    or ``Access-Control-Request-Method`` header to treat ``OPTIONS`` as a
    preflight.

    Args:
        app: The ASGI application to wrap.
        headers: CORS headers to send (defaults to ``CorsConfig()``).
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(app)
        self.cors_headers = dict(headers or CorsConfig().as_headers())

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Short-circuit preflights, otherwise decorate the response.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or route handler.

        Returns:
            Response: The HTTP response with CORS headers.
        """
        if request.method == PREFLIGHT_METHOD:
            return Response(status_code=204, headers=self.cors_headers)

        response = await call_next(request)
        response.headers.update(self.cors_headers)
        return response
