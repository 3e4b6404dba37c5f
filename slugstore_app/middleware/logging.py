"""Request logging middleware."""

import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

QUIET_PATHS = {"/health"}


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    One log line per request, after the response is ready.

    The line names the endpoint that handled the request and the slug it
    touched, if any. Redirects also carry their Location, so a slug can be
    traced to the target the client was sent to. Health checks log at DEBUG.
    """

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("slugstore_app.web")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
        self.logger.log(level, self.describe(request, response, duration_ms))
        return response

    @staticmethod
    def describe(request: Request, response: Response, duration_ms: float) -> str:
        # Routing fills endpoint and path_params into the shared scope
        endpoint = request.scope.get("endpoint")
        endpoint_name = getattr(endpoint, "__name__", "unmatched")
        client_ip = request.client.host if request.client else "unknown"

        parts = [
            f"{request.method} {request.url.path}",
            f"endpoint={endpoint_name}",
            f"status={response.status_code}",
        ]
        slug = request.scope.get("path_params", {}).get("slug")
        if slug:
            parts.append(f"slug={slug}")
        location = response.headers.get("location")
        if location:
            parts.append(f"target={location}")
        parts.append(f"client={client_ip}")
        parts.append(f"{duration_ms:.2f}ms")
        return " ".join(parts)
