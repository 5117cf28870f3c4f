"""
Postboard Backend — Request Logging Middleware
================================================

What:  One access log line per request: method, path, status, duration,
       plus the exception type when the handler failed unexpectedly.
How:   Times the downstream call and picks the level from the status code
       (5xx → ERROR, 4xx → WARNING, otherwise INFO). The request id is added
       by RequestIDLogFilter, not here.

Last line of defense:
    Errors that no exception handler maps (anything outside PostboardError)
    are logged with their traceback and answered with a plain-text 500
    "Erro interno do servidor.". This runs inside CORS and Request ID, so the
    response still carries Access-Control-Allow-Origin and X-Request-ID.

Request bodies are never logged here; PostService logs the documents it stores.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

logger = logging.getLogger("postboard.access")

INTERNAL_ERROR_MESSAGE = "Erro interno do servidor."


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request and turns unhandled exceptions into a 500."""

    # Probed every few seconds by orchestrators
    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "%s %s 500 %.1fms from %s | unhandled %s: %s",
                method,
                path,
                duration_ms,
                client_ip,
                type(e).__name__,
                e,
                exc_info=True,
            )
            return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)

        if path in self.SKIPPED_PATHS:
            return response

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms from %s",
            method,
            path,
            status,
            duration_ms,
            client_ip,
        )
        return response
