"""Observability middleware for the attendance API.

Provides:
- Request ID generation and propagation
- Request/response timing
- Structured logging for all requests

Usage:
    from libs.common.middleware import add_observability_middleware

    app = FastAPI()
    add_observability_middleware(app)
"""
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from libs.common.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
_QUIET_PATHS = frozenset({"/health"})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Bind a request ID to the logging context and log the request lifecycle.

    The ID is taken from the incoming X-Request-ID header when present and is
    echoed back on the response so the dashboard can correlate failures.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(
            request_id=request.headers.get(REQUEST_ID_HEADER),
            path=request.url.path,
            method=request.method,
        )
        request.state.request_id = request_id
        quiet = request.url.path in _QUIET_PATHS

        start_time = time.perf_counter()
        if not quiet:
            logger.info(
                "Request started",
                extra={
                    "extra_fields": {
                        "query": str(request.url.query) if request.url.query else None
                    }
                },
            )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Request failed with unhandled exception",
                extra={
                    "extra_fields": {
                        "error": str(e),
                        "duration_ms": _elapsed_ms(start_time),
                    }
                },
            )
            raise
        finally:
            clear_request_context()

        if not quiet:
            log = logger.warning if response.status_code >= 400 else logger.info
            log(
                "Request completed",
                extra={
                    "extra_fields": {
                        "status_code": response.status_code,
                        "duration_ms": _elapsed_ms(start_time),
                        "request_id": request_id,
                    }
                },
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)


def add_observability_middleware(app: FastAPI) -> None:
    """
    Configure logging and install the request context middleware.
    """
    configure_logging()
    app.add_middleware(RequestContextMiddleware)
    logger.info("Observability middleware initialized")
