"""Global exception handlers producing consistent JSON error bodies.

Every error response has the shape ``{"detail": ..., "request_id": ...}`` so
the dashboard can show the message and support can find the matching log
lines.
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from libs.common.errors import ServiceError
from libs.common.logging import get_logger, get_request_id

logger = get_logger(__name__)


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None) or get_request_id()


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Service error",
            extra={
                "extra_fields": {
                    "error_type": type(exc).__name__,
                    "error": exc.message,
                }
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "request_id": _request_id(request)},
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "request_id": _request_id(request)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "detail": jsonable_errors(exc),
            "request_id": _request_id(request),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception",
        extra={"extra_fields": {"error_type": type(exc).__name__}},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "request_id": _request_id(request)},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Strip non-serializable context (e.g. exception objects) from pydantic errors."""
    errors = []
    for error in exc.errors():
        errors.append(
            {
                "loc": list(error.get("loc", ())),
                "msg": error.get("msg"),
                "type": error.get("type"),
            }
        )
    return errors


def add_exception_handlers(app: FastAPI) -> None:
    """Register the global exception handlers on an app."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
