"""FastAPI application entrypoint serving every API router in one process.

The dashboard UI talks to this app only; each service router is mounted
in-process and shares the same auth, logging and error handling.
"""

from __future__ import annotations

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

load_dotenv()

from libs.common.config import get_settings
from libs.common.error_handler import add_exception_handlers
from libs.common.middleware import add_observability_middleware
from libs.common.rate_limit import limiter, rate_limit_exceeded_handler
from services.attendance_service.router import router as attendance_router
from services.dashboard_service.router import router as dashboard_router
from services.sidebar_service.router import router as sidebar_router
from services.users_service.router import router as users_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = get_settings()
    app = FastAPI(
        title="Attendance Management API",
        version="0.1.0",
        description="Employee attendance, user management and dashboard API.",
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_observability_middleware(app)
    add_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple readiness endpoint."""
        return {"status": "ok"}

    app.include_router(attendance_router)
    app.include_router(users_router)
    app.include_router(dashboard_router)
    app.include_router(sidebar_router)

    return app


app = create_app()
