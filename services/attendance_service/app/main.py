"""FastAPI application for the Attendance Service."""
from dotenv import load_dotenv
from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

load_dotenv()

from libs.common.error_handler import add_exception_handlers
from libs.common.middleware import add_observability_middleware
from libs.common.rate_limit import limiter, rate_limit_exceeded_handler
from services.attendance_service.router import router as attendance_router


def create_app() -> FastAPI:
    """Create and configure the Attendance Service FastAPI app."""
    app = FastAPI(
        title="Attendance Service",
        version="0.1.0",
        description="Daily time in / time out and tier-scoped attendance listing.",
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    add_observability_middleware(app)
    add_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "attendance"}

    app.include_router(attendance_router)

    return app


app = create_app()
