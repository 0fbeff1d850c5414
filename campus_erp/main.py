from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from campus_erp import __version__
from campus_erp.core.config import settings
from campus_erp.core.database import SupabaseClient
from campus_erp.core.exceptions import CampusERPError, ValidationError, error_response
from campus_erp.core.logging_config import logger
from campus_erp.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    RequestSizeLimitMiddleware,
)
from campus_erp.core.rate_limiter import build_limiter, rate_limit_exceeded_handler


ADMIN_SERVICE = "admin-backend"
ACADEMIC_SERVICE = "academic-backend"

API_PREFIXES = {
    ADMIN_SERVICE: f"/api/admin/{settings.API_VERSION}",
    ACADEMIC_SERVICE: f"/api/academic/{settings.API_VERSION}",
}


def get_service_router(service_name: str):
    if service_name == ADMIN_SERVICE:
        from campus_erp.api.admin.router import api_router
    elif service_name == ACADEMIC_SERVICE:
        from campus_erp.api.academic.router import api_router
    else:
        raise ValueError(f"Unknown service: {service_name}")
    return api_router


def _render(request: Request, error: CampusERPError, **extra) -> JSONResponse:
    body = error_response(error, path=request.url.path, debug=not settings.is_production())
    body.update(extra)
    return JSONResponse(status_code=error.status_code, content=body)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure in the `{success: false, error, meta}` envelope"""

    @app.exception_handler(CampusERPError)
    async def campus_erp_error_handler(request: Request, exc: CampusERPError):
        if exc.status_code >= 500:
            logger.log_error_with_context(
                exc,
                context=f"{request.method} {request.url.path}",
                exc_info=False,
                error_code=exc.code,
                error_details=exc.details,
            )
        else:
            logger.warning(
                f"{exc.code}: {exc.message}",
                extra={"event_type": "client_error", "error_code": exc.code, "http_path": request.url.path}
            )
        return _render(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        logger.warning(
            f"Validation failed on {request.method} {request.url.path}",
            extra={"event_type": "validation_error", "errors": errors}
        )
        return _render(request, ValidationError("Validation failed"), errors=errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            error = CampusERPError(
                f"Route {request.method} {request.url.path} not found",
                code="NOT_FOUND",
                status_code=404,
            )
        else:
            error = CampusERPError(str(exc.detail), code=f"HTTP_{exc.status_code}", status_code=exc.status_code)
        return _render(request, error)

    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global exception: {exc}", exc_info=True)
        error = CampusERPError("Internal server error", code="INTERNAL_ERROR")
        error.details = {"reason": str(exc), "error_type": type(exc).__name__}
        return _render(request, error)


def create_app(service_name: str, limiter: Optional[Limiter] = None) -> FastAPI:
    """Build the FastAPI application for one backend service"""
    api_prefix = API_PREFIXES[service_name]

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("=" * 60)
        logger.info(f"Starting {settings.APP_NAME} {service_name}...")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"API prefix: {api_prefix}")
        logger.info("=" * 60)

        app.state.db = SupabaseClient.from_settings()
        if settings.SUPABASE_CONFIGURED:
            logger.info("[Startup] ✓ Supabase client ready")

        yield

        logger.info(f"Shutting down {service_name}...")
        await app.state.db.aclose()

    app = FastAPI(
        title=f"{settings.APP_NAME} - {service_name}",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.service_name = service_name

    # Rate limiter state (read by SlowAPIMiddleware)
    app.state.limiter = limiter or build_limiter(service_name)

    # Middleware (order matters - last added runs first)
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_REQUEST_SIZE)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Response-Time"],
    )

    register_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "ok",
            "service": service_name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    app.include_router(get_service_router(service_name), prefix=api_prefix)
    return app


admin_app = create_app(ADMIN_SERVICE)
academic_app = create_app(ACADEMIC_SERVICE)


def run(service_name: str, app_path: str) -> None:
    import uvicorn

    uvicorn.run(
        app_path,
        host=settings.SERVER_HOST,
        port=settings.get_port(service_name),
        reload=settings.DEBUG,
    )


def run_admin() -> None:
    run(ADMIN_SERVICE, "campus_erp.main:admin_app")


def run_academic() -> None:
    run(ACADEMIC_SERVICE, "campus_erp.main:academic_app")


if __name__ == "__main__":
    run_academic()
