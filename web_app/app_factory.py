"""FastAPI application factory."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortener.exceptions import InvalidURLError, GenerationError
from shortener.common.logging_config import get_logger

from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware

logger = get_logger("web")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Map shortener and framework errors to ``{"error": ...}`` responses."""

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Invalid request body for {request.url.path}: {exc.errors()}")
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @app.exception_handler(InvalidURLError)
    async def invalid_url_handler(request: Request, exc: InvalidURLError):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(GenerationError)
    async def generation_error_handler(request: Request, exc: GenerationError):
        logger.error(f"Short code generation failed: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Could not generate short code")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: Service instance (owns the mapping store)
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="URL Shortener",
        description="In-memory URL shortening service",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config

    app.add_middleware(LoggingMiddleware)
    register_exception_handlers(app)

    # API routes first so /health and /shorten win over /{short_code}
    app.include_router(api_router, tags=["API"])
    app.include_router(web_router, tags=["Redirect"])

    return app
