"""FastAPI application factory with middleware, routers, and lifespan."""

import logging
import resource
import sys
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings, setup_logging
from .rate_limit import limiter
from .suggestions.routes import CONTENT_REQUIRED_ERROR
from .suggestions.routes import router as suggestions_router
from .suggestions.service import create_resolver
from .timeutil import utc_timestamp

logger = logging.getLogger(__name__)

APP_NAME = "LinkedIn Search Everywhere API"
VERSION = "1.0.0"

ENDPOINTS = [
    "GET /",
    "GET /health",
    "POST /api/analyze-content",
]

_startup_time: float = 0.0


def _memory_usage() -> dict:
    usage = resource.getrusage(resource.RUSAGE_SELF)
    # ru_maxrss is bytes on macOS, kilobytes elsewhere
    max_rss = usage.ru_maxrss if sys.platform == "darwin" else usage.ru_maxrss * 1024
    return {"maxRss": max_rss}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    global _startup_time
    _startup_time = time.time()

    app.state.resolver = create_resolver(settings)
    if not settings.openai_configured:
        logger.warning("OPENAI_API_KEY not configured, serving keyword fallback suggestions only")

    logger.info("%s running on port %d", APP_NAME, settings.port)
    logger.info("Health check: http://localhost:%d/health", settings.port)
    yield


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    return JSONResponse(
        {"error": "Too many requests, please try again later."},
        status_code=429,
        headers={"Retry-After": "900"},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=APP_NAME,
        version=VERSION,
        lifespan=lifespan,
    )

    # --- Exception handlers ---
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Wrong method on a known path is reported like an unknown route
        if exc.status_code in (404, 405):
            return JSONResponse(
                {"error": "Endpoint not found", "availableEndpoints": ENDPOINTS},
                status_code=404,
            )
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": CONTENT_REQUIRED_ERROR}, status_code=400)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        body = {"error": "Internal server error"}
        if not settings.is_production:
            body["detail"] = str(exc)
        return JSONResponse(body, status_code=500)

    # --- Middleware stack (LIFO: last added = outermost) ---

    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        too_large = JSONResponse({"error": "Request body too large"}, status_code=413)
        length = request.headers.get("content-length")
        if length is not None:
            if length.isdigit() and int(length) > settings.max_body_bytes:
                return too_large
        elif request.method in ("POST", "PUT", "PATCH"):
            # Chunked upload: measure the buffered body
            body = await request.body()
            if len(body) > settings.max_body_bytes:
                return too_large
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- API routers ---
    api_router = APIRouter(prefix="/api")
    api_router.include_router(suggestions_router)
    app.include_router(api_router)

    # --- Status & health ---
    @app.get("/")
    def root():
        return {
            "name": APP_NAME,
            "status": "running",
            "version": VERSION,
            "endpoints": ENDPOINTS,
            "timestamp": utc_timestamp(),
            "environment": settings.environment,
        }

    @app.get("/health")
    def health(request: Request):
        uptime = round(time.time() - _startup_time, 1) if _startup_time else 0.0
        return {
            "status": "healthy",
            "timestamp": utc_timestamp(),
            "uptime": uptime,
            "memory": _memory_usage(),
            "openaiConfigured": request.app.state.resolver.configured,
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: configure logging and serve with uvicorn."""
    setup_logging()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
