"""userhub - FastAPI application."""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from userhub import __version__
from userhub.config import settings
from userhub.database import check_database, dispose_engine, init_db, session_scope
from userhub.logger import configure_logging, get_logger, log_exception
from userhub.repositories import InMemoryUserRepository, SqlUserRepository, UserRepository
from userhub.routers import hello, users
from userhub.seed import seed_demo_users
from userhub.utils import http_response

# Initialize logging early
configure_logging()
logger = get_logger(__name__)

ENDPOINTS = {
    "health": "/health",
    "users": "/api/users",
    "hello": "/api/hello",
    "helloPersonalized": "/api/hello/personalized/{name}",
    "helloRandom": "/api/hello/random",
    "helloLanguages": "/api/hello/languages",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - prepare the user store on startup."""
    repository: UserRepository | None = app.state.user_repository

    if repository is None:
        await init_db()
        if settings.seed_demo_users:
            async with session_scope() as session:
                await seed_demo_users(SqlUserRepository(session))
    elif settings.seed_demo_users:
        await seed_demo_users(repository)

    logger.info(
        "Application started",
        version=__version__,
        repository_backend=type(repository).__name__ if repository else "SqlUserRepository",
    )
    yield

    if repository is None:
        await dispose_engine()
    logger.info("Application shutting down")


def _request_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]


def create_app(user_repository: UserRepository | None = None) -> FastAPI:
    """Build the application.

    With the memory backend a process-wide InMemoryUserRepository is created
    unless one is passed in; with the SQL backend each request gets its own
    SqlUserRepository (see userhub.deps).
    """
    if user_repository is None and not settings.uses_sql_backend:
        user_repository = InMemoryUserRepository()

    app = FastAPI(
        title="userhub API",
        description="Layered REST API for users, with a greeting endpoint",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.user_repository = user_repository
    app.state.started_at = time.monotonic()

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next: Any) -> Response:
        """Middleware to inject Request-ID and log request details."""
        request_id = request.headers.get("X-Request-ID", str(uuid4()))

        # structlog.contextvars are isolated per async context/task
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            logger.info(
                "HTTP Request",
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )

            response.headers["X-Request-ID"] = request_id
            return response
        except Exception as exc:
            duration = time.perf_counter() - start_time
            logger.exception(
                "HTTP Request Failed",
                duration_ms=round(duration * 1000, 2),
                error=str(exc),
            )
            raise

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Unknown routes, wrong methods and other framework errors use the envelope too."""
        response = http_response.error(str(exc.detail), exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return http_response.unprocessable_entity(errors=_request_errors(exc))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Last resort: a generic 500 envelope; details stay in the logs."""
        log_exception(logger, exc, "Unhandled exception", path=request.url.path)
        if settings.debug:
            return http_response.internal_error(f"Internal Server Error: {exc}")
        return http_response.internal_error()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )

    app.include_router(users.router)
    app.include_router(hello.router)

    @app.get("/")
    async def index() -> dict[str, Any]:
        """Service banner with the endpoint map."""
        return {
            "message": "userhub API is running",
            "version": __version__,
            "endpoints": ENDPOINTS,
        }

    @app.get("/health")
    async def health_check(request: Request) -> JSONResponse:
        """Liveness and uptime; probes the database when the SQL backend is active.

        Returns 200 if all checks pass, 503 otherwise.
        """
        checks: dict[str, bool] = {}
        if request.app.state.user_repository is None:
            try:
                async with session_scope() as session:
                    checks["database"] = await check_database(session)
            except (SQLAlchemyError, OSError) as exc:
                logger.error(
                    "Health check: database unreachable",
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                checks["database"] = False

        healthy = all(checks.values())
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={
                "status": "OK" if healthy else "unhealthy",
                "timestamp": datetime.now(UTC).isoformat(),
                "uptime": round(time.monotonic() - request.app.state.started_at, 3),
                "version": __version__,
                "checks": checks,
            },
        )

    return app


app = create_app()
