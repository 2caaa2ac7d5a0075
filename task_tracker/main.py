import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .exceptions import TaskTrackerError
from .logging_setup import setup_logging
from .routes import stats, tasks
from .schemas import ErrorResponse
from .store import TaskStore

logger = logging.getLogger(__name__)

TASK_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
STATS_METHODS = "GET, OPTIONS"


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=message, status=status_code, timestamp=int(time.time() * 1000))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    setup_logging(app.state.settings.log_level)
    logger.info(
        "Task Tracker %s started with %d tasks",
        app.state.settings.version,
        app.state.task_store.count(),
    )
    yield
    logger.info("Task Tracker shutting down")


def create_app(settings: Optional[Settings] = None, store: Optional[TaskStore] = None) -> FastAPI:
    """Build the API around one task store.

    When no store is given a fresh one is created and, if enabled in the
    settings, filled with the sample tasks.
    """
    settings = settings or get_settings()
    if store is None:
        store = TaskStore()
        if settings.seed_sample_tasks:
            store.seed_sample_tasks()

    app = FastAPI(
        title="Task Tracker API",
        description="In-memory task tracking with filtering, search and statistics",
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.task_store = store

    stats_path = f"{settings.api_prefix}/stats"

    # CORS headers on every response, preflight answers, request logging
    @app.middleware("http")
    async def cors_and_logging(request: Request, call_next):
        started = time.perf_counter()
        if request.method == "OPTIONS":
            # Preflight is answered here, without routing
            response = Response(status_code=200)
        else:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("Unhandled error on %s %s", request.method, request.url.path)
                response = error_response(500, "Internal server error")

        if request.url.path.startswith(stats_path):
            methods = STATS_METHODS
        else:
            methods = TASK_METHODS
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = methods
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        response.headers["Access-Control-Max-Age"] = "3600"

        logger.debug(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    @app.exception_handler(TaskTrackerError)
    async def task_error_handler(request: Request, exc: TaskTrackerError):
        logger.info("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected body on %s %s: %s", request.method, request.url.path, exc.errors())
        return error_response(400, "Invalid task data")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        response = error_response(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    app.include_router(tasks.router, prefix=settings.api_prefix)
    app.include_router(stats.router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "task-tracker-api",
            "version": settings.version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "task_tracker.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
