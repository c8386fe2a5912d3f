"""Lifeboard Backend - FastAPI Application."""

import time
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from lifeboard.boot import Bootloader, BootMode
from lifeboard.config import settings
from lifeboard.database import init_db
from lifeboard.deps import DbSession
from lifeboard.logger import bind_request_context, configure_logging, current_request_id, get_logger
from lifeboard.routers import habits, money, notes, pomodoro, tasks

APP_VERSION = "0.1.0"

# Initialize logging early
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - validate environment and init DB on startup."""
    # Will sys.exit(1) if critical checks fail
    await Bootloader.validate(mode=BootMode.CRITICAL)
    await init_db()
    logger.info("Application started", version=APP_VERSION, environment=settings.environment)
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Lifeboard API",
    description="Personal finance, habit and productivity tracking",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def logging_middleware(request: Request, call_next: Any) -> Response:
    """Middleware to inject Request-ID and log request details."""
    request_id = request.headers.get("X-Request-ID", str(uuid4()))

    bind_request_context(request_id, request.method, request.url.path)

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


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler to ensure JSON response."""
    # Only show exception details in DEBUG mode
    if settings.debug:
        detail = str(exc)
        trace = "".join(traceback.format_exception(exc))
    else:
        detail = "An internal server error occurred. Please try again later."
        trace = None

    return JSONResponse(
        status_code=500,
        content={
            "detail": detail,
            "trace": trace,
            "request_id": current_request_id(),
        },
    )


# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)

app.include_router(money.router)
app.include_router(habits.router)
app.include_router(tasks.router)
app.include_router(notes.router)
app.include_router(pomodoro.router)


@app.get("/health")
async def health_check(db: DbSession) -> JSONResponse:
    """Returns 200 when the database answers, 503 otherwise."""
    checks: dict[str, bool] = {}
    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = True
    except SQLAlchemyError as exc:
        logger.error("Health check: database unreachable", error=str(exc))
        checks["database"] = False

    healthy = all(checks.values())
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "checks": checks,
            "ai_enabled": settings.ai_enabled,
            "version": APP_VERSION,
        },
    )
