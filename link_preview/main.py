"""FastAPI application for link previews.

Usage::

    # Development server
    uvicorn link_preview.main:app --reload

    # Installed entry point (host and port from settings)
    link-preview-api
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Callable

import structlog
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from link_preview.api import api_router
from link_preview.config import settings
from link_preview.logging_config import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    configure_logging(settings.effective_log_level)
    logger.info("startup", app=settings.app_name, debug=settings.debug)
    yield
    logger.info("shutdown", app=settings.app_name)


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router)


@app.middleware("http")
async def request_logging_middleware(
    request: Request, call_next: Callable
) -> Response:
    """Log each request with its status and duration under a request ID."""
    request_id = str(uuid.uuid4())
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )

    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
    log_fn = logger.warning if response.status_code >= 400 else logger.info
    log_fn(
        "request_complete",
        status_code=response.status_code,
        elapsed_ms=elapsed_ms,
    )

    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok", "app": settings.app_name}


def run() -> None:
    uvicorn.run(
        "link_preview.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
