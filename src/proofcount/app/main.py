from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from proofcount.app.api.routers import count_router, health_router, stores_router
from proofcount.app.context import AppContext, build_context
from proofcount.domain.stores.timeframes import InvalidTimeframeError
from proofcount.observability.logging import configure_logging
from proofcount.settings import get_settings

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # Drop the leading "query"/"body" marker from the location
        loc = [str(p) for p in err.get("loc", ())[1:]]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Build the FastAPI application.

    When no context is supplied, one is built from environment settings at start-up
    and its storage client is closed on shutdown.
    """
    settings = context.settings if context is not None else get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owns_context = getattr(app.state, "context", None) is None
        if owns_context:
            app.state.context = build_context(settings)
        try:
            yield
        finally:
            if owns_context:
                app.state.context.close()
                app.state.context = None

    app = FastAPI(title="proofcount", lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _describe_validation_error(exc)})

    @app.exception_handler(InvalidTimeframeError)
    async def invalid_timeframe_handler(request: Request, exc: InvalidTimeframeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(health_router)
    app.include_router(count_router, prefix="/api", tags=["count"])
    app.include_router(stores_router, prefix="/api", tags=["stores"])
    return app


configure_logging()

app = create_app()
