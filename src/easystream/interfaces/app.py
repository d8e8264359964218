"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.responses import Response

from easystream.infrastructure.config import AppConfig
from easystream.interfaces.app_state import AppState
from easystream.interfaces.composition import lifespan

log = structlog.get_logger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app: configuration ONLY, NO resource initialization.

    Resources (HTTP client, adapters, use case) are created in lifespan().
    """
    app = FastAPI(
        title="easystream",
        description="Stremio addon streaming Easynews search results",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    from easystream.interfaces.api.stats.router import router as stats_router
    from easystream.interfaces.api.stremio.router import router as stremio_router

    app.include_router(stremio_router)
    app.include_router(stats_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        """Liveness probe, returns 200 as long as the process is running."""
        return {"status": "ok"}

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            log.exception("unhandled_request_error", path=request.url.path)
            response = JSONResponse(
                status_code=500,
                content={"error": "An unexpected error occurred"},
            )

        duration_ms = (time.perf_counter() - start) * 1000.0
        log.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
            client_host=(request.client.host if request.client else None),
        )
        return response

    # Registered last, so it wraps everything including the error fallback.
    @app.middleware("http")
    async def cors_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method == "OPTIONS":
            response: Response = Response(status_code=200)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    return app
