"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.responses import Response

from magnetarr.infrastructure.config import AppConfig
from magnetarr.interfaces.app_state import AppState
from magnetarr.interfaces.composition import build_manifest, lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app: configuration ONLY, NO resource initialization.

    Resources (HTTP client, adapters, use case) are created in lifespan().
    """
    app = FastAPI(
        title="Magnetarr",
        description="Stremio addon: torrent index + Real-Debrid cache",
        version=config.stremio.addon_version,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config
    app.state.manifest = build_manifest(config)

    from magnetarr.interfaces.api.stremio import router as stremio_router

    app.include_router(stremio_router, prefix="/api/v1")

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return (
            f"{config.stremio.addon_name}: Stremio addon. "
            "Install via /api/v1/stremio/manifest.json"
        )

    @app.get("/api/v1/healthz")
    async def healthz() -> dict[str, str]:
        """Liveness probe: returns 200 as long as the process is running."""
        return {"status": "ok"}

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        start = time.perf_counter()
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            status_code = getattr(locals().get("response", None), "status_code", 500)

            # Path only: the settings segment carries the user's API key.
            log.info(
                "http_request",
                method=request.method,
                route=getattr(request.scope.get("route"), "path", None),
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
