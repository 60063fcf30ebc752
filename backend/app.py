"""FastAPI application entry point for the matrix display API."""

import asyncio
import contextlib
import logging
import sys

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, settings as default_settings
from errors import register_error_handlers
from services.display import DisplayService

# Structured logging: JSON for production, human-readable for local
if default_settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, service: DisplayService | None = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="Matrix Display API", version="1.0.0")
    app.state.display = service or DisplayService.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.display import router as display_router
    from routes.feeds import router as feeds_router
    from routes.health import router as health_router

    app.include_router(health_router)
    app.include_router(display_router)
    app.include_router(feeds_router)

    @app.on_event("startup")
    async def _start_state_ticker() -> None:
        missing = settings.validate()
        if missing:
            logger.warning("Missing env vars (feeds will return 503): %s", ", ".join(missing))

        gate = app.state.display.gate
        app.state.ticker = asyncio.create_task(gate.run_periodic(settings.state_tick_seconds))
        logger.info("State ticker running every %ss", settings.state_tick_seconds)

    @app.on_event("shutdown")
    async def _stop_state_ticker() -> None:
        ticker = getattr(app.state, "ticker", None)
        if ticker is not None:
            ticker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await ticker

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("app:app", host="0.0.0.0", port=default_settings.port)
