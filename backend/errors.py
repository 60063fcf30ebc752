"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DisplayServiceError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationMissingError(DisplayServiceError):
    """A feed cannot run until the listed env vars are set."""

    def __init__(self, feed: str, missing: list[str]):
        super().__init__(
            f"{feed} feed unavailable, missing configuration: {', '.join(missing)}",
            status_code=503,
        )
        self.feed = feed
        self.missing = missing


class UpstreamFetchError(DisplayServiceError):
    """Network failure, non-2xx status or undecodable body from an upstream API."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source} request failed: {message}", status_code=502)
        self.source = source


class UpstreamDataError(UpstreamFetchError):
    """Upstream answered, but the payload lacks the fields we need."""


class UnsupportedModeError(DisplayServiceError):
    def __init__(self, mode: str, supported: set[str]):
        super().__init__(
            f"Unsupported mode: {mode}. Supported: {sorted(supported)}",
            status_code=400,
        )


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(DisplayServiceError)
    async def handle_display_error(_request: Request, exc: DisplayServiceError):
        if exc.status_code >= 500:
            logger.warning("Request failed: %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
