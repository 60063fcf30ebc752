"""Request-scoped access to the shared DisplayService."""

from fastapi import Request

from services.display import DisplayService


def get_service(request: Request) -> DisplayService:
    return request.app.state.display
