"""Interface layer error mapping.

Domain errors carry an ``ErrorKind``; this module turns each kind into a
stable HTTP status and a ``{"kind", "detail"}`` body.

Rendering happens in ``DomainErrorMiddleware`` rather than a FastAPI
exception handler. Exception handlers run inside dishka's request scope, so
the scope would close cleanly and commit the session. The middleware sits
outside that scope: the error reaches the unit of work first and the
session rolls back.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from engage.domain.error import DomainError, ErrorKind

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.OPERATION_NOT_ALLOWED: status.HTTP_409_CONFLICT,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_PARENT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INVALID_ACTION: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    return ERROR_STATUS[error.kind]


def render_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as JSON.

    Args:
        request: Request that raised the error
        exc: The domain error

    Returns:
        JSON response with the mapped status code
    """
    status_code = status_for(exc)
    logfire.info(
        "Domain error",
        kind=exc.kind.value,
        status_code=status_code,
        path=request.url.path,
        detail=str(exc),
    )
    return JSONResponse(
        status_code=status_code,
        content={"kind": exc.kind.value, "detail": str(exc)},
    )


class DomainErrorMiddleware:
    """ASGI middleware turning escaped domain errors into responses."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        try:
            await self.app(scope, receive, send)
        except DomainError as exc:
            response = render_domain_error(Request(scope), exc)
            await response(scope, receive, send)


def register_error_handlers(app: FastAPI) -> None:
    """Install domain error rendering on an application.

    Call after ``setup_di``: middleware added later wraps middleware added
    earlier, and this one has to wrap dishka's container middleware.
    """
    app.add_middleware(DomainErrorMiddleware)
