"""API middleware: CORS, request logging, and error handling.

Provides helper functions and middleware classes to configure cross-origin
resource sharing, structured request logging (via structlog), and the
conversion of :class:`NarratorError` subclasses into JSON
:class:`ErrorResponse` bodies.

Middleware is a stack (last added, first executed).  ``main.py`` adds
ErrorHandlingMiddleware first and RequestLoggingMiddleware second, so the
request log sees the final status code after errors were converted.
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.api.schemas import ErrorResponse
from src.utils.errors import GENERIC_DEPENDENCY_MESSAGE, ErrorKind, NarratorError
from src.utils.logging import bind_request_context, clear_request_context, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DEPENDENCY: 502,
    ErrorKind.CONFIGURATION: 500,
}


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Defaults to ``["*"]`` for development; restrict to the deployed
    frontend origin in production via ``CORS_ORIGINS``.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration.

    A ``request_id`` is bound into the structlog context for the lifetime
    of the request, so every event logged while serving it carries the id.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None
        bind_request_context(request_id=uuid.uuid4().hex[:12])

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )
            clear_request_context()


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


def error_response(exc: NarratorError) -> JSONResponse:
    """Build the client-facing response for *exc*.

    Validation and not-found messages are returned verbatim.  Authorization
    failures get a fixed message; everything else gets the generic
    dependency message so provider error text never reaches the client.
    """
    if exc.is_public:
        detail = exc.message
    elif exc.kind is ErrorKind.UNAUTHORIZED:
        detail = "Unauthorized"
    else:
        detail = GENERIC_DEPENDENCY_MESSAGE
    body = ErrorResponse(error=exc.kind.value, detail=detail)
    return JSONResponse(
        status_code=STATUS_BY_KIND.get(exc.kind, 500),
        content=body.model_dump(),
    )


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catch ``NarratorError`` subclasses and return structured JSON errors.

    The full error (including provider name and message) is logged
    server-side; the client only sees what :func:`error_response` allows.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except NarratorError as exc:
            log = _logger.error if exc.kind is ErrorKind.DEPENDENCY else _logger.info
            log(
                "application_error",
                kind=exc.kind.value,
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            return error_response(exc)
