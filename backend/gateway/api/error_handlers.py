"""Error Handlers — global exception handlers for errors raised outside the dispatcher.

Invariants:
    - GatewayError -> the legacy {"status": {error, code, request}} envelope
    - RequestValidationError -> 400 envelope, field details only in the log
    - Exception (catch-all) -> 500 envelope, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (GatewayError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py (ADR: ExMA import fan-out < 10)
    - Same envelope as dispatcher errors: a client cannot tell which layer failed
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response

from gateway.core.domain_types import ResponseFormat
from gateway.core.errors import BadRequestError, GatewayError, InternalServerError
from gateway.core.response_formatter import render_error

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_gateway_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _envelope_response(request: Request, exc: GatewayError) -> Response:
    rendered = render_error(
        ResponseFormat.JSON, exc.to_envelope(request.url.path.strip("/")),
    )
    return Response(
        content=rendered.body,
        status_code=exc.http_status,
        media_type=rendered.content_type,
    )


def _register_gateway_error_handler(app: FastAPI) -> None:
    """Register gateway domain/infrastructure error handler."""

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        logger.error(
            f"GatewayError: {exc.message}",
            extra={
                "error_code": exc.code, "api_path": request.url.path,
                "status_code": exc.http_status,
            },
        )
        return _envelope_response(request, exc)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return _envelope_response(request, BadRequestError("Invalid request data"))


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return _envelope_response(request, InternalServerError())
