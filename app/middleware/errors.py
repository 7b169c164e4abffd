from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.json_io import write_json
from app.core.errors import ClientInputError, ResponseEncodeError

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "the server encountered a problem and could not process your request"
NOT_FOUND_MESSAGE = "the requested resource could not be found"


def error_response(status: int, message: Any, headers: dict[str, str] | None = None) -> Response:
    """Write the ``{"error": ...}`` envelope used for every failure."""
    return write_json(status, {"error": message}, headers)


def _http_exception_message(request: Request, exc: StarletteHTTPException) -> str:
    if exc.status_code == 404:
        return NOT_FOUND_MESSAGE
    if exc.status_code == 405:
        return f"the {request.method} method is not supported for this resource"
    return str(exc.detail)


def _field_errors(errors: list[dict[str, Any]]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for err in errors:
        name = ".".join(str(part) for part in err["loc"] if part != "body") or "body"
        fields.setdefault(name, err["msg"])
    return fields


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers that turn exceptions into error envelopes."""

    @app.exception_handler(ClientInputError)
    async def client_input_error_handler(request: Request, exc: ClientInputError) -> Response:
        logger.warning("client error", extra={"path": request.url.path, "detail": exc.message})
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(ValidationError)
    async def body_validation_error_handler(request: Request, exc: ValidationError) -> Response:
        logger.warning("validation error", extra={"path": request.url.path, "errors": exc.errors()})
        return error_response(422, _field_errors(exc.errors()))

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> Response:
        logger.warning("validation error", extra={"path": request.url.path, "errors": exc.errors()})
        return error_response(422, _field_errors(list(exc.errors())))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        logger.warning("HTTP exception", extra={"path": request.url.path, "detail": exc.detail})
        return error_response(
            exc.status_code, _http_exception_message(request, exc), getattr(exc, "headers", None)
        )

    @app.exception_handler(ResponseEncodeError)
    async def response_encode_error_handler(request: Request, exc: ResponseEncodeError) -> Response:
        logger.error("response encoding failed", extra={"path": request.url.path, "detail": str(exc)})
        return error_response(500, SERVER_ERROR_MESSAGE)

    @app.middleware("http")
    async def catch_unhandled_exceptions(request: Request, call_next):  # type: ignore[no-untyped-def]
        try:
            return await call_next(request)
        except Exception:
            logger.exception("unhandled exception", extra={"path": request.url.path})
            return error_response(500, SERVER_ERROR_MESSAGE)
