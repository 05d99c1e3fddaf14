"""Domain errors and the handlers that turn them into JSON envelopes."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Mapping

from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.context import REQUEST_ID_HEADER, request_id_scope
from .schemas.system import ErrorResponse

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """Base class for errors that carry their own HTTP rendering."""

    default_message = "Application error."
    default_code = "application_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.code = code or self.default_code
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class NotFoundError(ApplicationError):
    """The entity does not exist, or is not visible to the caller."""

    default_message = "Resource not found."
    default_code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class UnauthorizedError(ApplicationError):
    """The caller is authenticated but may not act on the target project."""

    default_message = "You don't have access to this project."
    default_code = "unauthorized"
    status_code = status.HTTP_403_FORBIDDEN


class InvalidArgumentError(ApplicationError):
    default_message = "Invalid argument."
    default_code = "invalid_argument"
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ApplicationError):
    """Missing, malformed or rejected credentials."""

    default_message = "Could not validate credentials."
    default_code = "authentication_failed"
    status_code = status.HTTP_401_UNAUTHORIZED


class DatabaseIntegrityError(ApplicationError):
    default_message = "Database integrity violation."
    default_code = "db_integrity_error"
    status_code = status.HTTP_409_CONFLICT


class ServerError(ApplicationError):
    default_message = "Internal server error."
    default_code = "server_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


_HTTP_STATUS_CODE_MAP: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_401_UNAUTHORIZED: "authentication_failed",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
}


def _with_request_id(request: Request, details: Any | None) -> Any | None:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        return details
    if details is None:
        return {"request_id": request_id}
    if isinstance(details, dict):
        return {**details, "request_id": details.get("request_id", request_id)}
    return {"request_id": request_id, "detail": details}


def _render(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(code=code, message=message, details=_with_request_id(request, details))
    response = JSONResponse(status_code=status_code, content=body.model_dump(), headers=dict(headers or {}))
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


def _log_for(status_code: int):
    return logger.error if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning


async def _handle_application_error(request: Request, exc: ApplicationError) -> JSONResponse:
    with request_id_scope(getattr(request.state, "request_id", None)):
        _log_for(exc.status_code)(
            exc.message,
            extra={"code": exc.code, "status_code": exc.status_code, "path": request.url.path},
        )
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return _render(
            request,
            status_code=exc.status_code,
            code=exc.code,
            message=exc.message,
            details=exc.details,
            headers=headers,
        )


async def _handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    with request_id_scope(getattr(request.state, "request_id", None)):
        logger.warning("Request validation failed", extra={"errors": errors, "path": request.url.path})
        return _render(
            request,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            code="validation_error",
            message="Request validation failed.",
            details={"errors": errors},
        )


async def _handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    with request_id_scope(getattr(request.state, "request_id", None)):
        logger.error("Database integrity error encountered.", exc_info=exc)
        return _render(
            request,
            status_code=DatabaseIntegrityError.status_code,
            code=DatabaseIntegrityError.default_code,
            message=DatabaseIntegrityError.default_message,
        )


async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_STATUS_CODE_MAP.get(exc.status_code, "http_error")
    details: Any | None = None
    if isinstance(exc.detail, str):
        message = exc.detail
    else:
        try:
            message = HTTPStatus(exc.status_code).phrase
        except ValueError:
            message = "Error"
        if isinstance(exc.detail, list):
            details = {"errors": exc.detail}
        else:
            details = exc.detail
    with request_id_scope(getattr(request.state, "request_id", None)):
        _log_for(exc.status_code)(
            "HTTP exception raised",
            extra={"code": code, "status_code": exc.status_code, "path": request.url.path},
        )
        return _render(
            request,
            status_code=exc.status_code,
            code=code,
            message=message,
            details=details,
            headers=exc.headers,
        )


async def _handle_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    with request_id_scope(getattr(request.state, "request_id", None)):
        logger.exception("Unhandled application error.", exc_info=exc)
        return _render(
            request,
            status_code=ServerError.status_code,
            code=ServerError.default_code,
            message=ServerError.default_message,
        )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-producing handlers on ``app``."""

    app.add_exception_handler(ApplicationError, _handle_application_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, _handle_integrity_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _handle_unhandled_exception)


__all__ = [
    "ApplicationError",
    "AuthenticationError",
    "DatabaseIntegrityError",
    "InvalidArgumentError",
    "NotFoundError",
    "ServerError",
    "UnauthorizedError",
    "register_exception_handlers",
]
