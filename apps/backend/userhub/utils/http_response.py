"""Standard response envelope for every HTTP reply.

Every body has the shape::

    {"success": bool, "message"?: str, "data"?: Any, "error"?: str,
     "errors"?: list, "timestamp": ISO-8601}

The helpers know nothing about the domain; controllers pick the helper that
matches the outcome of a service call.
"""

from datetime import UTC, datetime
from enum import IntEnum
from typing import Any

from fastapi import Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from userhub.schemas.base import ApiResponse
from userhub.utils.exceptions import AppError, InternalError


class HttpStatus(IntEnum):
    # Success
    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NO_CONTENT = 204

    # Client errors
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422

    # Server errors
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503


def _timestamp() -> str:
    return datetime.now(UTC).isoformat()


def _render(envelope: ApiResponse, status_code: int, *, keep_data: bool) -> JSONResponse:
    # Only top-level keys are dropped when unset; payload contents stay intact
    body = {key: value for key, value in envelope.model_dump().items() if value is not None}
    if keep_data:
        body["data"] = envelope.data
    return JSONResponse(status_code=int(status_code), content=jsonable_encoder(body))


# =============================================================================
# Success
# =============================================================================


def success(
    data: Any,
    message: str | None = None,
    status_code: int = HttpStatus.OK,
) -> JSONResponse:
    envelope = ApiResponse(
        success=True,
        message=message or "Success",
        data=data,
        timestamp=_timestamp(),
    )
    return _render(envelope, status_code, keep_data=True)


def created(data: Any, message: str | None = None) -> JSONResponse:
    return success(data, message or "Resource created successfully", HttpStatus.CREATED)


def no_content() -> Response:
    return Response(status_code=HttpStatus.NO_CONTENT)


# =============================================================================
# Errors
# =============================================================================


def error(
    message: str,
    status_code: int = HttpStatus.INTERNAL_SERVER_ERROR,
    errors: list[Any] | None = None,
) -> JSONResponse:
    envelope = ApiResponse(
        success=False,
        message=message,
        error=message,
        errors=errors,
        timestamp=_timestamp(),
    )
    return _render(envelope, status_code, keep_data=False)


def bad_request(message: str = "Bad Request", errors: list[Any] | None = None) -> JSONResponse:
    return error(message, HttpStatus.BAD_REQUEST, errors)


def unauthorized(message: str = "Unauthorized") -> JSONResponse:
    return error(message, HttpStatus.UNAUTHORIZED)


def forbidden(message: str = "Forbidden") -> JSONResponse:
    return error(message, HttpStatus.FORBIDDEN)


def not_found(message: str = "Resource not found") -> JSONResponse:
    return error(message, HttpStatus.NOT_FOUND)


def conflict(message: str = "Resource already exists") -> JSONResponse:
    return error(message, HttpStatus.CONFLICT)


def unprocessable_entity(
    message: str = "Validation failed", errors: list[Any] | None = None
) -> JSONResponse:
    return error(message, HttpStatus.UNPROCESSABLE_ENTITY, errors)


def internal_error(message: str = "Internal Server Error") -> JSONResponse:
    return error(message, HttpStatus.INTERNAL_SERVER_ERROR)


def service_unavailable(message: str = "Service Unavailable") -> JSONResponse:
    return error(message, HttpStatus.SERVICE_UNAVAILABLE)


def error_from_exception(exc: AppError) -> JSONResponse:
    """Render a taxonomy error; internal errors never expose their message."""
    if isinstance(exc, InternalError) or exc.status_code >= HttpStatus.INTERNAL_SERVER_ERROR:
        return internal_error()
    return error(exc.message, exc.status_code, exc.errors)


# =============================================================================
# Status helpers
# =============================================================================


def get_status_name(status_code: int) -> str:
    try:
        return HttpStatus(status_code).name
    except ValueError:
        return "UNKNOWN"


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


def is_client_error(status_code: int) -> bool:
    return 400 <= status_code < 500


def is_server_error(status_code: int) -> bool:
    return 500 <= status_code < 600
