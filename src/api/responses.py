"""Response envelope helpers.

Success: ``{"success": true, "message": ..., "data": ...}``
Failure: ``{"success": false, "message": ..., "errors"?: {field: [messages]}}``
"""

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from domain.model.errors import (
    DomainError,
    DuplicateError,
    PermissionDeniedError,
    UnauthorizedError,
    ValidationError,
)

_STATUS_BY_ERROR = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (DuplicateError, status.HTTP_409_CONFLICT),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
]


def success_response(data: Any, message: str = "Success", status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "message": message, "data": data},
    )


def error_response(
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    errors: dict[str, list[str]] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def domain_error_response(error: DomainError) -> JSONResponse:
    """Map a domain error to its envelope and HTTP status.

    Unmapped errors (InternalError included) become a 500 carrying the
    error's own generic message.
    """
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            errors = error.field_errors if isinstance(error, ValidationError) else None
            return error_response(str(error), status_code, errors)
    return error_response(str(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
