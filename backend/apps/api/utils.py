from collections.abc import Mapping
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

ERROR_STATUS_MAP = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "UNSUPPORTED_MEDIA_TYPE": status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _normalize_details(details: Any) -> Any:
    if isinstance(details, ValidationError):
        return as_serializer_error(details)
    if isinstance(details, Mapping):
        return dict(details)
    if isinstance(details, Exception):
        return {"type": details.__class__.__name__}
    return details


def resolve_status(code: str, http_status: Optional[int] = None) -> int:
    if http_status is not None:
        return int(http_status)
    return ERROR_STATUS_MAP.get(code.upper(), DEFAULT_ERROR_STATUS)


def build_error_payload(
    code: str,
    message: str,
    status_code: int,
    details: Optional[Any] = None,
    *,
    hint: Optional[str] = None,
    extra: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the ``{"error": {...}}`` envelope shared by every error response."""
    error: Dict[str, Any] = {
        "code": code,
        "message": message,
        "status": status_code,
    }
    if details is not None:
        error["details"] = _normalize_details(details)
    if hint is not None:
        error["hint"] = hint
    if extra:
        error["extra"] = dict(extra)
    return {"error": error}


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    hint: Optional[str] = None,
    extra: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    """
    Return a consistently structured error response for API endpoints.

    Args:
        code: Machine-readable error identifier.
        message: Human-readable explanation of the error.
        details: Optional context, e.g. validation errors or exception details.
        http_status: Explicit HTTP status code to override the default mapping.
        hint: Optional actionable message for clients on how to resolve the error.
        extra: Optional mapping holding additional machine-readable fields.
        headers: Optional response headers to include alongside the payload.
    """

    if not isinstance(code, str):
        raise TypeError("error_response requires code to be a string")
    if not isinstance(message, str):
        raise TypeError("error_response requires message to be a string")

    code = code.strip().upper()
    message = message.strip()

    if not code:
        raise ValueError("error_response requires a non-empty code")
    if not message:
        raise ValueError("error_response requires a non-empty message")
    if extra is not None and not isinstance(extra, Mapping):
        raise TypeError("error_response extra must be a mapping if provided")
    if headers is not None and not isinstance(headers, Mapping):
        raise TypeError("error_response headers must be a mapping if provided")
    if hint is not None and not isinstance(hint, str):
        raise TypeError("error_response hint must be a string if provided")

    status_code = resolve_status(code, http_status)
    if not 100 <= status_code <= 599:
        raise ValueError("error_response status must be a valid HTTP status code")

    payload = build_error_payload(
        code, message, status_code, details, hint=hint, extra=extra
    )
    headers_dict = (
        {str(key): str(value) for key, value in headers.items()} if headers else None
    )
    return Response(payload, status=status_code, headers=headers_dict)
