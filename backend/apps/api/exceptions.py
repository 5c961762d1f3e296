from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple, Union

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404, JsonResponse
from rest_framework import status
from rest_framework.exceptions import (
    MethodNotAllowed,
    NotFound,
    ParseError,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import build_error_payload, error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

STATUS_CODE_DEFAULTS: Dict[int, Tuple[str, str]] = {
    status.HTTP_400_BAD_REQUEST: ("VALIDATION_ERROR", "Validation failed"),
    status.HTTP_404_NOT_FOUND: ("NOT_FOUND", "Resource not found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("METHOD_NOT_ALLOWED", "Method not allowed"),
    status.HTTP_406_NOT_ACCEPTABLE: ("NOT_ACCEPTABLE", "Not acceptable"),
    status.HTTP_409_CONFLICT: ("CONFLICT", "Resource conflict"),
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: (
        "UNSUPPORTED_MEDIA_TYPE",
        "Unsupported media type",
    ),
    status.HTTP_500_INTERNAL_SERVER_ERROR: ("SERVER_ERROR", "Something went wrong"),
}

SERVER_ERROR_MESSAGE = STATUS_CODE_DEFAULTS[status.HTTP_500_INTERNAL_SERVER_ERROR][1]


class ApplicationError(Exception):
    """
    Domain-level error raised from services and rendered by the global handler.

    Args:
        code: Machine readable error code.
        message: Human readable explanation of the error.
        status_code: Optional explicit HTTP status. If omitted, code mapping is used.
        details: Optional structured details for clients.
        hint: Optional hint for remediation.
        extra: Optional additional machine readable fields.
        headers: Optional mapping of headers to include in the response.
    """

    default_code = "SERVER_ERROR"
    default_status: Optional[int] = None

    def __init__(
        self,
        code: Optional[str] = None,
        message: str = "",
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.status_code = status_code if status_code is not None else self.default_status
        self.details = details
        self.hint = hint
        self.extra = extra
        self.headers = headers

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
            hint=self.hint,
            extra=self.extra,
            headers=self.headers,
        )


class NotFoundError(ApplicationError):
    """A referenced user or address does not exist."""

    default_code = "NOT_FOUND"
    default_status = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str, details: Optional[Any] = None, **kwargs: Any):
        super().__init__(None, message, details=details, **kwargs)


class ConflictError(ApplicationError):
    """A write would break a uniqueness rule (login name, address description)."""

    default_code = "CONFLICT"
    default_status = status.HTTP_409_CONFLICT

    def __init__(self, message: str, details: Optional[Any] = None, **kwargs: Any):
        super().__init__(None, message, details=details, **kwargs)


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    Translate any exception escaping a DRF view into the JSON error envelope.

    Application errors render themselves, DRF/Django errors are normalized to
    the same shape, and anything else becomes an opaque 500.
    """

    bound_logger = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        bound_logger.info(
            "Handled application error",
            code=exc.code,
            status=exc.status_code,
        )
        return exc.to_response()

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(_normalize_django_validation_error(exc))

    response = drf_exception_handler(exc, context)
    if response is not None:
        return _from_drf_exception(exc, response, bound_logger)

    bound_logger.exception(
        "Unhandled exception bubbled to global handler",
        exception=exc.__class__.__name__,
    )
    return error_response(
        "SERVER_ERROR",
        SERVER_ERROR_MESSAGE,
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def not_found_handler(request, exception=None):
    """``handler404`` for requests that never reached a DRF view."""
    logger.info("Route not matched", path=getattr(request, "path", None))
    payload = build_error_payload(
        "NOT_FOUND", "Resource not found", status.HTTP_404_NOT_FOUND
    )
    return JsonResponse(payload, status=status.HTTP_404_NOT_FOUND)


def server_error_handler(request):
    """``handler500`` for failures outside the DRF exception handler."""
    logger.error("Server error outside API view", path=getattr(request, "path", None))
    payload = build_error_payload(
        "SERVER_ERROR", SERVER_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return JsonResponse(payload, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _from_drf_exception(
    exc: Exception, response: Response, bound_logger
) -> Response:
    status_code = response.status_code
    code, message, details = _normalize_payload(exc, response.data, status_code)
    headers = dict(response.headers) if getattr(response, "headers", None) else None

    if status_code >= 500:
        bound_logger.error("Converted server error", code=code, status=status_code)
    else:
        bound_logger.info("Converted API exception", code=code, status=status_code)

    return error_response(
        code,
        message,
        details,
        http_status=status_code,
        headers=headers,
    )


def _normalize_django_validation_error(
    exc: DjangoValidationError,
) -> Union[Dict[str, Any], list[str]]:
    if hasattr(exc, "message_dict"):
        return exc.message_dict
    if hasattr(exc, "messages"):
        return list(exc.messages)
    return {"detail": getattr(exc, "message", "Validation failed")}


def _normalize_payload(
    exc: Exception,
    payload: Any,
    status_code: int,
) -> Tuple[str, str, Optional[Any]]:
    if isinstance(exc, ValidationError):
        return (
            "VALIDATION_ERROR",
            _extract_message(payload, "Validation failed", status_code),
            payload,
        )
    if isinstance(exc, ParseError):
        return (
            "VALIDATION_ERROR",
            _extract_message(payload, "Malformed request", status_code),
            None,
        )
    if isinstance(exc, (NotFound, Http404)):
        return (
            "NOT_FOUND",
            _extract_message(payload, "Resource not found", status_code),
            None,
        )
    if isinstance(exc, MethodNotAllowed):
        return (
            "METHOD_NOT_ALLOWED",
            _extract_message(payload, "Method not allowed", status_code),
            None,
        )

    code, default_message = STATUS_CODE_DEFAULTS.get(
        status_code,
        (
            "SERVER_ERROR" if status_code >= 500 else "UNKNOWN_ERROR",
            SERVER_ERROR_MESSAGE if status_code >= 500 else "Request failed",
        ),
    )
    details = payload if _include_details(status_code, payload) else None
    return code, _extract_message(payload, default_message, status_code), details


def _include_details(status_code: int, payload: Any) -> bool:
    if status_code >= 500:
        return False
    if isinstance(payload, dict) and set(payload) == {"detail"}:
        return False
    return isinstance(payload, (dict, list)) and bool(payload)


def _extract_message(payload: Any, fallback: str, status_code: int) -> str:
    if status_code >= 500:
        return SERVER_ERROR_MESSAGE
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if isinstance(detail, str):
            return detail
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return fallback


__all__ = [
    "ApplicationError",
    "ConflictError",
    "NotFoundError",
    "global_exception_handler",
    "not_found_handler",
    "server_error_handler",
]
