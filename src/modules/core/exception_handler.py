"""Global HTTP error mapper.

Translates every error that reaches the API layer into one body shape::

    {
        "type": "<error kind>",
        "errors": [{"code": "<error kind>", "detail": "<message>"}, ...],
        "path": "/api/v1/products/7/"
    }

Views render failed service ``Result`` values with ``error_response``;
anything raised past a view is caught by ``api_exception_handler``
(registered as DRF's ``EXCEPTION_HANDLER``).  Unexpected failures never
leak internal detail: the caller gets a generic message, the cause is
logged here.
"""

from __future__ import annotations

from typing import Any, Iterable

import structlog
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db import IntegrityError
from django.http import Http404
from pydantic import ValidationError as PydanticValidationError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import set_rollback

from modules.core.exceptions import DomainError, ErrorKind
from modules.core.results import ServiceError

logger = structlog.get_logger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "Contact an administrator."
CONFLICT_MESSAGE = "Duplicate keys are not allowed."


def error_body(kind: str, messages: Iterable[str], path: str) -> dict[str, Any]:
    return {
        "type": str(kind),
        "errors": [{"code": str(kind), "detail": message} for message in messages],
        "path": path,
    }


def error_response(request, error: ServiceError) -> Response:
    """Render a failed service result."""
    return Response(
        error_body(error.kind, error.messages, request.path),
        status=STATUS_BY_KIND[error.kind],
    )


def pydantic_messages(exc: PydanticValidationError) -> list[str]:
    """``"field: message"`` entries for every pydantic error."""
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"])
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return messages


def _flatten_detail(detail: Any, prefix: str = "") -> list[str]:
    """Flatten DRF ``ValidationError.detail`` into ``"field: message"`` entries."""
    if isinstance(detail, dict):
        messages = []
        for key, value in detail.items():
            field = key if key != "non_field_errors" else ""
            nested = f"{prefix}.{field}" if prefix and field else (field or prefix)
            messages.extend(_flatten_detail(value, nested))
        return messages
    if isinstance(detail, list):
        messages = []
        for item in detail:
            messages.extend(_flatten_detail(item, prefix))
        return messages
    return [f"{prefix}: {detail}" if prefix else str(detail)]


def _path(context: dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request is not None else ""


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    """DRF ``EXCEPTION_HANDLER`` producing the standard error body."""
    path = _path(context)

    if isinstance(exc, DomainError):
        if exc.kind is ErrorKind.INTERNAL:
            logger.error("api.domain_error", path=path, error=str(exc))
            messages: Iterable[str] = (INTERNAL_ERROR_MESSAGE,)
        else:
            messages = exc.messages
        return Response(
            error_body(exc.kind, messages, path),
            status=STATUS_BY_KIND[exc.kind],
        )

    if isinstance(exc, PydanticValidationError):
        return Response(
            error_body(ErrorKind.INVALID_ARGUMENT, pydantic_messages(exc), path),
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, exceptions.APIException):
        return _api_exception_response(exc, path)

    set_rollback()

    if isinstance(exc, IntegrityError):
        logger.error("api.integrity_error", path=path, error=str(exc))
        return Response(
            error_body(ErrorKind.CONFLICT, (CONFLICT_MESSAGE,), path),
            status=status.HTTP_409_CONFLICT,
        )

    logger.exception("api.unhandled_error", path=path, error_type=type(exc).__name__)
    return Response(
        error_body(ErrorKind.INTERNAL, (INTERNAL_ERROR_MESSAGE,), path),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _api_exception_response(exc: exceptions.APIException, path: str) -> Response:
    headers: dict[str, str] = {}
    if getattr(exc, "auth_header", None):
        headers["WWW-Authenticate"] = exc.auth_header
    if getattr(exc, "wait", None):
        headers["Retry-After"] = str(int(exc.wait))

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        kind: str = ErrorKind.UNAUTHORIZED
    elif isinstance(exc, exceptions.PermissionDenied):
        kind = ErrorKind.FORBIDDEN
    elif isinstance(exc, exceptions.NotFound):
        kind = ErrorKind.NOT_FOUND
    elif isinstance(exc, (exceptions.ValidationError, exceptions.ParseError)):
        kind = ErrorKind.INVALID_ARGUMENT
    else:
        kind = exc.default_code

    set_rollback()
    return Response(
        error_body(kind, _flatten_detail(exc.detail), path),
        status=exc.status_code,
        headers=headers,
    )
