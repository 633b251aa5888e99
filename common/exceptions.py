"""Error types and the API exception handler.

Every error response shares one envelope::

    {"success": false, "message": "<human readable>", ...}

Validation errors add ``errors`` with field-level messages. Unexpected
exceptions are logged and turned into a 500 whose detail is only exposed in
DEBUG mode.
"""

import logging

from django.conf import settings
from django.db import DatabaseError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_default_exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    """409: the resource already exists (e.g. duplicate email)."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "conflict"


class TransientFailure(APIException):
    """500: a transaction could not commit; the caller may retry."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "The operation could not be completed. Please try again."
    default_code = "transient_failure"


def error_response(message: str, status_code: int = 400, **extra) -> Response:
    """Build an error response in the shared envelope."""
    payload = {"success": False, "message": message}
    payload.update(extra)
    return Response(payload, status=status_code)


def _first_message(detail) -> str:
    if isinstance(detail, (list, tuple)) and detail:
        return _first_message(detail[0])
    if isinstance(detail, dict) and detail:
        return _first_message(next(iter(detail.values())))
    return str(detail)


def _message_for(exc: APIException, detail) -> str:
    if isinstance(exc, ValidationError):
        return "Validation failed"
    if isinstance(exc, NotAuthenticated):
        return "Access denied. No token provided."
    if isinstance(exc, (AuthenticationFailed, PermissionDenied, NotFound, MethodNotAllowed, ParseError)):
        return _first_message(detail)
    return _first_message(detail) or "Request failed"


def api_exception_handler(exc: Exception, context: dict) -> Response:
    """Normalize DRF and unexpected exceptions into the shared error envelope."""
    if isinstance(exc, Http404):
        exc = NotFound(str(exc) or "Not found.")

    resp = drf_default_exception_handler(exc, context)

    if resp is not None:
        detail = resp.data.get("detail", resp.data) if isinstance(resp.data, dict) else resp.data
        payload = {"success": False, "message": _message_for(exc, detail)}
        if isinstance(exc, ValidationError):
            payload["errors"] = resp.data if isinstance(resp.data, dict) else {"non_field_errors": resp.data}
        if resp.status_code >= 500:
            logger.error("API error %s: %s", resp.status_code, payload["message"], exc_info=exc)
        resp.data = payload
        return resp

    view = context.get("view")
    logger.error(
        "Unhandled exception in %s",
        type(view).__name__ if view is not None else "request",
        exc_info=exc,
    )
    message = "Database error" if isinstance(exc, DatabaseError) else "Internal server error"
    return error_response(
        message=message if settings.DEBUG else "Internal server error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error=str(exc) if settings.DEBUG else "Internal server error",
    )
