"""
Error Boundary

DRF ``EXCEPTION_HANDLER`` that renders every failure with the same shape:
``{"detail": ..., "code": ...}`` plus ``errors`` for validation failures.
Named domain errors keep their status and message. DRF and Django
exceptions are mapped onto the domain taxonomy. Anything else is logged
and rendered as a generic internal error.
"""

from __future__ import annotations

import logging

from django.core.exceptions import PermissionDenied  # type: ignore
from django.http import Http404  # type: ignore
from rest_framework import exceptions as drf_exceptions  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import set_rollback  # type: ignore

from shared.application.validation import flatten_errors
from shared.domain.errors import (
    Forbidden,
    Internal,
    NotFound,
    StaybookError,
    Unauthenticated,
    ValidationFailed,
)

logger = logging.getLogger(__name__)


def _translate_drf_exception(exc: drf_exceptions.APIException) -> StaybookError | None:
    if isinstance(exc, (drf_exceptions.NotAuthenticated, drf_exceptions.AuthenticationFailed)):
        return Unauthenticated()
    if isinstance(exc, drf_exceptions.PermissionDenied):
        return Forbidden()
    if isinstance(exc, drf_exceptions.NotFound):
        return NotFound()
    if isinstance(exc, drf_exceptions.ValidationError):
        detail = exc.detail if isinstance(exc.detail, dict) else {"non_field_errors": exc.detail}
        return ValidationFailed(flatten_errors(detail))
    return None


def api_exception_handler(exc, context):
    """Convert ``exc`` into a structured response; never re-raise."""
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else None

    if isinstance(exc, Http404):
        exc = NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = Forbidden()
    elif isinstance(exc, drf_exceptions.APIException):
        translated = _translate_drf_exception(exc)
        if translated is None:
            # Method not allowed, unsupported media type, throttling and
            # parse errors keep DRF's own status code.
            set_rollback()
            headers = {}
            if getattr(exc, "wait", None):
                headers["Retry-After"] = str(int(exc.wait))
            return Response(
                {"detail": str(exc.detail), "code": f"http.{exc.default_code}"},
                status=exc.status_code,
                headers=headers,
            )
        exc = translated

    if not isinstance(exc, StaybookError):
        logger.error(
            f"Unhandled exception in {view_name}: {exc.__class__.__name__}",
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        exc = Internal()
    elif isinstance(exc, Internal):
        logger.error(f"Internal error in {view_name}: {exc.message}")
    else:
        logger.info(f"{view_name} failed with {exc.code}")

    set_rollback()
    return Response(exc.to_public_dict(), status=exc.status_code)
