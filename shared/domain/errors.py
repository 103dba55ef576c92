"""
Domain Errors

Typed failures raised by services and adapters. Every error carries:
- a stable ``code`` for programmatic handling by clients
- a human-readable ``message`` that is safe to show to users
- the HTTP ``status_code`` the error boundary renders it with

Adapter-internal diagnostics belong in the logs, never in ``message``.
"""

from __future__ import annotations

from typing import Any


class StaybookError(Exception):
    """Base class for every named failure kind."""

    code = "internal.error"
    default_message = "Something went wrong."
    status_code = 500

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_public_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "code": self.code}


class Unauthenticated(StaybookError):
    code = "auth.unauthenticated"
    default_message = "You must be logged in to do that."
    status_code = 401


class Forbidden(StaybookError):
    code = "auth.forbidden"
    default_message = "You do not have permission to do that."
    status_code = 403


class NotFound(StaybookError):
    code = "resource.not_found"
    default_message = "The requested resource does not exist."
    status_code = 404


class ValidationFailed(StaybookError):
    """Payload violates its schema; ``errors`` maps field name to messages."""

    code = "request.validation_failed"
    default_message = "The submitted data is invalid."
    status_code = 400

    def __init__(self, errors: dict[str, list[str]], message: str | None = None) -> None:
        self.errors = errors
        super().__init__(message)

    @property
    def fields(self) -> list[str]:
        return sorted(self.errors)

    def to_public_dict(self) -> dict[str, Any]:
        payload = super().to_public_dict()
        payload["errors"] = self.errors
        return payload


class DuplicateUser(StaybookError):
    code = "auth.duplicate_user"
    default_message = "A user with that username or email already exists."
    status_code = 409


class GeocodingFailed(StaybookError):
    code = "upstream.geocoding_failed"
    default_message = "We could not find that location. Please check it and try again."
    status_code = 422


class UploadFailed(StaybookError):
    code = "upstream.upload_failed"
    default_message = "The image could not be uploaded. Please try again."
    status_code = 502


class Internal(StaybookError):
    code = "internal.error"
    default_message = "Something went wrong."
    status_code = 500
