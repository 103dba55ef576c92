"""
Payload Validation

A schema is a DRF serializer: each declared field is a descriptor with a
type, ``required`` flag and bounds. ``validate_payload`` is the single
routine that evaluates any schema against a raw client payload and either
returns the normalized data or raises ``ValidationFailed`` listing every
violated field.
"""

from __future__ import annotations

from typing import Any, Mapping

from rest_framework import serializers  # type: ignore

from shared.domain.errors import ValidationFailed


def flatten_errors(errors: Mapping[str, Any]) -> dict[str, list[str]]:
    flat: dict[str, list[str]] = {}
    for field, messages in errors.items():
        if isinstance(messages, Mapping):
            for sub_field, sub_messages in flatten_errors(messages).items():
                flat[f"{field}.{sub_field}"] = sub_messages
        elif isinstance(messages, (list, tuple)):
            flat[field] = [str(message) for message in messages]
        else:
            flat[field] = [str(messages)]
    return flat


def validate_payload(
    schema: type[serializers.Serializer],
    data: Mapping[str, Any],
    *,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Run ``schema`` over ``data`` and return the validated fields."""
    serializer = schema(data=data, context=context or {})
    if not serializer.is_valid():
        raise ValidationFailed(flatten_errors(serializer.errors))
    return dict(serializer.validated_data)
