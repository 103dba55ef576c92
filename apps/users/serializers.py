"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public representation of a user."""

    class Meta:
        model = User
        fields = ["id", "username", "email", "created_at"]
        read_only_fields = fields


class UserShortSerializer(serializers.ModelSerializer):
    """Owner/author reference embedded in listings and reviews."""

    class Meta:
        model = User
        fields = ["id", "username"]
        read_only_fields = fields
