"""Serializers for reviews.

``ReviewInputSerializer`` is the write schema; the author, listing and
timestamp are set by the service, never by the client.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserShortSerializer

from .models import RATING_MAX, RATING_MIN, Review


class ReviewInputSerializer(serializers.Serializer):
    comment = serializers.CharField()
    rating = serializers.IntegerField(min_value=RATING_MIN, max_value=RATING_MAX)


class ReviewSerializer(serializers.ModelSerializer):
    """Read serializer for reviews with the author populated."""

    author = UserShortSerializer(read_only=True)
    listing_id = serializers.ReadOnlyField()

    class Meta:
        model = Review
        fields = ['id', 'listing_id', 'author', 'rating', 'comment', 'created_at']
        read_only_fields = fields
