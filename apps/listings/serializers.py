"""Serializers for the listings domain.

``ListingInputSerializer`` is the write schema checked before any
adapter call. Read serializers render listings with their owner and,
on the detail view, every review with its author.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from apps.reviews.serializers import ReviewSerializer
from apps.users.serializers import UserShortSerializer

from .models import Listing
from .permissions import is_owner


class ListingInputSerializer(serializers.Serializer):
    """Write schema. Geometry, owner and image keys are never read from clients."""

    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    location = serializers.CharField(max_length=255)
    country = serializers.CharField(max_length=100)


class ListingSerializer(serializers.ModelSerializer):
    """Read serializer used by the list endpoint and write responses."""

    owner = UserShortSerializer(read_only=True)
    image = serializers.SerializerMethodField()
    geometry = serializers.ReadOnlyField()
    review_count = serializers.SerializerMethodField()

    class Meta:
        model = Listing
        fields = [
            "id",
            "title",
            "description",
            "price",
            "location",
            "country",
            "image",
            "geometry",
            "owner",
            "review_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_image(self, obj: Listing) -> dict:
        return {"url": obj.image_url, "key": obj.image_key}

    def get_review_count(self, obj: Listing) -> int:
        annotated = getattr(obj, "review_count", None)
        if annotated is not None:
            return annotated
        return obj.reviews.count()


class ListingDetailSerializer(ListingSerializer):
    """Detail serializer with reviews and their authors populated."""

    reviews = ReviewSerializer(many=True, read_only=True)
    average_rating = serializers.ReadOnlyField()
    viewer_is_owner = serializers.SerializerMethodField()

    class Meta(ListingSerializer.Meta):
        fields = ListingSerializer.Meta.fields + ["average_rating", "reviews", "viewer_is_owner"]
        read_only_fields = fields

    def get_viewer_is_owner(self, obj: Listing) -> bool:
        return is_owner(self.context.get("viewer"), obj)


class ListingEditSerializer(ListingSerializer):
    """Edit-form payload: current values plus a reduced-size image preview."""

    image_preview_url = serializers.SerializerMethodField()

    class Meta(ListingSerializer.Meta):
        fields = ListingSerializer.Meta.fields + ["image_preview_url"]
        read_only_fields = fields

    def get_image_preview_url(self, obj: Listing) -> str:
        url = obj.image_url
        if "/upload/" in url:
            return url.replace("/upload/", "/upload/w_250/", 1)
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}w=250"
