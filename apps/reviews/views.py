"""API views for creating and deleting reviews on a listing."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.context import RequestContext

from . import services
from .serializers import ReviewSerializer


class ReviewViewSet(viewsets.ViewSet):
    """Nested under ``/listings/<listing_pk>/reviews/``."""

    permission_classes = [permissions.AllowAny]
    lookup_value_regex = r"\d+"

    def create(self, request, listing_pk=None):  # type: ignore
        ctx = RequestContext.from_request(request)
        review = services.create_review(ctx, listing_pk, request.data)
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, listing_pk=None, pk=None):  # type: ignore
        services.delete_review(RequestContext.from_request(request), listing_pk, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
