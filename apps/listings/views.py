"""Listing API views.

Views are thin: they build the request context, hand the raw payload and
uploaded file to the listing service and render the result. Guards,
validation and persistence live in ``services``.
"""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.context import RequestContext

from . import services
from .permissions import ensure_owner
from .serializers import (
    ListingDetailSerializer,
    ListingEditSerializer,
    ListingSerializer,
)

IMAGE_FIELD = "image"


class ListingViewSet(viewsets.ViewSet):
    """Viewset for browsing and managing listings."""

    permission_classes = [permissions.AllowAny]
    lookup_value_regex = r"\d+"

    def list(self, request):  # type: ignore
        serializer = ListingSerializer(services.list_listings(), many=True)
        return Response(serializer.data)

    def retrieve(self, request, pk=None):  # type: ignore
        viewer = RequestContext.from_request(request).current_user()
        listing = services.get_listing(pk)
        return Response(ListingDetailSerializer(listing, context={"viewer": viewer}).data)

    def create(self, request):  # type: ignore
        ctx = RequestContext.from_request(request)
        listing = services.create_listing(ctx, request.data, request.FILES.get(IMAGE_FIELD))
        return Response(ListingSerializer(listing).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None):  # type: ignore
        ctx = RequestContext.from_request(request)
        listing = services.update_listing(ctx, pk, request.data, request.FILES.get(IMAGE_FIELD))
        return Response(ListingSerializer(listing).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):  # type: ignore
        services.delete_listing(RequestContext.from_request(request), pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path="new")
    def new(self, request):  # type: ignore
        """Blank create-form payload; login required."""
        RequestContext.from_request(request).require_identity()
        return Response(
            {"title": "", "description": "", "price": None, "location": "", "country": ""}
        )

    @action(detail=True, methods=["get"], url_path="edit")
    def edit(self, request, pk=None):  # type: ignore
        """Current values for the edit form; owner only."""
        identity = RequestContext.from_request(request).require_identity()
        listing = services.get_listing(pk)
        ensure_owner(identity, listing)
        return Response(ListingEditSerializer(listing).data)
