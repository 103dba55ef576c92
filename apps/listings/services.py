"""Listing service: create, read, update and cascading delete.

Every mutation runs the same pipeline: authentication gate, target lookup,
ownership guard, payload validation, adapters (geocoding, media) and
finally persistence. Nothing is written until every earlier step has
passed, and a failure in any step leaves the stored state untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from django.db import DatabaseError, transaction  # type: ignore
from django.db.models import Count, ProtectedError, Prefetch  # type: ignore

from apps.reviews.models import Review
from apps.users.context import RequestContext
from shared.application.validation import validate_payload
from shared.domain.errors import Internal, NotFound
from shared.domain.value_objects import StoredImage
from shared.infrastructure.locking import lock_queryset_if_possible

from .geocoding import get_geocoder
from .media import default_image, get_media_store
from .models import Listing
from .permissions import ensure_owner
from .serializers import ListingInputSerializer

logger = logging.getLogger(__name__)


def list_listings():
    return Listing.objects.select_related("owner").annotate(review_count=Count("reviews"))


def get_listing(pk) -> Listing:
    reviews = Prefetch("reviews", queryset=Review.objects.select_related("author"))
    try:
        return Listing.objects.select_related("owner").prefetch_related(reviews).get(pk=pk)
    except (Listing.DoesNotExist, ValueError, TypeError):
        raise NotFound("Listing not found.") from None


def _load_for_update(pk) -> Listing:
    """Fetch the listing, row-locked when called inside a transaction."""
    try:
        return lock_queryset_if_possible(Listing.objects.all()).get(pk=pk)
    except (Listing.DoesNotExist, ValueError, TypeError):
        raise NotFound("Listing not found.") from None


def _discard_on_commit(image: StoredImage) -> None:
    if image.is_default:
        return
    transaction.on_commit(lambda: get_media_store().discard(image.key))


def create_listing(ctx: RequestContext, data: Mapping[str, Any], file_obj=None) -> Listing:
    owner = ctx.require_identity()
    fields = validate_payload(ListingInputSerializer, data)

    coordinates = get_geocoder().geocode(fields["location"])
    media = get_media_store()
    image = media.store(file_obj) if file_obj is not None else default_image()

    listing = Listing(owner=owner, **fields)
    listing.coordinates = coordinates
    listing.image = image
    try:
        with transaction.atomic():
            listing.save()
    except DatabaseError:
        if not image.is_default:
            media.discard(image.key)
        raise

    logger.info(f"Listing {listing.pk} created by user {owner.pk}")
    return listing


def update_listing(ctx: RequestContext, pk, data: Mapping[str, Any], file_obj=None) -> Listing:
    identity = ctx.require_identity()
    listing = _load_for_update(pk)
    ensure_owner(identity, listing)
    fields = validate_payload(ListingInputSerializer, data)

    # Geometry is recomputed on every update so it always reflects the
    # stored location text.
    coordinates = get_geocoder().geocode(fields["location"])
    media = get_media_store()
    new_image = media.store(file_obj) if file_obj is not None else None

    try:
        with transaction.atomic():
            listing = _load_for_update(pk)
            ensure_owner(identity, listing)
            previous_image = listing.image
            for name, value in fields.items():
                setattr(listing, name, value)
            listing.coordinates = coordinates
            if new_image is not None:
                listing.image = new_image
                _discard_on_commit(previous_image)
            listing.save()
    except Exception:
        if new_image is not None:
            media.discard(new_image.key)
        raise

    logger.info(f"Listing {listing.pk} updated by user {identity.pk}")
    return listing


def delete_listing(ctx: RequestContext, pk) -> None:
    """Delete the listing's reviews, then the listing, in one transaction."""
    identity = ctx.require_identity()
    ensure_owner(identity, _load_for_update(pk))

    try:
        with transaction.atomic():
            listing = _load_for_update(pk)
            ensure_owner(identity, listing)
            deleted_reviews, _ = Review.objects.filter(listing=listing).delete()
            # Review.listing is PROTECT: a review that slipped in would abort
            # the whole transaction here instead of being orphaned.
            listing.delete()
            _discard_on_commit(listing.image)
    except (DatabaseError, ProtectedError) as e:
        logger.error(f"Cascade delete of listing {pk} rolled back: {e}", exc_info=True)
        raise Internal("The listing could not be deleted. Please try again.") from e

    logger.info(f"Listing {pk} deleted by user {identity.pk} with {deleted_reviews} reviews")
