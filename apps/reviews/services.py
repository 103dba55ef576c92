"""Review service: create and delete reviews scoped to a parent listing.

Both operations hold the parent listing's row lock for their whole
transaction, so they serialize against a concurrent cascade delete of
the same listing.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from django.db import transaction  # type: ignore

from apps.listings.models import Listing
from apps.users.context import RequestContext
from shared.application.validation import validate_payload
from shared.domain.errors import NotFound
from shared.infrastructure.locking import lock_queryset_if_possible

from .models import Review
from .permissions import ensure_author
from .serializers import ReviewInputSerializer

logger = logging.getLogger(__name__)


def _lock_listing(listing_pk) -> Listing:
    try:
        return lock_queryset_if_possible(Listing.objects.all()).get(pk=listing_pk)
    except (Listing.DoesNotExist, ValueError, TypeError):
        raise NotFound("Listing not found.") from None


@transaction.atomic
def create_review(ctx: RequestContext, listing_pk, data: Mapping[str, Any]) -> Review:
    author = ctx.require_identity()
    listing = _lock_listing(listing_pk)
    fields = validate_payload(ReviewInputSerializer, data)

    # Creating the row with its back-reference is what adds it to
    # ``listing.reviews``; both happen in this single insert.
    review = Review.objects.create(author=author, listing=listing, **fields)
    logger.info(f"Review {review.pk} created on listing {listing.pk} by user {author.pk}")
    return review


@transaction.atomic
def delete_review(ctx: RequestContext, listing_pk, review_pk) -> None:
    identity = ctx.require_identity()
    listing = _lock_listing(listing_pk)
    try:
        review = Review.objects.get(pk=review_pk, listing=listing)
    except (Review.DoesNotExist, ValueError, TypeError):
        # Also covers a review that exists but belongs to another listing.
        raise NotFound("Review not found.") from None
    ensure_author(identity, review)

    review.delete()
    logger.info(f"Review {review_pk} deleted from listing {listing.pk} by user {identity.pk}")
