"""Models for the review domain.

Defines the ``Review`` entity: a 1 to 5 rating and a comment left by an
author on one listing. The author, the listing and ``created_at`` never
change after creation.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

RATING_MIN = 1
RATING_MAX = 5


class Review(models.Model):
    """Represents a review left by a user for a listing."""

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='reviews'
    )
    # PROTECT: the listing service deletes reviews explicitly before their
    # listing, and the database refuses the reverse order.
    listing = models.ForeignKey(
        'listings.Listing', on_delete=models.PROTECT, related_name='reviews'
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(RATING_MIN), MaxValueValidator(RATING_MAX)],
        help_text=_('Rating from 1 to 5'),
    )
    comment = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['listing', '-created_at'], name='review_listing_created_idx'),
            models.Index(fields=['author'], name='review_author_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=RATING_MIN) & models.Q(rating__lte=RATING_MAX),
                name='review_rating_range',
            ),
        ]

    def __str__(self) -> str:
        return f"Review by {self.author_id} for listing {self.listing_id} (Rating: {self.rating})"
