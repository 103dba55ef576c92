"""Listing domain models for Staybook.

A listing is a rentable property owned by exactly one user. Its
coordinates are always computed server-side from the free-text
``location`` and are never taken from client input. Reviews point back
to the listing through ``Review.listing`` (``listing.reviews``).
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.db.models import Avg  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import Coordinates, StoredImage


class Listing(models.Model):
    """A rentable property with a location, a price and one photo."""

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="listings",
    )
    title = models.CharField(max_length=255)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    location = models.CharField(max_length=255)
    country = models.CharField(max_length=100)

    image_url = models.URLField(max_length=500)
    image_key = models.CharField(
        max_length=255,
        blank=True,
        help_text=_("Storage key of the uploaded photo; empty for the default image."),
    )

    longitude = models.FloatField()
    latitude = models.FloatField()

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Listing")
        verbose_name_plural = _("Listings")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["owner", "-created_at"], name="listing_owner_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(price__gte=0), name="listing_price_non_negative"),
        ]

    def __str__(self) -> str:
        return self.title

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(longitude=self.longitude, latitude=self.latitude)

    @coordinates.setter
    def coordinates(self, value: Coordinates) -> None:
        self.longitude = value.longitude
        self.latitude = value.latitude

    @property
    def geometry(self) -> dict:
        return self.coordinates.as_geometry()

    @property
    def image(self) -> StoredImage:
        return StoredImage(url=self.image_url, key=self.image_key)

    @image.setter
    def image(self, value: StoredImage) -> None:
        self.image_url = value.url
        self.image_key = value.key

    @property
    def average_rating(self) -> float | None:
        value = self.reviews.aggregate(avg=Avg("rating"))["avg"]
        return round(value, 2) if value is not None else None
