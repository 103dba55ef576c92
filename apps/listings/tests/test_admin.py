"""Admin tests: staff may not bypass geocoding or ownership rules."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.listings.models import Listing
from apps.users.models import User


class ListingAdminTests(APITestCase):
    def setUp(self) -> None:
        self.admin_user = User.objects.create_superuser(
            username="admin", email="admin@example.com", password="AdminPass123"
        )
        self.owner = User.objects.create_user(username="owner", email="owner@example.com", password="OwnerPass123")
        self.intruder = User.objects.create_user(
            username="intruder", email="intruder@example.com", password="IntruderPass123"
        )
        self.listing = Listing.objects.create(
            owner=self.owner,
            title="Cabin",
            description="Quiet cabin",
            price=80,
            location="Oslo, Norway",
            country="Norway",
            image_url="https://example.com/cabin.jpg",
            longitude=10.75,
            latitude=59.91,
        )
        self.client.force_login(self.admin_user)

    def test_add_form_is_disabled(self) -> None:
        response = self.client.get(reverse("admin:listings_listing_add"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_change_form_keeps_location_owner_and_geometry(self) -> None:
        url = reverse("admin:listings_listing_change", args=[self.listing.pk])
        response = self.client.post(
            url,
            {
                "title": "Cabin by the fjord",
                "description": "Quiet cabin",
                "price": "90.00",
                "location": "Sydney, Australia",
                "country": "Australia",
                "owner": self.intruder.pk,
                "longitude": "151.2",
                "latitude": "-33.8",
                "reviews-TOTAL_FORMS": "0",
                "reviews-INITIAL_FORMS": "0",
                "reviews-MIN_NUM_FORMS": "0",
                "reviews-MAX_NUM_FORMS": "1000",
            },
        )

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.listing.refresh_from_db()
        self.assertEqual(self.listing.title, "Cabin by the fjord")
        self.assertEqual(self.listing.location, "Oslo, Norway")
        self.assertEqual(self.listing.country, "Norway")
        self.assertEqual(self.listing.owner, self.owner)
        self.assertEqual(self.listing.geometry["coordinates"], [10.75, 59.91])
