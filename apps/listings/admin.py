"""Admin registrations for the listings domain.

Listings are created, relocated and deleted through the API so geocoding,
ownership and the review cascade always apply. The admin edits the
descriptive fields only.
"""

from __future__ import annotations

from django.contrib import admin

from apps.reviews.models import Review

from .models import Listing


class ReviewInline(admin.TabularInline):
    model = Review
    extra = 0
    fields = ("author", "rating", "comment", "created_at")
    readonly_fields = ("author", "rating", "comment", "created_at")
    can_delete = False

    def has_add_permission(self, request, obj=None):  # type: ignore
        return False


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = ("title", "location", "country", "price", "owner", "created_at")
    list_filter = ("country",)
    search_fields = ("title", "location", "country", "owner__username")
    readonly_fields = (
        "owner",
        "location",
        "country",
        "longitude",
        "latitude",
        "image_url",
        "image_key",
        "created_at",
        "updated_at",
    )
    inlines = [ReviewInline]

    def has_add_permission(self, request):  # type: ignore
        return False

    def has_delete_permission(self, request, obj=None):  # type: ignore
        return False
