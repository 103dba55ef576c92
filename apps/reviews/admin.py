"""Admin registrations for the reviews domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("listing", "author", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("comment", "author__username", "listing__title")
    readonly_fields = ("author", "listing", "created_at")
