"""URL configuration for Staybook project.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
the OpenAPI schema and application‑level routers from each app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView  # type: ignore

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    # Application URLs
    path('api/v1/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/v1/listings/', include(('apps.listings.urls', 'listings'), namespace='listings')),
    path(
        'api/v1/listings/<int:listing_pk>/reviews/',
        include(('apps.reviews.urls', 'reviews'), namespace='reviews'),
    ),
]
