"""URL routing for the reviews domain (nested under a listing)."""

from django.urls import path  # type: ignore

from .views import ReviewViewSet

review_list = ReviewViewSet.as_view({'post': 'create'})
review_detail = ReviewViewSet.as_view({'delete': 'destroy'})

urlpatterns = [
    path('', review_list, name='review-list'),
    path('<int:pk>/', review_detail, name='review-detail'),
]
