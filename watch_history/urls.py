from django.urls import path
from .views import WatchHistoryView

urlpatterns = [
    path("users/<str:user_id>/watch-history/<str:tmdb_id>", WatchHistoryView.as_view(), name="watch-history-item"),
]
