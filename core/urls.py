from django.urls import include, path

from .views import MetaInfoView

urlpatterns = [
    path("meta/info", MetaInfoView.as_view(), name="meta-info"),
    path("", include("watch_history.urls")),
]
